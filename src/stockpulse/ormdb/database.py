"""Engine, session factory and schema management for the user store."""

from typing import Generator, Optional

from sqlalchemy import Engine, create_engine, event, text
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from ..config.logging import get_logger
from ..config.settings import get_settings

logger = get_logger(__name__)

# Base class for all ORM models
Base = declarative_base()

# Process-wide engine and session factory, created on first use
_engine: Optional[Engine] = None
_SessionLocal: Optional[sessionmaker] = None


def _sqlite_pragmas(dbapi_connection, connection_record):
    # Cascading watchlist deletes rely on foreign keys being enforced
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.close()


def build_engine(
    url: str,
    echo: bool = False,
    pool_pre_ping: bool = True,
    pool_recycle: int = 3600,
) -> Engine:
    """
    Create an engine for a database URL.

    SQLite engines enforce foreign keys and may be used across threads; an
    in-memory SQLite database lives on a single shared connection. Other
    backends get a small connection pool.
    """
    if url.startswith("sqlite"):
        in_memory = url in ("sqlite://", "sqlite:///:memory:")
        engine = create_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False, "timeout": 30},
            **({"poolclass": StaticPool} if in_memory else {}),
        )
        event.listen(engine, "connect", _sqlite_pragmas)
        return engine

    return create_engine(
        url,
        echo=echo,
        pool_pre_ping=pool_pre_ping,
        pool_recycle=pool_recycle,
        pool_size=5,
        max_overflow=10,
    )


def get_engine() -> Engine:
    """Get the database engine, creating it from settings if necessary."""
    global _engine

    if _engine is None:
        settings = get_settings()
        url = settings.get_database_url()
        _engine = build_engine(
            url,
            echo=settings.database_echo_sql,
            pool_pre_ping=settings.database_pool_pre_ping,
            pool_recycle=settings.database_pool_recycle,
        )
        logger.info("Database engine initialized", backend=_engine.dialect.name)

    return _engine


def get_session_factory() -> sessionmaker:
    """Get the session factory, creating it if necessary."""
    global _SessionLocal

    if _SessionLocal is None:
        # Objects stay readable after commit, e.g. when building responses
        _SessionLocal = sessionmaker(
            autocommit=False, autoflush=False, bind=get_engine(), expire_on_commit=False
        )

    return _SessionLocal


def get_session() -> Generator[Session, None, None]:
    """
    Yield a session that commits on success and rolls back on error.

    Yields:
        Session: SQLAlchemy database session
    """
    session = get_session_factory()()

    try:
        yield session
        session.commit()
    except Exception as e:
        session.rollback()
        logger.warning("Database session rolled back", error=str(e))
        raise
    finally:
        session.close()


def create_tables() -> None:
    """Create the users and watchlist tables if they are missing."""
    # Register models on the metadata
    from . import models  # noqa: F401

    Base.metadata.create_all(bind=get_engine())
    logger.info("Database schema ready", tables=sorted(Base.metadata.tables))


def drop_tables() -> None:
    """Drop the users and watchlist tables."""
    from . import models  # noqa: F401

    logger.warning("Dropping all database tables")
    Base.metadata.drop_all(bind=get_engine())


def check_database_health() -> dict:
    """
    Probe the user store with a trivial query.

    Returns:
        dict: ``status`` (healthy/unhealthy), ``connectivity`` and any error
    """
    try:
        with get_session_factory()() as session:
            ok = session.execute(text("SELECT 1")).scalar() == 1
        return {"status": "healthy" if ok else "unhealthy", "connectivity": ok}
    except Exception as e:
        logger.error("Database health check failed", error=str(e))
        return {"status": "unhealthy", "connectivity": False, "error": str(e)}


def reset_engine() -> None:
    """Dispose the engine and forget the session factory."""
    global _engine, _SessionLocal

    if _engine is not None:
        _engine.dispose()
    _engine = None
    _SessionLocal = None
