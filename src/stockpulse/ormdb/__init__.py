"""User store: SQLAlchemy models, engine management and repositories."""

from .database import (
    Base,
    build_engine,
    check_database_health,
    create_tables,
    drop_tables,
    get_engine,
    get_session,
    get_session_factory,
    reset_engine,
)
from .models import User, WatchlistEntry
from .repositories import BaseRepository, UserRepository, WatchlistRepository

__all__ = [
    "Base",
    "build_engine",
    "check_database_health",
    "create_tables",
    "drop_tables",
    "get_engine",
    "get_session",
    "get_session_factory",
    "reset_engine",
    "User",
    "WatchlistEntry",
    "BaseRepository",
    "UserRepository",
    "WatchlistRepository",
]
