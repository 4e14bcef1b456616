"""Shared test configuration and fixtures."""

from typing import Any, Dict, List, Union

import pandas as pd
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from stockpulse.config.settings import Settings, get_settings
from stockpulse.exceptions import SymbolNotFoundError


class StubProvider:
    """In-memory stand-in for YahooFinanceProvider."""

    def __init__(self):
        self.quotes: Dict[str, Union[Dict[str, Any], Exception]] = {}
        self.candles: Union[pd.DataFrame, Exception, None] = None
        self.hits: Union[List[Dict[str, Any]], Exception] = []
        self.candle_calls: List[tuple] = []

    async def fetch_quote(self, symbol: str) -> Dict[str, Any]:
        result = self.quotes.get(symbol)
        if result is None:
            raise SymbolNotFoundError(symbol)
        if isinstance(result, Exception):
            raise result
        return result

    async def fetch_candles(self, symbol, interval, start, end) -> pd.DataFrame:
        self.candle_calls.append((symbol, interval, start, end))
        if isinstance(self.candles, Exception):
            raise self.candles
        if self.candles is None:
            return pd.DataFrame()
        return self.candles

    async def search(self, query: str) -> List[Dict[str, Any]]:
        if isinstance(self.hits, Exception):
            raise self.hits
        return self.hits


def make_quote_payload(
    symbol: str, price: float = 2500.0, **overrides: Any
) -> Dict[str, Any]:
    """Provider quote payload with realistic fields."""
    payload = {
        "symbol": symbol,
        "longName": f"{symbol} Limited",
        "shortName": symbol,
        "regularMarketPrice": price,
        "regularMarketPreviousClose": price - 10,
        "regularMarketChange": 10.0,
        "regularMarketChangePercent": 0.4,
        "regularMarketDayHigh": price + 15,
        "regularMarketDayLow": price - 20,
        "regularMarketVolume": 1_250_000,
        "marketCap": 16_900_000_000_000,
        "currency": "INR",
        "regularMarketOpen": price - 5,
    }
    payload.update(overrides)
    return payload


@pytest.fixture(autouse=True)
def clean_settings_cache():
    """Clear the settings cache between tests to avoid state pollution."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def test_settings() -> Settings:
    """Settings isolated from the environment and any .env file."""
    return Settings(
        _env_file=None,
        environment="testing",
        jwt_secret="test-secret-0123456789abcdef0123456789",
        jwt_expires_in="1h",
        bcrypt_rounds=4,
        rate_limit_enabled=False,
        log_file_enabled=False,
        database_url="sqlite://",
    )


@pytest.fixture
def isolated_db():
    """Create an isolated in-memory database for testing."""
    from stockpulse.ormdb.database import Base, build_engine
    from stockpulse.ormdb import models  # noqa: F401

    engine = build_engine("sqlite://")
    SessionLocal = sessionmaker(
        autocommit=False, autoflush=False, bind=engine, expire_on_commit=False
    )
    Base.metadata.create_all(bind=engine)

    yield {"engine": engine, "session_factory": SessionLocal}

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(isolated_db):
    """Session on the isolated database."""
    session = isolated_db["session_factory"]()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def quote_payload():
    """Factory for provider quote payloads."""
    return make_quote_payload


@pytest.fixture
def stub_provider() -> StubProvider:
    return StubProvider()


@pytest.fixture
def market_data(stub_provider):
    from stockpulse.services import MarketDataService

    return MarketDataService(stub_provider)


@pytest.fixture
def app(test_settings, market_data, isolated_db):
    """FastAPI app wired to the stub provider and isolated database."""
    from stockpulse.webapi.app import create_app
    from stockpulse.webapi.dependencies import get_db_session

    app = create_app(settings=test_settings, market_data=market_data)

    def override_session():
        session = isolated_db["session_factory"]()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    app.dependency_overrides[get_db_session] = override_session
    return app


@pytest.fixture
def client(app):
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def auth_headers(client):
    """Register a user and return its bearer header."""
    response = client.post(
        "/api/auth/register",
        json={"username": "trader", "email": "trader@example.com", "password": "secret123"},
    )
    assert response.status_code == 201
    return {"Authorization": f"Bearer {response.json()['token']}"}
