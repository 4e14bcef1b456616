"""FastAPI dependencies resolving services and the current user."""

from typing import Generator, Optional

from fastapi import Depends, Request, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from ..config.settings import Settings
from ..ormdb.database import get_session
from ..ormdb.models import User
from ..services import AuthService, MarketDataService, WatchlistService

# Missing credentials are reported by AuthService as 401, not 403
bearer_scheme = HTTPBearer(auto_error=False)


def get_db_session() -> Generator[Session, None, None]:
    """Per-request database session."""
    yield from get_session()


def get_app_settings(request: Request) -> Settings:
    """Resolve the settings the app was created with."""
    return request.app.state.settings


def get_market_data_service(request: Request) -> MarketDataService:
    """Resolve the shared market data service from app.state."""
    return request.app.state.market_data


def get_auth_service(
    session: Session = Depends(get_db_session),
    settings: Settings = Depends(get_app_settings),
) -> AuthService:
    """Auth service bound to the request session."""
    return AuthService(session, settings)


def get_watchlist_service(
    session: Session = Depends(get_db_session),
    market_data: MarketDataService = Depends(get_market_data_service),
) -> WatchlistService:
    """Watchlist service bound to the request session."""
    return WatchlistService(session, market_data)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
    auth_service: AuthService = Depends(get_auth_service),
) -> User:
    """Authenticate the ``Authorization: Bearer`` header."""
    token = credentials.credentials if credentials else None
    return auth_service.authenticate(token)
