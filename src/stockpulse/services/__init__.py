"""Service layer for business logic encapsulation."""

from .auth_service import AuthResult, AuthService
from .market_data import MarketDataService
from .watchlist_service import WatchlistService

__all__ = [
    "AuthResult",
    "AuthService",
    "MarketDataService",
    "WatchlistService",
]
