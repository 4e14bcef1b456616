"""API routers for StockPulse."""

from .auth import router as auth_router
from .indices import router as indices_router
from .stocks import router as stocks_router
from .watchlist import router as watchlist_router

__all__ = ["auth_router", "indices_router", "stocks_router", "watchlist_router"]
