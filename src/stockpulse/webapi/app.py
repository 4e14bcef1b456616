"""FastAPI application factory for the StockPulse API."""

import time
import uuid
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..config.logging import bind_request_context, clear_request_context, get_logger
from ..config.settings import Settings, get_settings
from ..core.provider import YahooFinanceProvider
from ..services import MarketDataService
from .exceptions import setup_exception_handlers
from .health import router as health_router
from .rate_limit import FixedWindowRateLimiter, rate_limit_middleware
from .routers import auth_router, indices_router, stocks_router, watchlist_router

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log startup and shutdown with the effective configuration."""
    settings: Settings = app.state.settings
    logger.info(
        "StockPulse API started",
        version=__version__,
        environment=settings.environment,
        default_currency=settings.default_currency,
    )

    yield

    logger.info("StockPulse API stopped")


async def add_request_id_middleware(request: Request, call_next):
    """Tag the request, and every log line it produces, with a unique id."""
    request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
    request.state.request_id = request_id
    bind_request_context(
        request_id=request_id, method=request.method, path=request.url.path
    )

    started = time.perf_counter()
    try:
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        logger.info(
            "Request completed",
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 1),
        )
        return response
    finally:
        clear_request_context()


def _build_market_data(settings: Settings) -> MarketDataService:
    return MarketDataService(
        YahooFinanceProvider(search_max_results=settings.search_max_results),
        default_currency=settings.default_currency,
    )


def _install_middleware(app: FastAPI, settings: Settings) -> None:
    # Starlette runs the last registered middleware first: CORS, request id,
    # then the rate limiter
    limiter = None
    if settings.rate_limit_enabled:
        limiter = FixedWindowRateLimiter(
            settings.rate_limit_requests, settings.rate_limit_window_seconds
        )
    app.state.rate_limiter = limiter

    app.middleware("http")(rate_limit_middleware(limiter))
    app.middleware("http")(add_request_id_middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
        expose_headers=["X-Request-ID"],
    )


def _include_routers(app: FastAPI, prefix: str) -> None:
    app.include_router(health_router, prefix=prefix, tags=["Health & Status"])
    app.include_router(auth_router, prefix=f"{prefix}/auth", tags=["Auth"])
    app.include_router(stocks_router, prefix=f"{prefix}/stocks", tags=["Stocks"])
    app.include_router(indices_router, prefix=f"{prefix}/indices", tags=["Indices"])
    app.include_router(
        watchlist_router, prefix=f"{prefix}/watchlist", tags=["Watchlist"]
    )


def create_app(
    settings: Optional[Settings] = None,
    market_data: Optional[MarketDataService] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Configuration (defaults to the cached environment settings)
        market_data: Market data service (defaults to one backed by Yahoo Finance)

    Returns:
        Configured FastAPI app
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="StockPulse API",
        description="Indian market quotes, charts, search and personal watchlists",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.market_data = market_data or _build_market_data(settings)

    _install_middleware(app, settings)
    setup_exception_handlers(app)
    _include_routers(app, settings.api_prefix)

    logger.debug(
        "FastAPI application created",
        api_prefix=settings.api_prefix,
        environment=settings.environment,
        rate_limited=settings.rate_limit_enabled,
    )
    return app
