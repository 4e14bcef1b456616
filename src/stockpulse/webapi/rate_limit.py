"""Fixed-window request rate limiting per client address."""

import time
from typing import Callable, Dict, Optional, Tuple

from fastapi import Request

from ..config.logging import get_logger
from ..exceptions import RateLimitError
from .exceptions import error_response

logger = get_logger(__name__)

# Forget idle clients once the table grows past this size
_MAX_TRACKED_CLIENTS = 10_000


class FixedWindowRateLimiter:
    """Counts requests per key within consecutive fixed windows."""

    def __init__(
        self,
        limit: int,
        window_seconds: int,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: Dict[str, Tuple[float, int]] = {}

    def _prune(self, now: float) -> None:
        self._windows = {
            key: (start, count)
            for key, (start, count) in self._windows.items()
            if now - start < self.window_seconds
        }

    def hit(self, key: str) -> bool:
        """Record a request; returns False once the key is over its limit."""
        now = self._clock()
        start, count = self._windows.get(key, (now, 0))

        if now - start >= self.window_seconds:
            start, count = now, 0

        count += 1
        self._windows[key] = (start, count)

        if len(self._windows) > _MAX_TRACKED_CLIENTS:
            self._prune(now)

        return count <= self.limit


def _client_key(request: Request) -> str:
    return request.client.host if request.client else "unknown"


def rate_limit_middleware(limiter: Optional[FixedWindowRateLimiter]):
    """Build an HTTP middleware enforcing the limiter."""

    async def middleware(request: Request, call_next):
        if limiter is not None and not limiter.hit(_client_key(request)):
            exc = RateLimitError(limiter.limit, limiter.window_seconds)
            logger.warning(
                "Rate limit exceeded",
                client=_client_key(request),
                path=request.url.path,
                limit=limiter.limit,
            )
            return error_response(exc.status_code, exc.message)
        return await call_next(request)

    return middleware
