"""Exception hierarchy shared by the service layer and the API."""

from typing import Any, Dict, Optional


class StockPulseException(Exception):
    """Base exception for StockPulse application."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details or {}


class ValidationException(StockPulseException):
    """Exception for validation errors."""

    def __init__(
        self,
        message: str = "Validation failed",
        field_errors: Optional[Dict[str, str]] = None,
    ):
        super().__init__(
            message=message,
            status_code=400,
            details={"field_errors": field_errors or {}},
        )


class NotFoundError(StockPulseException):
    """Exception for resource not found errors."""

    def __init__(self, message: str, resource: str, identifier: Optional[str] = None):
        super().__init__(
            message=message,
            status_code=404,
            details={"resource": resource, "identifier": identifier},
        )


class ConflictError(StockPulseException):
    """Exception for duplicate registrations and watchlist entries."""

    def __init__(self, message: str):
        super().__init__(message=message, status_code=409)


class UnauthorizedError(StockPulseException):
    """Exception for bad credentials or tokens."""

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message=message, status_code=401)


class RateLimitError(StockPulseException):
    """Exception for rate limiting errors."""

    def __init__(self, limit: int, window_seconds: int):
        super().__init__(
            message="Too many requests, please try again later",
            status_code=429,
            details={"limit": limit, "window_seconds": window_seconds},
        )


class ProviderError(StockPulseException):
    """Base class for market data provider failures."""

    def __init__(self, symbol: str, operation: str, message: str, status_code: int):
        super().__init__(
            message=f"{operation} failed for '{symbol}': {message}",
            status_code=status_code,
            details={"symbol": symbol, "operation": operation},
        )
        self.symbol = symbol
        self.operation = operation


class SymbolNotFoundError(ProviderError):
    """The provider answered, but has no data for the symbol."""

    reason = "not_found"

    def __init__(self, symbol: str, operation: str = "quote"):
        super().__init__(symbol, operation, "symbol not found", status_code=404)


class UpstreamUnavailableError(ProviderError):
    """The provider call failed (network, throttling or malformed payload)."""

    reason = "upstream_unavailable"

    def __init__(self, symbol: str, operation: str, message: str):
        super().__init__(symbol, operation, message, status_code=503)
