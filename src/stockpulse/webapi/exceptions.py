"""Exception handlers mapping failures onto the ``{success, message, error}`` envelope."""

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..config.logging import get_logger
from ..config.settings import get_settings
from ..exceptions import StockPulseException, ValidationException
from .models.responses import ErrorResponse

logger = get_logger(__name__)

ROUTE_NOT_FOUND = "Route Not Found"
INTERNAL_ERROR = "Something went wrong"


def error_response(status_code: int, message: str, error=None) -> JSONResponse:
    """Build a JSON error envelope; ``error`` is omitted when None."""
    content = ErrorResponse(message=message, error=error).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=content)


async def stockpulse_exception_handler(
    request: Request, exc: StockPulseException
) -> JSONResponse:
    """Domain failures carry their own status and client-safe message."""
    logger.info(
        "Request rejected",
        exception_type=type(exc).__name__,
        status_code=exc.status_code,
        message=exc.message,
        **exc.details,
    )
    # Only validation failures echo their details back to the client
    error = exc.details if isinstance(exc, ValidationException) else None
    return error_response(exc.status_code, exc.message, error)


def _field_path(loc) -> str:
    return ".".join(str(part) for part in loc)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed body, path or query input is a 400 with per-field messages."""
    field_errors = {_field_path(error["loc"]): error["msg"] for error in exc.errors()}
    return await stockpulse_exception_handler(
        request, ValidationException(field_errors=field_errors)
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Routing-level errors; unknown paths get a fixed message."""
    message = ROUTE_NOT_FOUND if exc.status_code == 404 else str(exc.detail)
    logger.info("HTTP error", status_code=exc.status_code, detail=exc.detail)
    return error_response(exc.status_code, message)


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Anything unhandled becomes a 500; the cause is only exposed in development."""
    logger.error(
        "Unhandled exception",
        exception_type=type(exc).__name__,
        request_id=getattr(request.state, "request_id", None),
        path=request.url.path,
        method=request.method,
        exc_info=exc,
    )

    settings = getattr(request.app.state, "settings", None) or get_settings()
    error = str(exc) if settings.is_development() else None
    return error_response(500, INTERNAL_ERROR, error)


def setup_exception_handlers(app):
    """Register exception handlers with FastAPI app."""
    app.add_exception_handler(StockPulseException, stockpulse_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
