"""Health check and client configuration endpoints."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..config.logging import get_logger
from ..config.settings import Settings
from ..ormdb.database import check_database_health
from .dependencies import get_app_settings
from .models.responses import (
    ClientConfig,
    HealthResponse,
    ReadinessResponse,
    SuccessResponse,
)

logger = get_logger(__name__)
router = APIRouter()


@router.get(
    "/health",
    response_model=HealthResponse,
    response_model_exclude_none=True,
    summary="Liveness Probe",
)
async def liveness_probe():
    """
    Liveness probe endpoint.

    Returns 200 if the application is running and can serve requests.
    This is a lightweight check that doesn't verify external dependencies.
    """
    return HealthResponse(status="OK", message="Server is running")


@router.get("/health/ready", response_model=ReadinessResponse, summary="Readiness Probe")
async def readiness_probe():
    """
    Readiness probe endpoint.

    Returns 200 when the user store is reachable, 503 otherwise.
    """
    db_health = check_database_health()

    if db_health["status"] != "healthy":
        logger.warning("Readiness check failed", database=db_health)
        body = ReadinessResponse(
            success=False,
            status="not_ready",
            message="Database not healthy",
            database=db_health,
        )
        return JSONResponse(status_code=503, content=body.model_dump())

    return ReadinessResponse(success=True, status="ready", database=db_health)


@router.get(
    "/config",
    response_model=SuccessResponse[ClientConfig],
    response_model_exclude_none=True,
    summary="Client Configuration",
    description="Polling cadence and display defaults for clients",
)
async def client_config(settings: Settings = Depends(get_app_settings)):
    return SuccessResponse[ClientConfig](
        data=ClientConfig(
            refresh_interval_seconds=settings.client_refresh_interval_seconds,
            default_currency=settings.default_currency,
        )
    )
