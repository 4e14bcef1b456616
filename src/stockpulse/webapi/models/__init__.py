"""API Models package for request/response schemas."""

from .requests import LoginRequest, RegisterRequest
from .responses import (
    AuthResponse,
    BaseResponse,
    ClientConfig,
    ErrorResponse,
    HealthResponse,
    ProfileResponse,
    ReadinessResponse,
    SuccessResponse,
    UserProfile,
    UserSummary,
    WatchlistEntryOut,
)

__all__ = [
    # Response models
    "AuthResponse",
    "BaseResponse",
    "ClientConfig",
    "ErrorResponse",
    "HealthResponse",
    "ProfileResponse",
    "ReadinessResponse",
    "SuccessResponse",
    "UserProfile",
    "UserSummary",
    "WatchlistEntryOut",
    # Request models
    "LoginRequest",
    "RegisterRequest",
]
