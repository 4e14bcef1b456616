"""Response envelope models for the StockPulse API."""

from datetime import datetime
from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

from ...core.models import CamelModel
from ...ormdb.models import User

# Generic type for data responses
T = TypeVar("T")


def _iso(dt: Optional[datetime]) -> Optional[str]:
    return dt.isoformat() if dt else None


class BaseResponse(BaseModel):
    """Uniform envelope shared by every response."""

    success: bool = Field(..., description="Whether the request was successful")
    message: Optional[str] = Field(None, description="Human readable message")


class SuccessResponse(BaseResponse, Generic[T]):
    """Generic success response with typed data."""

    success: bool = Field(True, description="Always true for success responses")
    data: T = Field(..., description="Response data")


class ErrorResponse(BaseResponse):
    """Error response model."""

    success: bool = Field(False, description="Always false for error responses")
    error: Optional[Any] = Field(None, description="Error detail")


class UserSummary(CamelModel):
    """Public identity returned after register and login."""

    id: int
    username: str
    email: str

    @classmethod
    def from_user(cls, user: User) -> "UserSummary":
        return cls(id=user.id, username=user.username, email=user.email)


class WatchlistEntryOut(CamelModel):
    """Stored watchlist entry without prices."""

    symbol: str
    company_name: str
    added_at: Optional[str] = None


class UserProfile(UserSummary):
    """Full user record, password excluded."""

    watchlist: List[WatchlistEntryOut] = Field(default_factory=list)
    created_at: Optional[str] = None

    @classmethod
    def from_user(cls, user: User) -> "UserProfile":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            watchlist=[
                WatchlistEntryOut(
                    symbol=entry.symbol,
                    company_name=entry.company_name,
                    added_at=_iso(entry.added_at),
                )
                for entry in user.watchlist
            ],
            created_at=_iso(user.created_at),
        )


class AuthResponse(BaseResponse):
    """Token and identity issued by register and login."""

    success: bool = True
    token: str = Field(..., description="Bearer token")
    user: UserSummary


class ProfileResponse(BaseResponse):
    """Current user profile."""

    success: bool = True
    user: UserProfile


class HealthResponse(BaseResponse):
    """Liveness probe response."""

    success: bool = True
    status: str = Field(..., description="OK when the server is running")


class ReadinessResponse(BaseResponse):
    """Readiness probe response."""

    status: str
    database: dict = Field(default_factory=dict)


class ClientConfig(CamelModel):
    """Settings a client needs at startup."""

    refresh_interval_seconds: int
    default_currency: str
