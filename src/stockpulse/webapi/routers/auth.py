"""Registration, login and profile endpoints."""

from fastapi import APIRouter, Depends

from ...ormdb.models import User
from ...services import AuthService
from ..dependencies import get_auth_service, get_current_user
from ..models.requests import LoginRequest, RegisterRequest
from ..models.responses import AuthResponse, ProfileResponse, UserProfile, UserSummary

router = APIRouter()


@router.post(
    "/register",
    response_model=AuthResponse,
    response_model_exclude_none=True,
    status_code=201,
    summary="Register",
    description="Create an account; the response carries a bearer token",
)
def register(
    payload: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    result = auth_service.register(payload.username, payload.email, payload.password)
    return AuthResponse(
        message="User registered successfully",
        token=result.token,
        user=UserSummary.from_user(result.user),
    )


@router.post(
    "/login",
    response_model=AuthResponse,
    response_model_exclude_none=True,
    summary="Login",
    description="Exchange email and password for a bearer token",
)
def login(
    payload: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    result = auth_service.login(payload.email, payload.password)
    return AuthResponse(
        message="Login successful",
        token=result.token,
        user=UserSummary.from_user(result.user),
    )


@router.get(
    "/profile",
    response_model=ProfileResponse,
    response_model_exclude_none=True,
    summary="Current User",
)
async def profile(user: User = Depends(get_current_user)):
    return ProfileResponse(user=UserProfile.from_user(user))
