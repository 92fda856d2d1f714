"""Registration and login endpoints."""

from fastapi import APIRouter, Depends

from dividend_tracker.api.deps import get_auth_service
from dividend_tracker.api.schemas import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    UserResponse,
)
from dividend_tracker.services import AuthService

router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=201)
def register(
    data: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Create a user and return a bearer token."""
    user, token = auth_service.register(data.email, data.password, data.name)
    return AuthResponse(
        message="User created successfully",
        token=token,
        user=UserResponse.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
def login(
    data: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Exchange credentials for a bearer token."""
    user, token = auth_service.login(data.email, data.password)
    return AuthResponse(
        message="Login successful",
        token=token,
        user=UserResponse.model_validate(user),
    )
