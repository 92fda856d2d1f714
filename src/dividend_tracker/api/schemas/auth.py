"""Pydantic schemas for registration and login."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from dividend_tracker.api.schemas.base import CamelRequest


class RegisterRequest(CamelRequest):
    """Request schema for creating an account."""

    email: Optional[str] = None
    password: Optional[str] = None
    name: Optional[str] = None


class LoginRequest(CamelRequest):
    """Request schema for logging in."""

    email: Optional[str] = None
    password: Optional[str] = None


class UserResponse(BaseModel):
    """Public view of a user."""

    model_config = {"from_attributes": True}

    user_id: int
    email: str
    name: str
    created_at: Optional[datetime] = None


class AuthResponse(BaseModel):
    """Token issued on register or login."""

    message: str
    token: str
    user: UserResponse
