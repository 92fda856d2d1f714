"""Pydantic schemas for API request/response."""

from dividend_tracker.api.schemas.auth import (
    RegisterRequest,
    LoginRequest,
    UserResponse,
    AuthResponse,
)
from dividend_tracker.api.schemas.stock import (
    HoldingResponse,
    HoldingValuationResponse,
    PortfolioSummaryResponse,
)
from dividend_tracker.api.schemas.transaction import (
    TransactionRequest,
    TransactionResponse,
    TransactionResultResponse,
)
from dividend_tracker.api.schemas.dividend import (
    DividendRequest,
    DividendResponse,
    DividendCreatedResponse,
)

__all__ = [
    "RegisterRequest",
    "LoginRequest",
    "UserResponse",
    "AuthResponse",
    "HoldingResponse",
    "HoldingValuationResponse",
    "PortfolioSummaryResponse",
    "TransactionRequest",
    "TransactionResponse",
    "TransactionResultResponse",
    "DividendRequest",
    "DividendResponse",
    "DividendCreatedResponse",
]
