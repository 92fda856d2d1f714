"""Pydantic schemas for BUY/SELL transactions."""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from dividend_tracker.api.schemas.base import CamelRequest, parse_optional_date
from dividend_tracker.api.schemas.stock import HoldingResponse
from dividend_tracker.domain.models.enums import TransactionType


class TransactionRequest(CamelRequest):
    """Request schema for recording a BUY or SELL."""

    ticker: str = Field(..., min_length=1, max_length=20)
    shares: Decimal = Field(..., gt=0)
    price_per_share: Decimal = Field(..., gt=0)
    transaction_type: TransactionType
    transaction_date: Optional[date] = Field(
        default=None,
        description="Trade date; defaults to today (US/Eastern)",
    )
    company_name: Optional[str] = Field(default=None, max_length=200)
    notes: Optional[str] = Field(default=None, max_length=500)

    @field_validator("ticker")
    @classmethod
    def uppercase_ticker(cls, v: str) -> str:
        return v.strip().upper()

    @field_validator("transaction_type", mode="before")
    @classmethod
    def uppercase_type(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v

    @field_validator("transaction_date", mode="before")
    @classmethod
    def parse_date(cls, v: Any) -> Any:
        return parse_optional_date(v)


class TransactionResponse(BaseModel):
    """Response schema for a single transaction."""

    model_config = {"from_attributes": True}

    transaction_id: Optional[int] = None
    ticker: str
    shares: Decimal
    price_per_share: Decimal
    total_amount: Decimal
    transaction_type: TransactionType
    transaction_date: date
    realized_gain_loss: Decimal
    notes: Optional[str] = None
    created_at: Optional[datetime] = None


class TransactionResultResponse(BaseModel):
    """Outcome of a BUY or SELL."""

    message: str
    transaction: Optional[TransactionResponse] = None
    holding: Optional[HoldingResponse] = None
    realized_gain_loss: Optional[Decimal] = None
