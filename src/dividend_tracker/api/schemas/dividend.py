"""Pydantic schemas for dividend endpoints."""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from dividend_tracker.api.schemas.base import CamelRequest, parse_optional_date


class DividendRequest(CamelRequest):
    """Request schema for recording a dividend payment."""

    ticker: str = Field(..., min_length=1, max_length=20)
    shares_held: Decimal = Field(..., gt=0)
    amount_per_share: Decimal = Field(..., gt=0)
    payment_date: Optional[date] = None
    record_date: Optional[date] = None
    notes: Optional[str] = Field(default=None, max_length=500)

    @field_validator("ticker")
    @classmethod
    def uppercase_ticker(cls, v: str) -> str:
        return v.strip().upper()

    @field_validator("payment_date", "record_date", mode="before")
    @classmethod
    def parse_dates(cls, v: Any) -> Any:
        return parse_optional_date(v)


class DividendResponse(BaseModel):
    """Response schema for a single dividend."""

    model_config = {"from_attributes": True}

    dividend_id: Optional[int] = None
    ticker: str
    company_name: Optional[str] = None
    shares_held: Decimal
    amount_per_share: Decimal
    total_amount: Decimal
    payment_date: date
    record_date: Optional[date] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None


class DividendCreatedResponse(BaseModel):
    """Response for a recorded dividend."""

    message: str
    dividend: DividendResponse
