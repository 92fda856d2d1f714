"""Pydantic schemas for holdings and portfolio valuation."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel


class HoldingResponse(BaseModel):
    """Stored position as kept by the ledger."""

    model_config = {"from_attributes": True}

    ticker: str
    company_name: str
    total_shares: Decimal
    average_cost: Decimal
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class HoldingValuationResponse(BaseModel):
    """Holding enriched with current price and return metrics."""

    model_config = {"from_attributes": True}

    ticker: str
    company_name: str
    total_shares: Decimal
    average_cost: Decimal
    current_price: Decimal
    total_cost: Decimal
    current_value: Decimal
    unrealized_gain_loss: Decimal
    unrealized_gain_loss_percent: Decimal
    total_dividends: Decimal
    dividend_count: int
    total_realized_gains: Decimal
    total_return: Decimal
    total_return_percent: Decimal
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PortfolioSummaryResponse(BaseModel):
    """Portfolio totals."""

    model_config = {"from_attributes": True}

    holding_count: int
    total_cost: Decimal
    current_value: Decimal
    unrealized_gain_loss: Decimal
    unrealized_gain_loss_percent: Decimal
    total_dividends: Decimal
    total_realized_gains: Decimal
    total_return: Decimal
    total_return_percent: Decimal
