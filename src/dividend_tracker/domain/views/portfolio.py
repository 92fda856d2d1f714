"""View models for ledger and valuation outputs."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from dividend_tracker.domain.models import Holding, Transaction


@dataclass
class SellResult:
    """Outcome of applying a SELL to a holding."""

    transaction: Transaction
    holding: Optional[Holding] = None
    liquidated: bool = False


@dataclass
class TickerIncome:
    """Aggregated dividend and realized figures for one ticker."""

    total_dividends: Decimal = field(default_factory=lambda: Decimal("0"))
    dividend_count: int = 0
    total_realized_gains: Decimal = field(default_factory=lambda: Decimal("0"))


@dataclass
class HoldingView:
    """A holding enriched with current price and return metrics."""

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


@dataclass
class PortfolioSummary:
    """Portfolio-level totals across all holdings."""

    holding_count: int = 0
    total_cost: Decimal = field(default_factory=lambda: Decimal("0"))
    current_value: Decimal = field(default_factory=lambda: Decimal("0"))
    unrealized_gain_loss: Decimal = field(default_factory=lambda: Decimal("0"))
    unrealized_gain_loss_percent: Decimal = field(default_factory=lambda: Decimal("0"))
    total_dividends: Decimal = field(default_factory=lambda: Decimal("0"))
    total_realized_gains: Decimal = field(default_factory=lambda: Decimal("0"))
    total_return: Decimal = field(default_factory=lambda: Decimal("0"))
    total_return_percent: Decimal = field(default_factory=lambda: Decimal("0"))
