"""Holding domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass
class Holding:
    """
    A user's current position in one ticker.

    Mutated only by the ledger. A holding whose shares fall to the
    liquidation threshold is deleted rather than kept at zero.
    """

    user_id: int
    ticker: str
    company_name: str
    total_shares: Decimal = field(default_factory=lambda: Decimal("0"))
    average_cost: Decimal = field(default_factory=lambda: Decimal("0"))
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def total_cost(self) -> Decimal:
        """Cost basis of the whole position."""
        return self.total_shares * self.average_cost
