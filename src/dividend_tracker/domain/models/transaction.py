"""Transaction domain model."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from dividend_tracker.domain.models.enums import TransactionType


@dataclass
class Transaction:
    """
    Append-only record of a BUY or SELL.

    ``realized_gain_loss`` is zero for BUY and computed against the average
    cost at sale time for SELL.
    """

    user_id: int
    ticker: str
    shares: Decimal
    price_per_share: Decimal
    total_amount: Decimal
    transaction_type: TransactionType
    transaction_date: date
    realized_gain_loss: Decimal = field(default_factory=lambda: Decimal("0"))
    notes: Optional[str] = None
    transaction_id: Optional[int] = None
    created_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        if isinstance(self.transaction_type, str):
            self.transaction_type = TransactionType(self.transaction_type)
