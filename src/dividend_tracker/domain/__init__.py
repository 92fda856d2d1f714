"""Domain layer - pure business models with no external dependencies."""

from dividend_tracker.domain.models import (
    TransactionType,
    User,
    AccessToken,
    Holding,
    Transaction,
    Dividend,
)

__all__ = [
    "TransactionType",
    "User",
    "AccessToken",
    "Holding",
    "Transaction",
    "Dividend",
]
