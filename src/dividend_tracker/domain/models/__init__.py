"""Domain models package."""

from dividend_tracker.domain.models.enums import TransactionType
from dividend_tracker.domain.models.user import User, AccessToken
from dividend_tracker.domain.models.holding import Holding
from dividend_tracker.domain.models.transaction import Transaction
from dividend_tracker.domain.models.dividend import Dividend
from dividend_tracker.domain.models.price import PriceCacheEntry

__all__ = [
    "TransactionType",
    "User",
    "AccessToken",
    "Holding",
    "Transaction",
    "Dividend",
    "PriceCacheEntry",
]
