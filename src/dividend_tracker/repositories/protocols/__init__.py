"""Repository protocol definitions (interfaces)."""

from dividend_tracker.repositories.protocols.user_repo import UserRepository
from dividend_tracker.repositories.protocols.holding_repo import HoldingRepository
from dividend_tracker.repositories.protocols.transaction_repo import TransactionRepository
from dividend_tracker.repositories.protocols.dividend_repo import DividendRepository
from dividend_tracker.repositories.protocols.unit_of_work import UnitOfWork

__all__ = [
    "UserRepository",
    "HoldingRepository",
    "TransactionRepository",
    "DividendRepository",
    "UnitOfWork",
]
