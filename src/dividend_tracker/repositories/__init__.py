"""Repository layer - data access abstractions and implementations."""

from dividend_tracker.repositories.protocols import (
    UserRepository,
    HoldingRepository,
    TransactionRepository,
    DividendRepository,
    UnitOfWork,
)

__all__ = [
    "UserRepository",
    "HoldingRepository",
    "TransactionRepository",
    "DividendRepository",
    "UnitOfWork",
]
