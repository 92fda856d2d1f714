"""Transaction repository protocol."""

from decimal import Decimal
from typing import Protocol, Optional

from dividend_tracker.domain.models import Transaction


class TransactionRepository(Protocol):
    """Interface for the append-only transaction log."""

    def add(self, transaction: Transaction) -> Transaction:
        """Stage a new transaction record."""
        ...

    def list_by_user(self, user_id: int, ticker: Optional[str] = None) -> list[Transaction]:
        """List transactions newest first (transaction_date, then created_at)."""
        ...

    def realized_gains_by_ticker(self, user_id: int) -> dict[str, Decimal]:
        """Sum of realized gain/loss over SELL transactions, per ticker."""
        ...
