"""Dividend repository protocol."""

from decimal import Decimal
from typing import Protocol, Optional

from dividend_tracker.domain.models import Dividend


class DividendRepository(Protocol):
    """Interface for the append-only dividend log."""

    def add(self, dividend: Dividend) -> Dividend:
        """Stage a new dividend record."""
        ...

    def list_by_user(self, user_id: int, ticker: Optional[str] = None) -> list[Dividend]:
        """List dividends newest first by payment date, with company names."""
        ...

    def totals_by_ticker(self, user_id: int) -> dict[str, tuple[Decimal, int]]:
        """Per ticker: (sum of total_amount, number of payments)."""
        ...
