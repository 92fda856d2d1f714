"""Holding repository protocol."""

from typing import Protocol, Optional

from dividend_tracker.domain.models import Holding


class HoldingRepository(Protocol):
    """Interface for holding data access."""

    def get(self, user_id: int, ticker: str, for_update: bool = False) -> Optional[Holding]:
        """Retrieve the holding for ``(user_id, ticker)``.

        ``for_update`` requests a row lock where the backend supports one.
        """
        ...

    def list_by_user(self, user_id: int) -> list[Holding]:
        """List all holdings for a user, ordered by ticker."""
        ...

    def add(self, holding: Holding) -> Holding:
        """Stage a new holding."""
        ...

    def update(self, holding: Holding) -> Holding:
        """Stage new share count and average cost for an existing holding."""
        ...

    def delete(self, user_id: int, ticker: str) -> None:
        """Stage removal of a holding."""
        ...
