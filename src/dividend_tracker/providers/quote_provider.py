"""Quote provider protocol and shared parsing helpers."""

from decimal import Decimal, InvalidOperation
from typing import Any, Protocol

from dividend_tracker.core.exceptions import UpstreamUnavailableError


class QuoteProvider(Protocol):
    """
    A single upstream source of current share prices.

    ``fetch`` returns a positive price or raises UpstreamUnavailableError;
    it never returns None or zero.
    """

    name: str

    def fetch(self, ticker: str) -> Decimal:
        ...


def parse_price(raw: Any, source: str, ticker: str) -> Decimal:
    """Convert an upstream price value to a positive Decimal."""
    if raw is None:
        raise UpstreamUnavailableError(source, ticker, "no price in response")
    try:
        price = Decimal(str(raw))
    except (InvalidOperation, ValueError) as exc:
        raise UpstreamUnavailableError(source, ticker, f"unparseable price {raw!r}") from exc
    if not price.is_finite() or price <= 0:
        raise UpstreamUnavailableError(source, ticker, f"non-positive price {raw!r}")
    return price
