"""Price cache entry model."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class PriceCacheEntry:
    """A resolved price and the clock reading when it was fetched."""

    price: Decimal
    fetched_at: float
