"""In-memory, time-boxed price cache."""

import threading
import time
from decimal import Decimal
from typing import Callable, Optional

from dividend_tracker.domain.models import PriceCacheEntry

DEFAULT_TTL_SECONDS = 15 * 60


class PriceCache:
    """
    Process-scoped ticker -> price cache.

    Entries are never evicted; an entry older than the TTL is ignored and is
    overwritten by the next successful fetch. The clock is injectable so
    expiry can be tested without waiting.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[str, PriceCacheEntry] = {}
        self._lock = threading.Lock()

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def get(self, ticker: str) -> Optional[Decimal]:
        """Return the cached price if it is still fresh, else None."""
        with self._lock:
            entry = self._entries.get(ticker)
        if entry is None:
            return None
        if self._clock() - entry.fetched_at < self._ttl:
            return entry.price
        return None

    def entry(self, ticker: str) -> Optional[PriceCacheEntry]:
        """Return the raw entry, fresh or stale."""
        with self._lock:
            return self._entries.get(ticker)

    def put(self, ticker: str, price: Decimal) -> None:
        """Store ``price`` stamped with the current clock reading."""
        entry = PriceCacheEntry(price=price, fetched_at=self._clock())
        with self._lock:
            self._entries[ticker] = entry

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
