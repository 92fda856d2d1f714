"""Synthetic price generator used when every real quote source fails."""

import random
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

# Approximate reference prices for well-known tickers
KNOWN_BASE_PRICES: dict[str, Decimal] = {
    "AAPL": Decimal("185.00"),
    "MSFT": Decimal("380.00"),
    "GOOGL": Decimal("140.00"),
    "GOOG": Decimal("140.00"),
    "AMZN": Decimal("155.00"),
    "TSLA": Decimal("200.00"),
    "META": Decimal("340.00"),
    "NVDA": Decimal("450.00"),
    "NFLX": Decimal("400.00"),
    "AMD": Decimal("110.00"),
    "INTC": Decimal("40.00"),
    "BABA": Decimal("80.00"),
    "UBER": Decimal("60.00"),
    "ABNB": Decimal("130.00"),
    "COIN": Decimal("180.00"),
    "SQ": Decimal("70.00"),
    "PYPL": Decimal("60.00"),
    "ROKU": Decimal("50.00"),
    "ZOOM": Decimal("70.00"),
    "CRM": Decimal("250.00"),
    "ADBE": Decimal("550.00"),
    "ORCL": Decimal("110.00"),
    "IBM": Decimal("180.00"),
    "V": Decimal("260.00"),
    "MA": Decimal("420.00"),
    "JPM": Decimal("160.00"),
    "BAC": Decimal("35.00"),
    "WFC": Decimal("45.00"),
    "GS": Decimal("380.00"),
    "MS": Decimal("90.00"),
    "C": Decimal("55.00"),
    "KO": Decimal("60.00"),
    "PEP": Decimal("180.00"),
    "WMT": Decimal("160.00"),
    "HD": Decimal("350.00"),
    "DIS": Decimal("110.00"),
    "MCD": Decimal("280.00"),
    "NKE": Decimal("90.00"),
    "SBUX": Decimal("95.00"),
}

MIN_HASHED_PRICE = 5
HASHED_PRICE_SPAN = 295
MAX_VARIATION = Decimal("0.03")
_CENTS = Decimal("0.01")


def symbol_hash(symbol: str) -> int:
    """31-multiplier string hash wrapped to a signed 32-bit integer."""
    value = 0
    for char in symbol:
        value = ((value << 5) - value + ord(char)) & 0xFFFFFFFF
    if value >= 0x80000000:
        value -= 0x100000000
    return value


class SyntheticPriceGenerator:
    """
    Generates a plausible price for any ticker; never fails.

    Known tickers start from a reference price; anything else gets a stable
    base in [$5, $299] derived from the symbol. Both are perturbed by up to
    ±3% and rounded to cents.
    """

    name = "synthetic"

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()

    def base_price(self, ticker: str) -> Decimal:
        """Unperturbed price for ``ticker``."""
        symbol = ticker.upper()
        if symbol in KNOWN_BASE_PRICES:
            return KNOWN_BASE_PRICES[symbol]
        return Decimal(abs(symbol_hash(symbol)) % HASHED_PRICE_SPAN + MIN_HASHED_PRICE)

    def fetch(self, ticker: str) -> Decimal:
        """Return a perturbed synthetic price."""
        variation = Decimal(str(self._rng.random() - 0.5)) * 2 * MAX_VARIATION
        price = self.base_price(ticker) * (1 + variation)
        return price.quantize(_CENTS, rounding=ROUND_HALF_UP)
