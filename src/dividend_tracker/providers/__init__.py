"""Quote providers module."""

from dividend_tracker.providers.quote_provider import QuoteProvider, parse_price
from dividend_tracker.providers.alpha_vantage import AlphaVantageProvider
from dividend_tracker.providers.fmp import FinancialModelingPrepProvider
from dividend_tracker.providers.yahoo import YahooFinanceProvider
from dividend_tracker.providers.synthetic import (
    KNOWN_BASE_PRICES,
    SyntheticPriceGenerator,
    symbol_hash,
)

__all__ = [
    "QuoteProvider",
    "parse_price",
    "AlphaVantageProvider",
    "FinancialModelingPrepProvider",
    "YahooFinanceProvider",
    "KNOWN_BASE_PRICES",
    "SyntheticPriceGenerator",
    "symbol_hash",
]
