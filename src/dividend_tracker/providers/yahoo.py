"""Yahoo Finance provider via yfinance."""

from decimal import Decimal

from dividend_tracker.core.exceptions import UpstreamUnavailableError
from dividend_tracker.providers.quote_provider import parse_price


# Lazy import so tests can patch before import
def _get_yf():
    import yfinance as yf
    return yf


class YahooFinanceProvider:
    """Quote source backed by ``yfinance.Ticker.info``."""

    name = "yahoo"

    def fetch(self, ticker: str) -> Decimal:
        """Return currentPrice, falling back to regularMarketPrice."""
        try:
            info = _get_yf().Ticker(ticker.upper()).info
        except Exception as exc:
            # yfinance surfaces network and parsing problems as assorted exception types
            raise UpstreamUnavailableError(self.name, ticker, str(exc) or type(exc).__name__) from exc

        if not isinstance(info, dict):
            raise UpstreamUnavailableError(self.name, ticker, "no quote info")
        price = info.get("currentPrice")
        if price is None:
            price = info.get("regularMarketPrice")
        return parse_price(price, self.name, ticker)
