"""Alpha Vantage GLOBAL_QUOTE provider."""

import logging
from decimal import Decimal
from typing import Optional

import httpx

from dividend_tracker.core.exceptions import UpstreamUnavailableError
from dividend_tracker.providers.quote_provider import parse_price

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://www.alphavantage.co"


class AlphaVantageProvider:
    """
    Primary quote source.

    The free tier allows 5 calls per minute; callers are expected to space
    requests (the price resolver staggers them).
    """

    name = "alpha_vantage"

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        client: Optional[httpx.Client] = None,
    ):
        self._api_key = api_key
        self._client = client or httpx.Client(base_url=base_url.rstrip("/"), timeout=timeout)

    def fetch(self, ticker: str) -> Decimal:
        """Return the latest trade price for ``ticker``."""
        try:
            response = self._client.get(
                "/query",
                params={
                    "function": "GLOBAL_QUOTE",
                    "symbol": ticker.upper(),
                    "apikey": self._api_key,
                },
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as exc:
            raise UpstreamUnavailableError(self.name, ticker, str(exc) or type(exc).__name__) from exc
        except ValueError as exc:
            raise UpstreamUnavailableError(self.name, ticker, "invalid JSON") from exc

        if not isinstance(data, dict):
            raise UpstreamUnavailableError(self.name, ticker, "unexpected payload")

        quote = data.get("Global Quote")
        if isinstance(quote, dict) and quote.get("05. price"):
            return parse_price(quote["05. price"], self.name, ticker)

        if "Error Message" in data:
            logger.info("Alpha Vantage error for %s: %s", ticker, data["Error Message"])
            raise UpstreamUnavailableError(self.name, ticker, data["Error Message"])
        # Free-tier throttling comes back as HTTP 200 with a "Note"/"Information" message
        note = data.get("Note") or data.get("Information")
        if note:
            logger.info("Alpha Vantage rate limit for %s: %s", ticker, note)
            raise UpstreamUnavailableError(self.name, ticker, "rate limited")
        raise UpstreamUnavailableError(self.name, ticker, "empty quote")

    def close(self) -> None:
        self._client.close()
