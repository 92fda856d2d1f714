"""Financial Modeling Prep quote-short provider."""

from decimal import Decimal
from typing import Optional

import httpx

from dividend_tracker.core.exceptions import UpstreamUnavailableError
from dividend_tracker.providers.quote_provider import parse_price

DEFAULT_BASE_URL = "https://financialmodelingprep.com/api/v3"


class FinancialModelingPrepProvider:
    """Secondary quote source."""

    name = "fmp"

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 8.0,
        client: Optional[httpx.Client] = None,
    ):
        self._api_key = api_key
        self._client = client or httpx.Client(base_url=base_url.rstrip("/"), timeout=timeout)

    def fetch(self, ticker: str) -> Decimal:
        """Return the latest price for ``ticker``."""
        params = {"apikey": self._api_key} if self._api_key else None
        try:
            response = self._client.get(f"/quote-short/{ticker.upper()}", params=params)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as exc:
            raise UpstreamUnavailableError(self.name, ticker, str(exc) or type(exc).__name__) from exc
        except ValueError as exc:
            raise UpstreamUnavailableError(self.name, ticker, "invalid JSON") from exc

        if not isinstance(data, list) or not data or not isinstance(data[0], dict):
            raise UpstreamUnavailableError(self.name, ticker, "empty quote")
        return parse_price(data[0].get("price"), self.name, ticker)

    def close(self) -> None:
        self._client.close()
