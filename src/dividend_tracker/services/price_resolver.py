"""Price resolver: cache, then an ordered chain of quote sources, then synthetic."""

import logging
import threading
import time
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FuturesTimeoutError
from decimal import Decimal
from typing import Callable, Optional

from dividend_tracker.config.settings import Settings
from dividend_tracker.core.exceptions import UpstreamUnavailableError
from dividend_tracker.providers import (
    QuoteProvider,
    AlphaVantageProvider,
    FinancialModelingPrepProvider,
    YahooFinanceProvider,
    SyntheticPriceGenerator,
)
from dividend_tracker.services.price_cache import PriceCache

logger = logging.getLogger(__name__)

DEFAULT_CALL_TIMEOUT_SECONDS = 8.0
DEFAULT_STAGGER_SECONDS = 2.0
DEFAULT_MAX_WORKERS = 8


def normalize_ticker(ticker: str) -> str:
    """Strip whitespace and uppercase."""
    return ticker.strip().upper()


class PriceResolver:
    """
    Resolves a current price for every requested ticker.

    Fresh cache entries are served without any upstream call. Misses walk
    the provider chain in order, each call bounded by a timeout, and end at
    the synthetic generator, which cannot fail. Every resolved price,
    synthetic included, is cached the moment it is known.

    Uncached tickers in one batch are resolved concurrently, but the i-th
    one does not start before ``i * stagger_seconds`` have passed, to stay
    under upstream per-minute quotas.
    """

    def __init__(
        self,
        cache: PriceCache,
        providers: Sequence[QuoteProvider],
        fallback: Optional[SyntheticPriceGenerator] = None,
        call_timeout_seconds: Optional[float] = DEFAULT_CALL_TIMEOUT_SECONDS,
        stagger_seconds: float = DEFAULT_STAGGER_SECONDS,
        max_workers: int = DEFAULT_MAX_WORKERS,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._cache = cache
        self._providers = list(providers)
        self._fallback = fallback or SyntheticPriceGenerator()
        self._call_timeout = call_timeout_seconds
        self._stagger = stagger_seconds
        self._max_workers = max(1, max_workers)
        self._clock = clock
        self._sleep = sleep
        # Upstream calls run here so a hung call can be abandoned after the timeout
        self._call_executor = ThreadPoolExecutor(
            max_workers=self._max_workers * 2,
            thread_name_prefix="quote-call",
        )

    @property
    def cache(self) -> PriceCache:
        return self._cache

    @property
    def providers(self) -> list[QuoteProvider]:
        return list(self._providers)

    def resolve_prices(self, tickers: Iterable[str]) -> dict[str, Decimal]:
        """
        Return ticker -> price for every non-blank ticker requested.

        Tickers are normalized to uppercase; result keys are normalized.
        """
        symbols = sorted({normalize_ticker(t) for t in tickers if t and t.strip()})
        prices: dict[str, Decimal] = {}
        missing: list[str] = []

        for symbol in symbols:
            cached = self._cache.get(symbol)
            if cached is not None:
                prices[symbol] = cached
            else:
                missing.append(symbol)

        if not missing:
            return prices

        if len(missing) == 1:
            prices[missing[0]] = self._resolve_one(missing[0])
            return prices

        start = self._clock()
        workers = min(self._max_workers, len(missing))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="price-resolve") as pool:
            futures = {
                symbol: pool.submit(self._resolve_one, symbol, start + index * self._stagger)
                for index, symbol in enumerate(missing)
            }
            for symbol, future in futures.items():
                prices[symbol] = future.result()

        return prices

    def resolve_price(self, ticker: str) -> Decimal:
        """Resolve a single ticker."""
        symbol = normalize_ticker(ticker)
        return self.resolve_prices([symbol])[symbol]

    def warm(self, tickers: Iterable[str]) -> None:
        """Resolve tickers one at a time, spaced by the stagger interval."""
        for index, ticker in enumerate(tickers):
            if index:
                self._sleep(self._stagger)
            self.resolve_price(ticker)

    def start_warmup(self, tickers: Sequence[str]) -> threading.Thread:
        """Run ``warm`` on a daemon thread and return the thread."""
        thread = threading.Thread(
            target=self.warm,
            args=(list(tickers),),
            name="price-warmup",
            daemon=True,
        )
        thread.start()
        return thread

    def close(self) -> None:
        """Release the call pool and any provider HTTP clients."""
        self._call_executor.shutdown(wait=False, cancel_futures=True)
        for provider in self._providers:
            close = getattr(provider, "close", None)
            if callable(close):
                close()

    def _resolve_one(self, ticker: str, not_before: Optional[float] = None) -> Decimal:
        if not_before is not None:
            delay = not_before - self._clock()
            if delay > 0:
                self._sleep(delay)
            # Another request may have resolved it while we were waiting
            cached = self._cache.get(ticker)
            if cached is not None:
                return cached

        for provider in self._providers:
            try:
                price = self._call(provider, ticker)
            except UpstreamUnavailableError as exc:
                logger.warning("Quote source %s failed for %s: %s", provider.name, ticker, exc.message)
                continue
            except FuturesTimeoutError:
                logger.warning(
                    "Quote source %s timed out for %s after %ss",
                    provider.name,
                    ticker,
                    self._call_timeout,
                )
                continue
            except Exception:
                # A misbehaving source must not break the chain
                logger.exception("Quote source %s raised unexpectedly for %s", provider.name, ticker)
                continue

            logger.info("Got %s price for %s: %s", provider.name, ticker, price)
            self._cache.put(ticker, price)
            return price

        price = self._fallback.fetch(ticker)
        logger.warning("Using simulated price for %s (real quote sources failed): %s", ticker, price)
        self._cache.put(ticker, price)
        return price

    def _call(self, provider: QuoteProvider, ticker: str) -> Decimal:
        if self._call_timeout is None:
            return provider.fetch(ticker)
        future = self._call_executor.submit(provider.fetch, ticker)
        try:
            return future.result(timeout=self._call_timeout)
        except FuturesTimeoutError:
            future.cancel()
            raise


def build_quote_providers(settings: Settings) -> list[QuoteProvider]:
    """Instantiate the configured quote sources in priority order."""
    factories: dict[str, Callable[[], QuoteProvider]] = {
        "alpha_vantage": lambda: AlphaVantageProvider(
            api_key=settings.alpha_vantage_api_key,
            base_url=settings.alpha_vantage_base_url,
            timeout=settings.quote_call_timeout_seconds,
        ),
        "fmp": lambda: FinancialModelingPrepProvider(
            api_key=settings.fmp_api_key,
            base_url=settings.fmp_base_url,
            timeout=settings.quote_call_timeout_seconds,
        ),
        "yahoo": YahooFinanceProvider,
    }
    providers: list[QuoteProvider] = []
    for name in settings.quote_providers:
        key = name.strip().lower()
        if key not in factories:
            raise ValueError(
                f"Unknown quote provider '{name}'; expected one of {sorted(factories)}"
            )
        providers.append(factories[key]())
    return providers


def build_price_resolver(settings: Settings) -> PriceResolver:
    """Build a resolver wired from settings."""
    return PriceResolver(
        cache=PriceCache(ttl_seconds=settings.price_cache_ttl_seconds),
        providers=build_quote_providers(settings),
        call_timeout_seconds=settings.quote_call_timeout_seconds,
        stagger_seconds=settings.quote_stagger_seconds,
        max_workers=settings.quote_max_workers,
    )
