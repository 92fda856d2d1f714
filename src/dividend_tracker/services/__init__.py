"""Service layer - business logic orchestration."""

from dividend_tracker.services.ledger_service import LedgerService
from dividend_tracker.services.price_cache import PriceCache
from dividend_tracker.services.price_resolver import (
    PriceResolver,
    build_price_resolver,
    build_quote_providers,
)
from dividend_tracker.services.valuation_service import ValuationService
from dividend_tracker.services.auth_service import AuthService

__all__ = [
    "LedgerService",
    "PriceCache",
    "PriceResolver",
    "build_price_resolver",
    "build_quote_providers",
    "ValuationService",
    "AuthService",
]
