"""Core utilities and shared functionality."""

from dividend_tracker.core.timezone import (
    now_eastern,
    to_eastern,
    today_eastern,
    utcnow,
    parse_trade_date,
    EASTERN_TZ,
)
from dividend_tracker.core.exceptions import (
    AppError,
    ValidationError,
    NotFoundError,
    InsufficientSharesError,
    AuthenticationError,
    PersistenceError,
    UpstreamUnavailableError,
)
from dividend_tracker.core.locks import KeyedLock, holding_locks

__all__ = [
    "now_eastern",
    "to_eastern",
    "today_eastern",
    "utcnow",
    "parse_trade_date",
    "EASTERN_TZ",
    "AppError",
    "ValidationError",
    "NotFoundError",
    "InsufficientSharesError",
    "AuthenticationError",
    "PersistenceError",
    "UpstreamUnavailableError",
    "KeyedLock",
    "holding_locks",
]
