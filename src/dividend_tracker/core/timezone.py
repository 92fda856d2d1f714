"""Timezone and date utilities for US/Eastern market time."""

from datetime import date, datetime, timezone
from typing import Union

import pytz
from dateutil import parser as date_parser

EASTERN_TZ = pytz.timezone("US/Eastern")


def now_eastern() -> datetime:
    """Return current time in US/Eastern timezone."""
    return datetime.now(EASTERN_TZ)


def to_eastern(dt: datetime) -> datetime:
    """Convert a datetime to US/Eastern timezone."""
    if dt.tzinfo is None:
        # Assume naive datetime is already Eastern
        return EASTERN_TZ.localize(dt)
    return dt.astimezone(EASTERN_TZ)


def utcnow() -> datetime:
    """Return the current UTC time as a naive datetime (storage format)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def today_eastern() -> date:
    """Return today's date on the US/Eastern calendar."""
    return now_eastern().date()


def parse_trade_date(value: Union[str, date, datetime]) -> date:
    """
    Parse a trade, payment or record date.

    Accepts ISO dates, full timestamps and loose formats such as
    ``01/15/2024``. A string keeps the calendar day it was written with;
    an aware datetime object is converted to its Eastern calendar day.
    """
    if isinstance(value, datetime):
        return to_eastern(value).date()
    if isinstance(value, date):
        return value
    return date_parser.parse(value).date()
