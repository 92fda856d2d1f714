"""Dividend domain model."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional


@dataclass
class Dividend:
    """
    Append-only record of a dividend payment.

    Not validated against the current share count, so historical payments
    can be entered after the fact. ``company_name`` is not stored; it is
    filled in from the matching holding when dividends are listed.
    """

    user_id: int
    ticker: str
    shares_held: Decimal
    amount_per_share: Decimal
    total_amount: Decimal
    payment_date: date
    record_date: Optional[date] = None
    notes: Optional[str] = None
    dividend_id: Optional[int] = None
    created_at: Optional[datetime] = None
    company_name: Optional[str] = None
