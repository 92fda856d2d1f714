"""Position ledger: applies BUY/SELL transactions and records dividends."""

import logging
from datetime import date
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional

from dividend_tracker.core.timezone import today_eastern, utcnow
from dividend_tracker.core.exceptions import (
    ValidationError,
    NotFoundError,
    InsufficientSharesError,
)
from dividend_tracker.core.locks import KeyedLock, holding_locks
from dividend_tracker.domain.models import (
    Holding,
    Transaction,
    TransactionType,
    Dividend,
)
from dividend_tracker.domain.views import SellResult
from dividend_tracker.repositories.protocols import (
    HoldingRepository,
    TransactionRepository,
    DividendRepository,
    UnitOfWork,
)

logger = logging.getLogger(__name__)

DEFAULT_LIQUIDATION_EPSILON = Decimal("0.001")
MAX_TICKER_LENGTH = 20
# Scale of every Numeric amount column.
AMOUNT_QUANTUM = Decimal("0.00000001")


class LedgerService:
    """
    Owns the authoritative position per user and ticker.

    Holdings use a moving weighted-average cost: BUY recomputes the average
    from the pre-update position, SELL never changes it. Every BUY/SELL
    holds the per-(user, ticker) lock and writes the holding change and the
    transaction record in one unit of work.
    """

    def __init__(
        self,
        holding_repo: HoldingRepository,
        transaction_repo: TransactionRepository,
        dividend_repo: DividendRepository,
        unit_of_work: UnitOfWork,
        locks: KeyedLock = holding_locks,
        liquidation_epsilon: Decimal = DEFAULT_LIQUIDATION_EPSILON,
    ):
        self._holding_repo = holding_repo
        self._transaction_repo = transaction_repo
        self._dividend_repo = dividend_repo
        self._uow = unit_of_work
        self._locks = locks
        self._epsilon = liquidation_epsilon

    def apply_buy(
        self,
        user_id: int,
        ticker: str,
        shares: Decimal,
        price_per_share: Decimal,
        transaction_date: Optional[date] = None,
        company_name: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> Holding:
        """
        Add shares to a position, creating it on the first BUY.

        new_avg = (old_shares * old_avg + shares * price) / (old_shares + shares)
        """
        ticker = self._validate_ticker(ticker)
        shares = self._require_positive("shares", shares)
        price_per_share = self._require_positive("pricePerShare", price_per_share)
        txn_date = transaction_date or today_eastern()

        with self._locks.hold((user_id, ticker)):
            with self._uow:
                now = utcnow()
                holding = self._holding_repo.get(user_id, ticker, for_update=True)
                if holding is None:
                    holding = self._holding_repo.add(
                        Holding(
                            user_id=user_id,
                            ticker=ticker,
                            company_name=(company_name or "").strip() or ticker,
                            total_shares=shares,
                            average_cost=price_per_share,
                            created_at=now,
                            updated_at=now,
                        )
                    )
                else:
                    new_shares = holding.total_shares + shares
                    new_cost = holding.total_shares * holding.average_cost + shares * price_per_share
                    holding.total_shares = new_shares
                    holding.average_cost = new_cost / new_shares
                    holding.updated_at = now
                    holding = self._holding_repo.update(holding)

                self._transaction_repo.add(
                    Transaction(
                        user_id=user_id,
                        ticker=ticker,
                        shares=shares,
                        price_per_share=price_per_share,
                        total_amount=shares * price_per_share,
                        transaction_type=TransactionType.BUY,
                        transaction_date=txn_date,
                        realized_gain_loss=Decimal("0"),
                        notes=notes,
                        created_at=now,
                    )
                )

        logger.info(
            "BUY %s %s @ %s for user %s -> %s shares, avg cost %s",
            shares, ticker, price_per_share, user_id, holding.total_shares, holding.average_cost,
        )
        return holding

    def apply_sell(
        self,
        user_id: int,
        ticker: str,
        shares: Decimal,
        price_per_share: Decimal,
        transaction_date: Optional[date] = None,
        notes: Optional[str] = None,
    ) -> SellResult:
        """
        Remove shares from a position and book the realized gain/loss.

        realized = (price - average_cost) * shares. A remainder at or below
        the liquidation epsilon deletes the holding.
        """
        ticker = self._validate_ticker(ticker)
        shares = self._require_positive("shares", shares)
        price_per_share = self._require_positive("pricePerShare", price_per_share)
        txn_date = transaction_date or today_eastern()

        with self._locks.hold((user_id, ticker)):
            with self._uow:
                now = utcnow()
                holding = self._holding_repo.get(user_id, ticker, for_update=True)
                if holding is None:
                    raise NotFoundError("Stock", ticker)
                if shares > holding.total_shares:
                    raise InsufficientSharesError(ticker, str(shares), str(holding.total_shares))

                realized = (price_per_share - holding.average_cost) * shares
                remaining = holding.total_shares - shares
                liquidated = remaining <= self._epsilon

                if liquidated:
                    self._holding_repo.delete(user_id, ticker)
                    remaining_holding = None
                else:
                    holding.total_shares = remaining
                    holding.updated_at = now
                    remaining_holding = self._holding_repo.update(holding)

                transaction = self._transaction_repo.add(
                    Transaction(
                        user_id=user_id,
                        ticker=ticker,
                        shares=shares,
                        price_per_share=price_per_share,
                        total_amount=shares * price_per_share,
                        transaction_type=TransactionType.SELL,
                        transaction_date=txn_date,
                        realized_gain_loss=realized,
                        notes=notes,
                        created_at=now,
                    )
                )

        logger.info(
            "SELL %s %s @ %s for user %s -> realized %s%s",
            shares, ticker, price_per_share, user_id, realized,
            " (position closed)" if liquidated else "",
        )
        return SellResult(
            transaction=transaction,
            holding=remaining_holding,
            liquidated=liquidated,
        )

    def record_dividend(
        self,
        user_id: int,
        ticker: str,
        shares_held: Decimal,
        amount_per_share: Decimal,
        payment_date: Optional[date] = None,
        record_date: Optional[date] = None,
        notes: Optional[str] = None,
    ) -> Dividend:
        """
        Record a dividend payment for a ticker the user holds.

        ``shares_held`` is taken as given and not checked against the
        current position.
        """
        ticker = self._validate_ticker(ticker)
        shares_held = self._require_positive("sharesHeld", shares_held)
        amount_per_share = self._require_positive("amountPerShare", amount_per_share)

        with self._uow:
            holding = self._holding_repo.get(user_id, ticker)
            if holding is None:
                raise NotFoundError("Stock", ticker)

            dividend = self._dividend_repo.add(
                Dividend(
                    user_id=user_id,
                    ticker=ticker,
                    shares_held=shares_held,
                    amount_per_share=amount_per_share,
                    total_amount=shares_held * amount_per_share,
                    payment_date=payment_date or today_eastern(),
                    record_date=record_date,
                    notes=notes,
                    created_at=utcnow(),
                    company_name=holding.company_name,
                )
            )

        logger.info("Dividend %s on %s for user %s", dividend.total_amount, ticker, user_id)
        return dividend

    def get_holding(self, user_id: int, ticker: str) -> Optional[Holding]:
        """Current holding for a ticker, or None."""
        return self._holding_repo.get(user_id, self._validate_ticker(ticker))

    def list_holdings(self, user_id: int) -> list[Holding]:
        """All holdings for a user, ordered by ticker."""
        return self._holding_repo.list_by_user(user_id)

    def list_transactions(self, user_id: int, ticker: Optional[str] = None) -> list[Transaction]:
        """Transactions newest first, optionally for one ticker."""
        if ticker is not None:
            ticker = self._validate_ticker(ticker)
        return self._transaction_repo.list_by_user(user_id, ticker)

    def list_dividends(self, user_id: int, ticker: Optional[str] = None) -> list[Dividend]:
        """Dividends newest first by payment date, optionally for one ticker."""
        if ticker is not None:
            ticker = self._validate_ticker(ticker)
        return self._dividend_repo.list_by_user(user_id, ticker)

    @staticmethod
    def _validate_ticker(ticker: Optional[str]) -> str:
        symbol = (ticker or "").strip().upper()
        if not symbol:
            raise ValidationError("ticker is required")
        if len(symbol) > MAX_TICKER_LENGTH:
            raise ValidationError(f"ticker must be at most {MAX_TICKER_LENGTH} characters")
        return symbol

    @staticmethod
    def _require_positive(field_name: str, value: Optional[Decimal]) -> Decimal:
        """Return ``value`` rounded to the storage scale, rejecting anything not above 0."""
        if value is None:
            raise ValidationError(f"{field_name} is required")
        if not value.is_finite() or value <= 0:
            raise ValidationError(f"{field_name} must be greater than 0")
        try:
            value = value.quantize(AMOUNT_QUANTUM, rounding=ROUND_HALF_UP)
        except InvalidOperation:
            raise ValidationError(f"{field_name} is too large") from None
        if value <= 0:
            raise ValidationError(f"{field_name} must be greater than 0")
        return value
