"""Valuation aggregator: holdings + prices + income -> return metrics."""

from decimal import Decimal
from typing import Optional

from dividend_tracker.domain.models import Holding
from dividend_tracker.domain.views import HoldingView, PortfolioSummary, TickerIncome
from dividend_tracker.repositories.protocols import (
    HoldingRepository,
    TransactionRepository,
    DividendRepository,
)
from dividend_tracker.services.price_resolver import PriceResolver

_CENTS = Decimal("0.01")
_ZERO = Decimal("0")


def _percent(part: Decimal, whole: Decimal) -> Decimal:
    """part / whole * 100, or 0 when whole is 0."""
    if whole == _ZERO:
        return _ZERO.quantize(_CENTS)
    return (part / whole * 100).quantize(_CENTS)


class ValuationService:
    """
    Computes per-holding and portfolio metrics for a user.

    Prices for all held tickers are requested in a single batch.
    """

    def __init__(
        self,
        holding_repo: HoldingRepository,
        transaction_repo: TransactionRepository,
        dividend_repo: DividendRepository,
        price_resolver: PriceResolver,
    ):
        self._holding_repo = holding_repo
        self._transaction_repo = transaction_repo
        self._dividend_repo = dividend_repo
        self._prices = price_resolver

    def value_portfolio(self, user_id: int) -> list[HoldingView]:
        """
        Return every holding enriched with price and return metrics.

        Ordered by ticker.
        """
        holdings = self._holding_repo.list_by_user(user_id)
        if not holdings:
            return []

        income = self._income_by_ticker(user_id)
        prices = self._prices.resolve_prices(h.ticker for h in holdings)

        views = [
            self._value_holding(h, prices.get(h.ticker), income.get(h.ticker, TickerIncome()))
            for h in holdings
        ]
        views.sort(key=lambda v: v.ticker)
        return views

    def summarize(self, views: list[HoldingView]) -> PortfolioSummary:
        """Portfolio totals: sums of the per-holding figures."""
        summary = PortfolioSummary(holding_count=len(views))
        for view in views:
            summary.total_cost += view.total_cost
            summary.current_value += view.current_value
            summary.unrealized_gain_loss += view.unrealized_gain_loss
            summary.total_dividends += view.total_dividends
            summary.total_realized_gains += view.total_realized_gains
            summary.total_return += view.total_return

        summary.unrealized_gain_loss_percent = _percent(
            summary.unrealized_gain_loss, summary.total_cost
        )
        summary.total_return_percent = _percent(summary.total_return, summary.total_cost)
        return summary

    def portfolio_summary(self, user_id: int) -> PortfolioSummary:
        """Value the portfolio and return only the totals."""
        return self.summarize(self.value_portfolio(user_id))

    def _income_by_ticker(self, user_id: int) -> dict[str, TickerIncome]:
        income: dict[str, TickerIncome] = {}
        for ticker, (total, count) in self._dividend_repo.totals_by_ticker(user_id).items():
            entry = income.setdefault(ticker, TickerIncome())
            entry.total_dividends = total
            entry.dividend_count = count
        for ticker, realized in self._transaction_repo.realized_gains_by_ticker(user_id).items():
            income.setdefault(ticker, TickerIncome()).total_realized_gains = realized
        return income

    @staticmethod
    def _value_holding(
        holding: Holding,
        current_price: Optional[Decimal],
        income: TickerIncome,
    ) -> HoldingView:
        # The resolver always answers; fall back to cost so a gap reads as flat
        price = current_price if current_price is not None else holding.average_cost

        total_cost = holding.total_shares * holding.average_cost
        current_value = holding.total_shares * price
        unrealized = current_value - total_cost
        total_return = unrealized + income.total_dividends + income.total_realized_gains

        return HoldingView(
            ticker=holding.ticker,
            company_name=holding.company_name,
            total_shares=holding.total_shares,
            average_cost=holding.average_cost,
            current_price=price,
            total_cost=total_cost.quantize(_CENTS),
            current_value=current_value.quantize(_CENTS),
            unrealized_gain_loss=unrealized.quantize(_CENTS),
            unrealized_gain_loss_percent=_percent(unrealized, total_cost),
            total_dividends=income.total_dividends.quantize(_CENTS),
            dividend_count=income.dividend_count,
            total_realized_gains=income.total_realized_gains.quantize(_CENTS),
            total_return=total_return.quantize(_CENTS),
            total_return_percent=_percent(total_return, total_cost),
            created_at=holding.created_at,
            updated_at=holding.updated_at,
        )
