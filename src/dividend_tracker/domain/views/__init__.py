"""View models for service outputs."""

from dividend_tracker.domain.views.portfolio import (
    SellResult,
    TickerIncome,
    HoldingView,
    PortfolioSummary,
)

__all__ = [
    "SellResult",
    "TickerIncome",
    "HoldingView",
    "PortfolioSummary",
]
