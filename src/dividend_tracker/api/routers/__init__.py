"""API routers package."""

from dividend_tracker.api.routers.auth import router as auth_router
from dividend_tracker.api.routers.stocks import router as stocks_router
from dividend_tracker.api.routers.dividends import router as dividends_router
from dividend_tracker.api.routers.transactions import router as transactions_router

__all__ = [
    "auth_router",
    "stocks_router",
    "dividends_router",
    "transactions_router",
]
