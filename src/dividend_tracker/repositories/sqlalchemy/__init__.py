"""SQLAlchemy repository implementations."""

from dividend_tracker.repositories.sqlalchemy.database import (
    get_engine,
    get_session_factory,
    get_db,
    get_session,
    init_db,
    reset_database,
    Base,
)
from dividend_tracker.repositories.sqlalchemy.user_repo import SqlAlchemyUserRepository
from dividend_tracker.repositories.sqlalchemy.holding_repo import SqlAlchemyHoldingRepository
from dividend_tracker.repositories.sqlalchemy.transaction_repo import SqlAlchemyTransactionRepository
from dividend_tracker.repositories.sqlalchemy.dividend_repo import SqlAlchemyDividendRepository
from dividend_tracker.repositories.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork

__all__ = [
    "get_engine",
    "get_session_factory",
    "get_db",
    "get_session",
    "init_db",
    "reset_database",
    "Base",
    "SqlAlchemyUserRepository",
    "SqlAlchemyHoldingRepository",
    "SqlAlchemyTransactionRepository",
    "SqlAlchemyDividendRepository",
    "SqlAlchemyUnitOfWork",
]
