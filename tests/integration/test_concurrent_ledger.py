"""
Integration tests for concurrent BUY/SELL on a file-backed SQLite database.

Each worker uses its own session, as concurrent requests would; only the
shared per-holding lock coordinates them.
"""

import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from dividend_tracker.core.exceptions import InsufficientSharesError, NotFoundError
from dividend_tracker.core.locks import KeyedLock
from dividend_tracker.repositories.sqlalchemy import (
    Base,
    SqlAlchemyDividendRepository,
    SqlAlchemyHoldingRepository,
    SqlAlchemyTransactionRepository,
    SqlAlchemyUnitOfWork,
    SqlAlchemyUserRepository,
)
from dividend_tracker.repositories.sqlalchemy import orm_models  # noqa: F401
from dividend_tracker.services import LedgerService

from tests.conftest import assert_decimal_equal


@pytest.fixture
def session_factory(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'ledger.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def user_id(session_factory) -> int:
    session = session_factory()
    try:
        user = SqlAlchemyUserRepository(session).create("c@example.com", "C", "x")
        session.commit()
        return user.user_id
    finally:
        session.close()


def run_with_ledger(session_factory, locks: KeyedLock, action):
    session = session_factory()
    try:
        ledger = LedgerService(
            holding_repo=SqlAlchemyHoldingRepository(session),
            transaction_repo=SqlAlchemyTransactionRepository(session),
            dividend_repo=SqlAlchemyDividendRepository(session),
            unit_of_work=SqlAlchemyUnitOfWork(session),
            locks=locks,
        )
        return action(ledger)
    finally:
        session.close()


class TestConcurrentBuys:
    """Concurrent writes to one holding serialize through the lock."""

    def test_concurrent_buys_produce_exact_weighted_mean(self, session_factory, user_id):
        """
        GIVEN 16 concurrent BUYs of 1 share at $1..$16
        WHEN they all complete
        THEN there are 16 shares at the mean price of $8.50 and 16 transactions
        """
        locks = KeyedLock()
        start = threading.Barrier(8)

        def buy(price: int):
            def action(ledger: LedgerService):
                if price <= 8:
                    start.wait(timeout=10)
                return ledger.apply_buy(
                    user_id, "AAPL", Decimal("1"), Decimal(price), date(2024, 1, 1)
                )

            return run_with_ledger(session_factory, locks, action)

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(buy, range(1, 17)))

        holding = run_with_ledger(session_factory, locks, lambda l: l.get_holding(user_id, "AAPL"))
        txns = run_with_ledger(session_factory, locks, lambda l: l.list_transactions(user_id))

        assert holding.total_shares == Decimal("16")
        assert_decimal_equal(holding.average_cost, Decimal("8.5"))
        assert len(txns) == 16
        assert len(locks) == 0

    def test_concurrent_sells_never_oversell(self, session_factory, user_id):
        """
        GIVEN 10 shares and 15 concurrent SELLs of 1 share
        WHEN they race
        THEN exactly 10 succeed and the holding is gone
        """
        locks = KeyedLock()
        run_with_ledger(
            session_factory,
            locks,
            lambda l: l.apply_buy(user_id, "KO", Decimal("10"), Decimal("60"), date(2024, 1, 1)),
        )

        def sell(_):
            try:
                run_with_ledger(
                    session_factory,
                    locks,
                    lambda l: l.apply_sell(user_id, "KO", Decimal("1"), Decimal("65"), date(2024, 2, 1)),
                )
                return True
            except (NotFoundError, InsufficientSharesError):
                return False

        with ThreadPoolExecutor(max_workers=8) as pool:
            outcomes = list(pool.map(sell, range(15)))

        assert outcomes.count(True) == 10
        assert run_with_ledger(session_factory, locks, lambda l: l.get_holding(user_id, "KO")) is None
