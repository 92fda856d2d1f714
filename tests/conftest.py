"""
Pytest configuration and fixtures for dividend tracker tests.

This module provides:
- In-memory SQLite database fixtures
- Repository, unit-of-work and service fixtures
- Fake clocks and deterministic quote providers
- An authenticated FastAPI test client
"""

import random
import threading
from decimal import Decimal
from typing import Callable, Optional

import pytest
from sqlalchemy import create_engine, StaticPool
from sqlalchemy.orm import sessionmaker, Session
from fastapi.testclient import TestClient

from dividend_tracker.main import app
from dividend_tracker.api.deps import get_price_resolver
from dividend_tracker.config.settings import Settings, set_settings, reset_settings
from dividend_tracker.core.exceptions import UpstreamUnavailableError
from dividend_tracker.core.locks import KeyedLock
from dividend_tracker.repositories.sqlalchemy.database import Base, get_db, reset_database
# Import ORM models to register them with Base before creating tables
from dividend_tracker.repositories.sqlalchemy import orm_models  # noqa: F401
from dividend_tracker.repositories.sqlalchemy import (
    SqlAlchemyUserRepository,
    SqlAlchemyHoldingRepository,
    SqlAlchemyTransactionRepository,
    SqlAlchemyDividendRepository,
    SqlAlchemyUnitOfWork,
)
from dividend_tracker.providers import SyntheticPriceGenerator
from dividend_tracker.services import (
    AuthService,
    LedgerService,
    PriceCache,
    PriceResolver,
    ValuationService,
)


# =============================================================================
# CLOCK HELPERS
# =============================================================================


class FakeClock:
    """Manually advanced monotonic clock; ``sleep`` advances it instantly."""

    def __init__(self, start: float = 1000.0):
        self.now = start
        self.sleeps: list[float] = []
        self._lock = threading.Lock()

    def __call__(self) -> float:
        with self._lock:
            return self.now

    def advance(self, seconds: float) -> None:
        with self._lock:
            self.now += seconds

    def sleep(self, seconds: float) -> None:
        with self._lock:
            self.sleeps.append(seconds)
            self.now += seconds


@pytest.fixture
def fake_clock() -> FakeClock:
    """Provide a fake monotonic clock."""
    return FakeClock()


# =============================================================================
# QUOTE PROVIDER FAKES
# =============================================================================


class FixedQuoteProvider:
    """Returns fixed prices and records every call."""

    def __init__(self, prices: dict[str, Decimal], name: str = "fixed"):
        self.name = name
        self._prices = prices
        self.calls: list[str] = []
        self._lock = threading.Lock()

    def fetch(self, ticker: str) -> Decimal:
        with self._lock:
            self.calls.append(ticker)
        if ticker not in self._prices:
            raise UpstreamUnavailableError(self.name, ticker, "unknown symbol")
        return self._prices[ticker]


class FailingQuoteProvider:
    """Always fails like an unreachable upstream."""

    def __init__(self, name: str = "failing"):
        self.name = name
        self.calls: list[str] = []

    def fetch(self, ticker: str) -> Decimal:
        self.calls.append(ticker)
        raise UpstreamUnavailableError(self.name, ticker, "connection refused")


class HangingQuoteProvider:
    """Blocks until released, to exercise the per-call timeout."""

    def __init__(self, name: str = "hanging"):
        self.name = name
        self.release = threading.Event()
        self.calls: list[str] = []

    def fetch(self, ticker: str) -> Decimal:
        self.calls.append(ticker)
        self.release.wait(timeout=5)
        return Decimal("1.00")


FIXED_PRICES = {
    "AAPL": Decimal("200.00"),
    "MSFT": Decimal("400.00"),
    "KO": Decimal("62.50"),
}


@pytest.fixture
def fixed_provider() -> FixedQuoteProvider:
    """Provide a quote provider with fixed prices for AAPL, MSFT and KO."""
    return FixedQuoteProvider(dict(FIXED_PRICES))


@pytest.fixture
def failing_provider() -> FailingQuoteProvider:
    """Provide a quote provider that always fails."""
    return FailingQuoteProvider()


@pytest.fixture
def synthetic_generator() -> SyntheticPriceGenerator:
    """Synthetic generator with a seeded RNG."""
    return SyntheticPriceGenerator(rng=random.Random(42))


@pytest.fixture
def price_resolver_factory(fake_clock, synthetic_generator) -> Callable[..., PriceResolver]:
    """Factory for resolvers wired to the fake clock and no real stagger wait."""
    created: list[PriceResolver] = []

    def _create(
        providers: list,
        stagger_seconds: float = 0.0,
        call_timeout_seconds: Optional[float] = None,
        ttl_seconds: float = 900,
        max_workers: int = 4,
    ) -> PriceResolver:
        resolver = PriceResolver(
            cache=PriceCache(ttl_seconds=ttl_seconds, clock=fake_clock),
            providers=providers,
            fallback=synthetic_generator,
            call_timeout_seconds=call_timeout_seconds,
            stagger_seconds=stagger_seconds,
            max_workers=max_workers,
            clock=fake_clock,
            sleep=fake_clock.sleep,
        )
        created.append(resolver)
        return resolver

    yield _create
    for resolver in created:
        resolver.close()


@pytest.fixture
def price_resolver(price_resolver_factory, fixed_provider) -> PriceResolver:
    """Resolver backed by the fixed-price provider."""
    return price_resolver_factory([fixed_provider])


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    # Reset settings for clean state
    reset_settings()

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def test_session(test_engine) -> Session:
    """Create test database session."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


# =============================================================================
# REPOSITORY FIXTURES
# =============================================================================


@pytest.fixture
def user_repo(test_session) -> SqlAlchemyUserRepository:
    """Provide test UserRepository."""
    return SqlAlchemyUserRepository(test_session)


@pytest.fixture
def holding_repo(test_session) -> SqlAlchemyHoldingRepository:
    """Provide test HoldingRepository."""
    return SqlAlchemyHoldingRepository(test_session)


@pytest.fixture
def transaction_repo(test_session) -> SqlAlchemyTransactionRepository:
    """Provide test TransactionRepository."""
    return SqlAlchemyTransactionRepository(test_session)


@pytest.fixture
def dividend_repo(test_session) -> SqlAlchemyDividendRepository:
    """Provide test DividendRepository."""
    return SqlAlchemyDividendRepository(test_session)


@pytest.fixture
def unit_of_work(test_session) -> SqlAlchemyUnitOfWork:
    """Provide a unit of work over the test session."""
    return SqlAlchemyUnitOfWork(test_session)


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def ledger_service(holding_repo, transaction_repo, dividend_repo, unit_of_work) -> LedgerService:
    """Provide test LedgerService with its own lock registry."""
    return LedgerService(
        holding_repo=holding_repo,
        transaction_repo=transaction_repo,
        dividend_repo=dividend_repo,
        unit_of_work=unit_of_work,
        locks=KeyedLock(),
    )


@pytest.fixture
def valuation_service(
    holding_repo,
    transaction_repo,
    dividend_repo,
    price_resolver,
) -> ValuationService:
    """Provide test ValuationService with fixed prices."""
    return ValuationService(
        holding_repo=holding_repo,
        transaction_repo=transaction_repo,
        dividend_repo=dividend_repo,
        price_resolver=price_resolver,
    )


@pytest.fixture
def auth_service(user_repo, unit_of_work) -> AuthService:
    """Provide test AuthService."""
    return AuthService(user_repo=user_repo, unit_of_work=unit_of_work)


@pytest.fixture
def test_user(user_repo, unit_of_work):
    """A persisted user to own holdings in service tests."""
    with unit_of_work:
        user = user_repo.create(email="alice@example.com", name="Alice", password_hash="x")
    return user


# =============================================================================
# API TEST CLIENT FIXTURES
# =============================================================================


@pytest.fixture
def client(test_engine, price_resolver) -> TestClient:
    """Provide FastAPI test client with test database and fixed prices."""
    # Keep the app's own engine off the user's data directory
    set_settings(Settings(database_url="sqlite://", price_warmup_enabled=False))
    reset_database()

    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

    def override_get_db():
        session = TestSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_price_resolver] = lambda: price_resolver
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    reset_database()
    reset_settings()


def register_user(
    client: TestClient,
    email: str = "alice@example.com",
    password: str = "secret123",
    name: str = "Alice",
) -> dict:
    """Register through the API and return the JSON body."""
    response = client.post(
        "/api/register",
        json={"email": email, "password": password, "name": name},
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def auth_headers(client: TestClient) -> dict[str, str]:
    """Bearer headers for a freshly registered user."""
    token = register_user(client)["token"]
    return {"Authorization": f"Bearer {token}"}


# =============================================================================
# HELPER FUNCTIONS (exported for use in tests)
# =============================================================================


def assert_decimal_equal(
    actual: Decimal,
    expected: Decimal,
    tolerance: Decimal = Decimal("0.0001"),
) -> None:
    """Assert two Decimals are equal within tolerance."""
    diff = abs(Decimal(actual) - Decimal(expected))
    assert diff <= tolerance, f"Expected {expected}, got {actual} (diff={diff})"
