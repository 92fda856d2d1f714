"""Dependency injection for FastAPI."""

import threading
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from dividend_tracker.config.settings import get_settings
from dividend_tracker.domain.models import User
from dividend_tracker.repositories.sqlalchemy.database import get_db
from dividend_tracker.repositories.sqlalchemy import (
    SqlAlchemyUserRepository,
    SqlAlchemyHoldingRepository,
    SqlAlchemyTransactionRepository,
    SqlAlchemyDividendRepository,
    SqlAlchemyUnitOfWork,
)
from dividend_tracker.services import (
    AuthService,
    LedgerService,
    PriceResolver,
    ValuationService,
    build_price_resolver,
)

bearer_scheme = HTTPBearer(auto_error=False)

# Process-wide resolver so the price cache outlives a single request
_price_resolver: Optional[PriceResolver] = None
_price_resolver_lock = threading.Lock()


def get_price_resolver() -> PriceResolver:
    """Provide the shared PriceResolver, building it on first use."""
    global _price_resolver
    if _price_resolver is None:
        with _price_resolver_lock:
            if _price_resolver is None:
                _price_resolver = build_price_resolver(get_settings())
    return _price_resolver


def reset_price_resolver() -> None:
    """Shut down and forget the shared resolver (shutdown/reconfiguration)."""
    global _price_resolver
    with _price_resolver_lock:
        if _price_resolver is not None:
            _price_resolver.close()
        _price_resolver = None


def get_user_repo(db: Session = Depends(get_db)) -> SqlAlchemyUserRepository:
    """Provide UserRepository instance."""
    return SqlAlchemyUserRepository(db)


def get_holding_repo(db: Session = Depends(get_db)) -> SqlAlchemyHoldingRepository:
    """Provide HoldingRepository instance."""
    return SqlAlchemyHoldingRepository(db)


def get_transaction_repo(db: Session = Depends(get_db)) -> SqlAlchemyTransactionRepository:
    """Provide TransactionRepository instance."""
    return SqlAlchemyTransactionRepository(db)


def get_dividend_repo(db: Session = Depends(get_db)) -> SqlAlchemyDividendRepository:
    """Provide DividendRepository instance."""
    return SqlAlchemyDividendRepository(db)


def get_unit_of_work(db: Session = Depends(get_db)) -> SqlAlchemyUnitOfWork:
    """Provide a unit of work over the request session."""
    return SqlAlchemyUnitOfWork(db)


def get_auth_service(
    user_repo: SqlAlchemyUserRepository = Depends(get_user_repo),
    unit_of_work: SqlAlchemyUnitOfWork = Depends(get_unit_of_work),
) -> AuthService:
    """Provide AuthService instance."""
    return AuthService(
        user_repo=user_repo,
        unit_of_work=unit_of_work,
        token_ttl_hours=get_settings().access_token_ttl_hours,
    )


def get_ledger_service(
    holding_repo: SqlAlchemyHoldingRepository = Depends(get_holding_repo),
    transaction_repo: SqlAlchemyTransactionRepository = Depends(get_transaction_repo),
    dividend_repo: SqlAlchemyDividendRepository = Depends(get_dividend_repo),
    unit_of_work: SqlAlchemyUnitOfWork = Depends(get_unit_of_work),
) -> LedgerService:
    """Provide LedgerService instance."""
    return LedgerService(
        holding_repo=holding_repo,
        transaction_repo=transaction_repo,
        dividend_repo=dividend_repo,
        unit_of_work=unit_of_work,
        liquidation_epsilon=get_settings().liquidation_epsilon,
    )


def get_valuation_service(
    holding_repo: SqlAlchemyHoldingRepository = Depends(get_holding_repo),
    transaction_repo: SqlAlchemyTransactionRepository = Depends(get_transaction_repo),
    dividend_repo: SqlAlchemyDividendRepository = Depends(get_dividend_repo),
    price_resolver: PriceResolver = Depends(get_price_resolver),
) -> ValuationService:
    """Provide ValuationService instance."""
    return ValuationService(
        holding_repo=holding_repo,
        transaction_repo=transaction_repo,
        dividend_repo=dividend_repo,
        price_resolver=price_resolver,
    )


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth_service: AuthService = Depends(get_auth_service),
) -> User:
    """Resolve the bearer token on the request to a user (401 otherwise)."""
    token = credentials.credentials if credentials else None
    return auth_service.authenticate(token)
