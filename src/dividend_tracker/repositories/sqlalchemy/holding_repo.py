"""SQLAlchemy implementation of HoldingRepository."""

from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from dividend_tracker.domain.models import Holding
from dividend_tracker.repositories.sqlalchemy.orm_models import HoldingORM


class SqlAlchemyHoldingRepository:
    """SQLAlchemy-backed holding repository.

    Writes are flushed, never committed; the unit of work decides.
    """

    def __init__(self, db: Session):
        self._db = db

    def get(self, user_id: int, ticker: str, for_update: bool = False) -> Optional[Holding]:
        """Retrieve the holding for a user and ticker."""
        orm_holding = self._query_one(user_id, ticker, for_update=for_update)
        return self._to_domain(orm_holding) if orm_holding else None

    def list_by_user(self, user_id: int) -> list[Holding]:
        """List all holdings for a user, ordered by ticker."""
        orm_holdings = (
            self._db.query(HoldingORM)
            .filter(HoldingORM.user_id == user_id)
            .order_by(HoldingORM.ticker)
            .all()
        )
        return [self._to_domain(h) for h in orm_holdings]

    def add(self, holding: Holding) -> Holding:
        """Stage a new holding."""
        orm_holding = HoldingORM(
            user_id=holding.user_id,
            ticker=holding.ticker,
            company_name=holding.company_name,
            total_shares=holding.total_shares,
            average_cost=holding.average_cost,
            created_at=holding.created_at,
            updated_at=holding.updated_at,
        )
        self._db.add(orm_holding)
        self._db.flush()
        return self._to_domain(orm_holding)

    def update(self, holding: Holding) -> Holding:
        """Stage new share count and average cost for an existing holding."""
        orm_holding = self._query_one(holding.user_id, holding.ticker)
        if not orm_holding:
            raise ValueError(f"Holding not found: {holding.user_id}/{holding.ticker}")

        orm_holding.total_shares = holding.total_shares
        orm_holding.average_cost = holding.average_cost
        orm_holding.updated_at = holding.updated_at
        self._db.flush()
        return self._to_domain(orm_holding)

    def delete(self, user_id: int, ticker: str) -> None:
        """Stage removal of a holding."""
        self._db.query(HoldingORM).filter(
            HoldingORM.user_id == user_id,
            HoldingORM.ticker == ticker,
        ).delete(synchronize_session=False)
        self._db.flush()

    def _query_one(self, user_id: int, ticker: str, for_update: bool = False) -> Optional[HoldingORM]:
        query = self._db.query(HoldingORM).filter(
            HoldingORM.user_id == user_id,
            HoldingORM.ticker == ticker,
        )
        if for_update:
            query = query.with_for_update()
        return query.first()

    @staticmethod
    def _to_domain(orm: HoldingORM) -> Holding:
        """Convert ORM model to domain model."""
        return Holding(
            user_id=orm.user_id,
            ticker=orm.ticker,
            company_name=orm.company_name or orm.ticker,
            total_shares=Decimal(str(orm.total_shares)) if orm.total_shares else Decimal("0"),
            average_cost=Decimal(str(orm.average_cost)) if orm.average_cost else Decimal("0"),
            created_at=orm.created_at,
            updated_at=orm.updated_at,
        )
