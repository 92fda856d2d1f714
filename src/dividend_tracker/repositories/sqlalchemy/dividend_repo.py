"""SQLAlchemy implementation of DividendRepository."""

from decimal import Decimal
from typing import Optional

from sqlalchemy import and_, func
from sqlalchemy.orm import Session

from dividend_tracker.domain.models import Dividend
from dividend_tracker.repositories.sqlalchemy.orm_models import DividendORM, HoldingORM


class SqlAlchemyDividendRepository:
    """SQLAlchemy-backed dividend repository (append-only)."""

    def __init__(self, db: Session):
        self._db = db

    def add(self, dividend: Dividend) -> Dividend:
        """Stage a new dividend record."""
        orm_div = DividendORM(
            user_id=dividend.user_id,
            ticker=dividend.ticker,
            shares_held=dividend.shares_held,
            amount_per_share=dividend.amount_per_share,
            total_amount=dividend.total_amount,
            payment_date=dividend.payment_date,
            record_date=dividend.record_date,
            notes=dividend.notes,
            created_at=dividend.created_at,
        )
        self._db.add(orm_div)
        self._db.flush()
        return self._to_domain(orm_div, company_name=dividend.company_name)

    def list_by_user(self, user_id: int, ticker: Optional[str] = None) -> list[Dividend]:
        """List dividends newest first by payment date.

        Company name comes from the matching holding; dividends for tickers
        that have since been sold off are still listed, without a name.
        """
        query = (
            self._db.query(DividendORM, HoldingORM.company_name)
            .outerjoin(
                HoldingORM,
                and_(
                    HoldingORM.user_id == DividendORM.user_id,
                    HoldingORM.ticker == DividendORM.ticker,
                ),
            )
            .filter(DividendORM.user_id == user_id)
        )
        if ticker:
            query = query.filter(DividendORM.ticker == ticker)
        query = query.order_by(
            DividendORM.payment_date.desc(),
            DividendORM.created_at.desc(),
            DividendORM.dividend_id.desc(),
        )
        return [self._to_domain(d, company_name=name) for d, name in query.all()]

    def totals_by_ticker(self, user_id: int) -> dict[str, tuple[Decimal, int]]:
        """Per ticker: (sum of total_amount, number of payments)."""
        rows = (
            self._db.query(
                DividendORM.ticker,
                func.sum(DividendORM.total_amount),
                func.count(DividendORM.dividend_id),
            )
            .filter(DividendORM.user_id == user_id)
            .group_by(DividendORM.ticker)
            .all()
        )
        return {
            ticker: (Decimal(str(total)) if total is not None else Decimal("0"), int(count))
            for ticker, total, count in rows
        }

    @staticmethod
    def _to_domain(orm: DividendORM, company_name: Optional[str] = None) -> Dividend:
        """Convert ORM model to domain model."""
        return Dividend(
            dividend_id=orm.dividend_id,
            user_id=orm.user_id,
            ticker=orm.ticker,
            shares_held=Decimal(str(orm.shares_held)),
            amount_per_share=Decimal(str(orm.amount_per_share)),
            total_amount=Decimal(str(orm.total_amount)),
            payment_date=orm.payment_date,
            record_date=orm.record_date,
            notes=orm.notes,
            created_at=orm.created_at,
            company_name=company_name,
        )
