"""SQLAlchemy implementation of TransactionRepository."""

from decimal import Decimal
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from dividend_tracker.domain.models import Transaction, TransactionType
from dividend_tracker.repositories.sqlalchemy.orm_models import TransactionORM


class SqlAlchemyTransactionRepository:
    """SQLAlchemy-backed transaction repository (append-only)."""

    def __init__(self, db: Session):
        self._db = db

    def add(self, transaction: Transaction) -> Transaction:
        """Stage a new transaction record."""
        orm_txn = self._to_orm(transaction)
        self._db.add(orm_txn)
        self._db.flush()
        return self._to_domain(orm_txn)

    def list_by_user(self, user_id: int, ticker: Optional[str] = None) -> list[Transaction]:
        """List transactions newest first."""
        query = self._db.query(TransactionORM).filter(TransactionORM.user_id == user_id)
        if ticker:
            query = query.filter(TransactionORM.ticker == ticker)
        query = query.order_by(
            TransactionORM.transaction_date.desc(),
            TransactionORM.created_at.desc(),
            TransactionORM.transaction_id.desc(),
        )
        return [self._to_domain(t) for t in query.all()]

    def realized_gains_by_ticker(self, user_id: int) -> dict[str, Decimal]:
        """Sum of realized gain/loss over SELL transactions, per ticker."""
        rows = (
            self._db.query(
                TransactionORM.ticker,
                func.sum(TransactionORM.realized_gain_loss),
            )
            .filter(
                TransactionORM.user_id == user_id,
                TransactionORM.transaction_type == TransactionType.SELL,
            )
            .group_by(TransactionORM.ticker)
            .all()
        )
        return {
            ticker: Decimal(str(total)) if total is not None else Decimal("0")
            for ticker, total in rows
        }

    @staticmethod
    def _to_orm(txn: Transaction) -> TransactionORM:
        """Convert domain model to ORM model."""
        return TransactionORM(
            user_id=txn.user_id,
            ticker=txn.ticker,
            shares=txn.shares,
            price_per_share=txn.price_per_share,
            total_amount=txn.total_amount,
            transaction_type=txn.transaction_type,
            transaction_date=txn.transaction_date,
            realized_gain_loss=txn.realized_gain_loss,
            notes=txn.notes,
            created_at=txn.created_at,
        )

    @staticmethod
    def _to_domain(orm: TransactionORM) -> Transaction:
        """Convert ORM model to domain model."""
        return Transaction(
            transaction_id=orm.transaction_id,
            user_id=orm.user_id,
            ticker=orm.ticker,
            shares=Decimal(str(orm.shares)),
            price_per_share=Decimal(str(orm.price_per_share)),
            total_amount=Decimal(str(orm.total_amount)),
            transaction_type=orm.transaction_type,
            transaction_date=orm.transaction_date,
            realized_gain_loss=(
                Decimal(str(orm.realized_gain_loss)) if orm.realized_gain_loss else Decimal("0")
            ),
            notes=orm.notes,
            created_at=orm.created_at,
        )
