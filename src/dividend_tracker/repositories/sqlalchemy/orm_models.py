"""SQLAlchemy ORM model definitions."""

from decimal import Decimal

from sqlalchemy import (
    Column,
    Integer,
    String,
    Date,
    DateTime,
    Text,
    ForeignKey,
    Numeric,
    UniqueConstraint,
    Enum as SqlEnum,
)
from sqlalchemy.orm import relationship

from dividend_tracker.repositories.sqlalchemy.database import Base
from dividend_tracker.core.timezone import utcnow
from dividend_tracker.domain.models.enums import TransactionType


class UserORM(Base):
    """SQLAlchemy model for User."""

    __tablename__ = "users"

    user_id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    holdings = relationship("HoldingORM", back_populates="user")


class AccessTokenORM(Base):
    """SQLAlchemy model for AccessToken (bearer token digests)."""

    __tablename__ = "access_tokens"

    token_hash = Column(String(64), primary_key=True)
    user_id = Column(Integer, ForeignKey("users.user_id"), nullable=False, index=True)
    expires_at = Column(DateTime, nullable=False)


class HoldingORM(Base):
    """SQLAlchemy model for Holding (current position per user and ticker)."""

    __tablename__ = "holdings"
    __table_args__ = (UniqueConstraint("user_id", "ticker", name="uq_holdings_user_ticker"),)

    holding_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    ticker = Column(String(20), nullable=False)
    company_name = Column(String(255), nullable=True)
    total_shares = Column(Numeric(precision=18, scale=8), nullable=False, default=Decimal("0"))
    average_cost = Column(Numeric(precision=18, scale=8), nullable=False, default=Decimal("0"))
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow)

    user = relationship("UserORM", back_populates="holdings")


class TransactionORM(Base):
    """SQLAlchemy model for Transaction (append-only ledger entry)."""

    __tablename__ = "transactions"

    transaction_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.user_id"), nullable=False, index=True)
    ticker = Column(String(20), nullable=False)
    shares = Column(Numeric(precision=18, scale=8), nullable=False)
    price_per_share = Column(Numeric(precision=18, scale=8), nullable=False)
    total_amount = Column(Numeric(precision=18, scale=8), nullable=False)
    transaction_type = Column(SqlEnum(TransactionType), nullable=False)
    transaction_date = Column(Date, nullable=False)
    realized_gain_loss = Column(Numeric(precision=18, scale=8), nullable=False, default=Decimal("0"))
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)


class DividendORM(Base):
    """SQLAlchemy model for Dividend (append-only payment record)."""

    __tablename__ = "dividends"

    dividend_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.user_id"), nullable=False, index=True)
    ticker = Column(String(20), nullable=False)
    shares_held = Column(Numeric(precision=18, scale=8), nullable=False)
    amount_per_share = Column(Numeric(precision=18, scale=8), nullable=False)
    total_amount = Column(Numeric(precision=18, scale=8), nullable=False)
    payment_date = Column(Date, nullable=False)
    record_date = Column(Date, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
