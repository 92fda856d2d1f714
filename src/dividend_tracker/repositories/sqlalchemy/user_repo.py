"""SQLAlchemy implementation of UserRepository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from dividend_tracker.core.exceptions import ValidationError
from dividend_tracker.domain.models import User, AccessToken
from dividend_tracker.repositories.sqlalchemy.orm_models import UserORM, AccessTokenORM


class SqlAlchemyUserRepository:
    """SQLAlchemy-backed user repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, email: str, name: str, password_hash: str) -> User:
        """
        Persist a new user (flushed so the ID is assigned).

        A concurrent registration that already took the email surfaces as the
        unique constraint; it is reported like any other duplicate.
        """
        orm_user = UserORM(email=email, name=name, password_hash=password_hash)
        self._db.add(orm_user)
        try:
            self._db.flush()
        except IntegrityError as exc:
            raise ValidationError("Email already exists") from exc
        return self._to_domain(orm_user)

    def get_by_id(self, user_id: int) -> Optional[User]:
        """Retrieve user by ID."""
        orm_user = self._db.query(UserORM).filter(UserORM.user_id == user_id).first()
        return self._to_domain(orm_user) if orm_user else None

    def get_by_email(self, email: str) -> Optional[User]:
        """Retrieve user by email (case-insensitive)."""
        orm_user = (
            self._db.query(UserORM)
            .filter(func.lower(UserORM.email) == email.lower())
            .first()
        )
        return self._to_domain(orm_user) if orm_user else None

    def add_token(self, token: AccessToken) -> AccessToken:
        """Persist an access token digest."""
        self._db.add(
            AccessTokenORM(
                token_hash=token.token_hash,
                user_id=token.user_id,
                expires_at=token.expires_at,
            )
        )
        self._db.flush()
        return token

    def get_token(self, token_hash: str) -> Optional[AccessToken]:
        """Retrieve an access token by digest."""
        orm_token = (
            self._db.query(AccessTokenORM)
            .filter(AccessTokenORM.token_hash == token_hash)
            .first()
        )
        if not orm_token:
            return None
        return AccessToken(
            token_hash=orm_token.token_hash,
            user_id=orm_token.user_id,
            expires_at=orm_token.expires_at,
        )

    def delete_expired_tokens(self, now: datetime) -> int:
        """Delete tokens that expired before ``now``."""
        return (
            self._db.query(AccessTokenORM)
            .filter(AccessTokenORM.expires_at < now)
            .delete(synchronize_session=False)
        )

    @staticmethod
    def _to_domain(orm: UserORM) -> User:
        """Convert ORM model to domain model."""
        return User(
            user_id=orm.user_id,
            email=orm.email,
            name=orm.name,
            password_hash=orm.password_hash,
            created_at=orm.created_at,
        )
