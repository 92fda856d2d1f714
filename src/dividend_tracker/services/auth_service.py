"""Registration, login and bearer token validation."""

import logging
from datetime import datetime, timedelta
from typing import Callable, Optional

from dividend_tracker.core.timezone import utcnow
from dividend_tracker.core.exceptions import ValidationError, AuthenticationError
from dividend_tracker.core.security import (
    hash_password,
    verify_password,
    generate_access_token,
    hash_access_token,
)
from dividend_tracker.domain.models import User, AccessToken
from dividend_tracker.repositories.protocols import UserRepository, UnitOfWork

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
DEFAULT_TOKEN_TTL_HOURS = 24


class AuthService:
    """
    Issues and validates opaque bearer tokens.

    The plain token is returned once to the client; only its SHA-256 digest
    is stored, with an expiry.
    """

    def __init__(
        self,
        user_repo: UserRepository,
        unit_of_work: UnitOfWork,
        token_ttl_hours: int = DEFAULT_TOKEN_TTL_HOURS,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._user_repo = user_repo
        self._uow = unit_of_work
        self._token_ttl = timedelta(hours=token_ttl_hours)
        self._clock = clock

    def register(self, email: str, password: str, name: str) -> tuple[User, str]:
        """Create a user and return it with a fresh token."""
        email = (email or "").strip().lower()
        name = (name or "").strip()
        if not email or not password or not name:
            raise ValidationError("All fields are required")
        if "@" not in email:
            raise ValidationError("A valid email is required")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        if self._user_repo.get_by_email(email):
            raise ValidationError("Email already exists")

        with self._uow:
            user = self._user_repo.create(email=email, name=name, password_hash=hash_password(password))
            token = self._issue_token(user.user_id)

        logger.info("Registered user %s", user.user_id)
        return user, token

    def login(self, email: str, password: str) -> tuple[User, str]:
        """Check credentials and return the user with a fresh token."""
        email = (email or "").strip().lower()
        if not email or not password:
            raise ValidationError("Email and password are required")

        user = self._user_repo.get_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            raise AuthenticationError("Invalid credentials")

        with self._uow:
            self._user_repo.delete_expired_tokens(self._clock())
            token = self._issue_token(user.user_id)
        return user, token

    def authenticate(self, token: Optional[str]) -> User:
        """Resolve a bearer token to its user."""
        if not token:
            raise AuthenticationError("Access token required")

        stored = self._user_repo.get_token(hash_access_token(token))
        if stored is None or stored.expires_at <= self._clock():
            raise AuthenticationError("Invalid or expired token")

        user = self._user_repo.get_by_id(stored.user_id)
        if user is None:
            raise AuthenticationError("Invalid or expired token")
        return user

    def _issue_token(self, user_id: int) -> str:
        token = generate_access_token()
        self._user_repo.add_token(
            AccessToken(
                token_hash=hash_access_token(token),
                user_id=user_id,
                expires_at=self._clock() + self._token_ttl,
            )
        )
        return token
