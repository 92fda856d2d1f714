"""User and access token repository protocol."""

from datetime import datetime
from typing import Protocol, Optional

from dividend_tracker.domain.models import User, AccessToken


class UserRepository(Protocol):
    """Interface for user and bearer token data access."""

    def create(self, email: str, name: str, password_hash: str) -> User:
        """Persist a new user and return it with its assigned ID."""
        ...

    def get_by_id(self, user_id: int) -> Optional[User]:
        """Retrieve user by ID."""
        ...

    def get_by_email(self, email: str) -> Optional[User]:
        """Retrieve user by email (case-insensitive)."""
        ...

    def add_token(self, token: AccessToken) -> AccessToken:
        """Persist an access token digest."""
        ...

    def get_token(self, token_hash: str) -> Optional[AccessToken]:
        """Retrieve an access token by digest."""
        ...

    def delete_expired_tokens(self, now: datetime) -> int:
        """Delete tokens that expired before ``now``; return how many."""
        ...
