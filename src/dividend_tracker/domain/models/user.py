"""User and access token domain models."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass
class User:
    """A registered user; owns holdings, transactions and dividends."""

    user_id: int
    email: str
    name: str
    password_hash: str = field(default="", repr=False)
    created_at: Optional[datetime] = None


@dataclass
class AccessToken:
    """Stored bearer credential. Only the SHA-256 digest is persisted."""

    token_hash: str
    user_id: int
    expires_at: datetime
