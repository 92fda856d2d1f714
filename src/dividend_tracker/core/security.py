"""Password hashing and bearer token helpers."""

import hashlib
import hmac
import secrets

_PBKDF2_ITERATIONS = 200_000
_SCHEME = "pbkdf2_sha256"


def hash_password(password: str) -> str:
    """Hash a password with a random salt for storage.

    Returns:
        ``pbkdf2_sha256$<iterations>$<salt hex>$<digest hex>``
    """
    salt = secrets.token_bytes(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, _PBKDF2_ITERATIONS)
    return f"{_SCHEME}${_PBKDF2_ITERATIONS}${salt.hex()}${digest.hex()}"


def verify_password(password: str, stored: str) -> bool:
    """Check a password against a value produced by hash_password."""
    try:
        scheme, iterations, salt_hex, digest_hex = stored.split("$")
    except ValueError:
        return False
    if scheme != _SCHEME:
        return False
    digest = hashlib.pbkdf2_hmac(
        "sha256",
        password.encode("utf-8"),
        bytes.fromhex(salt_hex),
        int(iterations),
    )
    return hmac.compare_digest(digest.hex(), digest_hex)


def generate_access_token() -> str:
    """Generate an opaque bearer token (URL-safe, 43 characters)."""
    return secrets.token_urlsafe(32)


def hash_access_token(token: str) -> str:
    """SHA-256 hex digest of a bearer token; only the digest is stored."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()
