"""Password hashing and JWT creation/verification for authentication."""

from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from app.core.config import settings

# Bcrypt cost (rounds); 12 is a good default for security vs speed.
BCRYPT_ROUNDS = 12

# Min/max lengths for username and password validation.
USERNAME_MIN_LEN = 1
USERNAME_MAX_LEN = 255
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128

ROLE_ADMIN = "admin"
ROLE_USER = "user"
ROLES = (ROLE_ADMIN, ROLE_USER)


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def access_token_lifetime() -> timedelta:
    """Fixed lifetime of an access token from the moment it is issued."""
    return timedelta(minutes=settings.JWT_EXPIRE_MINUTES)


def create_access_token(
    sub: str | int,
    username: str,
    role: str,
    now: datetime | None = None,
) -> tuple[str, datetime]:
    """
    Create a JWT access token with sub (user id), username, role, iat and exp.

    Returns the encoded token and its expiry instant.
    """
    issued_at = (now or datetime.now(UTC)).replace(microsecond=0)
    expire = issued_at + access_token_lifetime()
    payload: dict[str, Any] = {
        "sub": str(sub),
        "username": username,
        "role": role,
        "exp": expire,
        "iat": issued_at,
    }
    secret = settings.JWT_SECRET.get_secret_value()
    token = jwt.encode(
        payload,
        secret,
        algorithm=settings.JWT_ALGORITHM,
    )
    return token, expire


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Decode and validate JWT; return payload (sub, username, role, exp, iat).
    Raises jwt.ExpiredSignatureError when expired, jwt.PyJWTError when otherwise invalid.
    """
    secret = settings.JWT_SECRET.get_secret_value()
    return jwt.decode(
        token,
        secret,
        algorithms=[settings.JWT_ALGORITHM],
        options={"require": ["sub", "exp"]},
    )
