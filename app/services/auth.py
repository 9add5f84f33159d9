"""Session issuing and verification: credential check against the users table and stateless JWTs."""

import logging
from datetime import UTC, datetime

import jwt
from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.core.security import (
    ROLE_USER,
    access_token_lifetime,
    create_access_token,
    decode_access_token,
    verify_password,
)
from app.models.user import User
from app.schemas.auth import CurrentUser

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid username or password"


class AuthError(Exception):
    """Raised when a caller cannot be authenticated. Maps to HTTP 401."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidCredentialsError(AuthError):
    """Unknown username or wrong password (deliberately indistinguishable)."""

    def __init__(self) -> None:
        super().__init__(INVALID_CREDENTIALS_MESSAGE)


class MissingCredentialError(AuthError):
    def __init__(self) -> None:
        super().__init__("Missing or invalid authorization header")


class InvalidTokenError(AuthError):
    def __init__(self, message: str = "Invalid token") -> None:
        super().__init__(message)


class ExpiredTokenError(AuthError):
    def __init__(self) -> None:
        super().__init__("Token expired")


class IssuedSession(BaseModel):
    """Result of a successful login."""

    token: str
    username: str
    role: str
    expires_at: datetime

    @property
    def expires_in_ms(self) -> int:
        return int(access_token_lifetime().total_seconds() * 1000)


class VerifiedSession(BaseModel):
    """Claims of a valid token."""

    user: CurrentUser
    subject: str
    expires_at: datetime

    @property
    def expires_at_ms(self) -> int:
        return int(self.expires_at.timestamp() * 1000)


def authenticate(db: Session, username: str, password: str) -> IssuedSession:
    """
    Check username/password against the users table and issue a token.

    Raises InvalidCredentialsError for an unknown user or a wrong password.
    Database errors propagate to the caller.
    """
    user = db.query(User).filter(User.username == username).first()
    if user is None or not verify_password(password, user.password_hash):
        logger.warning("Failed login attempt for username=%r", username)
        raise InvalidCredentialsError()

    role = user.role or ROLE_USER
    token, expires_at = create_access_token(sub=user.id, username=user.username, role=role)
    logger.info("Issued session for username=%r role=%s", user.username, role)
    return IssuedSession(token=token, username=user.username, role=role, expires_at=expires_at)


def verify_token(token: str | None, now: datetime | None = None) -> VerifiedSession:
    """
    Validate signature and expiry of a token and return its claims.

    Raises MissingCredentialError, InvalidTokenError, or ExpiredTokenError.
    """
    if not token or not token.strip():
        raise MissingCredentialError()
    try:
        payload = decode_access_token(token.strip())
    except jwt.ExpiredSignatureError:
        raise ExpiredTokenError()
    except jwt.PyJWTError:
        raise InvalidTokenError()

    exp = payload.get("exp")
    if not isinstance(exp, (int, float)):
        raise InvalidTokenError("Invalid token payload")
    current = now or datetime.now(UTC)
    if exp < current.timestamp():
        raise ExpiredTokenError()

    sub = payload.get("sub")
    username = payload.get("username")
    if not sub or not username:
        raise InvalidTokenError("Invalid token payload")
    try:
        user_id = int(sub)
    except (TypeError, ValueError):
        raise InvalidTokenError("Invalid token payload")

    return VerifiedSession(
        user=CurrentUser(id=user_id, username=username, role=payload.get("role") or ROLE_USER),
        subject=str(sub),
        expires_at=datetime.fromtimestamp(exp, UTC),
    )
