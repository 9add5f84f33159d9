"""JWT login/verify endpoints and auth dependencies (get_current_user, require_admin)."""

from typing import Annotated

from fastapi import APIRouter, Body, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.security import ROLE_ADMIN
from app.schemas.auth import (
    CurrentUser,
    LoginRequest,
    LoginResponse,
    VerifyRequest,
    VerifyResponse,
)
from app.services.auth import AuthError, InvalidTokenError, authenticate, verify_token

router = APIRouter()
security = HTTPBearer(auto_error=False)


def _unauthorized(e: AuthError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=e.message,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _bearer_token(credentials: HTTPAuthorizationCredentials | None) -> str | None:
    if credentials is None or credentials.scheme.lower() != "bearer":
        return None
    return credentials.credentials


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
) -> LoginResponse:
    """
    Authenticate with username and password; returns a JWT access token valid for 30 minutes.
    Include the token in the Authorization header as: Bearer <token>
    """
    try:
        session = authenticate(db, body.username, body.password)
    except AuthError as e:
        raise _unauthorized(e)
    return LoginResponse(
        token=session.token,
        token_type="bearer",
        username=session.username,
        role=session.role,
        expires_in=session.expires_in_ms,
    )


@router.post("/verify", response_model=VerifyResponse)
def verify(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    body: Annotated[VerifyRequest | None, Body()] = None,
) -> VerifyResponse:
    """Check a token from the Authorization header or the request body and return its claims."""
    token = _bearer_token(credentials) or (body.token if body else None)
    try:
        if token is not None and not isinstance(token, str):
            raise InvalidTokenError()
        session = verify_token(token)
    except AuthError as e:
        raise _unauthorized(e)
    return VerifyResponse(
        valid=True,
        username=session.user.username,
        subject=session.subject,
        role=session.user.role,
        expires_at=session.expires_at_ms,
    )


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> CurrentUser:
    """Dependency: require valid Bearer JWT and return the user from its claims. Raises 401 if missing or invalid."""
    try:
        session = verify_token(_bearer_token(credentials))
    except AuthError as e:
        raise _unauthorized(e)
    return session.user


def require_admin(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    """Dependency: require authenticated user with role 'admin'. Raises 403 for non-admin."""
    if current_user.role != ROLE_ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Insufficient permissions. Admin access required.",
        )
    return current_user
