"""Request/response schemas for auth endpoints."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class LoginRequest(BaseModel):
    """Credentials for login."""

    username: str = Field(..., min_length=1, max_length=255, description="Username")
    password: str = Field(..., min_length=1, max_length=128, description="Password")


class LoginResponse(BaseModel):
    """JWT access token and session details returned after successful login."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    username: str
    role: str
    expires_in: int = Field(..., description="Token lifetime in milliseconds")


class VerifyRequest(BaseModel):
    """Optional body for token verification when no Authorization header is sent.

    token is untyped so a non-string value is reported as an invalid token (401), not a 400.
    """

    token: Any = None


class VerifyResponse(BaseModel):
    """Decoded claims of a valid token."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    valid: bool = True
    username: str
    subject: str
    role: str
    expires_at: int = Field(..., description="Expiry as epoch milliseconds")


class CurrentUser(BaseModel):
    """Authenticated user (id, username, role) taken from token claims."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    role: str
