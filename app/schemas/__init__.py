"""Pydantic request/response schemas."""

from app.schemas.auth import (
    CurrentUser,
    LoginRequest,
    LoginResponse,
    VerifyRequest,
    VerifyResponse,
)
from app.schemas.bench_record import (
    UPDATABLE_FIELDS,
    BenchRecordCreate,
    BenchRecordDeleteResponse,
    BenchRecordListResponse,
    BenchRecordOut,
    BenchRecordUpdate,
)
from app.schemas.health import HealthResponse

__all__ = [
    "UPDATABLE_FIELDS",
    "BenchRecordCreate",
    "BenchRecordDeleteResponse",
    "BenchRecordListResponse",
    "BenchRecordOut",
    "BenchRecordUpdate",
    "CurrentUser",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "VerifyRequest",
    "VerifyResponse",
]
