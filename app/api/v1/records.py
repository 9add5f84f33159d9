"""Bench record endpoints: list, get, create (admin only), partial update, delete."""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, HTTPException, Request, status
from pydantic import ValidationError
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_user, require_admin
from app.core.database import get_db
from app.schemas.auth import CurrentUser
from app.schemas.bench_record import (
    BenchRecordCreate,
    BenchRecordDeleteResponse,
    BenchRecordListResponse,
    BenchRecordOut,
    BenchRecordUpdate,
)
from app.services.bench_records import (
    UNKNOWN,
    BenchRecordError,
    BenchRecordNotFoundError,
    create_bench_record,
    delete_bench_record,
    get_bench_record,
    list_bench_records,
    update_bench_record,
)

router = APIRouter()

MISSING_FIELDS_MESSAGE = "Missing required fields: timestamp, location, latitude, longitude"


def _to_http_error(e: BenchRecordError) -> HTTPException:
    if isinstance(e, BenchRecordNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)


def _client_ip(request: Request) -> str:
    """First hop of X-Forwarded-For, then X-Real-IP, then the socket peer."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded and forwarded.split(",")[0].strip():
        return forwarded.split(",")[0].strip()
    real_ip = request.headers.get("x-real-ip")
    if real_ip and real_ip.strip():
        return real_ip.strip()
    if request.client and request.client.host:
        return request.client.host
    return UNKNOWN


def _validation_detail(e: ValidationError, fallback: str) -> str:
    if any(err.get("type") in ("missing", "string_too_short") for err in e.errors()):
        return fallback
    first = e.errors()[0]
    loc = ".".join(str(p) for p in first.get("loc", ()))
    return f"Invalid field {loc}: {first.get('msg')}" if loc else str(first.get("msg"))


@router.get("", response_model=BenchRecordListResponse)
def list_records(
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> BenchRecordListResponse:
    """Return every bench record, newest first."""
    records = [BenchRecordOut.model_validate(r) for r in list_bench_records(db)]
    return BenchRecordListResponse(records=records, count=len(records))


@router.post("", response_model=BenchRecordOut, status_code=status.HTTP_201_CREATED)
async def create_record(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
    user: Annotated[CurrentUser, Depends(require_admin)],
) -> BenchRecordOut:
    """
    Log a new bench (admin only).

    Requires timestamp, location, latitude and longitude; accuracy, notes, tags and
    isPublic are optional. The body is read only after the admin check, so non-admins
    get 403 whatever they send. The logging user, timestamps and version are set server-side.
    """
    try:
        payload = await request.json()
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Request body must be a JSON object",
        )
    try:
        body = BenchRecordCreate.model_validate(payload)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=_validation_detail(e, MISSING_FIELDS_MESSAGE),
        )
    record = create_bench_record(
        db,
        body,
        user,
        user_agent=request.headers.get("user-agent"),
        ip_address=_client_ip(request),
    )
    return BenchRecordOut.model_validate(record)


@router.get("/{bench_id}", response_model=BenchRecordOut)
def get_record(
    bench_id: str,
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> BenchRecordOut:
    """Return one bench record by id."""
    try:
        record = get_bench_record(db, bench_id)
    except BenchRecordError as e:
        raise _to_http_error(e)
    return BenchRecordOut.model_validate(record)


@router.put("/{bench_id}", response_model=BenchRecordOut)
def update_record(
    bench_id: str,
    payload: Annotated[dict[str, Any], Body()],
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> BenchRecordOut:
    """
    Partially update a bench record.

    Only location, latitude, longitude, notes and tags are applied; other keys are
    ignored. Every successful update bumps version by one.
    """
    try:
        body = BenchRecordUpdate.model_validate(payload)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=_validation_detail(e, "Invalid update body"),
        )
    try:
        record = update_bench_record(db, bench_id, body.changes())
    except BenchRecordError as e:
        raise _to_http_error(e)
    return BenchRecordOut.model_validate(record)


@router.delete("/{bench_id}", response_model=BenchRecordDeleteResponse)
def delete_record(
    bench_id: str,
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> BenchRecordDeleteResponse:
    """Hard-delete a bench record and return its id."""
    try:
        deleted_id = delete_bench_record(db, bench_id)
    except BenchRecordError as e:
        raise _to_http_error(e)
    return BenchRecordDeleteResponse(deleted_id=deleted_id)
