"""Bench record store operations: insert, lookup, sorted scan, versioned partial update, hard delete."""

import logging
import re
import uuid
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import update
from sqlalchemy.orm import Session

from app.models import BenchRecord
from app.schemas.auth import CurrentUser
from app.schemas.bench_record import UPDATABLE_FIELDS, BenchRecordCreate

logger = logging.getLogger(__name__)

UNKNOWN = "Unknown"

# Display timestamps look like "2025-01-19 5:30 PM CT"; the zone label is dropped before parsing.
_TRAILING_ZONE = re.compile(r"\s+[A-Za-z]{1,5}$")
_DISPLAY_TIMESTAMP_FORMATS = (
    "%Y-%m-%d %I:%M %p",
    "%Y-%m-%d %I:%M:%S %p",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d",
)


class BenchRecordError(Exception):
    """Base error for bench record operations."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidBenchIdError(BenchRecordError):
    def __init__(self) -> None:
        super().__init__("Invalid bench ID format")


class BenchRecordNotFoundError(BenchRecordError):
    def __init__(self) -> None:
        super().__init__("Bench record not found")


class NoChangesError(BenchRecordError):
    def __init__(self) -> None:
        super().__init__("No changes were made to the record")


def normalize_bench_id(bench_id: str) -> str:
    """Return the canonical UUID string for bench_id; raise InvalidBenchIdError if malformed."""
    try:
        return str(uuid.UUID(bench_id.strip()))
    except (AttributeError, ValueError):
        raise InvalidBenchIdError()


def parse_display_timestamp(value: str) -> datetime | None:
    """Best-effort parse of a display timestamp into a naive datetime; None if unrecognized."""
    text = value.strip()
    if not text[:1].isdigit():
        return None
    for candidate in (text, _TRAILING_ZONE.sub("", text)):
        for fmt in _DISPLAY_TIMESTAMP_FORMATS:
            try:
                return datetime.strptime(candidate, fmt)
            except ValueError:
                continue
    return None


def list_bench_records(db: Session) -> list[BenchRecord]:
    """All records, newest first. No pagination or filtering."""
    return (
        db.query(BenchRecord)
        .order_by(BenchRecord.created_at.desc(), BenchRecord.id)
        .all()
    )


def get_bench_record(db: Session, bench_id: str) -> BenchRecord:
    """Point lookup. The id format is checked before the database is queried."""
    record_id = normalize_bench_id(bench_id)
    record = db.get(BenchRecord, record_id)
    if record is None:
        raise BenchRecordNotFoundError()
    return record


def create_bench_record(
    db: Session,
    body: BenchRecordCreate,
    user: CurrentUser,
    user_agent: str | None = None,
    ip_address: str | None = None,
) -> BenchRecord:
    """Insert a new record stamped with the caller's identity and request metadata."""
    now = datetime.now(UTC)
    record = BenchRecord(
        id=str(uuid.uuid4()),
        timestamp=body.timestamp,
        location=body.location,
        latitude=body.latitude,
        longitude=body.longitude,
        date_logged=parse_display_timestamp(body.timestamp),
        logged_by=user.username,
        user_id=str(user.id),
        created_at=now,
        updated_at=now,
        accuracy=body.accuracy,
        notes=body.notes,
        tags=list(body.tags),
        is_public=body.is_public,
        is_active=True,
        user_agent=user_agent or UNKNOWN,
        ip_address=ip_address or UNKNOWN,
        version=1,
    )
    db.add(record)
    db.commit()
    db.refresh(record)
    logger.info(
        "Created bench record id=%s location=%r logged_by=%s",
        record.id,
        record.location,
        record.logged_by,
    )
    return record


def update_bench_record(db: Session, bench_id: str, changes: dict[str, Any]) -> BenchRecord:
    """
    Apply allowlisted field changes, set updated_at and bump version by one.

    Keys outside the allowlist are ignored. Raises BenchRecordNotFoundError if the
    record does not exist and NoChangesError if the store reports no row changed.
    """
    record = get_bench_record(db, bench_id)
    values = {k: v for k, v in changes.items() if k in UPDATABLE_FIELDS}
    result = db.execute(
        update(BenchRecord)
        .where(BenchRecord.id == record.id)
        .values(
            **values,
            updated_at=datetime.now(UTC),
            version=BenchRecord.version + 1,
        )
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        db.rollback()
        raise NoChangesError()
    db.commit()
    db.refresh(record)
    logger.info(
        "Updated bench record id=%s fields=%s version=%s",
        record.id,
        sorted(values),
        record.version,
    )
    return record


def delete_bench_record(db: Session, bench_id: str) -> str:
    """Hard delete. Returns the deleted record id."""
    record = get_bench_record(db, bench_id)
    record_id = record.id
    db.delete(record)
    db.commit()
    logger.info("Deleted bench record id=%s", record_id)
    return record_id
