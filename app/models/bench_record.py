"""ORM model for logged bench (location visit) records."""

import uuid

from sqlalchemy import JSON, Boolean, Column, DateTime, Float, Integer, String, Text, func
from sqlalchemy.dialects.postgresql import JSONB

from app.models.base import Base


def _new_id() -> str:
    return str(uuid.uuid4())


class BenchRecord(Base):
    """
    One logged location visit.

    version starts at 1 and is bumped on every update; it is an audit counter,
    not a concurrency precondition.
    """

    __tablename__ = "bench_records"

    id = Column(String(36), primary_key=True, default=_new_id)
    timestamp = Column(String(64), nullable=False)
    location = Column(Text, nullable=False)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    date_logged = Column(DateTime(timezone=False), nullable=True)
    logged_by = Column(String(255), nullable=False, index=True)
    user_id = Column(String(64), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        index=True,
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    accuracy = Column(Float, nullable=True)
    notes = Column(Text, nullable=False, default="")
    tags = Column(JSON().with_variant(JSONB(), "postgresql"), nullable=False, default=list)
    is_public = Column(Boolean, nullable=False, default=False)
    is_active = Column(Boolean, nullable=False, default=True)
    user_agent = Column(String(1024), nullable=False, default="Unknown")
    ip_address = Column(String(255), nullable=False, default="Unknown")
    version = Column(Integer, nullable=False, default=1)
