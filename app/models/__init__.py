"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.bench_record import BenchRecord
from app.models.user import User

__all__ = ["Base", "BenchRecord", "User"]
