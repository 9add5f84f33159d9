"""SQLAlchemy declarative Base shared by the users and bench_records tables."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base; Base.metadata is the Alembic autogenerate target."""
