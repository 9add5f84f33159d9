"""Shared fixtures for tests: in-memory SQLite sessions and seeded users."""

from unittest.mock import patch

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.security import hash_password
from app.models import Base, User


def make_session_factory() -> sessionmaker:
    """Fresh in-memory database with all tables; shareable across TestClient threads."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def add_user(db: Session, username: str, password: str, role: str | None = "user") -> User:
    """Insert a user with a (cheap) bcrypt hash of password."""
    with patch("app.core.security.BCRYPT_ROUNDS", 4):
        password_hash = hash_password(password)
    user = User(username=username, password_hash=password_hash, role=role)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user
