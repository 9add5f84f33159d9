"""ORM model for application users (credential store for login and RBAC)."""

from sqlalchemy import Column, Integer, String

from app.models.base import Base


class User(Base):
    """
    User account for JWT authentication and role-based access control.

    Rows are created out-of-band (see app.scripts.create_user); the API only reads them.
    role: 'admin' (may create bench records) or 'user' (read-only)
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=True, default="user")
