"""
Create a user (e.g. the first admin). There is no registration endpoint. Run from project root:
  python -m app.scripts.create_user USERNAME PASSWORD [role]
Example:
  python -m app.scripts.create_user admin your-secure-password admin
"""
import argparse
import logging
import sys

from sqlalchemy.exc import SQLAlchemyError

from app.core.database import SessionLocal
from app.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    ROLE_USER,
    ROLES,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
    hash_password,
)
from app.models.user import User

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Create a Bench-Marked user (no registration UI).")
    parser.add_argument("username", help=f"Username ({USERNAME_MIN_LEN}-{USERNAME_MAX_LEN} chars)")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument("role", nargs="?", default=ROLE_USER, choices=list(ROLES))
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    username = args.username.strip()
    if not (USERNAME_MIN_LEN <= len(username) <= USERNAME_MAX_LEN):
        logger.error("Invalid username length.")
        return 1
    if not (PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN):
        logger.error("Password must be %s-%s characters.", PASSWORD_MIN_LEN, PASSWORD_MAX_LEN)
        return 1

    db = SessionLocal()
    try:
        existing = db.query(User).filter(User.username == username).first()
        if existing:
            logger.error("User '%s' already exists.", username)
            return 1
        user = User(
            username=username,
            password_hash=hash_password(args.password),
            role=args.role,
        )
        db.add(user)
        db.commit()
        logger.info("Created user '%s' with role '%s'.", username, args.role)
        return 0
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Could not create user '%s': %s", username, e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
