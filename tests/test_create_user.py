"""Unit tests for app.scripts.create_user: out-of-band user creation with hashed passwords."""

import unittest
from unittest.mock import patch

from app.core.security import verify_password
from app.models import User
from app.scripts.create_user import main
from tests.helpers import make_session_factory


class TestCreateUser(unittest.TestCase):
    """main() writes a bcrypt-hashed user and refuses duplicates and bad lengths."""

    def setUp(self) -> None:
        self.session_factory = make_session_factory()
        patchers = [
            patch("app.scripts.create_user.SessionLocal", self.session_factory),
            patch("app.core.security.BCRYPT_ROUNDS", 4),
        ]
        for p in patchers:
            p.start()
            self.addCleanup(p.stop)

    def _users(self) -> list[User]:
        db = self.session_factory()
        try:
            return db.query(User).order_by(User.id).all()
        finally:
            db.close()

    def test_creates_hashed_admin(self) -> None:
        self.assertEqual(main(["  admin  ", "adminpass", "admin"]), 0)
        users = self._users()
        self.assertEqual(len(users), 1)
        self.assertEqual(users[0].username, "admin")
        self.assertEqual(users[0].role, "admin")
        self.assertNotEqual(users[0].password_hash, "adminpass")
        self.assertTrue(verify_password("adminpass", users[0].password_hash))

    def test_role_defaults_to_user(self) -> None:
        self.assertEqual(main(["viewer", "viewerpass"]), 0)
        self.assertEqual(self._users()[0].role, "user")

    def test_refuses_duplicate(self) -> None:
        self.assertEqual(main(["admin", "adminpass", "admin"]), 0)
        self.assertEqual(main(["admin", "otherpass1", "user"]), 1)
        users = self._users()
        self.assertEqual(len(users), 1)
        self.assertEqual(users[0].role, "admin")

    def test_refuses_bad_lengths(self) -> None:
        self.assertEqual(main(["   ", "adminpass"]), 1)
        self.assertEqual(main(["x" * 256, "adminpass"]), 1)
        self.assertEqual(main(["admin", "short"]), 1)
        self.assertEqual(main(["admin", "p" * 129]), 1)
        self.assertEqual(self._users(), [])

    def test_rejects_unknown_role(self) -> None:
        with self.assertRaises(SystemExit):
            main(["admin", "adminpass", "owner"])


if __name__ == "__main__":
    unittest.main()
