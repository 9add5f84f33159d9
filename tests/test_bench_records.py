"""Unit tests for app.services.bench_records: create, list order, versioned update, delete."""

import unittest
from datetime import datetime, timedelta
from unittest.mock import MagicMock

from app.models import BenchRecord
from app.schemas.auth import CurrentUser
from app.schemas.bench_record import BenchRecordCreate, BenchRecordUpdate
from app.services.bench_records import (
    BenchRecordNotFoundError,
    InvalidBenchIdError,
    NoChangesError,
    create_bench_record,
    delete_bench_record,
    get_bench_record,
    list_bench_records,
    normalize_bench_id,
    parse_display_timestamp,
    update_bench_record,
)
from tests.helpers import make_session_factory

ADMIN = CurrentUser(id=1, username="admin", role="admin")


def _create_body(**overrides: object) -> BenchRecordCreate:
    """Build a minimal valid create body for tests."""
    data = {
        "timestamp": "2025-01-19 5:30 PM CT",
        "location": "City Hall",
        "latitude": 29.76,
        "longitude": -95.37,
    }
    data.update(overrides)
    return BenchRecordCreate.model_validate(data)


class TestParseDisplayTimestamp(unittest.TestCase):
    """parse_display_timestamp drops the zone label and understands 12-hour times."""

    def test_with_zone_label(self) -> None:
        self.assertEqual(
            parse_display_timestamp("2025-01-19 5:30 PM CT"),
            datetime(2025, 1, 19, 17, 30),
        )

    def test_without_zone_label(self) -> None:
        self.assertEqual(
            parse_display_timestamp("2025-01-19 9:05 AM"),
            datetime(2025, 1, 19, 9, 5),
        )

    def test_unparseable(self) -> None:
        self.assertIsNone(parse_display_timestamp("yesterday afternoon"))


class TestNormalizeBenchId(unittest.TestCase):
    def test_canonical(self) -> None:
        raw = "3F2504E0-4F89-11D3-9A0C-0305E82C3301"
        self.assertEqual(normalize_bench_id(raw), raw.lower())

    def test_malformed(self) -> None:
        for bad in ("", "123", "not-a-uuid", "507f1f77bcf86cd799439011"):
            with self.assertRaises(InvalidBenchIdError):
                normalize_bench_id(bad)

    def test_format_checked_before_lookup(self) -> None:
        db = MagicMock()
        with self.assertRaises(InvalidBenchIdError):
            get_bench_record(db, "bad-id")
        db.get.assert_not_called()


class TestCreateAndList(unittest.TestCase):
    def setUp(self) -> None:
        self.db = make_session_factory()()

    def tearDown(self) -> None:
        self.db.close()

    def test_create_stamps_server_metadata(self) -> None:
        record = create_bench_record(
            self.db,
            _create_body(accuracy=12.5, tags=["shade"]),
            ADMIN,
            user_agent="pytest",
            ip_address="10.0.0.1",
        )
        self.assertEqual(record.version, 1)
        self.assertEqual(record.logged_by, "admin")
        self.assertEqual(record.user_id, "1")
        self.assertEqual(record.date_logged, datetime(2025, 1, 19, 17, 30))
        self.assertEqual(record.created_at, record.updated_at)
        self.assertTrue(record.is_active)
        self.assertFalse(record.is_public)
        self.assertEqual(record.notes, "")
        self.assertEqual(record.tags, ["shade"])
        self.assertEqual(record.accuracy, 12.5)
        self.assertEqual(record.user_agent, "pytest")
        self.assertEqual(record.ip_address, "10.0.0.1")

    def test_missing_request_metadata_defaults_to_unknown(self) -> None:
        record = create_bench_record(self.db, _create_body(), ADMIN)
        self.assertEqual(record.user_agent, "Unknown")
        self.assertEqual(record.ip_address, "Unknown")

    def test_list_newest_first(self) -> None:
        older = create_bench_record(self.db, _create_body(location="Old Park"), ADMIN)
        newer = create_bench_record(self.db, _create_body(location="New Plaza"), ADMIN)
        older.created_at = newer.created_at - timedelta(minutes=5)
        self.db.commit()
        locations = [r.location for r in list_bench_records(self.db)]
        self.assertEqual(locations, ["New Plaza", "Old Park"])


class TestUpdate(unittest.TestCase):
    def setUp(self) -> None:
        self.db = make_session_factory()()
        self.record = create_bench_record(
            self.db, _create_body(notes="first", tags=["a"]), ADMIN
        )

    def tearDown(self) -> None:
        self.db.close()

    def test_bumps_version_and_keeps_omitted_fields(self) -> None:
        before = {
            c: getattr(self.record, c)
            for c in ("location", "longitude", "notes", "tags", "timestamp", "logged_by", "created_at")
        }
        updated = update_bench_record(
            self.db, self.record.id, BenchRecordUpdate.model_validate({"latitude": 30.0}).changes()
        )
        self.assertEqual(updated.version, 2)
        self.assertEqual(updated.latitude, 30.0)
        for column, value in before.items():
            self.assertEqual(getattr(updated, column), value, column)

    def test_each_update_adds_exactly_one(self) -> None:
        for expected in (2, 3, 4):
            updated = update_bench_record(self.db, self.record.id, {"notes": f"v{expected}"})
            self.assertEqual(updated.version, expected)

    def test_ignores_fields_outside_allowlist(self) -> None:
        updated = update_bench_record(
            self.db,
            self.record.id,
            {"logged_by": "mallory", "version": 99, "location": "Library"},
        )
        self.assertEqual(updated.logged_by, "admin")
        self.assertEqual(updated.version, 2)
        self.assertEqual(updated.location, "Library")

    def test_not_found(self) -> None:
        with self.assertRaises(BenchRecordNotFoundError):
            update_bench_record(self.db, "00000000-0000-0000-0000-000000000000", {"notes": "x"})

    def test_no_rows_changed(self) -> None:
        db = MagicMock()
        db.get.return_value = BenchRecord(id="00000000-0000-0000-0000-000000000001")
        db.execute.return_value.rowcount = 0
        with self.assertRaises(NoChangesError) as ctx:
            update_bench_record(db, "00000000-0000-0000-0000-000000000001", {"notes": "x"})
        self.assertEqual(ctx.exception.message, "No changes were made to the record")
        db.rollback.assert_called_once()
        db.commit.assert_not_called()


class TestDelete(unittest.TestCase):
    def setUp(self) -> None:
        self.db = make_session_factory()()

    def tearDown(self) -> None:
        self.db.close()

    def test_delete_then_get_is_not_found(self) -> None:
        record = create_bench_record(self.db, _create_body(), ADMIN)
        record_id = record.id
        self.assertEqual(delete_bench_record(self.db, record_id), record_id)
        with self.assertRaises(BenchRecordNotFoundError):
            get_bench_record(self.db, record_id)

    def test_delete_missing(self) -> None:
        with self.assertRaises(BenchRecordNotFoundError):
            delete_bench_record(self.db, "00000000-0000-0000-0000-000000000000")


class TestUpdateBodyCoercion(unittest.TestCase):
    """BenchRecordUpdate only reports keys that were actually sent."""

    def test_only_present_fields(self) -> None:
        body = BenchRecordUpdate.model_validate({"longitude": "-95.0", "timestamp": "ignored"})
        self.assertEqual(body.changes(), {"longitude": -95.0})

    def test_non_list_tags_become_empty(self) -> None:
        body = BenchRecordUpdate.model_validate({"tags": "shade"})
        self.assertEqual(body.changes(), {"tags": []})


if __name__ == "__main__":
    unittest.main()
