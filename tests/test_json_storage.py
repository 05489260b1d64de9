"""
Tests for the local JSON snapshot store.
"""
from __future__ import annotations

import json
import logging
from datetime import date

import pytest

from swdsms.domain.records import NewReport, NewUser
from swdsms.repositories import json_storage
from swdsms.repositories.errors import UsernameTakenError
from swdsms.repositories.json_storage import REPORTS, USERS, JSONStorage


def _user(username: str = "alice") -> NewUser:
    return NewUser(
        full_name="Alice Doe",
        username=username,
        email=f"{username}@example.com",
        account_type="Student",
        password="argon2$fake",
    )


def test_missing_file_reads_as_empty(data_dir):
    store = JSONStorage(data_dir)
    assert store.read(USERS) == []
    assert store.list_reports() == []


def test_write_then_read_round_trip(data_dir):
    store = JSONStorage(data_dir)
    records = [{"id": 2, "username": "bob"}, {"id": 1, "username": "ana", "note": "ção"}]
    store.write(USERS, records)
    assert store.read(USERS) == records
    assert store.path_for(USERS).read_text(encoding="utf-8").startswith("[")


def test_write_creates_directory_and_leaves_no_temp_files(tmp_path):
    target = tmp_path / "nested" / "data"
    store = JSONStorage(target)
    store.write(REPORTS, [{"id": 1}])
    assert sorted(p.name for p in target.iterdir()) == ["reports.json"]


def test_failed_write_keeps_previous_snapshot(data_dir, monkeypatch):
    store = JSONStorage(data_dir)
    store.write(USERS, [{"id": 1, "username": "ana"}])

    def broken_dump(*args, **kwargs):
        raise OSError("disk full")

    with monkeypatch.context() as m:
        m.setattr(json_storage.json, "dump", broken_dump)
        with pytest.raises(OSError):
            store.write(USERS, [{"id": 1, "username": "ana"}, {"id": 2, "username": "bob"}])

    assert store.read(USERS) == [{"id": 1, "username": "ana"}]
    assert sorted(p.name for p in data_dir.iterdir()) == ["users.json"]


def test_unparsable_file_reads_as_empty_and_logs(data_dir, caplog):
    data_dir.mkdir(parents=True)
    (data_dir / "users.json").write_text("{not json", encoding="utf-8")
    store = JSONStorage(data_dir)
    with caplog.at_level(logging.WARNING, logger="swdsms.repositories.json_storage"):
        assert store.read(USERS) == []
    assert "treated as empty" in caplog.text


def test_non_array_snapshot_reads_as_empty(data_dir):
    data_dir.mkdir(parents=True)
    (data_dir / "reports.json").write_text('{"id": 1}', encoding="utf-8")
    assert JSONStorage(data_dir).read(REPORTS) == []


def test_create_user_rejects_duplicate_username(data_dir):
    store = JSONStorage(data_dir)
    first = store.create_user(_user())
    assert first.created_at is not None
    with pytest.raises(UsernameTakenError):
        store.create_user(_user())
    assert len(store.read(USERS)) == 1


def test_user_snapshot_uses_caller_field_names(data_dir):
    store = JSONStorage(data_dir)
    store.create_user(_user())
    saved = json.loads((data_dir / "users.json").read_text(encoding="utf-8"))[0]
    assert saved["fullName"] == "Alice Doe"
    assert saved["accountType"] == "Student"
    assert "full_name" not in saved


def test_ids_increase_within_a_collection(data_dir, monkeypatch):
    store = JSONStorage(data_dir)
    monkeypatch.setattr(json_storage.time, "time", lambda: 1000.0)
    a = store.create_user(_user("a"))
    b = store.create_user(_user("b"))
    assert b.id > a.id


def test_list_users_is_newest_first_without_password(data_dir):
    store = JSONStorage(data_dir)
    store.create_user(_user("first"))
    store.create_user(_user("second"))
    users = store.list_users()
    assert [u.username for u in users] == ["second", "first"]
    assert all(u.password is None for u in users)


def test_reports_are_prepended(data_dir):
    store = JSONStorage(data_dir)
    store.create_report(NewReport(type="bullying", description="one", date=date(2024, 1, 1)))
    store.create_report(NewReport(type="theft", description="two", date=date(2024, 2, 1)))
    reports = store.list_reports()
    assert [r.description for r in reports] == ["two", "one"]
    assert reports[0].date == date(2024, 2, 1)
    saved = json.loads((data_dir / "reports.json").read_text(encoding="utf-8"))
    assert saved[0]["date"] == "2024-02-01"


def test_reads_snapshots_written_without_timestamps(data_dir):
    data_dir.mkdir(parents=True)
    legacy = [{"id": 1700000000000, "name": "", "grade": "", "type": "other", "description": "x", "date": "last week"}]
    (data_dir / "reports.json").write_text(json.dumps(legacy), encoding="utf-8")
    report = JSONStorage(data_dir).list_reports()[0]
    assert report.name == "Anonymous"
    assert report.date == "last week"
    assert report.created_at is None
