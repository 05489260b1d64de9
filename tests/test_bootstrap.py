from __future__ import annotations

import importlib.util
import json
import socket
from pathlib import Path

from swdsms.__main__ import pick_port
from swdsms.repositories.sql_repository import SQLRepository

ROOT = Path(__file__).resolve().parents[1]


def _load_migration():
    module_spec = importlib.util.spec_from_file_location("migrate_to_remote", ROOT / "scripts" / "migrate_to_remote.py")
    module = importlib.util.module_from_spec(module_spec)
    module_spec.loader.exec_module(module)
    return module


def test_pick_port_skips_a_busy_port():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as busy:
        busy.bind(("127.0.0.1", 0))
        busy.listen(1)
        port = busy.getsockname()[1]
        chosen = pick_port("127.0.0.1", port, 3)
    assert chosen != port


def test_pick_port_gives_up_without_retries():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as busy:
        busy.bind(("127.0.0.1", 0))
        busy.listen(1)
        port = busy.getsockname()[1]
        assert pick_port("127.0.0.1", port, 0) is None


def test_migration_copies_local_snapshots(db_env, data_dir):
    data_dir.mkdir(parents=True, exist_ok=True)
    users = [
        {"id": 1, "fullName": "Ana", "username": "ana", "email": "ana@x", "accountType": "Student", "password": "pw"},
        {"id": 2, "fullName": "Bo", "username": "bo", "email": "bo@x", "accountType": "Admin", "password": "pw2"},
    ]
    reports = [
        {"id": 4, "name": "Anonymous", "grade": "", "type": "theft", "description": "newer", "date": "2024-02-01"},
        {"id": 3, "name": "Ana", "grade": "7", "type": "bullying", "description": "older", "date": "2024-01-01"},
        {"id": 2, "name": "", "grade": "", "type": "other", "description": "bad", "date": "yesterday"},
    ]
    (data_dir / "users.json").write_text(json.dumps(users), encoding="utf-8")
    (data_dir / "reports.json").write_text(json.dumps(reports), encoding="utf-8")

    failures = _load_migration().migrate()

    assert failures == 1  # the free-form date cannot be stored as a calendar date
    repo = SQLRepository()
    assert repo.find_user_by_username("bo").account_type == "Admin"
    assert sorted(r.description for r in repo.list_reports()) == ["newer", "older"]
