"""One-off migration script: local JSON snapshots (users.json, reports.json) -> remote SQL backend."""
from __future__ import annotations

import sys
from pathlib import Path

# Make the swdsms package importable when run directly
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from swdsms.core.config import get_settings
from swdsms.domain.records import NewReport, NewUser
from swdsms.repositories.errors import StorageError
from swdsms.repositories.json_storage import REPORTS, USERS, JSONStorage, report_from_json, user_from_json
from swdsms.repositories.sql_repository import SQLRepository
from swdsms.services.report_service import parse_incident_date
from swdsms.services.errors import ValidationError


def migrate_users(local: JSONStorage, remote: SQLRepository) -> tuple[int, int]:
    users = local.read(USERS)
    if not users:
        print("No users to migrate.")
        return 0, 0
    print(f"Migrating {len(users)} users to the remote backend (table: users)")
    ok = failed = 0
    for item in users:
        user = user_from_json(item)
        payload = NewUser(
            full_name=user.full_name,
            username=user.username,
            email=user.email,
            account_type=user.account_type or "Student",
            password=user.password or "",
        )
        try:
            inserted = remote.create_user(payload)
        except StorageError as exc:
            failed += 1
            print(f"Failed to insert {user.username}: {exc}")
            continue
        ok += 1
        print(f"Inserted {inserted.username} id={inserted.id}")
    return ok, failed


def migrate_reports(local: JSONStorage, remote: SQLRepository) -> tuple[int, int]:
    reports = local.read(REPORTS)
    if not reports:
        print("No local reports to migrate.")
        return 0, 0
    print(f"Migrating {len(reports)} reports to the remote backend (table: reports)")
    ok = failed = 0
    # snapshots are newest first; insert oldest first so remote created_at keeps the order
    for item in reversed(reports):
        report = report_from_json(item)
        try:
            payload = NewReport(
                type=report.type,
                description=report.description,
                date=parse_incident_date(report.date),
                name=report.name,
                grade=report.grade,
            )
            inserted = remote.create_report(payload)
        except (StorageError, ValidationError) as exc:
            failed += 1
            print(f"Failed to insert report {report.id or ''}: {exc}")
            continue
        ok += 1
        print(f"Inserted report id={inserted.id}")
    return ok, failed


def migrate() -> int:
    settings = get_settings()
    if not settings.remote_configured:
        raise SystemExit("Please set DATABASE_URL before running this script.")
    local = JSONStorage(settings.data_dir)
    remote = SQLRepository()
    _, users_failed = migrate_users(local, remote)
    _, reports_failed = migrate_reports(local, remote)
    return users_failed + reports_failed


if __name__ == "__main__":
    failures = migrate()
    print("Migration finished. Verify rows in the remote database.")
    if failures:
        print(f"{failures} record(s) could not be migrated.")
