"""
File-based persistence adapter.

Each collection (users, reports) lives in its own JSON array under the data
directory. Collections are always read and written whole; a write goes to a
temporary file beside the target and is renamed over it, so a crash mid-write
leaves the previous snapshot intact.

Read-modify-write sequences are not serialized: two concurrent creates can
both read the same snapshot and the later write wins.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from pathlib import Path
from typing import Optional
import json
import logging
import os
import tempfile
import time

from swdsms.core.config import get_settings
from swdsms.domain.records import ANONYMOUS, NewReport, NewUser, ReportRecord, UserRecord
from swdsms.repositories.errors import UsernameTakenError

logger = logging.getLogger(__name__)

USERS = "users"
REPORTS = "reports"


def _parse_datetime(value) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(str(value))
    except ValueError:
        return None


def _parse_date(value):
    if not value:
        return None
    try:
        return date.fromisoformat(str(value))
    except ValueError:
        return str(value)


def user_from_json(item: dict) -> UserRecord:
    return UserRecord(
        id=item.get("id"),
        full_name=item.get("fullName") or item.get("full_name") or "",
        username=item.get("username") or "",
        email=item.get("email") or "",
        account_type=item.get("accountType") or item.get("account_type") or "",
        password=item.get("password"),
        created_at=_parse_datetime(item.get("createdAt") or item.get("created_at")),
    )


def user_to_json(user: UserRecord) -> dict:
    return {
        "id": user.id,
        "fullName": user.full_name,
        "username": user.username,
        "email": user.email,
        "accountType": user.account_type,
        "password": user.password,
        "createdAt": user.created_at.isoformat() if user.created_at else None,
    }


def report_from_json(item: dict) -> ReportRecord:
    return ReportRecord(
        id=item.get("id"),
        name=item.get("name") or ANONYMOUS,
        grade=item.get("grade") or "",
        type=item.get("type") or "",
        description=item.get("description") or "",
        date=_parse_date(item.get("date") or item.get("incident_date")),
        created_at=_parse_datetime(item.get("createdAt") or item.get("created_at")),
    )


def report_to_json(report: ReportRecord) -> dict:
    value = report.date
    return {
        "id": report.id,
        "name": report.name,
        "grade": report.grade,
        "type": report.type,
        "description": report.description,
        "date": value.isoformat() if isinstance(value, date) else value,
        "createdAt": report.created_at.isoformat() if report.created_at else None,
    }


class JSONStorage:
    """Whole-collection JSON snapshots with the same contract as SQLRepository."""

    def __init__(self, data_dir: str | os.PathLike | None = None) -> None:
        self.data_dir = Path(data_dir or get_settings().data_dir)

    def path_for(self, collection: str) -> Path:
        return self.data_dir / f"{collection}.json"

    # -------------------------- snapshots --------------------------
    def read(self, collection: str) -> list[dict]:
        """Return the stored records; an absent or unparsable file reads as empty."""
        path = self.path_for(collection)
        if not path.exists():
            return []
        try:
            data = json.loads(path.read_text(encoding="utf-8") or "[]")
        except (OSError, ValueError) as exc:
            logger.warning("Unreadable snapshot %s treated as empty: %s", path, exc)
            return []
        if not isinstance(data, list):
            logger.warning("Snapshot %s is not a JSON array; treated as empty", path)
            return []
        records = [item for item in data if isinstance(item, dict)]
        if len(records) != len(data):
            logger.warning("Skipped %d non-object entries in %s", len(data) - len(records), path)
        return records

    def write(self, collection: str, records: list[dict]) -> None:
        path = self.path_for(collection)
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{collection}.", suffix=".tmp", dir=path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(records, f, ensure_ascii=False, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, path)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except OSError:
                pass
            raise

    def _next_id(self, records: list[dict]) -> int:
        now_ms = int(time.time() * 1000)
        ids = [item.get("id") for item in records if isinstance(item.get("id"), int)]
        return max([now_ms] + [i + 1 for i in ids])

    def _now(self) -> datetime:
        return datetime.now(timezone.utc)

    # -------------------------- users --------------------------
    def create_user(self, new_user: NewUser) -> UserRecord:
        users = self.read(USERS)
        if any(item.get("username") == new_user.username for item in users):
            raise UsernameTakenError(new_user.username)
        record = UserRecord(
            id=self._next_id(users),
            full_name=new_user.full_name,
            username=new_user.username,
            email=new_user.email,
            account_type=new_user.account_type,
            password=new_user.password,
            created_at=self._now(),
        )
        users.append(user_to_json(record))
        self.write(USERS, users)
        return record

    def find_user_by_username(self, username: str) -> Optional[UserRecord]:
        for item in self.read(USERS):
            if item.get("username") == username:
                return user_from_json(item)
        return None

    def list_users(self) -> list[UserRecord]:
        # newest first, matching the remote ordering
        users = [user_from_json(item) for item in reversed(self.read(USERS))]
        return [
            UserRecord(
                id=u.id,
                full_name=u.full_name,
                username=u.username,
                email=u.email,
                account_type=u.account_type,
                created_at=u.created_at,
            )
            for u in users
        ]

    # -------------------------- reports --------------------------
    def create_report(self, new_report: NewReport) -> ReportRecord:
        reports = self.read(REPORTS)
        record = ReportRecord(
            id=self._next_id(reports),
            name=new_report.name or ANONYMOUS,
            grade=new_report.grade or "",
            type=new_report.type,
            description=new_report.description,
            date=new_report.date,
            created_at=self._now(),
        )
        # reports are kept newest first
        reports.insert(0, report_to_json(record))
        self.write(REPORTS, reports)
        return record

    def list_reports(self) -> list[ReportRecord]:
        return [report_from_json(item) for item in self.read(REPORTS)]
