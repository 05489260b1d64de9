"""Record types shared by both storage backends.

Storage adapters translate these to their own vocabulary: camelCase keys in
the local JSON snapshots, snake_case columns in the remote tables. Callers
only ever see these types or their ``public()`` payloads.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Union

ANONYMOUS = "Anonymous"

# Legacy local snapshots may hold free-form incident dates; those are kept verbatim.
IncidentDate = Union[date, str]


def _iso(value) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


@dataclass(frozen=True)
class NewUser:
    full_name: str
    username: str
    email: str
    account_type: str
    password: str


@dataclass(frozen=True)
class NewReport:
    type: str
    description: str
    date: date
    name: str = ANONYMOUS
    grade: str = ""


@dataclass(frozen=True)
class UserRecord:
    id: int
    full_name: str
    username: str
    email: str
    account_type: str
    password: Optional[str] = None
    created_at: Optional[datetime] = None

    def public(self) -> dict:
        """Caller-facing payload; the password never leaves the service."""
        return {
            "id": self.id,
            "fullName": self.full_name,
            "username": self.username,
            "email": self.email,
            "accountType": self.account_type,
            "createdAt": _iso(self.created_at),
        }

    def summary(self) -> dict:
        return {"id": self.id, "username": self.username, "accountType": self.account_type}


@dataclass(frozen=True)
class ReportRecord:
    id: int
    name: str
    grade: str
    type: str
    description: str
    date: Optional[IncidentDate]
    created_at: Optional[datetime] = None

    def public(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "grade": self.grade,
            "type": self.type,
            "description": self.description,
            "date": _iso(self.date),
            "createdAt": _iso(self.created_at),
        }
