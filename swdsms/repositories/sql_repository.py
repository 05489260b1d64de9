"""Remote data access backed by SQLAlchemy.

Every backend failure leaves this module as a ``RemoteStoreError`` whose
``category`` tells the caller whether the backend is structurally unusable
(missing relation, access policy rejection, unusable connection URL) or just
failed this one call.
"""
from __future__ import annotations

import re
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import select
from sqlalchemy.exc import ArgumentError, IntegrityError, SQLAlchemyError

from swdsms.db.models import Report, User
from swdsms.db.session import get_session
from swdsms.domain.records import ANONYMOUS, NewReport, NewUser, ReportRecord, UserRecord
from swdsms.repositories.errors import ErrorCategory, RemoteStoreError, UsernameTakenError

# undefined_table, insufficient_privilege (row-level security violations use it too)
PERMANENT_SQLSTATES = frozenset({"42P01", "42501"})
UNIQUE_VIOLATION = "23505"

# Only consulted for drivers that expose no SQLSTATE (sqlite).
_PERMANENT_SIGNATURE = re.compile(
    r"no such table|relation \S+ does not exist|could not find the table|row-level security policy",
    re.IGNORECASE,
)


def _sqlstate(exc: BaseException) -> Optional[str]:
    orig = getattr(exc, "orig", None)
    if orig is None:
        return None
    # psycopg 3 exposes ``sqlstate``, psycopg2 ``pgcode``.
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


def classify_error(exc: BaseException) -> ErrorCategory:
    """Map a driver/SQLAlchemy failure to a structured category."""
    if isinstance(exc, (ArgumentError, ImportError)):
        # bad DATABASE_URL or missing driver: the backend cannot be provisioned
        return ErrorCategory.PERMANENT
    code = _sqlstate(exc)
    if code:
        return ErrorCategory.PERMANENT if code in PERMANENT_SQLSTATES else ErrorCategory.TRANSIENT
    orig = getattr(exc, "orig", None)
    message = str(orig if orig is not None else exc)
    if _PERMANENT_SIGNATURE.search(message):
        return ErrorCategory.PERMANENT
    return ErrorCategory.TRANSIENT


def _is_unique_violation(exc: IntegrityError) -> bool:
    code = _sqlstate(exc)
    if code:
        return code == UNIQUE_VIOLATION
    return "unique" in str(exc.orig).lower()


@contextmanager
def _classified(operation: str) -> Iterator[None]:
    try:
        yield
    except (SQLAlchemyError, ImportError) as exc:
        raise RemoteStoreError(operation, classify_error(exc), exc) from exc


def _user_record(row) -> UserRecord:
    return UserRecord(
        id=row.id,
        full_name=row.full_name,
        username=row.username,
        email=row.email,
        account_type=row.account_type,
        password=getattr(row, "password", None),
        created_at=row.created_at,
    )


def _report_record(row: Report) -> ReportRecord:
    return ReportRecord(
        id=row.id,
        name=row.name or ANONYMOUS,
        grade=row.grade if row.grade is not None else "",
        type=row.type,
        description=row.description,
        date=row.incident_date,
        created_at=row.created_at,
    )


class SQLRepository:
    """CRUD helpers wrapping the SQLAlchemy session."""

    # -------------------------- users --------------------------
    def create_user(self, new_user: NewUser) -> UserRecord:
        entity = User(
            full_name=new_user.full_name,
            username=new_user.username,
            email=new_user.email,
            account_type=new_user.account_type,
            password=new_user.password,
        )
        with _classified("create_user"):
            with get_session() as session:
                session.add(entity)
                try:
                    session.commit()
                except IntegrityError as exc:
                    session.rollback()
                    if _is_unique_violation(exc):
                        raise UsernameTakenError(new_user.username) from exc
                    raise
                session.refresh(entity)
                return _user_record(entity)

    def find_user_by_username(self, username: str) -> Optional[UserRecord]:
        with _classified("find_user_by_username"):
            with get_session() as session:
                stmt = select(User).where(User.username == username).limit(1)
                user = session.execute(stmt).scalars().first()
                return _user_record(user) if user else None

    def list_users(self) -> list[UserRecord]:
        # password is never projected
        stmt = (
            select(User.id, User.full_name, User.username, User.email, User.account_type, User.created_at)
            .order_by(User.created_at.desc(), User.id.desc())
        )
        with _classified("list_users"):
            with get_session() as session:
                return [_user_record(row) for row in session.execute(stmt).all()]

    # -------------------------- reports --------------------------
    def create_report(self, new_report: NewReport) -> ReportRecord:
        entity = Report(
            name=new_report.name,
            grade=new_report.grade,
            type=new_report.type,
            description=new_report.description,
            incident_date=new_report.date,
        )
        with _classified("create_report"):
            with get_session() as session:
                session.add(entity)
                session.commit()
                session.refresh(entity)
                return _report_record(entity)

    def list_reports(self) -> list[ReportRecord]:
        stmt = select(Report).order_by(Report.created_at.desc(), Report.id.desc())
        with _classified("list_reports"):
            with get_session() as session:
                return [_report_record(row) for row in session.execute(stmt).scalars().all()]
