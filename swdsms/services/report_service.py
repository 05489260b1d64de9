"""Incident report use cases."""

from __future__ import annotations

from datetime import date
from typing import Optional

from swdsms.domain.records import ANONYMOUS, NewReport, ReportRecord
from swdsms.services.errors import ValidationError
from swdsms.services.failover import FailoverRouter


def parse_incident_date(value) -> date:
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError as exc:
        raise ValidationError("Invalid incident date, expected YYYY-MM-DD") from exc


class ReportService:
    """Creates and lists incident reports."""

    def __init__(self, router: FailoverRouter) -> None:
        self.router = router

    def create_report(
        self,
        type: Optional[str],
        description: Optional[str],
        date: Optional[str],
        name: Optional[str] = None,
        grade: Optional[str] = None,
    ) -> ReportRecord:
        type = (type or "").strip()
        description = (description or "").strip()
        if not type or not description or not date:
            raise ValidationError("Missing required report fields")
        new_report = NewReport(
            type=type,
            description=description,
            date=parse_incident_date(date),
            name=(name or "").strip() or ANONYMOUS,
            grade=(grade or "").strip(),
        )
        return self.router.create_report(new_report)

    def list_reports(self) -> list[ReportRecord]:
        return self.router.list_reports()
