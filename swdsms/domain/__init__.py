"""Domain types for user accounts and incident reports."""

from .records import ANONYMOUS, NewReport, NewUser, ReportRecord, UserRecord

__all__ = ["ANONYMOUS", "NewReport", "NewUser", "ReportRecord", "UserRecord"]
