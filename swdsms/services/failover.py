"""
Routing between the remote SQL backend and the local JSON snapshots.

The router starts on the remote backend when DATABASE_URL is configured. A
``RemoteStoreError`` in the PERMANENT category demotes it to local storage for
the rest of the process lifetime, and the call that hit the error is replayed
locally. TRANSIENT errors propagate to the caller and leave routing alone.
The two stores are never synchronized.
"""

from __future__ import annotations

import logging
import threading
from typing import Optional

from swdsms.core.config import Settings, get_settings
from swdsms.domain.records import NewReport, NewUser, ReportRecord, UserRecord
from swdsms.repositories.errors import RemoteStoreError
from swdsms.repositories.json_storage import JSONStorage
from swdsms.repositories.sql_repository import SQLRepository

logger = logging.getLogger(__name__)


class FailoverRouter:
    """Dispatches storage operations to the authoritative backend."""

    def __init__(self, remote: Optional[SQLRepository], local: JSONStorage) -> None:
        self._remote = remote
        self._local = local
        self._remote_available = remote is not None
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "FailoverRouter":
        settings = settings or get_settings()
        remote = SQLRepository() if settings.remote_configured else None
        router = cls(remote, JSONStorage(settings.data_dir))
        if remote is None:
            logger.info("Remote backend not configured; using local storage in %s", settings.data_dir)
        else:
            logger.info("Remote backend configured; local storage in %s is the fallback", settings.data_dir)
        return router

    @property
    def remote_available(self) -> bool:
        return self._remote_available

    @property
    def backend_name(self) -> str:
        return "remote" if self._remote_available else "local"

    def demote(self, error: BaseException) -> bool:
        """Switch to local storage for good. Returns True only for the call that flipped it."""
        with self._lock:
            if not self._remote_available:
                return False
            self._remote_available = False
        logger.warning("Disabling remote backend, falling back to local storage: %s", error)
        return True

    def _dispatch(self, operation: str, *args):
        if self._remote_available:
            try:
                return getattr(self._remote, operation)(*args)
            except RemoteStoreError as exc:
                if not exc.is_permanent:
                    raise
                self.demote(exc)
        return getattr(self._local, operation)(*args)

    # -------------------------- users --------------------------
    def create_user(self, new_user: NewUser) -> UserRecord:
        return self._dispatch("create_user", new_user)

    def find_user_by_username(self, username: str) -> Optional[UserRecord]:
        return self._dispatch("find_user_by_username", username)

    def list_users(self) -> list[UserRecord]:
        return self._dispatch("list_users")

    # -------------------------- reports --------------------------
    def create_report(self, new_report: NewReport) -> ReportRecord:
        return self._dispatch("create_report", new_report)

    def list_reports(self) -> list[ReportRecord]:
        return self._dispatch("list_reports")
