"""Errors raised by the storage adapters."""
from __future__ import annotations

import enum


class ErrorCategory(str, enum.Enum):
    """How a remote backend failure should be treated by the caller."""

    PERMANENT = "permanent"  # backend not provisioned: missing table, access policy
    TRANSIENT = "transient"


class StorageError(Exception):
    """Base class for storage adapter failures."""


class RemoteStoreError(StorageError):
    def __init__(self, operation: str, category: ErrorCategory, cause: BaseException | None = None):
        detail = str(cause) if cause is not None else category.value
        super().__init__(f"{operation}: {detail}")
        self.operation = operation
        self.category = category
        self.cause = cause

    @property
    def is_permanent(self) -> bool:
        return self.category is ErrorCategory.PERMANENT


class UsernameTakenError(StorageError):
    """Raised by a store when the username already exists in its collection."""

    def __init__(self, username: str):
        super().__init__(f"Username already exists: {username}")
        self.username = username
