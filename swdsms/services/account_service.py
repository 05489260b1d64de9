"""
Account related use cases (signup, login, user listing).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from swdsms.core.security import hash_password, verify_password
from swdsms.domain.records import NewUser, UserRecord
from swdsms.repositories.errors import UsernameTakenError
from swdsms.services.errors import AccountExistsError, InvalidCredentialsError, ValidationError
from swdsms.services.failover import FailoverRouter


def _clean(value: Optional[str]) -> str:
    return (value or "").strip()


@dataclass
class AccountService:
    """Handles signup and login against whichever store is authoritative."""

    router: FailoverRouter

    def signup(
        self,
        full_name: Optional[str],
        username: Optional[str],
        email: Optional[str],
        account_type: Optional[str],
        password: Optional[str],
    ) -> UserRecord:
        fields = [_clean(full_name), _clean(username), _clean(email), _clean(account_type)]
        if not all(fields) or not password:
            raise ValidationError("Missing required fields")
        full_name, username, email, account_type = fields

        if self.router.find_user_by_username(username):
            raise AccountExistsError("Username already exists")
        new_user = NewUser(
            full_name=full_name,
            username=username,
            email=email,
            account_type=account_type,
            password=hash_password(password),
        )
        # If the router demoted after the lookup, the local store re-checks by scan.
        try:
            return self.router.create_user(new_user)
        except UsernameTakenError as exc:
            raise AccountExistsError("Username already exists") from exc

    def login(self, username: Optional[str], password: Optional[str], account_type: Optional[str]) -> UserRecord:
        username = _clean(username)
        account_type = _clean(account_type)
        if not username or not password or not account_type:
            raise ValidationError("Missing fields")
        user = self.router.find_user_by_username(username)
        if not user or user.account_type != account_type or not verify_password(password, user.password):
            raise InvalidCredentialsError("Invalid credentials")
        return user

    def list_users(self) -> list[UserRecord]:
        return self.router.list_users()
