from __future__ import annotations

import datetime as dt
from typing import Any, Protocol

from bankapp.domain.user import User, UserCredentials


class UserRepository(Protocol):
    def get(self, user_id: str) -> User | None: ...

    def get_credentials(self, user_id: str) -> UserCredentials | None: ...

    def get_credentials_by_email(self, email: str) -> UserCredentials | None: ...

    def add(self, user: User, *, password_hash: str) -> None:
        """Raise ValueError if the email is already taken."""
        ...

    def update_profile(self, user_id: str, **fields: Any) -> User:
        """Raise KeyError if unknown."""
        ...

    def set_password(self, user_id: str, password_hash: str) -> None: ...

    def touch_last_login(self, user_id: str, at: dt.datetime) -> None: ...
