from __future__ import annotations

import logging
from typing import Any

from bankapp.domain.errors import BadRequestError, NotFoundError, UnauthorizedError
from bankapp.domain.user import User
from bankapp.repositories.user_repository import UserRepository
from bankapp.security import hash_password, verify_password

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, *, users: UserRepository) -> None:
        self._users = users

    def get_profile(self, user_id: str) -> User:
        user = self._users.get(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def update_profile(self, user_id: str, changes: dict[str, Any]) -> User:
        """
        Partial update. `changes` only holds the fields the client sent;
        None clears the nullable fields (phone_number, date_of_birth, address).
        """
        user = self.get_profile(user_id)
        if not user.is_active:
            raise BadRequestError("Account is deactivated")

        changes = dict(changes)
        for required in ("first_name", "last_name"):
            if required not in changes:
                continue
            value = (changes[required] or "").strip()
            if value:
                changes[required] = value
            else:
                # names can be changed but not blanked
                changes.pop(required)

        if not changes:
            return user

        updated = self._users.update_profile(user_id, **changes)
        logger.info("Updated profile of user %s (%s)", user_id, ", ".join(sorted(changes)))
        return updated

    def change_password(self, user_id: str, current_password: str, new_password: str) -> None:
        creds = self._users.get_credentials(user_id)
        if creds is None:
            raise NotFoundError("User not found")

        if not verify_password(current_password, creds.password_hash):
            raise UnauthorizedError("Current password is incorrect")

        if verify_password(new_password, creds.password_hash):
            raise BadRequestError("New password must be different from current password")

        self._users.set_password(user_id, hash_password(new_password))
        logger.info("Password changed for user %s", user_id)
