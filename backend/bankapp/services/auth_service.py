from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass, replace
from typing import Optional
from uuid import uuid4

from bankapp.db_base import utcnow
from bankapp.domain.errors import ConflictError, UnauthorizedError
from bankapp.domain.user import User, UserRole
from bankapp.repositories.user_repository import UserRepository
from bankapp.security import TokenClaims, create_access_token, hash_password, verify_password

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Registration:
    email: str
    password: str
    first_name: str
    last_name: str
    phone_number: Optional[str] = None
    date_of_birth: Optional[dt.date] = None
    address: Optional[str] = None


@dataclass(frozen=True)
class AuthResult:
    user: User
    token: str


def _token_for(user: User) -> str:
    return create_access_token(TokenClaims(user_id=user.id, email=user.email, role=user.role.value))


class AuthService:
    def __init__(self, *, users: UserRepository) -> None:
        self._users = users

    def register(self, data: Registration) -> AuthResult:
        email = data.email.strip().lower()
        if self._users.get_credentials_by_email(email) is not None:
            raise ConflictError("User with this email already exists")

        now = utcnow()
        user = User(
            id=str(uuid4()),
            email=email,
            first_name=data.first_name.strip(),
            last_name=data.last_name.strip(),
            role=UserRole.USER,
            is_active=True,
            created_at=now,
            updated_at=now,
            phone_number=data.phone_number,
            date_of_birth=data.date_of_birth,
            address=data.address,
        )
        try:
            self._users.add(user, password_hash=hash_password(data.password))
        except ValueError as exc:
            # lost a race with another registration of the same email
            raise ConflictError("User with this email already exists") from exc

        logger.info("Registered user %s", user.id)
        return AuthResult(user=user, token=_token_for(user))

    def login(self, email: str, password: str) -> AuthResult:
        creds = self._users.get_credentials_by_email(email)

        # same message for unknown email and wrong password
        if creds is None:
            raise UnauthorizedError("Invalid email or password")
        if not creds.user.is_active:
            raise UnauthorizedError("Account has been deactivated")
        if not verify_password(password, creds.password_hash):
            logger.warning("Failed login for user %s", creds.user.id)
            raise UnauthorizedError("Invalid email or password")

        now = utcnow()
        self._users.touch_last_login(creds.user.id, now)
        user = replace(creds.user, last_login=now)

        logger.info("User %s logged in", user.id)
        return AuthResult(user=user, token=_token_for(user))

    def verify_user(self, user_id: str) -> User:
        user = self._users.get(user_id)
        if user is None or not user.is_active:
            raise UnauthorizedError("User not found or inactive")
        return user
