from __future__ import annotations

import datetime as dt
from typing import Any

from sqlalchemy import Boolean, Date, DateTime, String, func, select, true
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Mapped, mapped_column

from bankapp.db import new_session
from bankapp.db_base import Base, as_utc, utcnow
from bankapp.domain.user import User, UserCredentials, UserRole
from bankapp.repositories.user_repository import UserRepository

_PROFILE_FIELDS = frozenset({"first_name", "last_name", "phone_number", "date_of_birth", "address"})


class UserRow(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    first_name: Mapped[str] = mapped_column(String(128), nullable=False)
    last_name: Mapped[str] = mapped_column(String(128), nullable=False)
    phone_number: Mapped[str | None] = mapped_column(String(32), nullable=True)
    date_of_birth: Mapped[dt.date | None] = mapped_column(Date, nullable=True)
    address: Mapped[str | None] = mapped_column(String(500), nullable=True)
    role: Mapped[str] = mapped_column(String(16), nullable=False, default=UserRole.USER.value)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default=true())
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    last_login: Mapped[dt.datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)


class SqlUserRepository(UserRepository):
    """
    Emails are stored lower-cased; lookups lower-case the input too.
    """

    def get(self, user_id: str) -> User | None:
        with new_session() as s:
            row = s.get(UserRow, user_id)
            return self._to_domain(row) if row else None

    def get_credentials(self, user_id: str) -> UserCredentials | None:
        with new_session() as s:
            row = s.get(UserRow, user_id)
            if row is None:
                return None
            return UserCredentials(user=self._to_domain(row), password_hash=row.password_hash)

    def get_credentials_by_email(self, email: str) -> UserCredentials | None:
        with new_session() as s:
            row = s.execute(
                select(UserRow).where(UserRow.email == email.strip().lower())
            ).scalars().first()
            if row is None:
                return None
            return UserCredentials(user=self._to_domain(row), password_hash=row.password_hash)

    def add(self, user: User, *, password_hash: str) -> None:
        if not isinstance(user, User):
            raise TypeError("user must be a User")

        row = UserRow(
            id=user.id,
            email=user.email.strip().lower(),
            password_hash=password_hash,
            first_name=user.first_name,
            last_name=user.last_name,
            phone_number=user.phone_number,
            date_of_birth=user.date_of_birth,
            address=user.address,
            role=user.role.value,
            is_active=user.is_active,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
        with new_session() as s:
            s.add(row)
            try:
                s.commit()
            except IntegrityError as exc:
                s.rollback()
                raise ValueError(f"email '{row.email}' already exists") from exc

    def update_profile(self, user_id: str, **fields: Any) -> User:
        unknown = set(fields) - _PROFILE_FIELDS
        if unknown:
            raise ValueError(f"cannot update fields: {sorted(unknown)}")

        with new_session() as s:
            row = s.get(UserRow, user_id)
            if row is None:
                raise KeyError(f"unknown user_id '{user_id}'")

            for name, value in fields.items():
                setattr(row, name, value)
            row.updated_at = utcnow()

            s.commit()
            s.refresh(row)
            return self._to_domain(row)

    def set_password(self, user_id: str, password_hash: str) -> None:
        with new_session() as s:
            row = s.get(UserRow, user_id)
            if row is None:
                raise KeyError(f"unknown user_id '{user_id}'")
            row.password_hash = password_hash
            row.updated_at = utcnow()
            s.commit()

    def touch_last_login(self, user_id: str, at: dt.datetime) -> None:
        with new_session() as s:
            row = s.get(UserRow, user_id)
            if row is None:
                raise KeyError(f"unknown user_id '{user_id}'")
            row.last_login = at
            s.commit()

    @staticmethod
    def _to_domain(row: UserRow) -> User:
        return User(
            id=row.id,
            email=row.email,
            first_name=row.first_name,
            last_name=row.last_name,
            role=UserRole(row.role),
            is_active=row.is_active,
            created_at=as_utc(row.created_at),
            updated_at=as_utc(row.updated_at),
            phone_number=row.phone_number,
            date_of_birth=row.date_of_birth,
            address=row.address,
            last_login=as_utc(row.last_login) if row.last_login else None,
        )
