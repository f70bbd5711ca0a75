from __future__ import annotations

import datetime as dt
import re
from typing import Optional

from pydantic import Field, field_validator

from bankapp.api.schemas.common import ApiModel
from bankapp.domain.user import UserRole

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"
PHONE_PATTERN = r"^\+?[1-9]\d{1,14}$"

_PASSWORD_RULES = (
    (re.compile(r"[A-Z]"), "Password must contain at least one uppercase letter"),
    (re.compile(r"[a-z]"), "Password must contain at least one lowercase letter"),
    (re.compile(r"[0-9]"), "Password must contain at least one number"),
    (re.compile(r"[^A-Za-z0-9]"), "Password must contain at least one special character"),
)


def check_password_strength(value: str) -> str:
    if len(value) < 8:
        raise ValueError("Password must be at least 8 characters")
    for pattern, message in _PASSWORD_RULES:
        if not pattern.search(value):
            raise ValueError(message)
    return value


def check_past_date(value: Optional[dt.date]) -> Optional[dt.date]:
    if value is not None and value >= dt.date.today():
        raise ValueError("Date of birth must be in the past")
    return value


class RegisterRequest(ApiModel):
    email: str = Field(min_length=3, max_length=255, pattern=EMAIL_PATTERN)
    password: str
    first_name: str = Field(min_length=1, max_length=128)
    last_name: str = Field(min_length=1, max_length=128)
    phone_number: Optional[str] = Field(default=None, pattern=PHONE_PATTERN)
    date_of_birth: Optional[dt.date] = None
    address: Optional[str] = Field(default=None, max_length=500)

    @field_validator("password")
    @classmethod
    def _password_strength(cls, v: str) -> str:
        return check_password_strength(v)

    @field_validator("date_of_birth")
    @classmethod
    def _dob_in_past(cls, v: Optional[dt.date]) -> Optional[dt.date]:
        return check_past_date(v)


class LoginRequest(ApiModel):
    email: str = Field(min_length=1, pattern=EMAIL_PATTERN)
    password: str = Field(min_length=1)


class UserResponse(ApiModel):
    id: str
    email: str
    first_name: str
    last_name: str
    phone_number: Optional[str]
    date_of_birth: Optional[dt.date]
    address: Optional[str]
    role: UserRole
    is_active: bool
    created_at: dt.datetime
    updated_at: dt.datetime
    last_login: Optional[dt.datetime]


class AuthResponse(ApiModel):
    user: UserResponse
    token: str
