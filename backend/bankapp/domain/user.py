from __future__ import annotations

from dataclasses import dataclass
import datetime as dt
from enum import Enum
from typing import Optional


class UserRole(str, Enum):
    USER = "USER"
    ADMIN = "ADMIN"


@dataclass(frozen=True, slots=True)
class User:
    """Profile view of a user. The password hash never leaves the repository layer."""
    id: str
    email: str
    first_name: str
    last_name: str
    role: UserRole
    is_active: bool
    created_at: dt.datetime
    updated_at: dt.datetime
    phone_number: Optional[str] = None
    date_of_birth: Optional[dt.date] = None
    address: Optional[str] = None
    last_login: Optional[dt.datetime] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass(frozen=True, slots=True)
class UserCredentials:
    user: User
    password_hash: str
