from __future__ import annotations

import datetime as dt
from typing import Optional

from pydantic import Field, field_validator, model_validator

from bankapp.api.schemas.auth import PHONE_PATTERN, check_password_strength, check_past_date
from bankapp.api.schemas.common import ApiModel


class UpdateProfileRequest(ApiModel):
    # only fields present in the request body are applied (exclude_unset)
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=128)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=128)
    phone_number: Optional[str] = Field(default=None, pattern=PHONE_PATTERN)
    date_of_birth: Optional[dt.date] = None
    address: Optional[str] = Field(default=None, max_length=500)

    @field_validator("date_of_birth")
    @classmethod
    def _dob_in_past(cls, v: Optional[dt.date]) -> Optional[dt.date]:
        return check_past_date(v)


class ChangePasswordRequest(ApiModel):
    current_password: str = Field(min_length=1)
    new_password: str
    confirm_password: str = Field(min_length=1)

    @field_validator("new_password")
    @classmethod
    def _password_strength(cls, v: str) -> str:
        return check_password_strength(v)

    @model_validator(mode="after")
    def _passwords_match(self) -> "ChangePasswordRequest":
        if self.new_password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self
