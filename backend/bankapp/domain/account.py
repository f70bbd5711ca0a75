from __future__ import annotations

from dataclasses import dataclass
import datetime as dt
from decimal import Decimal
from enum import Enum

from bankapp.domain.money import Currency, quantize_money


class AccountType(str, Enum):
    CHECKING = "CHECKING"
    SAVINGS = "SAVINGS"
    CREDIT = "CREDIT"


@dataclass(frozen=True, slots=True)
class Account:
    """
    Bank account owned by exactly one user.
    - account_number: external identifier shown to the customer (not the id)
    - balance: 2-place Decimal; CREDIT accounts may be negative (amount owed)
    """
    id: str
    user_id: str
    account_number: str
    account_type: AccountType
    currency: Currency
    balance: Decimal
    is_active: bool
    created_at: dt.datetime
    updated_at: dt.datetime

    def __post_init__(self) -> None:
        if not self.id or not self.id.strip():
            raise ValueError("account.id must be non-empty")
        if not self.user_id or not self.user_id.strip():
            raise ValueError("account.user_id must be non-empty")
        if not self.account_number or not self.account_number.isdigit():
            raise ValueError("account.account_number must be digits only")
        if not isinstance(self.account_type, AccountType):
            raise ValueError("account.account_type must be an AccountType")
        if not isinstance(self.currency, Currency):
            raise ValueError("account.currency must be a Currency")
        if not isinstance(self.balance, Decimal):
            raise TypeError("account.balance must be a Decimal")

        object.__setattr__(self, "balance", quantize_money(self.balance))

    def owned_by(self, user_id: str) -> bool:
        return self.user_id == user_id
