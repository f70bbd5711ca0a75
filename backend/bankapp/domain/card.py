from __future__ import annotations

from dataclasses import dataclass
import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import Optional


class CardType(str, Enum):
    DEBIT = "DEBIT"
    CREDIT = "CREDIT"


class CardStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    BLOCKED = "BLOCKED"


@dataclass(frozen=True, slots=True)
class Card:
    id: str
    account_id: str
    card_number: str
    card_type: CardType
    cardholder_name: str
    expiry_date: dt.date
    cvv: str
    status: CardStatus
    created_at: dt.datetime
    updated_at: dt.datetime
    credit_limit: Optional[Decimal] = None

    def __post_init__(self) -> None:
        if len(self.card_number) != 16 or not self.card_number.isdigit():
            raise ValueError("card_number must be 16 digits")
        if len(self.cvv) != 3 or not self.cvv.isdigit():
            raise ValueError("cvv must be 3 digits")
        if not isinstance(self.card_type, CardType):
            raise ValueError("card_type must be a CardType")
        if not isinstance(self.status, CardStatus):
            raise ValueError("status must be a CardStatus")

    @property
    def masked_number(self) -> str:
        return "**** **** **** " + self.card_number[-4:]

    @property
    def is_active(self) -> bool:
        return self.status == CardStatus.ACTIVE
