from __future__ import annotations

import datetime as dt
from decimal import Decimal
from typing import Optional

from pydantic import Field

from bankapp.api.schemas.common import ApiModel
from bankapp.domain.account import AccountType
from bankapp.domain.card import CardStatus, CardType


class CardCreateRequest(ApiModel):
    account_id: str = Field(min_length=1)
    card_type: CardType
    cardholder_name: str = Field(min_length=2, max_length=128)
    expiry_date: dt.date
    credit_limit: Optional[Decimal] = None


class CardStatusUpdateRequest(ApiModel):
    status: CardStatus


class CardAccountInfo(ApiModel):
    account_number: str
    account_type: AccountType


class CardResponse(ApiModel):
    id: str
    account_id: str
    card_number: str
    masked_number: str
    card_type: CardType
    cardholder_name: str
    expiry_date: dt.date
    credit_limit: Optional[Decimal]
    status: CardStatus
    created_at: dt.datetime
    updated_at: dt.datetime
    account: Optional[CardAccountInfo] = None


class CardCreatedResponse(CardResponse):
    # only returned once, at issue time
    cvv: str
