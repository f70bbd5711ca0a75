from __future__ import annotations

import datetime as dt
from decimal import Decimal
from typing import Optional

from bankapp.api.schemas.common import ApiModel, PaginationResponse
from bankapp.domain.account import AccountType
from bankapp.domain.ledger_entry import Direction
from bankapp.domain.money import Currency


class AccountResponse(ApiModel):
    id: str
    account_number: str
    account_type: AccountType
    currency: Currency
    balance: Decimal
    is_active: bool
    created_at: dt.datetime
    updated_at: dt.datetime


class AccountListResponse(ApiModel):
    accounts: list[AccountResponse]
    pagination: PaginationResponse


class AccountsSummaryResponse(ApiModel):
    total_balance: Decimal
    checking: Decimal
    savings: Decimal
    credit: Decimal
    account_count: int


class LedgerEntryResponse(ApiModel):
    id: str
    account_id: str
    sequence: int
    direction: Direction
    amount: Decimal
    description: str
    card_id: Optional[str]
    category: Optional[str]
    merchant: Optional[str]
    balance_after: Decimal
    created_at: dt.datetime


class LedgerEntryListResponse(ApiModel):
    transactions: list[LedgerEntryResponse]
    pagination: PaginationResponse
