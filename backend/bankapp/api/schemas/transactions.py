from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import Field

from bankapp.api.schemas.accounts import AccountResponse, LedgerEntryResponse
from bankapp.api.schemas.common import ApiModel


class PostingRequest(ApiModel):
    account_id: str = Field(min_length=1)
    # sign and range are checked by the posting rules (400 InvalidAmount), not here
    amount: Decimal = Field(examples=[3000.00])
    description: Optional[str] = Field(default=None, max_length=256)
    card_id: Optional[str] = None


class PostingResponse(ApiModel):
    transaction: LedgerEntryResponse
    account: AccountResponse
