from __future__ import annotations

import datetime as dt
from typing import Optional

from fastapi import APIRouter, Depends, Query

from bankapp.api.deps import get_account_service, get_card_service, get_current_user_id
from bankapp.api.mappers.account_mapper import (
    account_to_response,
    entry_to_response,
    pagination_to_response,
    summary_to_response,
)
from bankapp.api.mappers.card_mapper import card_to_response
from bankapp.api.schemas.accounts import (
    AccountListResponse,
    AccountResponse,
    AccountsSummaryResponse,
    LedgerEntryListResponse,
)
from bankapp.api.schemas.cards import CardResponse
from bankapp.api.schemas.common import ApiResponse
from bankapp.domain.account import AccountType
from bankapp.domain.ledger_entry import Direction
from bankapp.services.account_service import AccountListQuery, LedgerQuery

router = APIRouter(prefix="/api/accounts", tags=["accounts"])


# declared before "/{account_id}" so "summary" is not taken for an id
@router.get("/summary", response_model=ApiResponse[AccountsSummaryResponse])
def get_summary(user_id: str = Depends(get_current_user_id)) -> ApiResponse[AccountsSummaryResponse]:
    return ApiResponse(data=summary_to_response(get_account_service().summary(user_id)))


@router.get("", response_model=ApiResponse[AccountListResponse])
def list_accounts(
    account_type: Optional[AccountType] = Query(default=None, alias="type"),
    limit: int = Query(default=10, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    user_id: str = Depends(get_current_user_id),
) -> ApiResponse[AccountListResponse]:
    page = get_account_service().list_accounts(
        user_id, AccountListQuery(account_type=account_type, limit=limit, offset=offset)
    )
    return ApiResponse(
        data=AccountListResponse(
            accounts=[account_to_response(a) for a in page.items],
            pagination=pagination_to_response(page.pagination),
        )
    )


@router.get("/{account_id}", response_model=ApiResponse[AccountResponse])
def get_account(account_id: str, user_id: str = Depends(get_current_user_id)) -> ApiResponse[AccountResponse]:
    account = get_account_service().resolve_owned_account(account_id, user_id)
    return ApiResponse(data=account_to_response(account))


@router.get("/{account_id}/transactions", response_model=ApiResponse[LedgerEntryListResponse])
def list_account_transactions(
    account_id: str,
    direction: Optional[Direction] = Query(default=None, alias="type"),
    start_date: Optional[dt.datetime] = Query(default=None, alias="startDate"),
    end_date: Optional[dt.datetime] = Query(default=None, alias="endDate"),
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    user_id: str = Depends(get_current_user_id),
) -> ApiResponse[LedgerEntryListResponse]:
    page = get_account_service().list_transactions(
        account_id,
        user_id,
        LedgerQuery(direction=direction, start=start_date, end=end_date, limit=limit, offset=offset),
    )
    return ApiResponse(
        data=LedgerEntryListResponse(
            transactions=[entry_to_response(e) for e in page.items],
            pagination=pagination_to_response(page.pagination),
        )
    )


@router.get("/{account_id}/cards", response_model=ApiResponse[list[CardResponse]])
def list_account_cards(account_id: str, user_id: str = Depends(get_current_user_id)) -> ApiResponse[list[CardResponse]]:
    cards = get_card_service().list_account_cards(account_id, user_id)
    return ApiResponse(data=[card_to_response(c) for c in cards])
