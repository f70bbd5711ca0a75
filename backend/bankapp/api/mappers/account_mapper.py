from __future__ import annotations

from bankapp.api.schemas.accounts import AccountResponse, AccountsSummaryResponse, LedgerEntryResponse
from bankapp.api.schemas.common import PaginationResponse
from bankapp.domain.account import Account
from bankapp.domain.ledger_entry import LedgerEntry
from bankapp.engine.account_summary import AccountsSummary
from bankapp.services.pagination import Pagination


def account_to_response(account: Account) -> AccountResponse:
    return AccountResponse(
        id=account.id,
        account_number=account.account_number,
        account_type=account.account_type,
        currency=account.currency,
        balance=account.balance,
        is_active=account.is_active,
        created_at=account.created_at,
        updated_at=account.updated_at,
    )


def entry_to_response(entry: LedgerEntry) -> LedgerEntryResponse:
    return LedgerEntryResponse(
        id=entry.id,
        account_id=entry.account_id,
        sequence=entry.sequence,
        direction=entry.direction,
        amount=entry.amount,
        description=entry.description,
        card_id=entry.card_id,
        category=entry.category,
        merchant=entry.merchant,
        balance_after=entry.balance_after,
        created_at=entry.created_at,
    )


def summary_to_response(summary: AccountsSummary) -> AccountsSummaryResponse:
    return AccountsSummaryResponse(
        total_balance=summary.total_balance,
        checking=summary.checking,
        savings=summary.savings,
        credit=summary.credit,
        account_count=summary.account_count,
    )


def pagination_to_response(p: Pagination) -> PaginationResponse:
    return PaginationResponse(total=p.total, limit=p.limit, offset=p.offset, has_more=p.has_more)
