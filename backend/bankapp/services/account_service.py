from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass
from decimal import Decimal
from uuid import uuid4

from bankapp.db_base import utcnow
from bankapp.domain.account import Account, AccountType
from bankapp.domain.errors import NotFoundError
from bankapp.domain.ledger_entry import Direction, LedgerEntry
from bankapp.domain.money import Currency, ZERO, to_money
from bankapp.engine.account_summary import AccountsSummary, summarize_accounts
from bankapp.engine.number_generators import generate_account_number
from bankapp.repositories.account_repository import AccountRepository
from bankapp.repositories.ledger_repository import LedgerFilter, LedgerRepository
from bankapp.services.pagination import Page, Pagination

logger = logging.getLogger(__name__)

_ACCOUNT_NUMBER_ATTEMPTS = 5


@dataclass(frozen=True)
class AccountListQuery:
    account_type: AccountType | None = None
    limit: int = 10
    offset: int = 0


@dataclass(frozen=True)
class LedgerQuery:
    direction: Direction | None = None
    start: dt.datetime | None = None  # inclusive
    end: dt.datetime | None = None    # inclusive
    limit: int = 20
    offset: int = 0


def _to_utc(value: dt.datetime | None) -> dt.datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=dt.timezone.utc)
    return value.astimezone(dt.timezone.utc)


class AccountService:
    def __init__(self, *, accounts: AccountRepository, ledger: LedgerRepository) -> None:
        self._accounts = accounts
        self._ledger = ledger

    def resolve_owned_account(self, account_id: str, user_id: str) -> Account:
        """
        Ownership guard. A missing account and someone else's account raise the
        same NotFoundError so that non-owners learn nothing about which ids exist.
        """
        account = self._accounts.get(account_id)
        if account is None or not account.owned_by(user_id):
            raise NotFoundError("Account not found")
        return account

    def list_accounts(self, user_id: str, query: AccountListQuery) -> Page[Account]:
        total = self._accounts.count_for_user(user_id, account_type=query.account_type)
        items = self._accounts.list_for_user(
            user_id,
            account_type=query.account_type,
            limit=query.limit,
            offset=query.offset,
        )
        return Page(items=items, pagination=Pagination(total=total, limit=query.limit, offset=query.offset))

    def list_transactions(self, account_id: str, user_id: str, query: LedgerQuery) -> Page[LedgerEntry]:
        account = self.resolve_owned_account(account_id, user_id)

        filters = LedgerFilter(
            direction=query.direction,
            start=_to_utc(query.start),
            end=_to_utc(query.end),
        )
        total = self._ledger.count_for_account(account.id, filters=filters)
        items = self._ledger.list_for_account(
            account.id,
            filters=filters,
            limit=query.limit,
            offset=query.offset,
        )
        return Page(items=items, pagination=Pagination(total=total, limit=query.limit, offset=query.offset))

    def summary(self, user_id: str) -> AccountsSummary:
        return summarize_accounts(self._accounts.list_for_user(user_id))

    def open_account(
        self,
        *,
        user_id: str,
        account_type: AccountType,
        currency: Currency = Currency.USD,
        opening_balance: Decimal = ZERO,
    ) -> Account:
        """
        Create an account with its opening balance. Later balance changes go
        through the posting flow only.
        """
        balance = to_money(opening_balance)
        if balance < 0 and account_type != AccountType.CREDIT:
            raise ValueError("only CREDIT accounts may open with a negative balance")

        now = utcnow()
        last_error: ValueError | None = None
        for _ in range(_ACCOUNT_NUMBER_ATTEMPTS):
            account = Account(
                id=str(uuid4()),
                user_id=user_id,
                account_number=generate_account_number(),
                account_type=account_type,
                currency=currency,
                balance=balance,
                is_active=True,
                created_at=now,
                updated_at=now,
            )
            try:
                self._accounts.add(account)
            except ValueError as exc:
                # account number collision; draw another one
                last_error = exc
                continue
            logger.info("Opened %s account %s for user %s", account_type.value, account.id, user_id)
            return account

        raise RuntimeError("could not allocate a unique account number") from last_error
