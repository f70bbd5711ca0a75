from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from decimal import Decimal
from typing import Protocol

from bankapp.domain.account import Account
from bankapp.domain.ledger_entry import Direction, LedgerEntry


@dataclass(frozen=True)
class LedgerFilter:
    direction: Direction | None = None
    start: dt.datetime | None = None  # inclusive
    end: dt.datetime | None = None    # inclusive


class LedgerRepository(Protocol):
    def post_entry(
        self,
        *,
        account_id: str,
        direction: Direction,
        amount: Decimal,
        description: str | None = None,
        card_id: str | None = None,
        category: str | None = None,
        merchant: str | None = None,
    ) -> tuple[LedgerEntry, Account]:
        """
        Apply the balance change and insert the ledger row as one atomic unit.
        Either both writes commit or neither does.
        """
        ...

    def list_for_account(
        self,
        account_id: str,
        *,
        filters: LedgerFilter | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[LedgerEntry]:
        """Newest first."""
        ...

    def count_for_account(self, account_id: str, *, filters: LedgerFilter | None = None) -> int: ...

    def history(self, account_id: str) -> list[LedgerEntry]:
        """Every entry of the account in posting order (oldest first)."""
        ...
