from __future__ import annotations

from typing import Protocol

from bankapp.domain.account import Account, AccountType


class AccountRepository(Protocol):
    def get(self, account_id: str) -> Account | None: ...

    def list_for_user(
        self,
        user_id: str,
        *,
        account_type: AccountType | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[Account]: ...

    def count_for_user(self, user_id: str, *, account_type: AccountType | None = None) -> int: ...

    def add(self, account: Account) -> None: ...
