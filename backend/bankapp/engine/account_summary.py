from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from bankapp.domain.account import Account, AccountType
from bankapp.domain.money import ZERO


@dataclass(frozen=True)
class AccountsSummary:
    total_balance: Decimal
    checking: Decimal
    savings: Decimal
    credit: Decimal
    account_count: int


def summarize_accounts(accounts: Iterable[Account]) -> AccountsSummary:
    """
    Sum balances per account type over active accounts.
    Currencies are summed as-is (no FX conversion).
    """
    per_type = {t: ZERO for t in AccountType}
    count = 0

    for acc in accounts:
        if not acc.is_active:
            continue
        per_type[acc.account_type] += acc.balance
        count += 1

    return AccountsSummary(
        total_balance=sum(per_type.values(), ZERO),
        checking=per_type[AccountType.CHECKING],
        savings=per_type[AccountType.SAVINGS],
        credit=per_type[AccountType.CREDIT],
        account_count=count,
    )
