from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from bankapp.domain.ledger_entry import LedgerEntry
from bankapp.domain.money import quantize_money


class LedgerReplayError(ValueError):
    pass


@dataclass(frozen=True)
class ReplayedEntry:
    entry: LedgerEntry
    expected_balance_after: Decimal


def _sorted_entries(entries: Iterable[LedgerEntry]) -> list[LedgerEntry]:
    return sorted(entries, key=lambda e: e.sequence)


def replay_ledger(
    entries: Iterable[LedgerEntry],
    *,
    opening_balance: Decimal,
) -> list[ReplayedEntry]:
    """
    Re-apply the signed amounts in posting order (sequence) starting from opening_balance.
    Raises LedgerReplayError as soon as a recorded balance_after diverges from the replay.
    """
    ordered = _sorted_entries(entries)
    if not ordered:
        return []

    expected_account_id = ordered[0].account_id
    balance = quantize_money(opening_balance)
    out: list[ReplayedEntry] = []

    for e in ordered:
        if e.account_id != expected_account_id:
            raise LedgerReplayError("mixed account_id in replay_ledger")

        balance = balance + e.signed_amount
        if e.balance_after != balance:
            raise LedgerReplayError(
                f"entry {e.id}: recorded balance_after {e.balance_after} != replayed {balance}"
            )
        out.append(ReplayedEntry(entry=e, expected_balance_after=balance))

    return out
