from decimal import Decimal

import pytest

from bankapp.domain.ledger_entry import Direction, LedgerEntry
from bankapp.engine.running_balance import LedgerReplayError, replay_ledger


def _entry(*, sequence: int, direction: Direction, amount: str, balance_after: str, account_id: str = "A") -> LedgerEntry:
    return LedgerEntry.create(
        account_id=account_id,
        sequence=sequence,
        direction=direction,
        amount=Decimal(amount),
        balance_after=Decimal(balance_after),
    )


def test_replay_empty_list():
    assert replay_ledger([], opening_balance=Decimal("0")) == []


def test_replay_orders_by_sequence():
    e1 = _entry(sequence=1, direction=Direction.CREDIT, amount="3000.00", balance_after="8000.00")
    e2 = _entry(sequence=2, direction=Direction.DEBIT, amount="1500.50", balance_after="6499.50")
    e3 = _entry(sequence=3, direction=Direction.CREDIT, amount="0.50", balance_after="6500.00")

    out = replay_ledger([e3, e1, e2], opening_balance=Decimal("5000"))

    assert [r.entry.sequence for r in out] == [1, 2, 3]
    assert [r.expected_balance_after for r in out] == [
        Decimal("8000.00"),
        Decimal("6499.50"),
        Decimal("6500.00"),
    ]


def test_replay_detects_divergent_snapshot():
    e1 = _entry(sequence=1, direction=Direction.CREDIT, amount="10.00", balance_after="110.00")
    e2 = _entry(sequence=2, direction=Direction.DEBIT, amount="10.00", balance_after="90.00")

    with pytest.raises(LedgerReplayError):
        replay_ledger([e1, e2], opening_balance=Decimal("100"))


def test_replay_rejects_mixed_accounts():
    e1 = _entry(sequence=1, direction=Direction.CREDIT, amount="10.00", balance_after="10.00")
    e2 = _entry(sequence=2, direction=Direction.CREDIT, amount="10.00", balance_after="20.00", account_id="B")

    with pytest.raises(LedgerReplayError):
        replay_ledger([e1, e2], opening_balance=Decimal("0"))
