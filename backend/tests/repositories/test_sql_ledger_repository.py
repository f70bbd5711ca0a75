import datetime as dt
from decimal import Decimal

import pytest
from sqlalchemy.exc import OperationalError

from bankapp.domain.errors import InsufficientFundsError, InternalError, InvalidAmountError, NotFoundError
from bankapp.domain.ledger_entry import Direction
from bankapp.repositories.ledger_repository import LedgerFilter
from bankapp.repositories.sql_ledger_repository import SqlLedgerRepository


def test_post_entry_updates_balance_and_snapshots_it(make_user, make_account, ledger_repo, account_repo):
    user = make_user()
    acc = make_account(user.id, "5000.00")

    entry, account = ledger_repo.post_entry(
        account_id=acc.id, direction=Direction.CREDIT, amount=Decimal("3000")
    )

    assert entry.sequence == 1
    assert entry.amount == Decimal("3000.00")
    assert entry.balance_after == Decimal("8000.00")
    assert entry.description == "Deposit"
    assert account.balance == Decimal("8000.00")
    assert account_repo.get(acc.id).balance == Decimal("8000.00")


def test_sequence_increments_per_account(make_user, make_account, ledger_repo):
    user = make_user()
    a = make_account(user.id, "100.00")
    b = make_account(user.id, "100.00")

    ledger_repo.post_entry(account_id=a.id, direction=Direction.CREDIT, amount=Decimal("1"))
    ledger_repo.post_entry(account_id=a.id, direction=Direction.DEBIT, amount=Decimal("2"))
    e_b, _ = ledger_repo.post_entry(account_id=b.id, direction=Direction.CREDIT, amount=Decimal("3"))

    assert [e.sequence for e in ledger_repo.history(a.id)] == [1, 2]
    assert e_b.sequence == 1


def test_overdraft_is_rejected_and_nothing_is_written(make_user, make_account, ledger_repo, account_repo):
    user = make_user()
    acc = make_account(user.id, "100.00")

    with pytest.raises(InsufficientFundsError):
        ledger_repo.post_entry(account_id=acc.id, direction=Direction.DEBIT, amount=Decimal("100.01"))

    assert account_repo.get(acc.id).balance == Decimal("100.00")
    assert ledger_repo.history(acc.id) == []


def test_unknown_account_is_not_found(ledger_repo):
    with pytest.raises(NotFoundError):
        ledger_repo.post_entry(account_id="missing", direction=Direction.CREDIT, amount=Decimal("1"))


def test_amount_rounding_to_zero_is_invalid(make_user, make_account, ledger_repo):
    user = make_user()
    acc = make_account(user.id, "1.00")
    with pytest.raises(InvalidAmountError):
        ledger_repo.post_entry(account_id=acc.id, direction=Direction.CREDIT, amount=Decimal("0.004"))


def test_list_is_newest_first_with_filters(make_user, make_account, ledger_repo):
    user = make_user()
    acc = make_account(user.id, "100.00")
    for direction, amount in [
        (Direction.CREDIT, "10"),
        (Direction.DEBIT, "5"),
        (Direction.CREDIT, "20"),
    ]:
        ledger_repo.post_entry(account_id=acc.id, direction=direction, amount=Decimal(amount))

    assert [e.sequence for e in ledger_repo.list_for_account(acc.id)] == [3, 2, 1]
    assert [e.sequence for e in ledger_repo.list_for_account(acc.id, limit=1, offset=1)] == [2]

    credits = LedgerFilter(direction=Direction.CREDIT)
    assert [e.sequence for e in ledger_repo.list_for_account(acc.id, filters=credits)] == [3, 1]
    assert ledger_repo.count_for_account(acc.id, filters=credits) == 2

    tomorrow = dt.datetime.now(dt.timezone.utc) + dt.timedelta(days=1)
    assert ledger_repo.count_for_account(acc.id, filters=LedgerFilter(start=tomorrow)) == 0
    assert ledger_repo.count_for_account(acc.id, filters=LedgerFilter(end=tomorrow)) == 3


def test_failure_after_balance_update_rolls_everything_back(make_user, make_account, ledger_repo, account_repo, monkeypatch):
    user = make_user()
    acc = make_account(user.id, "100.00")

    def _fail(s, *, account_id):
        raise OperationalError("SELECT max(sequence)", {}, Exception("disk I/O error"))

    monkeypatch.setattr(SqlLedgerRepository, "_next_sequence_in_session", staticmethod(_fail))

    with pytest.raises(InternalError) as exc:
        ledger_repo.post_entry(account_id=acc.id, direction=Direction.DEBIT, amount=Decimal("40.00"))
    assert exc.value.status_code == 500

    assert account_repo.get(acc.id).balance == Decimal("100.00")
    assert ledger_repo.history(acc.id) == []


def test_cent_arithmetic_has_no_float_drift(make_user, make_account, ledger_repo, account_repo):
    user = make_user()
    acc = make_account(user.id, "1.00")

    _, account = ledger_repo.post_entry(account_id=acc.id, direction=Direction.DEBIT, amount=Decimal("0.90"))
    assert account.balance == Decimal("0.10")

    entry, account = ledger_repo.post_entry(account_id=acc.id, direction=Direction.DEBIT, amount=Decimal("0.10"))
    assert entry.balance_after == Decimal("0.00")
    assert account_repo.get(acc.id).balance == Decimal("0.00")
