import datetime as dt
from decimal import Decimal

import pytest

from bankapp.domain.account import AccountType
from bankapp.domain.card import CardStatus, CardType
from bankapp.domain.errors import BadRequestError, NotFoundError
from bankapp.domain.ledger_entry import Direction
from bankapp.services.account_service import AccountListQuery, LedgerQuery
from bankapp.services.card_service import NewCard


def test_open_account_rules(make_user, account_service):
    user = make_user()
    acc = account_service.open_account(user_id=user.id, account_type=AccountType.SAVINGS)
    assert acc.balance == Decimal("0.00")
    assert len(acc.account_number) == 10

    with pytest.raises(ValueError):
        account_service.open_account(
            user_id=user.id, account_type=AccountType.CHECKING, opening_balance=Decimal("-1")
        )


def test_list_accounts_pagination(make_user, make_account, account_service):
    user = make_user()
    for _ in range(3):
        make_account(user.id, "10.00")

    page = account_service.list_accounts(user.id, AccountListQuery(limit=2, offset=0))
    assert len(page.items) == 2
    assert page.pagination.total == 3
    assert page.pagination.has_more

    last = account_service.list_accounts(user.id, AccountListQuery(limit=2, offset=2))
    assert len(last.items) == 1
    assert not last.pagination.has_more


def test_list_transactions_is_guarded_and_filtered(make_user, make_account, account_service, transaction_service):
    owner, intruder = make_user(), make_user()
    acc = make_account(owner.id, "100.00")
    transaction_service.deposit(owner.id, acc.id, Decimal("5"))
    transaction_service.withdraw(owner.id, acc.id, Decimal("3"))

    page = account_service.list_transactions(acc.id, owner.id, LedgerQuery())
    assert [e.direction for e in page.items] == [Direction.DEBIT, Direction.CREDIT]

    debits = account_service.list_transactions(acc.id, owner.id, LedgerQuery(direction=Direction.DEBIT))
    assert debits.pagination.total == 1

    # naive datetimes are read as UTC
    future = dt.datetime.now(dt.timezone.utc).replace(tzinfo=None) + dt.timedelta(hours=1)
    assert account_service.list_transactions(acc.id, owner.id, LedgerQuery(start=future)).items == []

    with pytest.raises(NotFoundError):
        account_service.list_transactions(acc.id, intruder.id, LedgerQuery())


def test_summary_counts_user_accounts(make_user, make_account, account_service):
    user = make_user()
    make_account(user.id, "5000.00", AccountType.CHECKING)
    make_account(user.id, "15000.00", AccountType.SAVINGS)
    make_account(make_user().id, "1.00")

    s = account_service.summary(user.id)
    assert s.total_balance == Decimal("20000.00")
    assert s.account_count == 2


def test_create_card_and_ownership(make_user, make_account, card_service, future_expiry):
    owner, intruder = make_user(), make_user()
    acc = make_account(owner.id)

    card, account = card_service.create_card(
        owner.id,
        NewCard(
            account_id=acc.id,
            card_type=CardType.CREDIT,
            cardholder_name=" Ada Lovelace ",
            expiry_date=future_expiry,
            credit_limit=Decimal("2500"),
        ),
    )
    assert account.id == acc.id
    assert card.cardholder_name == "Ada Lovelace"
    assert card.credit_limit == Decimal("2500.00")
    assert card.status == CardStatus.ACTIVE

    assert [c.id for c, _ in card_service.list_user_cards(owner.id)] == [card.id]
    assert [c.id for c in card_service.list_account_cards(acc.id, owner.id)] == [card.id]

    for call in (
        lambda: card_service.get_card(card.id, intruder.id),
        lambda: card_service.update_status(card.id, CardStatus.BLOCKED, intruder.id),
        lambda: card_service.delete_card(card.id, intruder.id),
        lambda: card_service.list_account_cards(acc.id, intruder.id),
    ):
        with pytest.raises(NotFoundError):
            call()

    card_service.delete_card(card.id, owner.id)
    with pytest.raises(NotFoundError):
        card_service.get_card(card.id, owner.id)


def test_create_card_validation(make_user, make_account, card_service, future_expiry):
    user = make_user()
    acc = make_account(user.id)

    with pytest.raises(BadRequestError) as exc:
        card_service.create_card(
            user.id,
            NewCard(account_id=acc.id, card_type=CardType.DEBIT, cardholder_name="Ada", expiry_date=dt.date(2020, 1, 1)),
        )
    assert exc.value.message == "Expiry date must be in the future"

    with pytest.raises(BadRequestError):
        card_service.create_card(
            user.id,
            NewCard(
                account_id=acc.id,
                card_type=CardType.CREDIT,
                cardholder_name="Ada",
                expiry_date=future_expiry,
                credit_limit=Decimal("0"),
            ),
        )
