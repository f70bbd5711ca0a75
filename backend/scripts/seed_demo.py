"""
Load a demo user with accounts, cards and a few ledger entries.

    BANKAPP_DATABASE_URL=sqlite:///backend/data/bankapp.db python backend/scripts/seed_demo.py

Running it twice is a no-op: it stops if the demo user already exists.
"""
from __future__ import annotations

import datetime as dt
import logging
import os
import sys
from decimal import Decimal
from uuid import uuid4

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from bankapp.db import init_db
from bankapp.db_base import utcnow
from bankapp.domain.account import AccountType
from bankapp.domain.card import CardType
from bankapp.domain.ledger_entry import Direction
from bankapp.domain.user import User, UserRole
from bankapp.engine.running_balance import replay_ledger
from bankapp.logging_config import configure_logging
from bankapp.repositories.sql_account_repository import SqlAccountRepository
from bankapp.repositories.sql_card_repository import SqlCardRepository
from bankapp.repositories.sql_ledger_repository import SqlLedgerRepository
from bankapp.repositories.sql_user_repository import SqlUserRepository
from bankapp.security import hash_password
from bankapp.services.account_service import AccountService
from bankapp.services.card_service import CardService, NewCard

logger = logging.getLogger("bankapp.scripts.seed_demo")

DEMO_PASSWORD = "Demo123!@#"

USERS = (
    ("admin@demo.com", "Admin", "User", UserRole.ADMIN),
    ("user@demo.com", "John", "Doe", UserRole.USER),
)

# (direction, amount, description, category, merchant), applied in order
CHECKING_ACTIVITY = (
    (Direction.DEBIT, "50.25", "Whole Foods Market", "GROCERIES", "Whole Foods"),
    (Direction.DEBIT, "30.00", "Uber ride to downtown", "TRANSPORTATION", "Uber"),
    (Direction.CREDIT, "3000.00", "Monthly salary deposit", "SALARY", "ABC Corp"),
    (Direction.DEBIT, "75.50", "Dinner at Italian Restaurant", "DINING", "La Trattoria"),
    (Direction.DEBIT, "120.00", "Electric bill payment", "UTILITIES", "City Power"),
)


def _add_user(users: SqlUserRepository, email: str, first: str, last: str, role: UserRole) -> User:
    now = utcnow()
    user = User(
        id=str(uuid4()),
        email=email,
        first_name=first,
        last_name=last,
        role=role,
        is_active=True,
        created_at=now,
        updated_at=now,
    )
    users.add(user, password_hash=hash_password(DEMO_PASSWORD))
    return user


def main() -> None:
    configure_logging("INFO")
    init_db()

    users = SqlUserRepository()
    if users.get_credentials_by_email("user@demo.com") is not None:
        logger.info("Demo data already present, nothing to do")
        return

    ledger = SqlLedgerRepository()
    accounts = AccountService(accounts=SqlAccountRepository(), ledger=ledger)
    cards = CardService(cards=SqlCardRepository(), accounts=accounts)

    created = [_add_user(users, *row) for row in USERS]
    demo = created[-1]

    checking = accounts.open_account(
        user_id=demo.id, account_type=AccountType.CHECKING, opening_balance=Decimal("5000.00")
    )
    accounts.open_account(user_id=demo.id, account_type=AccountType.SAVINGS, opening_balance=Decimal("15000.00"))
    credit = accounts.open_account(
        user_id=demo.id, account_type=AccountType.CREDIT, opening_balance=Decimal("-500.00")
    )

    expiry = dt.date.today().replace(day=1) + dt.timedelta(days=4 * 365)
    debit_card, _ = cards.create_card(
        demo.id,
        NewCard(account_id=checking.id, card_type=CardType.DEBIT, cardholder_name=demo.full_name, expiry_date=expiry),
    )
    cards.create_card(
        demo.id,
        NewCard(
            account_id=credit.id,
            card_type=CardType.CREDIT,
            cardholder_name=demo.full_name,
            expiry_date=expiry,
            credit_limit=Decimal("10000.00"),
        ),
    )

    for direction, amount, description, category, merchant in CHECKING_ACTIVITY:
        ledger.post_entry(
            account_id=checking.id,
            direction=direction,
            amount=Decimal(amount),
            description=description,
            card_id=debit_card.id if direction == Direction.DEBIT else None,
            category=category,
            merchant=merchant,
        )

    # fails loudly if the snapshots do not add up
    replay_ledger(ledger.history(checking.id), opening_balance=checking.balance)

    logger.info("Seeded %d users; demo login: user@demo.com / %s", len(created), DEMO_PASSWORD)


if __name__ == "__main__":
    main()
