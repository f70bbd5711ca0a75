import os

# must be set before bankapp.api.main is imported (it reads settings at import time)
os.environ.setdefault("BANKAPP_ENV", "test")
os.environ.setdefault("BANKAPP_JWT_SECRET", "test-secret-0123456789-0123456789-abcdef")
os.environ.setdefault("BANKAPP_BCRYPT_ROUNDS", "4")
os.environ.setdefault("BANKAPP_LOG_LEVEL", "WARNING")
os.environ.setdefault("BANKAPP_DATABASE_URL", "sqlite:///:memory:")

import datetime as dt
from decimal import Decimal
from uuid import uuid4

import pytest

from bankapp.db import init_db, reset_engine
from bankapp.db_base import utcnow
from bankapp.domain.account import AccountType
from bankapp.domain.user import User, UserRole
from bankapp.repositories.sql_account_repository import SqlAccountRepository
from bankapp.repositories.sql_card_repository import SqlCardRepository
from bankapp.repositories.sql_ledger_repository import SqlLedgerRepository
from bankapp.repositories.sql_user_repository import SqlUserRepository
from bankapp.security import hash_password
from bankapp.services.account_service import AccountService
from bankapp.services.card_service import CardService
from bankapp.services.transaction_service import TransactionService

TEST_PASSWORD = "Str0ng!Pass"


@pytest.fixture
def password() -> str:
    """Plain-text password of every user created by the fixtures."""
    return TEST_PASSWORD


@pytest.fixture(autouse=True)
def _isolated_db(tmp_path, monkeypatch):
    """Fresh SQLite file per test."""
    monkeypatch.setenv("BANKAPP_ENV", "test")
    monkeypatch.setenv("BANKAPP_DATABASE_URL", f"sqlite:///{(tmp_path / 'bankapp.db').as_posix()}")
    reset_engine()
    init_db()
    yield
    reset_engine()


@pytest.fixture
def user_repo() -> SqlUserRepository:
    return SqlUserRepository()


@pytest.fixture
def account_repo() -> SqlAccountRepository:
    return SqlAccountRepository()


@pytest.fixture
def ledger_repo() -> SqlLedgerRepository:
    return SqlLedgerRepository()


@pytest.fixture
def card_repo() -> SqlCardRepository:
    return SqlCardRepository()


@pytest.fixture
def account_service(account_repo, ledger_repo) -> AccountService:
    return AccountService(accounts=account_repo, ledger=ledger_repo)


@pytest.fixture
def transaction_service(account_service, ledger_repo, card_repo) -> TransactionService:
    return TransactionService(accounts=account_service, ledger=ledger_repo, cards=card_repo)


@pytest.fixture
def card_service(card_repo, account_service) -> CardService:
    return CardService(cards=card_repo, accounts=account_service)


@pytest.fixture
def make_user(user_repo):
    def _make(email: str | None = None, *, is_active: bool = True) -> User:
        now = utcnow()
        user = User(
            id=str(uuid4()),
            email=email or f"user-{uuid4().hex[:8]}@example.com",
            first_name="Ada",
            last_name="Lovelace",
            role=UserRole.USER,
            is_active=is_active,
            created_at=now,
            updated_at=now,
        )
        user_repo.add(user, password_hash=hash_password(TEST_PASSWORD))
        return user

    return _make


@pytest.fixture
def make_account(account_service):
    def _make(user_id: str, balance: str = "0.00", account_type: AccountType = AccountType.CHECKING):
        return account_service.open_account(
            user_id=user_id,
            account_type=account_type,
            opening_balance=Decimal(balance),
        )

    return _make


@pytest.fixture
def future_expiry() -> dt.date:
    return dt.date.today().replace(day=1) + dt.timedelta(days=3 * 365)
