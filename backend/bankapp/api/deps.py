from __future__ import annotations

from functools import lru_cache
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from bankapp.domain.errors import UnauthorizedError
from bankapp.repositories.sql_account_repository import SqlAccountRepository
from bankapp.repositories.sql_card_repository import SqlCardRepository
from bankapp.repositories.sql_ledger_repository import SqlLedgerRepository
from bankapp.repositories.sql_user_repository import SqlUserRepository
from bankapp.security import decode_access_token
from bankapp.services.account_service import AccountService
from bankapp.services.auth_service import AuthService
from bankapp.services.card_service import CardService
from bankapp.services.transaction_service import TransactionService
from bankapp.services.user_service import UserService

# repositories open a session per call, so one instance per process is enough


@lru_cache
def get_user_repo() -> SqlUserRepository:
    return SqlUserRepository()


@lru_cache
def get_account_repo() -> SqlAccountRepository:
    return SqlAccountRepository()


@lru_cache
def get_ledger_repo() -> SqlLedgerRepository:
    return SqlLedgerRepository()


@lru_cache
def get_card_repo() -> SqlCardRepository:
    return SqlCardRepository()


@lru_cache
def get_auth_service() -> AuthService:
    return AuthService(users=get_user_repo())


@lru_cache
def get_user_service() -> UserService:
    return UserService(users=get_user_repo())


@lru_cache
def get_account_service() -> AccountService:
    return AccountService(accounts=get_account_repo(), ledger=get_ledger_repo())


@lru_cache
def get_card_service() -> CardService:
    return CardService(cards=get_card_repo(), accounts=get_account_service())


@lru_cache
def get_transaction_service() -> TransactionService:
    return TransactionService(
        accounts=get_account_service(),
        ledger=get_ledger_repo(),
        cards=get_card_repo(),
    )


_bearer = HTTPBearer(auto_error=False)


def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
) -> str:
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("No token provided")

    claims = decode_access_token(credentials.credentials)
    if claims is None:
        raise UnauthorizedError("Invalid or expired token")

    # deleted or deactivated users lose access even with a live token
    get_auth_service().verify_user(claims.user_id)
    return claims.user_id
