from __future__ import annotations

from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session

from bankapp.settings import get_settings

# seconds a sqlite writer waits on the database lock before giving up
SQLITE_BUSY_TIMEOUT = 15


def get_database_url() -> str:
    return get_settings().database_url


@lru_cache
def get_engine() -> Engine:
    url = get_database_url()

    # sqlite needs check_same_thread for FastAPI sync access (threadpool)
    connect_args = {}
    if url.startswith("sqlite"):
        connect_args = {"check_same_thread": False, "timeout": SQLITE_BUSY_TIMEOUT}

    return create_engine(url, future=True, connect_args=connect_args)


@lru_cache
def get_session_factory() -> sessionmaker[Session]:
    return sessionmaker(bind=get_engine(), autoflush=False, expire_on_commit=False, future=True)


def new_session() -> Session:
    return get_session_factory()()


def reset_engine() -> None:
    """Drop the cached engine so the next call picks up the current settings."""
    if get_engine.cache_info().currsize:
        get_engine().dispose()
    get_session_factory.cache_clear()
    get_engine.cache_clear()


def init_db() -> None:
    # import here to avoid circular imports; registers every table on Base.metadata
    from bankapp.db_base import Base
    from bankapp.repositories.sql_user_repository import UserRow  # noqa: F401
    from bankapp.repositories.sql_account_repository import AccountRow  # noqa: F401
    from bankapp.repositories.sql_card_repository import CardRow  # noqa: F401
    from bankapp.repositories.sql_ledger_repository import LedgerEntryRow  # noqa: F401

    Base.metadata.create_all(get_engine())
