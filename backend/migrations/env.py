import os
import sys
from logging.config import fileConfig

from sqlalchemy import create_engine
from sqlalchemy import pool

# --- add backend/ to sys.path (so "bankapp.*" imports work)
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from alembic import context

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

from bankapp.db_base import Base
from bankapp.settings import get_settings

# Ensure all models are registered on Base.metadata for autogenerate
from bankapp.repositories.sql_user_repository import UserRow  # noqa: F401
from bankapp.repositories.sql_account_repository import AccountRow  # noqa: F401
from bankapp.repositories.sql_card_repository import CardRow  # noqa: F401
from bankapp.repositories.sql_ledger_repository import LedgerEntryRow  # noqa: F401

target_metadata = Base.metadata


def _database_url() -> str:
    # BANKAPP_DATABASE_URL wins; otherwise the same default the app uses
    return get_settings().database_url


def run_migrations_offline() -> None:
    """Emit SQL to stdout instead of running it against a database."""
    context.configure(
        url=_database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = create_engine(_database_url(), poolclass=pool.NullPool)

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            render_as_batch=connection.dialect.name == "sqlite",
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
