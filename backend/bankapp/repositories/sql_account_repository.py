from __future__ import annotations

import datetime as dt

from sqlalchemy import BigInteger, Boolean, DateTime, ForeignKey, String, func, select, true
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Mapped, mapped_column

from bankapp.db import new_session
from bankapp.db_base import Base, as_utc
from bankapp.domain.account import Account, AccountType
from bankapp.domain.money import Currency, from_minor_units, to_minor_units
from bankapp.repositories.account_repository import AccountRepository


class AccountRow(Base):
    __tablename__ = "accounts"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    account_number: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)
    account_type: Mapped[str] = mapped_column(String(16), nullable=False)
    currency: Mapped[str] = mapped_column(String(8), nullable=False)
    # integer cents, added and compared in SQL by SqlLedgerRepository.post_entry
    balance_cents: Mapped[int] = mapped_column(BigInteger, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default=true())
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), index=True, nullable=False)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), nullable=False)


def account_row_to_domain(row: AccountRow) -> Account:
    return Account(
        id=row.id,
        user_id=row.user_id,
        account_number=row.account_number,
        account_type=AccountType(row.account_type),
        currency=Currency(row.currency),
        balance=from_minor_units(row.balance_cents),
        is_active=row.is_active,
        created_at=as_utc(row.created_at),
        updated_at=as_utc(row.updated_at),
    )


class SqlAccountRepository(AccountRepository):
    """
    Read side of accounts plus creation.
    Balances are never written here: they only change through SqlLedgerRepository.post_entry.
    """

    def get(self, account_id: str) -> Account | None:
        if not isinstance(account_id, str) or not account_id.strip():
            return None

        with new_session() as s:
            row = s.get(AccountRow, account_id.strip())
            return account_row_to_domain(row) if row else None

    def list_for_user(
        self,
        user_id: str,
        *,
        account_type: AccountType | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[Account]:
        stmt = select(AccountRow).where(AccountRow.user_id == user_id)
        if account_type is not None:
            stmt = stmt.where(AccountRow.account_type == account_type.value)

        # newest first, id as tie-breaker for stable pagination
        stmt = stmt.order_by(AccountRow.created_at.desc(), AccountRow.id.asc()).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)

        with new_session() as s:
            rows = s.execute(stmt).scalars().all()
            return [account_row_to_domain(r) for r in rows]

    def count_for_user(self, user_id: str, *, account_type: AccountType | None = None) -> int:
        stmt = select(func.count()).select_from(AccountRow).where(AccountRow.user_id == user_id)
        if account_type is not None:
            stmt = stmt.where(AccountRow.account_type == account_type.value)

        with new_session() as s:
            return int(s.execute(stmt).scalar_one())

    def add(self, account: Account) -> None:
        if not isinstance(account, Account):
            raise TypeError("account must be an Account")

        row = AccountRow(
            id=account.id,
            user_id=account.user_id,
            account_number=account.account_number,
            account_type=account.account_type.value,
            currency=account.currency.value,
            balance_cents=to_minor_units(account.balance),
            is_active=account.is_active,
            created_at=account.created_at,
            updated_at=account.updated_at,
        )
        with new_session() as s:
            s.add(row)
            try:
                s.commit()
            except IntegrityError as exc:
                s.rollback()
                raise ValueError(f"account '{account.id}' / '{account.account_number}' already exists") from exc
