from __future__ import annotations

import datetime as dt
import logging
from decimal import Decimal

from sqlalchemy import BigInteger, DateTime, ForeignKey, Integer, String, UniqueConstraint, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Mapped, Session, mapped_column
from sqlalchemy.sql import Select

from bankapp.db import new_session
from bankapp.db_base import Base, as_utc, utcnow
from bankapp.domain.account import Account
from bankapp.domain.errors import InsufficientFundsError, InternalError, InvalidAmountError, NotFoundError
from bankapp.domain.ledger_entry import Direction, LedgerEntry
from bankapp.domain.money import from_minor_units, quantize_money, to_minor_units
from bankapp.repositories.ledger_repository import LedgerFilter, LedgerRepository
from bankapp.repositories.sql_account_repository import AccountRow, account_row_to_domain

logger = logging.getLogger(__name__)


class LedgerEntryRow(Base):
    __tablename__ = "ledger_entries"

    __table_args__ = (
        UniqueConstraint("account_id", "sequence", name="uq_ledger_entries_account_sequence"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    account_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("accounts.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    sequence: Mapped[int] = mapped_column(Integer, nullable=False)
    direction: Mapped[str] = mapped_column(String(8), nullable=False)
    amount_cents: Mapped[int] = mapped_column(BigInteger, nullable=False)
    description: Mapped[str] = mapped_column(String(256), nullable=False)
    card_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("cards.id", ondelete="SET NULL"),
        nullable=True,
    )
    category: Mapped[str | None] = mapped_column(String(64), nullable=True)
    merchant: Mapped[str | None] = mapped_column(String(128), nullable=True)
    balance_after_cents: Mapped[int] = mapped_column(BigInteger, nullable=False)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), index=True, nullable=False)


class SqlLedgerRepository(LedgerRepository):
    """
    Owns every balance mutation.

    post_entry() runs inside a single session transaction:
    1. conditional UPDATE of the account balance in integer cents
       (compare-and-swap on the funds rule for debits)
    2. read back the new balance (we now hold the row / database write lock)
    3. INSERT the ledger row with balance_after = that balance
    A second writer on the same account blocks at step 1 until the first commits, then
    re-evaluates the predicate, so no lost update and no overdraft.
    """

    def post_entry(
        self,
        *,
        account_id: str,
        direction: Direction,
        amount: Decimal,
        description: str | None = None,
        card_id: str | None = None,
        category: str | None = None,
        merchant: str | None = None,
    ) -> tuple[LedgerEntry, Account]:
        amount = quantize_money(amount)
        if amount <= 0:
            raise InvalidAmountError("Amount must be greater than 0")
        cents = to_minor_units(amount)
        now = utcnow()

        try:
            with new_session() as s, s.begin():
                stmt = update(AccountRow).where(AccountRow.id == account_id)
                if direction == Direction.DEBIT:
                    stmt = stmt.where(AccountRow.balance_cents >= cents).values(
                        balance_cents=AccountRow.balance_cents - cents, updated_at=now
                    )
                else:
                    stmt = stmt.values(balance_cents=AccountRow.balance_cents + cents, updated_at=now)

                result = s.execute(stmt.execution_options(synchronize_session=False))
                if result.rowcount != 1:
                    if s.get(AccountRow, account_id) is None:
                        raise NotFoundError("Account not found")
                    raise InsufficientFundsError("Insufficient funds")

                account_row = s.execute(
                    select(AccountRow).where(AccountRow.id == account_id)
                ).scalar_one()
                account = account_row_to_domain(account_row)

                entry = LedgerEntry.create(
                    account_id=account_id,
                    sequence=self._next_sequence_in_session(s, account_id=account_id),
                    direction=direction,
                    amount=amount,
                    balance_after=account.balance,
                    description=description,
                    card_id=card_id,
                    category=category,
                    merchant=merchant,
                    created_at=now,
                )
                s.add(self._to_row(entry))
        except SQLAlchemyError as exc:
            logger.exception("Ledger write failed for account %s", account_id)
            raise InternalError("Failed to record transaction") from exc

        return entry, account

    def list_for_account(
        self,
        account_id: str,
        *,
        filters: LedgerFilter | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[LedgerEntry]:
        stmt = self._filtered(select(LedgerEntryRow), account_id, filters)
        stmt = stmt.order_by(LedgerEntryRow.sequence.desc()).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)

        with new_session() as s:
            rows = s.execute(stmt).scalars().all()
            return [self._to_domain(r) for r in rows]

    def count_for_account(self, account_id: str, *, filters: LedgerFilter | None = None) -> int:
        stmt = self._filtered(select(func.count()).select_from(LedgerEntryRow), account_id, filters)
        with new_session() as s:
            return int(s.execute(stmt).scalar_one())

    def history(self, account_id: str) -> list[LedgerEntry]:
        stmt = (
            select(LedgerEntryRow)
            .where(LedgerEntryRow.account_id == account_id)
            .order_by(LedgerEntryRow.sequence.asc())
        )
        with new_session() as s:
            rows = s.execute(stmt).scalars().all()
            return [self._to_domain(r) for r in rows]

    @staticmethod
    def _filtered(stmt: Select, account_id: str, filters: LedgerFilter | None) -> Select:
        stmt = stmt.where(LedgerEntryRow.account_id == account_id)
        if filters is None:
            return stmt
        if filters.direction is not None:
            stmt = stmt.where(LedgerEntryRow.direction == filters.direction.value)
        if filters.start is not None:
            stmt = stmt.where(LedgerEntryRow.created_at >= filters.start)
        if filters.end is not None:
            stmt = stmt.where(LedgerEntryRow.created_at <= filters.end)
        return stmt

    @staticmethod
    def _next_sequence_in_session(s: Session, *, account_id: str) -> int:
        stmt = select(func.max(LedgerEntryRow.sequence)).where(LedgerEntryRow.account_id == account_id)
        max_seq = s.execute(stmt).scalar_one_or_none()
        return int(max_seq or 0) + 1

    @staticmethod
    def _to_row(entry: LedgerEntry) -> LedgerEntryRow:
        return LedgerEntryRow(
            id=entry.id,
            account_id=entry.account_id,
            sequence=entry.sequence,
            direction=entry.direction.value,
            amount_cents=to_minor_units(entry.amount),
            description=entry.description,
            card_id=entry.card_id,
            category=entry.category,
            merchant=entry.merchant,
            balance_after_cents=to_minor_units(entry.balance_after),
            created_at=entry.created_at,
        )

    @staticmethod
    def _to_domain(row: LedgerEntryRow) -> LedgerEntry:
        return LedgerEntry.create(
            id=row.id,
            account_id=row.account_id,
            sequence=row.sequence,
            direction=Direction(row.direction),
            amount=from_minor_units(row.amount_cents),
            balance_after=from_minor_units(row.balance_after_cents),
            description=row.description,
            card_id=row.card_id,
            category=row.category,
            merchant=row.merchant,
            created_at=as_utc(row.created_at),
        )
