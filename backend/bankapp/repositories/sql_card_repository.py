from __future__ import annotations

import datetime as dt
from decimal import Decimal

from sqlalchemy import Date, DateTime, ForeignKey, Numeric, String, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Mapped, mapped_column

from bankapp.db import new_session
from bankapp.db_base import Base, as_utc, utcnow
from bankapp.domain.account import Account
from bankapp.domain.card import Card, CardStatus, CardType
from bankapp.repositories.card_repository import CardRepository
from bankapp.repositories.sql_account_repository import AccountRow, account_row_to_domain


class CardRow(Base):
    __tablename__ = "cards"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    account_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("accounts.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    card_number: Mapped[str] = mapped_column(String(16), unique=True, nullable=False)
    card_type: Mapped[str] = mapped_column(String(8), nullable=False)
    cardholder_name: Mapped[str] = mapped_column(String(128), nullable=False)
    expiry_date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    cvv: Mapped[str] = mapped_column(String(3), nullable=False)
    credit_limit: Mapped[Decimal | None] = mapped_column(Numeric(18, 2), nullable=True)
    status: Mapped[str] = mapped_column(String(16), nullable=False)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), index=True, nullable=False)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class SqlCardRepository(CardRepository):

    def get(self, card_id: str) -> Card | None:
        with new_session() as s:
            row = s.get(CardRow, card_id)
            return self._to_domain(row) if row else None

    def get_for_user(self, card_id: str, user_id: str) -> tuple[Card, Account] | None:
        stmt = (
            select(CardRow, AccountRow)
            .join(AccountRow, AccountRow.id == CardRow.account_id)
            .where(CardRow.id == card_id)
            .where(AccountRow.user_id == user_id)
        )
        with new_session() as s:
            pair = s.execute(stmt).first()
            if pair is None:
                return None
            card_row, account_row = pair
            return self._to_domain(card_row), account_row_to_domain(account_row)

    def list_for_user(self, user_id: str) -> list[tuple[Card, Account]]:
        stmt = (
            select(CardRow, AccountRow)
            .join(AccountRow, AccountRow.id == CardRow.account_id)
            .where(AccountRow.user_id == user_id)
            .order_by(CardRow.created_at.desc(), CardRow.id.asc())
        )
        with new_session() as s:
            return [
                (self._to_domain(card_row), account_row_to_domain(account_row))
                for card_row, account_row in s.execute(stmt).all()
            ]

    def list_for_account(self, account_id: str) -> list[Card]:
        stmt = (
            select(CardRow)
            .where(CardRow.account_id == account_id)
            .order_by(CardRow.created_at.desc(), CardRow.id.asc())
        )
        with new_session() as s:
            return [self._to_domain(r) for r in s.execute(stmt).scalars().all()]

    def add(self, card: Card) -> None:
        if not isinstance(card, Card):
            raise TypeError("card must be a Card")

        row = CardRow(
            id=card.id,
            account_id=card.account_id,
            card_number=card.card_number,
            card_type=card.card_type.value,
            cardholder_name=card.cardholder_name,
            expiry_date=card.expiry_date,
            cvv=card.cvv,
            credit_limit=card.credit_limit,
            status=card.status.value,
            created_at=card.created_at,
            updated_at=card.updated_at,
        )
        with new_session() as s:
            s.add(row)
            try:
                s.commit()
            except IntegrityError as exc:
                s.rollback()
                raise ValueError("card number already exists") from exc

    def update_status(self, card_id: str, status: CardStatus) -> Card:
        with new_session() as s:
            row = s.get(CardRow, card_id)
            if row is None:
                raise KeyError(f"unknown card_id '{card_id}'")
            row.status = status.value
            row.updated_at = utcnow()
            s.commit()
            s.refresh(row)
            return self._to_domain(row)

    def delete(self, card_id: str) -> bool:
        with new_session() as s:
            row = s.get(CardRow, card_id)
            if row is None:
                return False
            s.delete(row)
            s.commit()
            return True

    @staticmethod
    def _to_domain(row: CardRow) -> Card:
        return Card(
            id=row.id,
            account_id=row.account_id,
            card_number=row.card_number,
            card_type=CardType(row.card_type),
            cardholder_name=row.cardholder_name,
            expiry_date=row.expiry_date,
            cvv=row.cvv,
            status=CardStatus(row.status),
            created_at=as_utc(row.created_at),
            updated_at=as_utc(row.updated_at),
            credit_limit=Decimal(row.credit_limit) if row.credit_limit is not None else None,
        )
