from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass
from decimal import Decimal
from uuid import uuid4

from bankapp.db_base import utcnow
from bankapp.domain.account import Account
from bankapp.domain.card import Card, CardStatus, CardType
from bankapp.domain.errors import BadRequestError, NotFoundError
from bankapp.domain.money import to_money
from bankapp.engine.number_generators import generate_card_number, generate_cvv
from bankapp.repositories.card_repository import CardRepository
from bankapp.services.account_service import AccountService

logger = logging.getLogger(__name__)

_CARD_NUMBER_ATTEMPTS = 5


@dataclass(frozen=True)
class NewCard:
    account_id: str
    card_type: CardType
    cardholder_name: str
    expiry_date: dt.date
    credit_limit: Decimal | None = None


class CardService:
    def __init__(self, *, cards: CardRepository, accounts: AccountService) -> None:
        self._cards = cards
        self._accounts = accounts

    def list_user_cards(self, user_id: str) -> list[tuple[Card, Account]]:
        return self._cards.list_for_user(user_id)

    def list_account_cards(self, account_id: str, user_id: str) -> list[Card]:
        account = self._accounts.resolve_owned_account(account_id, user_id)
        return self._cards.list_for_account(account.id)

    def get_card(self, card_id: str, user_id: str) -> tuple[Card, Account]:
        found = self._cards.get_for_user(card_id, user_id)
        if found is None:
            raise NotFoundError("Card not found")
        return found

    def create_card(self, user_id: str, data: NewCard) -> tuple[Card, Account]:
        account = self._accounts.resolve_owned_account(data.account_id, user_id)

        if data.expiry_date <= dt.date.today():
            raise BadRequestError("Expiry date must be in the future")

        credit_limit = None
        if data.credit_limit is not None:
            try:
                credit_limit = to_money(data.credit_limit)
            except ValueError as exc:
                raise BadRequestError(str(exc)) from exc
            if credit_limit <= 0:
                raise BadRequestError("Credit limit must be greater than 0")

        now = utcnow()
        for _ in range(_CARD_NUMBER_ATTEMPTS):
            card = Card(
                id=str(uuid4()),
                account_id=account.id,
                card_number=generate_card_number(),
                card_type=data.card_type,
                cardholder_name=data.cardholder_name.strip(),
                expiry_date=data.expiry_date,
                cvv=generate_cvv(),
                status=CardStatus.ACTIVE,
                created_at=now,
                updated_at=now,
                credit_limit=credit_limit,
            )
            try:
                self._cards.add(card)
            except ValueError:
                # card number collision
                continue
            logger.info("Issued %s card %s on account %s", card.card_type.value, card.id, account.id)
            return card, account

        raise RuntimeError("could not allocate a unique card number")

    def update_status(self, card_id: str, status: CardStatus, user_id: str) -> tuple[Card, Account]:
        _, account = self.get_card(card_id, user_id)
        updated = self._cards.update_status(card_id, status)
        logger.info("Card %s status -> %s", card_id, status.value)
        return updated, account

    def delete_card(self, card_id: str, user_id: str) -> None:
        self.get_card(card_id, user_id)
        if not self._cards.delete(card_id):
            # removed concurrently
            raise NotFoundError("Card not found")
        logger.info("Deleted card %s", card_id)
