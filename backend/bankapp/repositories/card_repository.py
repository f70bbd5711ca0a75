from __future__ import annotations

from typing import Protocol

from bankapp.domain.account import Account
from bankapp.domain.card import Card, CardStatus


class CardRepository(Protocol):
    def get(self, card_id: str) -> Card | None: ...

    def get_for_user(self, card_id: str, user_id: str) -> tuple[Card, Account] | None:
        """None when the card does not exist or its account belongs to someone else."""
        ...

    def list_for_user(self, user_id: str) -> list[tuple[Card, Account]]: ...

    def list_for_account(self, account_id: str) -> list[Card]: ...

    def add(self, card: Card) -> None: ...

    def update_status(self, card_id: str, status: CardStatus) -> Card: ...

    def delete(self, card_id: str) -> bool: ...
