from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from bankapp.domain.account import Account
from bankapp.domain.errors import AppError, BadRequestError, InvalidAmountError, NotFoundError
from bankapp.domain.ledger_entry import Direction, LedgerEntry
from bankapp.domain.money import AmountOutOfRangeError, to_money
from bankapp.engine.posting_rules import validate_posting
from bankapp.repositories.card_repository import CardRepository
from bankapp.repositories.ledger_repository import LedgerRepository
from bankapp.services.account_service import AccountService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PostingResult:
    entry: LedgerEntry
    account: Account


class TransactionService:
    """
    Deposit / withdraw orchestration:
    ownership guard -> amount & funds check -> atomic ledger write.

    Nothing is retried or compensated here: the ledger write is all-or-nothing.
    """

    def __init__(
        self,
        *,
        accounts: AccountService,
        ledger: LedgerRepository,
        cards: CardRepository,
    ) -> None:
        self._accounts = accounts
        self._ledger = ledger
        self._cards = cards

    def deposit(
        self,
        user_id: str,
        account_id: str,
        amount: Decimal | int | float | str,
        description: str | None = None,
        *,
        card_id: str | None = None,
    ) -> PostingResult:
        return self.post(user_id, account_id, Direction.CREDIT, amount, description, card_id=card_id)

    def withdraw(
        self,
        user_id: str,
        account_id: str,
        amount: Decimal | int | float | str,
        description: str | None = None,
        *,
        card_id: str | None = None,
    ) -> PostingResult:
        return self.post(user_id, account_id, Direction.DEBIT, amount, description, card_id=card_id)

    def post(
        self,
        user_id: str,
        account_id: str,
        direction: Direction,
        amount: Decimal | int | float | str,
        description: str | None = None,
        *,
        card_id: str | None = None,
    ) -> PostingResult:
        account = self._accounts.resolve_owned_account(account_id, user_id)

        try:
            value = to_money(amount)
        except AmountOutOfRangeError as exc:
            raise InvalidAmountError(str(exc)) from exc
        except (TypeError, ValueError) as exc:
            raise InvalidAmountError("Amount must be greater than 0") from exc

        try:
            validate_posting(direction, value, account.balance)
            if not account.is_active:
                raise BadRequestError("Account is not active")
            if card_id is not None:
                self._check_card(card_id, account)

            entry, updated = self._ledger.post_entry(
                account_id=account.id,
                direction=direction,
                amount=value,
                description=description,
                card_id=card_id,
            )
        except AppError as exc:
            if exc.status_code < 500:
                logger.warning(
                    "Rejected %s of %s on account %s: %s", direction.value, value, account.id, exc.message
                )
            raise

        logger.info(
            "Posted %s %s on account %s (balance_after=%s)",
            direction.value, entry.amount, account.id, entry.balance_after,
        )
        return PostingResult(entry=entry, account=updated)

    def _check_card(self, card_id: str, account: Account) -> None:
        card = self._cards.get(card_id)
        if card is None or card.account_id != account.id:
            raise NotFoundError("Card not found")
        if not card.is_active:
            raise BadRequestError("Card is not active")
