from __future__ import annotations

from typing import Optional

from bankapp.api.schemas.cards import CardAccountInfo, CardCreatedResponse, CardResponse
from bankapp.domain.account import Account
from bankapp.domain.card import Card


def _card_fields(card: Card, account: Optional[Account]) -> dict:
    return dict(
        id=card.id,
        account_id=card.account_id,
        card_number=card.card_number,
        masked_number=card.masked_number,
        card_type=card.card_type,
        cardholder_name=card.cardholder_name,
        expiry_date=card.expiry_date,
        credit_limit=card.credit_limit,
        status=card.status,
        created_at=card.created_at,
        updated_at=card.updated_at,
        account=(
            CardAccountInfo(account_number=account.account_number, account_type=account.account_type)
            if account is not None
            else None
        ),
    )


def card_to_response(card: Card, account: Optional[Account] = None) -> CardResponse:
    return CardResponse(**_card_fields(card, account))


def created_card_to_response(card: Card, account: Account) -> CardCreatedResponse:
    return CardCreatedResponse(**_card_fields(card, account), cvv=card.cvv)
