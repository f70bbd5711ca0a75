from __future__ import annotations

from dataclasses import dataclass
import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import uuid4

from bankapp.domain.money import quantize_money


class Direction(str, Enum):
    CREDIT = "CREDIT"  # funds in
    DEBIT = "DEBIT"    # funds out

    def signed(self, amount: Decimal) -> Decimal:
        return amount if self is Direction.CREDIT else -amount


DEFAULT_DESCRIPTIONS = {
    Direction.CREDIT: "Deposit",
    Direction.DEBIT: "Withdrawal",
}


@dataclass(frozen=True)
class LedgerEntry:
    """
    Immutable record of one funds movement on an account.
    The amount is always positive; the direction carries the sign.
    """
    id: str
    account_id: str
    sequence: int
    direction: Direction
    amount: Decimal
    description: str
    balance_after: Decimal
    created_at: dt.datetime
    card_id: Optional[str] = None
    category: Optional[str] = None
    merchant: Optional[str] = None

    @property
    def signed_amount(self) -> Decimal:
        return self.direction.signed(self.amount)

    @staticmethod
    def create(
        *,
        account_id: str,
        sequence: int,
        direction: Direction,
        amount: Decimal,
        balance_after: Decimal,
        description: Optional[str] = None,
        card_id: Optional[str] = None,
        category: Optional[str] = None,
        merchant: Optional[str] = None,
        id: Optional[str] = None,
        created_at: Optional[dt.datetime] = None,
    ) -> "LedgerEntry":
        if not isinstance(account_id, str) or account_id.strip() == "":
            raise ValueError("account_id cannot be empty")

        if not isinstance(sequence, int) or sequence < 1:
            raise ValueError("sequence must be an integer >= 1")

        if not isinstance(direction, Direction):
            raise ValueError("direction must be a Direction")

        if not isinstance(amount, Decimal):
            raise ValueError("amount must be a Decimal")
        amount = quantize_money(amount)
        if amount <= 0:
            raise ValueError("amount must be positive; direction carries the sign")

        if not isinstance(balance_after, Decimal):
            raise ValueError("balance_after must be a Decimal")

        if description is None or description.strip() == "":
            norm_description = DEFAULT_DESCRIPTIONS[direction]
        else:
            norm_description = description.strip()

        if created_at is None:
            final_created_at = dt.datetime.now(dt.timezone.utc)
        else:
            if created_at.tzinfo is None:
                raise ValueError("created_at must be timezone-aware (UTC recommended)")
            final_created_at = created_at.astimezone(dt.timezone.utc)

        return LedgerEntry(
            id=id or str(uuid4()),
            account_id=account_id.strip(),
            sequence=sequence,
            direction=direction,
            amount=amount,
            description=norm_description,
            balance_after=quantize_money(balance_after),
            created_at=final_created_at,
            card_id=card_id,
            category=category.strip() if category and category.strip() else None,
            merchant=merchant.strip() if merchant and merchant.strip() else None,
        )
