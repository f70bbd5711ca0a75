from __future__ import annotations

from decimal import Decimal

from bankapp.domain.errors import InsufficientFundsError, InvalidAmountError
from bankapp.domain.ledger_entry import Direction


def validate_posting(direction: Direction, amount: Decimal, current_balance: Decimal) -> None:
    """
    Pure check, no I/O. Raises on rejection, returns None when the posting is acceptable.

    Rules, in order:
    1. amount <= 0 (or not finite) -> InvalidAmountError
    2. DEBIT and amount > current_balance -> InsufficientFundsError
       (withdrawing exactly the balance is allowed; CREDIT accounts get no exemption)
    """
    if not isinstance(amount, Decimal) or not amount.is_finite() or amount <= 0:
        raise InvalidAmountError("Amount must be greater than 0")

    if direction == Direction.DEBIT and amount > current_balance:
        raise InsufficientFundsError("Insufficient funds")
