from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from enum import Enum


class Currency(str, Enum):
    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"


_QUANT = Decimal("0.01")
ZERO = Decimal("0.00")

# fits Numeric(18, 2) and a BIGINT count of cents
MAX_MONEY = Decimal("9999999999999999.99")


class AmountOutOfRangeError(ValueError):
    pass


def parse_decimal(value: str) -> Decimal:
    """
    Robust parse from string.
    Accepts "12.34", "-12.34", "12", and "12,34".
    """
    if not isinstance(value, str):
        raise TypeError("Amount must be provided as a string")

    raw = value.strip()
    if raw == "":
        raise ValueError("Amount cannot be empty")

    raw = raw.replace(",", ".")

    try:
        return Decimal(raw)
    except InvalidOperation as exc:
        raise ValueError(f"Invalid decimal amount: {value!r}") from exc


def quantize_money(amount: Decimal) -> Decimal:
    # classic accounting rounding
    return amount.quantize(_QUANT, rounding=ROUND_HALF_UP)


def to_money(value: Decimal | int | float | str) -> Decimal:
    """Normalize any numeric input to a 2-place Decimal."""
    if isinstance(value, bool):
        raise TypeError("Amount cannot be a boolean")
    if isinstance(value, str):
        dec = parse_decimal(value)
    elif isinstance(value, float):
        # str() keeps the shortest repr, so 0.1 stays 0.1
        dec = Decimal(str(value))
    elif isinstance(value, (int, Decimal)):
        dec = Decimal(value)
    else:
        raise TypeError(f"Unsupported amount type: {type(value).__name__}")

    if not dec.is_finite():
        raise ValueError("Amount must be a finite number")
    if abs(dec) > MAX_MONEY:
        raise AmountOutOfRangeError(f"Amount must not exceed {MAX_MONEY}")
    try:
        return quantize_money(dec)
    except InvalidOperation as exc:
        raise ValueError(f"Invalid decimal amount: {value!r}") from exc


def to_minor_units(amount: Decimal) -> int:
    """2-place Decimal -> integer cents, the unit balances are stored and added in."""
    return int(quantize_money(amount).scaleb(2))


def from_minor_units(cents: int) -> Decimal:
    return Decimal(int(cents)).scaleb(-2)
