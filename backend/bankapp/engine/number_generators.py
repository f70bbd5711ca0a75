from __future__ import annotations

import secrets

CARD_NUMBER_LENGTH = 16
ACCOUNT_NUMBER_LENGTH = 10

# 4 = Visa, 5 = Mastercard
_CARD_PREFIXES = ("4", "5")


def _digits(n: int) -> str:
    return "".join(str(secrets.randbelow(10)) for _ in range(n))


def generate_card_number() -> str:
    return secrets.choice(_CARD_PREFIXES) + _digits(CARD_NUMBER_LENGTH - 1)


def generate_cvv() -> str:
    # 100..999
    return str(100 + secrets.randbelow(900))


def generate_account_number() -> str:
    # no leading zero so the number keeps its length when treated as an int
    return str(1 + secrets.randbelow(9)) + _digits(ACCOUNT_NUMBER_LENGTH - 1)
