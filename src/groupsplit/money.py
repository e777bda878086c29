"""Cent-exact money helpers.

Every amount that enters the engine is turned into integer cents before it is
distributed and turned back into a two-place ``Decimal`` on the way out.
Rounding is half away from zero (``ROUND_HALF_UP``) everywhere.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

Amount = Union[Decimal, int, float, str]

CENT_FACTOR = 100
CENT = Decimal("0.01")


def to_decimal(amount: Amount) -> Decimal:
    if isinstance(amount, Decimal):
        value = amount
    elif isinstance(amount, float):
        # str() keeps the shortest repr, so 2.675 stays 2.675 instead of 2.67499...
        value = Decimal(str(amount))
    else:
        try:
            value = Decimal(amount)
        except InvalidOperation as exc:
            raise ValueError(f"invalid amount: {amount!r}") from exc
    if not value.is_finite():
        raise ValueError(f"amount must be finite, got {amount!r}")
    return value


def to_cents(amount: Amount) -> int:
    return int((to_decimal(amount) * CENT_FACTOR).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def from_cents(cents: int) -> Decimal:
    return (Decimal(cents) / CENT_FACTOR).quantize(CENT)


def quantize(amount: Amount) -> Decimal:
    return to_decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)
