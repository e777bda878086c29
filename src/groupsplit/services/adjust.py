"""Spread the gap between an expense total and the entered base amounts.

Used when people enter their pre-tax/pre-tip amounts and the difference has
to be added on top, either evenly or in proportion to what each entered.
"""

from __future__ import annotations

from decimal import Decimal
from fractions import Fraction
from typing import Mapping

from groupsplit.models import ParticipantId, ShareCents
from groupsplit.money import Amount, from_cents, to_cents
from groupsplit.services.split import SplitError, apportion, distribute_even


def _with_extra(base_cents: Mapping[ParticipantId, int], extra: list[ShareCents]) -> dict[ParticipantId, Decimal]:
    result = {participant_id: from_cents(cents) for participant_id, cents in base_cents.items()}
    for share in extra:
        result[share.participant_id] = from_cents(base_cents[share.participant_id] + share.cents)
    return result


def spread_difference_even(total: Amount, base_amounts: Mapping[ParticipantId, Amount]) -> dict[ParticipantId, Decimal]:
    if not base_amounts:
        raise SplitError("no participants to spread the difference over")

    base_cents = {participant_id: to_cents(amount) for participant_id, amount in base_amounts.items()}
    difference = to_cents(total) - sum(base_cents.values())
    return _with_extra(base_cents, distribute_even(difference, list(base_cents)))


def spread_difference_proportional(
    total: Amount,
    base_amounts: Mapping[ParticipantId, Amount],
) -> dict[ParticipantId, Decimal]:
    if not base_amounts:
        raise SplitError("no participants to spread the difference over")

    base_cents = {participant_id: to_cents(amount) for participant_id, amount in base_amounts.items()}
    difference = to_cents(total) - sum(base_cents.values())

    weights = [(participant_id, Fraction(cents)) for participant_id, cents in base_cents.items() if cents > 0]
    if not weights:
        return _with_extra(base_cents, distribute_even(difference, list(base_cents)))
    return _with_extra(base_cents, apportion(difference, weights))
