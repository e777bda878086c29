from __future__ import annotations

import math
from fractions import Fraction
from typing import Iterable, Mapping, Sequence

from groupsplit.models import (
    ExactSplit,
    Expense,
    ExpenseShare,
    ParticipantId,
    ShareCents,
    SharesSplit,
    SplitInstruction,
)
from groupsplit.money import Amount, from_cents, to_cents


class SplitError(ValueError):
    pass


def distribute_even(total_cents: int, participant_ids: Sequence[ParticipantId]) -> list[ShareCents]:
    """Split ``total_cents`` equally; the first ``remainder`` participants get one extra cent."""
    if not participant_ids:
        raise SplitError("even split needs at least one participant")

    n = len(participant_ids)
    base = total_cents // n
    remainder = total_cents - base * n

    shares: list[ShareCents] = []
    for participant_id in participant_ids:
        cents = base
        if remainder > 0:
            cents += 1
            remainder -= 1
        shares.append(ShareCents(participant_id=participant_id, cents=cents))
    return shares


def apportion(total_cents: int, weights: Sequence[tuple[ParticipantId, Fraction]]) -> list[ShareCents]:
    """Largest-remainder apportionment of ``total_cents`` over positive weights.

    Each entry gets the floor of its exact share; leftover cents go one by one
    to the entries with the largest fractional part, ties resolved by input
    order. The returned list keeps the input order.
    """
    total_weight = sum(weight for _, weight in weights)

    floors: list[int] = []
    fractions: list[Fraction] = []
    for _, weight in weights:
        exact = weight / total_weight * total_cents
        floor = math.floor(exact)
        floors.append(floor)
        fractions.append(exact - floor)

    remainder = total_cents - sum(floors)
    order = sorted(range(len(weights)), key=lambda idx: fractions[idx], reverse=True)
    for idx in order:
        if remainder <= 0:
            break
        floors[idx] += 1
        remainder -= 1

    return [ShareCents(participant_id=pid, cents=cents) for (pid, _), cents in zip(weights, floors)]


def distribute_shares(total_cents: int, split: SharesSplit) -> list[ShareCents]:
    if not split.shares:
        raise SplitError("shares split needs at least one participant")

    positive = [(share.participant_id, Fraction(share.weight)) for share in split.shares if share.weight > 0]
    if not positive:
        return distribute_even(total_cents, [share.participant_id for share in split.shares])

    return apportion(total_cents, positive)


def distribute_exact(total_cents: int, split: ExactSplit) -> list[ShareCents]:
    if not split.allocations:
        raise SplitError("exact split needs at least one allocation")

    shares = [
        ShareCents(participant_id=allocation.participant_id, cents=to_cents(allocation.amount))
        for allocation in split.allocations
    ]
    difference = total_cents - sum(share.cents for share in shares)
    if difference != 0:
        shares[0].cents += difference
    return shares


def distribute_split_cents(total_cents: int, split: SplitInstruction) -> list[ShareCents]:
    match split.type:
        case "even":
            return distribute_even(total_cents, split.participant_ids)
        case "shares":
            return distribute_shares(total_cents, split)
        case "exact":
            return distribute_exact(total_cents, split)
    raise SplitError(f"unsupported split type: {split.type!r}")


def distribute_split(amount: Amount, split: SplitInstruction) -> list[ExpenseShare]:
    shares = distribute_split_cents(to_cents(amount), split)
    return [ExpenseShare(participant_id=share.participant_id, amount=from_cents(share.cents)) for share in shares]


def calculate_expense_shares(expense: Expense) -> list[ExpenseShare]:
    return distribute_split(expense.amount, expense.split)


def merge_shares(shares: Iterable[Mapping[ParticipantId, int]]) -> dict[ParticipantId, int]:
    result: dict[ParticipantId, int] = {}
    for share in shares:
        for participant_id, amount in share.items():
            result[participant_id] = result.get(participant_id, 0) + amount
    return result
