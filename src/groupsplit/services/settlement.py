from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Optional, Sequence

from groupsplit.config import get_settings
from groupsplit.logging import get_logger
from groupsplit.models import ParticipantBalance, ParticipantId, Settlement
from groupsplit.money import Amount, quantize, to_decimal

log = get_logger(__name__)


def suggest_settlements(
    balances: Sequence[ParticipantBalance],
    tolerance: Optional[Amount] = None,
) -> list[Settlement]:
    """Greedy largest-creditor / largest-debtor matching.

    Nets within ``tolerance`` of zero are treated as settled. Balances are
    expected to sum to roughly zero; if they don't, the walk stops when either
    side runs out and the result is incomplete.
    """
    tol = get_settings().settlement_tolerance if tolerance is None else to_decimal(tolerance)

    creditors: list[tuple[ParticipantId, Decimal]] = []
    debtors: list[tuple[ParticipantId, Decimal]] = []
    imbalance = Decimal("0")

    for balance in balances:
        net = quantize(balance.net)
        imbalance += net
        if net > tol:
            creditors.append((balance.participant_id, net))
        elif net < -tol:
            debtors.append((balance.participant_id, net))

    creditors.sort(key=lambda x: x[1], reverse=True)
    debtors.sort(key=lambda x: x[1])

    if abs(imbalance) > tol:
        log.debug("settlement.imbalanced_input", imbalance=str(imbalance))

    settlements: list[Settlement] = []
    i, j = 0, 0

    while i < len(creditors) and j < len(debtors):
        cred_id, cred_amount = creditors[i]
        debt_id, debt_amount = debtors[j]

        amount = quantize(min(cred_amount, -debt_amount))
        settlements.append(Settlement(from_id=debt_id, to_id=cred_id, amount=amount))

        cred_amount = quantize(cred_amount - amount)
        debt_amount = quantize(debt_amount + amount)
        creditors[i] = (cred_id, cred_amount)
        debtors[j] = (debt_id, debt_amount)

        if cred_amount <= tol:
            i += 1
        if abs(debt_amount) <= tol:
            j += 1

    log.debug("settlement.suggested", creditors=len(creditors), debtors=len(debtors), settlements=len(settlements))
    return settlements


def apply_settlements(
    balances: Iterable[ParticipantBalance],
    settlements: Iterable[Settlement],
) -> dict[ParticipantId, Decimal]:
    after = {balance.participant_id: balance.net for balance in balances}
    for settlement in settlements:
        after[settlement.from_id] = after.get(settlement.from_id, Decimal("0")) + settlement.amount
        after[settlement.to_id] = after.get(settlement.to_id, Decimal("0")) - settlement.amount
    return after
