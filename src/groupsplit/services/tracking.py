from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Optional, Sequence

from groupsplit.config import get_settings
from groupsplit.models import Settlement, SettlementPayment, SettlementProgress, SettlementTracking
from groupsplit.money import Amount, from_cents, to_cents, to_decimal


def settlement_progress(
    settlement: Settlement,
    payments: Iterable[SettlementPayment],
    tolerance: Optional[Amount] = None,
) -> SettlementProgress:
    tol = get_settings().settlement_tolerance if tolerance is None else to_decimal(tolerance)

    paid_cents = sum(to_cents(payment.amount) for payment in payments)
    total_paid = from_cents(paid_cents)
    remaining = max(Decimal("0.00"), from_cents(to_cents(settlement.amount) - paid_cents))

    return SettlementProgress(
        settlement=settlement,
        total_paid=total_paid,
        remaining=remaining,
        is_complete=total_paid >= settlement.amount - tol,
    )


def outstanding_settlements(
    settlements: Sequence[Settlement],
    tracking: Iterable[SettlementTracking],
    tolerance: Optional[Amount] = None,
) -> list[SettlementProgress]:
    """Progress for every suggested settlement, matched to tracking by ``(from, to)``."""
    by_pair = {(record.from_participant_id, record.to_participant_id): record for record in tracking}

    result: list[SettlementProgress] = []
    for settlement in settlements:
        record = by_pair.get((settlement.from_id, settlement.to_id))
        progress = settlement_progress(settlement, record.payments if record else (), tolerance)
        if record is not None and record.marked_complete:
            progress.is_complete = True
        result.append(progress)
    return result
