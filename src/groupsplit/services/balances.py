from __future__ import annotations

from groupsplit.logging import get_logger
from groupsplit.models import BalanceTotals, Event, EventBalanceSummary, ParticipantBalance, ParticipantId
from groupsplit.money import from_cents, to_cents
from groupsplit.services.split import distribute_split_cents

log = get_logger(__name__)


def aggregate_balances(event: Event) -> EventBalanceSummary:
    """Fold every expense of ``event`` into paid/owes/net per declared participant.

    Accumulation happens in integer cents, so expense order never changes the
    result. Payers and split entries that reference ids outside the event's
    participants are dropped.
    """
    paid: dict[ParticipantId, int] = {participant.id: 0 for participant in event.participants}
    owes: dict[ParticipantId, int] = {participant.id: 0 for participant in event.participants}
    total_cents = 0

    for expense in event.expenses:
        total_cents += to_cents(expense.amount)

        for allocation in expense.paid_by:
            if allocation.participant_id not in paid:
                log.warning(
                    "balances.dangling_reference",
                    event_id=event.id,
                    expense_id=expense.id,
                    participant_id=allocation.participant_id,
                    role="payer",
                )
                continue
            paid[allocation.participant_id] += to_cents(allocation.amount)

        for share in distribute_split_cents(to_cents(expense.amount), expense.split):
            if share.participant_id not in owes:
                log.warning(
                    "balances.dangling_reference",
                    event_id=event.id,
                    expense_id=expense.id,
                    participant_id=share.participant_id,
                    role="split",
                )
                continue
            owes[share.participant_id] += share.cents

    balances = [
        ParticipantBalance(
            participant_id=participant_id,
            paid=from_cents(paid[participant_id]),
            owes=from_cents(owes[participant_id]),
            net=from_cents(paid[participant_id] - owes[participant_id]),
        )
        for participant_id in paid
    ]

    log.debug(
        "balances.aggregated",
        event_id=event.id,
        participants=len(event.participants),
        expenses=len(event.expenses),
    )

    return EventBalanceSummary(
        totals=BalanceTotals(participants=len(event.participants), expenses=from_cents(total_cents)),
        balances=balances,
    )
