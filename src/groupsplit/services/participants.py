from __future__ import annotations

from typing import Iterable

from groupsplit.models import Event, Expense, ParticipantId


def split_participant_ids(expense: Expense) -> list[ParticipantId]:
    split = expense.split
    match split.type:
        case "even":
            return list(split.participant_ids)
        case "shares":
            return [share.participant_id for share in split.shares]
        case "exact":
            return [allocation.participant_id for allocation in split.allocations]
    return []


def referenced_participant_ids(expense: Expense) -> list[ParticipantId]:
    ids = [allocation.participant_id for allocation in expense.paid_by]
    ids.extend(split_participant_ids(expense))
    return list(dict.fromkeys(ids))


def participant_expenses(participant_id: ParticipantId, events: Iterable[Event]) -> list[Expense]:
    return [
        expense
        for event in events
        for expense in event.expenses
        if participant_id in referenced_participant_ids(expense)
    ]


def dangling_participant_ids(event: Event) -> list[ParticipantId]:
    """Ids that expenses still reference but the event no longer lists."""
    known = {participant.id for participant in event.participants}
    dangling: list[ParticipantId] = []
    for expense in event.expenses:
        for participant_id in referenced_participant_ids(expense):
            if participant_id not in known and participant_id not in dangling:
                dangling.append(participant_id)
    return dangling
