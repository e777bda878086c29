from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Mapping

from groupsplit.models import EventBalanceSummary, Expense, Participant, ParticipantId, Settlement
from groupsplit.money import quantize

UNKNOWN_NAME = "Unknown"


def format_money(amount: Decimal, currency: str) -> str:
    return f"{quantize(amount):,.2f} {currency}"


def _name(participants: Mapping[ParticipantId, Participant], participant_id: ParticipantId) -> str:
    participant = participants.get(participant_id)
    return participant.name if participant else UNKNOWN_NAME


def describe_split(expense: Expense, participants: Mapping[ParticipantId, Participant]) -> str:
    split = expense.split
    match split.type:
        case "even":
            names = ", ".join(_name(participants, pid) for pid in split.participant_ids)
            return f"Even split · {len(split.participant_ids)} participants ({names})"
        case "shares":
            total_weight = sum((share.weight for share in split.shares), Decimal("0"))
            details = []
            for share in split.shares:
                percentage = share.weight / total_weight * 100 if total_weight > 0 else Decimal("0")
                percentage = percentage.quantize(Decimal("1"), rounding=ROUND_HALF_UP)
                details.append(f"{_name(participants, share.participant_id)} ({percentage}%)")
            return f"Weighted shares · {len(split.shares)} participants ({', '.join(details)})"
        case "exact":
            details = [
                f"{_name(participants, a.participant_id)} ({format_money(a.amount, expense.currency)})"
                for a in split.allocations
            ]
            return f"Exact amounts · {len(split.allocations)} participants ({', '.join(details)})"
    return "Custom split"


def format_balance_table(
    summary: EventBalanceSummary,
    participants: Mapping[ParticipantId, Participant],
    currency: str,
    settlements: list[Settlement] | None = None,
) -> str:
    people = "person" if summary.totals.participants == 1 else "people"
    lines = [f"{summary.totals.participants} {people} · {format_money(summary.totals.expenses, currency)} total spend"]
    for balance in summary.balances:
        lines.append(
            f"{_name(participants, balance.participant_id)}: "
            f"paid {format_money(balance.paid, currency)}, "
            f"owes {format_money(balance.owes, currency)}, "
            f"net {format_money(balance.net, currency)}"
        )
    if settlements:
        lines.append("Settlements:")
        for settlement in settlements:
            lines.append(
                f"{_name(participants, settlement.from_id)} → {_name(participants, settlement.to_id)}: "
                f"{format_money(settlement.amount, currency)}"
            )
    return "\n".join(lines)
