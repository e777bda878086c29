from __future__ import annotations

from typing import Mapping, Optional, Sequence

from groupsplit.logging import get_logger
from groupsplit.models import (
    ExactAllocation,
    ExactSplit,
    ParsedReceipt,
    ParticipantId,
    ReceiptAllocationSummary,
    ReceiptLineItem,
)
from groupsplit.money import from_cents, to_cents
from groupsplit.services.split import distribute_even, merge_shares

log = get_logger(__name__)


def allocate_receipt_items(items: Sequence[ReceiptLineItem]) -> ReceiptAllocationSummary:
    """Split each line item evenly over its assigned participants.

    Items without assignees are reported in ``unassigned_item_ids`` and still
    count towards ``total``, so ``total`` can exceed the per-participant sum.
    """
    per_item: list[dict[ParticipantId, int]] = []
    unassigned_item_ids: list[str] = []
    total_cents = 0

    for item in items:
        item_cents = to_cents(item.amount)
        total_cents += item_cents
        if not item.assigned_participant_ids:
            unassigned_item_ids.append(item.id)
            continue

        shares: dict[ParticipantId, int] = {}
        for share in distribute_even(item_cents, item.assigned_participant_ids):
            shares[share.participant_id] = shares.get(share.participant_id, 0) + share.cents
        per_item.append(shares)

    per_participant = {
        participant_id: from_cents(cents) for participant_id, cents in merge_shares(per_item).items()
    }

    if unassigned_item_ids:
        log.info("receipt.unassigned_items", count=len(unassigned_item_ids))
    log.debug("receipt.allocated", items=len(items), participants=len(per_participant))

    return ReceiptAllocationSummary(
        per_participant=per_participant,
        unassigned_item_ids=unassigned_item_ids,
        total=from_cents(total_cents),
    )


def receipt_line_items(
    parsed: ParsedReceipt,
    assignments: Optional[Mapping[str, Sequence[ParticipantId]]] = None,
) -> list[ReceiptLineItem]:
    """Turn a parsed receipt into line items, with tax and tip as items of their own."""
    assignments = assignments or {}
    items = [
        ReceiptLineItem(
            id=item.id,
            description=item.description,
            amount=item.amount,
            assigned_participant_ids=tuple(assignments.get(item.id, ())),
        )
        for item in parsed.items
    ]
    if parsed.tax is not None and parsed.tax > 0:
        items.append(
            ReceiptLineItem(
                id="receipt_tax",
                description="Tax",
                amount=parsed.tax,
                assigned_participant_ids=tuple(assignments.get("receipt_tax", ())),
            )
        )
    if parsed.tip is not None and parsed.tip > 0:
        items.append(
            ReceiptLineItem(
                id="receipt_tip",
                description="Tip",
                amount=parsed.tip,
                assigned_participant_ids=tuple(assignments.get("receipt_tip", ())),
            )
        )
    return items


def receipt_exact_split(summary: ReceiptAllocationSummary) -> ExactSplit:
    if summary.unassigned_item_ids:
        raise ValueError(f"assign every item before applying: {', '.join(summary.unassigned_item_ids)}")
    if not summary.per_participant:
        raise ValueError("receipt has no assigned items")
    return ExactSplit(
        allocations=tuple(
            ExactAllocation(participant_id=participant_id, amount=amount)
            for participant_id, amount in summary.per_participant.items()
        )
    )
