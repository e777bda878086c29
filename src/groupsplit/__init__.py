from groupsplit.services.adjust import spread_difference_even, spread_difference_proportional
from groupsplit.services.balances import aggregate_balances
from groupsplit.services.participants import (
    dangling_participant_ids,
    participant_expenses,
    referenced_participant_ids,
)
from groupsplit.services.receipt import allocate_receipt_items, receipt_exact_split, receipt_line_items
from groupsplit.services.settlement import apply_settlements, suggest_settlements
from groupsplit.services.split import SplitError, distribute_split
from groupsplit.services.summary import describe_split, format_balance_table
from groupsplit.services.tracking import outstanding_settlements, settlement_progress
from groupsplit.utils.parse import load_event, load_receipt_items, parse_amount, parse_receipt_text

__all__ = [
    "SplitError",
    "aggregate_balances",
    "allocate_receipt_items",
    "apply_settlements",
    "dangling_participant_ids",
    "describe_split",
    "distribute_split",
    "format_balance_table",
    "load_event",
    "load_receipt_items",
    "outstanding_settlements",
    "parse_amount",
    "parse_receipt_text",
    "participant_expenses",
    "receipt_exact_split",
    "receipt_line_items",
    "referenced_participant_ids",
    "settlement_progress",
    "spread_difference_even",
    "spread_difference_proportional",
    "suggest_settlements",
]
