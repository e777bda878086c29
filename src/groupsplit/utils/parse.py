from __future__ import annotations

import re
from decimal import Decimal
from typing import Any, Iterable, Mapping

from pydantic import TypeAdapter

from groupsplit.logging import get_logger
from groupsplit.models import Event, ParsedReceipt, ParsedReceiptItem, ReceiptLineItem
from groupsplit.money import quantize, to_decimal

log = get_logger(__name__)

# trailing amount: 12.50, 12,50, 12, -3.00
AMOUNT_AT_END = re.compile(r"(-?\d+(?:[.,]\d{2})?)\s*$")

SUBTOTAL = re.compile(r"(sub\s*-?\s*total|subtotal)", re.IGNORECASE)
TAX = re.compile(r"(tax|hst|gst|vat)", re.IGNORECASE)
TIP = re.compile(r"(tip|gratuity|service charge)", re.IGNORECASE)
TOTAL = re.compile(r"(total|balance due|amount due|grand total)", re.IGNORECASE)
NOISE = re.compile(r"(table|guest|order|invoice|server|cashier)", re.IGNORECASE)
QUANTITY = re.compile(r"[#\d]+x\s*", re.IGNORECASE)

ITEM_CONFIDENCE = 0.6

_event_adapter = TypeAdapter(Event)
_items_adapter = TypeAdapter(list[ReceiptLineItem])


def parse_amount(value: str) -> Decimal:
    """
    Parse an amount typed by a user.

    Supported formats:
    - 12.50
    - 1,234.50 (commas as thousands separators)
    - -3
    """
    text = value.strip().replace(",", "")
    if not re.fullmatch(r"-?\d+(?:\.\d+)?", text):
        raise ValueError(f"could not parse amount: {value!r}")
    return quantize(to_decimal(text))


def normalise_line(line: str) -> str:
    line = re.sub(r"[^\x20-\x7E]", "", line)
    return re.sub(r"\s+", " ", line).strip()


def parse_receipt_text(raw_text: str) -> ParsedReceipt:
    """
    Split OCR receipt text into line items and summary rows.

    Lines without a trailing amount are skipped. Subtotal, tax, tip and total
    rows fill the summary; every other line becomes an item.
    """
    result = ParsedReceipt(raw_text=raw_text.strip())
    lines = [normalise_line(line) for line in re.split(r"\r?\n", raw_text)]

    for line in lines:
        if not line:
            continue
        match = AMOUNT_AT_END.search(line)
        if not match:
            continue

        # a trailing "12,50" uses the comma as the decimal separator
        amount = quantize(match.group(1).replace(",", "."))
        if abs(amount) < Decimal("0.01"):
            continue

        description = line[: match.start()].strip()

        if NOISE.search(description):
            continue
        if SUBTOTAL.search(description):
            result.subtotal = amount
            continue
        if TAX.search(description):
            result.tax = (result.tax or Decimal("0")) + amount
            continue
        if TIP.search(description):
            result.tip = (result.tip or Decimal("0")) + amount
            continue
        if TOTAL.search(description):
            result.total = amount
            continue

        description = QUANTITY.sub("", description, count=1).strip()
        result.items.append(
            ParsedReceiptItem(
                id=f"receipt_item_{len(result.items) + 1}",
                description=description or f"Item {len(result.items) + 1}",
                amount=amount,
                confidence=ITEM_CONFIDENCE,
                source_line=line,
            )
        )

    if result.total is None and result.items:
        subtotal = sum((item.amount for item in result.items), Decimal("0"))
        result.subtotal = quantize(subtotal)
        result.total = quantize(subtotal + (result.tax or 0) + (result.tip or 0))

    log.debug("receipt.parsed", items=len(result.items), total=str(result.total))
    return result


def load_event(payload: Mapping[str, Any]) -> Event:
    return _event_adapter.validate_python(payload)


def load_receipt_items(payload: Iterable[Mapping[str, Any]]) -> list[ReceiptLineItem]:
    return _items_adapter.validate_python(list(payload))
