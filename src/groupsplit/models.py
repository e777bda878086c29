from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from groupsplit.money import to_decimal

ParticipantId = str

Money = Annotated[Decimal, BeforeValidator(to_decimal)]


class Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class Participant(Frozen):
    id: ParticipantId
    name: str
    color: Optional[str] = None
    archived: bool = False


class PayerAllocation(Frozen):
    participant_id: ParticipantId
    amount: Money


class EvenSplit(Frozen):
    type: Literal["even"] = "even"
    participant_ids: tuple[ParticipantId, ...]


class ShareWeight(Frozen):
    participant_id: ParticipantId
    weight: Money


class SharesSplit(Frozen):
    type: Literal["shares"] = "shares"
    shares: tuple[ShareWeight, ...]


class ExactAllocation(Frozen):
    participant_id: ParticipantId
    amount: Money


class ExactSplit(Frozen):
    type: Literal["exact"] = "exact"
    allocations: tuple[ExactAllocation, ...]


SplitInstruction = Annotated[Union[EvenSplit, SharesSplit, ExactSplit], Field(discriminator="type")]


class Expense(Frozen):
    id: str
    description: str = ""
    amount: Money
    currency: str = "USD"
    category: Optional[str] = None
    notes: Optional[str] = None
    paid_by: tuple[PayerAllocation, ...] = ()
    split: SplitInstruction


class Event(Frozen):
    id: str
    name: str
    currency: str = "USD"
    participants: tuple[Participant, ...] = ()
    expenses: tuple[Expense, ...] = ()

    @model_validator(mode="after")
    def _unique_participant_ids(self) -> "Event":
        seen: set[str] = set()
        for participant in self.participants:
            if participant.id in seen:
                raise ValueError(f"duplicate participant id: {participant.id}")
            seen.add(participant.id)
        return self


class ReceiptLineItem(Frozen):
    id: str
    description: str = ""
    amount: Money
    assigned_participant_ids: tuple[ParticipantId, ...] = ()


class SettlementPayment(Frozen):
    id: str
    amount: Money
    paid_at: Optional[datetime] = None


class SettlementTracking(Frozen):
    from_participant_id: ParticipantId
    to_participant_id: ParticipantId
    payments: tuple[SettlementPayment, ...] = ()
    marked_complete: bool = False


@dataclass(slots=True)
class ShareCents:
    participant_id: ParticipantId
    cents: int


@dataclass(slots=True)
class ExpenseShare:
    participant_id: ParticipantId
    amount: Decimal


@dataclass(slots=True)
class ParticipantBalance:
    participant_id: ParticipantId
    paid: Decimal
    owes: Decimal
    net: Decimal


@dataclass(slots=True)
class BalanceTotals:
    participants: int
    expenses: Decimal


@dataclass(slots=True)
class EventBalanceSummary:
    totals: BalanceTotals
    balances: list[ParticipantBalance]


@dataclass(slots=True)
class Settlement:
    from_id: ParticipantId
    to_id: ParticipantId
    amount: Decimal


@dataclass(slots=True)
class SettlementProgress:
    settlement: Settlement
    total_paid: Decimal
    remaining: Decimal
    is_complete: bool


@dataclass(slots=True)
class ReceiptAllocationSummary:
    per_participant: dict[ParticipantId, Decimal]
    unassigned_item_ids: list[str]
    total: Decimal


@dataclass(slots=True)
class ParsedReceiptItem:
    id: str
    description: str
    amount: Decimal
    confidence: float
    source_line: str


@dataclass(slots=True)
class ParsedReceipt:
    raw_text: str
    items: list[ParsedReceiptItem] = field(default_factory=list)
    subtotal: Optional[Decimal] = None
    tax: Optional[Decimal] = None
    tip: Optional[Decimal] = None
    total: Optional[Decimal] = None
