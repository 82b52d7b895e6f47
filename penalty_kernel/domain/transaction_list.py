"""
TransactionList -- Normalized output of the penalty kernel.

Responsibility:
    Defines the output records (TransactionListItem, TransactionList) and the
    category / payable status enums that describe each line.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Invariants enforced:
    - Items are held in a tuple, index-aligned with the surviving input lines.
    - Records are frozen; a list is built fresh per call and carries no
      identity beyond it.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum, unique
from typing import Any


@unique
class ChargeCategory(str, Enum):
    """What a ledger line charges for."""

    PENALTY = "penalty"
    OTHER = "other"  # incidental costs and fees


@unique
class PayableStatus(str, Enum):
    """Whether a line can be paid on its own online."""

    OPEN = "open"
    CLOSED = "closed"


def _amount_to_json(value: Decimal) -> int | float:
    # Whole amounts serialize as integers (250 rather than 250.0)
    if value == value.to_integral_value():
        return int(value)
    return float(value)


def _date_to_json(value: date | None) -> str | None:
    return value.isoformat() if value is not None else None


@dataclass(frozen=True)
class TransactionListItem:
    id: str
    etag: str
    kind: str
    is_paid: bool
    is_dca: bool
    due_date: date | None
    made_up_date: date | None
    transaction_date: date | None
    original_amount: Decimal
    outstanding: Decimal
    type: ChargeCategory
    reason: str
    payable_status: PayableStatus

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "etag": self.etag,
            "kind": self.kind,
            "is_paid": self.is_paid,
            "is_dca": self.is_dca,
            "due_date": _date_to_json(self.due_date),
            "made_up_date": _date_to_json(self.made_up_date),
            "transaction_date": _date_to_json(self.transaction_date),
            "original_amount": _amount_to_json(self.original_amount),
            "outstanding": _amount_to_json(self.outstanding),
            "type": self.type.value,
            "reason": self.reason,
            "payable_status": self.payable_status.value,
        }


@dataclass(frozen=True)
class TransactionList:
    """Ordered transaction list items plus an optional list-level token."""

    items: tuple[TransactionListItem, ...]
    etag: str | None = None

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    @property
    def total_outstanding(self) -> Decimal:
        return sum((item.outstanding for item in self.items), Decimal("0"))

    def to_dict(self) -> dict[str, Any]:
        return {
            "etag": self.etag,
            "total_results": len(self.items),
            "items": [item.to_dict() for item in self.items],
        }
