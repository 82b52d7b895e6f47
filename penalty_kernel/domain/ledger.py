"""
Ledger -- Immutable inputs read from the external finance ledger.

Responsibility:
    Defines LedgerLine (one raw outstanding charge) and
    CustomerAccountSnapshot (a customer's ordered lines at a point in time).
    Both are produced by the ledger collaborator and never mutated here.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Invariants enforced:
    - Amounts are Decimal, never float.
    - Snapshot lines are held as a tuple so input ordering is preserved.

Failure modes:
    - ValueError / decimal.InvalidOperation from ``from_dict`` when an amount
      or date cannot be parsed, or an amount is infinite or NaN.  Text
      fields are taken as-is (padding kept).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any


def _parse_amount(value: Any) -> Decimal:
    if value is None or value == "":
        return Decimal("0")
    # str() first so floats from JSON keep their printed value
    amount = value if isinstance(value, Decimal) else Decimal(str(value))
    if not amount.is_finite():
        raise ValueError(f"Amount must be finite, got {value!r}")
    return amount


def _parse_date(value: Any) -> date | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value.strip()[:10])
    raise ValueError(f"Cannot parse date from {value!r}")


def _parse_datetime(value: Any) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    raise ValueError(f"Cannot parse datetime from {value!r}")


@dataclass(frozen=True)
class LedgerLine:
    """One outstanding charge or penalty on a customer's finance account."""

    company_code: str
    ledger_code: str
    customer_code: str
    transaction_reference: str
    transaction_date: date | None
    made_up_date: date | None
    due_date: date | None
    amount: Decimal
    outstanding_amount: Decimal
    is_paid: bool
    transaction_type: str
    transaction_subtype: str
    type_description: str = ""
    account_status: str = ""
    dunning_status: str = ""  # fixed width, right padded in source data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LedgerLine:
        """Build a line from the ledger client's JSON representation."""
        subtype = data.get("transaction_subtype", data.get("transaction_sub_type", ""))
        return cls(
            company_code=data.get("company_code", ""),
            ledger_code=data.get("ledger_code", ""),
            customer_code=data.get("customer_code", ""),
            transaction_reference=data.get("transaction_reference", ""),
            transaction_date=_parse_date(data.get("transaction_date")),
            made_up_date=_parse_date(data.get("made_up_date")),
            due_date=_parse_date(data.get("due_date")),
            amount=_parse_amount(data.get("amount")),
            outstanding_amount=_parse_amount(data.get("outstanding_amount")),
            is_paid=bool(data.get("is_paid", False)),
            transaction_type=str(data.get("transaction_type", "")),
            transaction_subtype=str(subtype or ""),
            type_description=data.get("type_description", "") or "",
            account_status=data.get("account_status", "") or "",
            dunning_status=data.get("dunning_status", "") or "",
        )


@dataclass(frozen=True)
class CustomerAccountSnapshot:
    """A customer's ledger lines as returned by the finance ledger."""

    customer_code: str
    company_code: str
    created_at: datetime | None = None
    lines: tuple[LedgerLine, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not isinstance(self.lines, tuple):
            object.__setattr__(self, "lines", tuple(self.lines))

    def __len__(self) -> int:
        return len(self.lines)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CustomerAccountSnapshot:
        """Build a snapshot from the ledger client's JSON representation."""
        raw_lines = data.get("lines")
        if raw_lines is None:
            raw_lines = data.get("account_penalties", [])
        return cls(
            customer_code=data.get("customer_code", ""),
            company_code=data.get("company_code", ""),
            created_at=_parse_datetime(data.get("created_at")),
            lines=tuple(LedgerLine.from_dict(line) for line in raw_lines),
        )
