"""
Classifier -- Penalty / other categorisation of a ledger line.

A line is a penalty when its subtype is one of the regime's penalty subtypes;
every other allowed line is an incidental cost ("other").  Unknown subtypes
never raise.
"""

from __future__ import annotations

from dataclasses import dataclass

from penalty_kernel.domain.ledger import LedgerLine
from penalty_kernel.domain.reference import RegimeDescriptor
from penalty_kernel.domain.transaction_list import ChargeCategory


@dataclass(frozen=True)
class LineClassification:
    category: ChargeCategory
    kind: str


@dataclass(frozen=True)
class ClassifiedLine:
    """A surviving ledger line with everything derived from it alone."""

    line: LedgerLine
    category: ChargeCategory
    kind: str
    is_dca: bool
    reason: str

    @property
    def is_paid(self) -> bool:
        return self.line.is_paid


def categorize(line: LedgerLine, descriptor: RegimeDescriptor) -> ChargeCategory:
    if descriptor.is_penalty_subtype(line.transaction_subtype):
        return ChargeCategory.PENALTY
    return ChargeCategory.OTHER


def classify_line(line: LedgerLine, descriptor: RegimeDescriptor) -> LineClassification:
    return LineClassification(
        category=categorize(line, descriptor),
        kind=descriptor.resource_kind,
    )
