"""
Reason -- Human-readable reason a penalty was raised.

Responsibility:
    Defines the ReasonProvider capability and the default policy used for all
    three regimes.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Rules (DefaultReasonProvider):
    - Non-invoice lines (costs, adjustments) have no reason: ''.
    - Invoice lines raised under the late filing company code always read
      LATE_FILING_PENALTY_REASON, whatever the subtype.
    - Other invoice lines use the first matching subtype in the reason
      table, falling back to PENALTY_REASON.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from penalty_kernel.domain.ledger import LedgerLine
from penalty_kernel.domain.reference import PenaltySubtypeReasonTable
from penalty_kernel.domain.regime import Regime, is_invoice

LATE_FILING_PENALTY_REASON = "Late filing of accounts"
PENALTY_REASON = "Penalty"


@runtime_checkable
class ReasonProvider(Protocol):
    """Protocol for resolving the reason text of a ledger line."""

    def get_reason(self, line: LedgerLine) -> str:
        ...


class DefaultReasonProvider:
    """ReasonProvider driven by the company code and the subtype reason table."""

    def __init__(self, reason_table: PenaltySubtypeReasonTable | None = None):
        self._reason_table = reason_table or PenaltySubtypeReasonTable()

    def get_reason(self, line: LedgerLine) -> str:
        if not is_invoice(line.transaction_type):
            return ""
        if line.company_code == Regime.LATE_FILING.company_code:
            return LATE_FILING_PENALTY_REASON
        return self._reason_table.lookup(line.transaction_subtype) or PENALTY_REASON
