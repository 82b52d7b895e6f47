"""
PayableStatus -- Whether a line may be paid online on its own.

A penalty is only safe to pay in isolation: if anything else is outstanding
on the account (an unpaid cost, a second penalty), or the line is not a real
penalty, is already paid, or is with a debt collection agency, it must be
handled through contact with the issuer instead.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from penalty_kernel.domain.classifier import ClassifiedLine
from penalty_kernel.domain.transaction_list import ChargeCategory, PayableStatus


@runtime_checkable
class PayableStatusProvider(Protocol):
    """Protocol for deciding the payable status of a classified line."""

    def get_payable_status(
        self,
        classified: ClassifiedLine,
        surviving_line_count: int,
    ) -> PayableStatus:
        ...


class DefaultPayableStatusProvider:
    """Open only for a lone, unpaid, non-DCA penalty."""

    def get_payable_status(
        self,
        classified: ClassifiedLine,
        surviving_line_count: int,
    ) -> PayableStatus:
        if (
            not classified.is_paid
            and not classified.is_dca
            and classified.category is ChargeCategory.PENALTY
            and surviving_line_count == 1
        ):
            return PayableStatus.OPEN
        return PayableStatus.CLOSED
