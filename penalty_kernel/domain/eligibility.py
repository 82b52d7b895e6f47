"""
Eligibility -- Allow-list filtering of raw ledger lines.

Responsibility:
    Keeps only the lines whose (transaction type, subtype) pair is allowed
    for the active regime.  Dropped lines are intentionally unsupported
    legacy codes; dropping them is not an error.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Failure modes:
    - ConfigurationMissingError if the registry has no entries for the regime.
"""

from __future__ import annotations

from penalty_kernel.domain.ledger import CustomerAccountSnapshot, LedgerLine
from penalty_kernel.domain.reference import AllowedTransactionRegistry
from penalty_kernel.domain.regime import Regime
from penalty_kernel.exceptions import ConfigurationMissingError
from penalty_kernel.logging_config import get_logger

logger = get_logger("domain.eligibility")


def filter_allowed_lines(
    snapshot: CustomerAccountSnapshot,
    regime: Regime,
    registry: AllowedTransactionRegistry,
) -> tuple[LedgerLine, ...]:
    """Return the snapshot's allowed lines, in their original order."""
    if not registry.has_regime(regime):
        raise ConfigurationMissingError(regime.value, "allowed transactions")

    allowed: list[LedgerLine] = []
    for line in snapshot.lines:
        if registry.is_allowed(regime, line.transaction_type, line.transaction_subtype):
            allowed.append(line)
        else:
            logger.debug(
                "ledger_line_not_allowed",
                extra={
                    "transaction_reference": line.transaction_reference,
                    "transaction_type": line.transaction_type,
                    "transaction_subtype": line.transaction_subtype,
                },
            )
    return tuple(allowed)
