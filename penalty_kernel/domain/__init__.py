"""
Pure domain layer.

This module contains the immutable data model and the classification
pipeline with NO dependencies on:
- HTTP transport
- Persistence
- The finance ledger client
- Configuration file I/O

All domain objects are immutable; every function is deterministic apart
from the integrity token generator.
"""

from penalty_kernel.domain.classifier import (
    ClassifiedLine,
    LineClassification,
    classify_line,
)
from penalty_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from penalty_kernel.domain.dunning import is_dca, normalize_dunning_status
from penalty_kernel.domain.eligibility import filter_allowed_lines
from penalty_kernel.domain.integrity import (
    EtagGenerator,
    IntegrityStamper,
    TokenGenerator,
)
from penalty_kernel.domain.ledger import CustomerAccountSnapshot, LedgerLine
from penalty_kernel.domain.payable_status import (
    DefaultPayableStatusProvider,
    PayableStatusProvider,
)
from penalty_kernel.domain.reason import (
    LATE_FILING_PENALTY_REASON,
    PENALTY_REASON,
    DefaultReasonProvider,
    ReasonProvider,
)
from penalty_kernel.domain.reference import (
    AllowedTransactionRegistry,
    PenaltyReasonEntry,
    PenaltyReferenceData,
    PenaltySubtypeReasonTable,
    PenaltyType,
    RegimeDescriptor,
)
from penalty_kernel.domain.regime import Regime
from penalty_kernel.domain.transaction_list import (
    ChargeCategory,
    PayableStatus,
    TransactionList,
    TransactionListItem,
)
from penalty_kernel.domain.transaction_list_builder import (
    TransactionListItemEnrichmentProviders,
    generate_transaction_list,
)

__all__ = [
    # Inputs
    "LedgerLine",
    "CustomerAccountSnapshot",
    # Reference data
    "Regime",
    "AllowedTransactionRegistry",
    "RegimeDescriptor",
    "PenaltyType",
    "PenaltyReasonEntry",
    "PenaltySubtypeReasonTable",
    "PenaltyReferenceData",
    # Output
    "ChargeCategory",
    "PayableStatus",
    "TransactionListItem",
    "TransactionList",
    # Pipeline
    "filter_allowed_lines",
    "classify_line",
    "LineClassification",
    "ClassifiedLine",
    "is_dca",
    "normalize_dunning_status",
    "ReasonProvider",
    "DefaultReasonProvider",
    "LATE_FILING_PENALTY_REASON",
    "PENALTY_REASON",
    "PayableStatusProvider",
    "DefaultPayableStatusProvider",
    "TokenGenerator",
    "EtagGenerator",
    "IntegrityStamper",
    "TransactionListItemEnrichmentProviders",
    "generate_transaction_list",
    # Clock
    "Clock",
    "SystemClock",
    "DeterministicClock",
]
