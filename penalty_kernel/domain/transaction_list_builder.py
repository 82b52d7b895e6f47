"""
TransactionListBuilder -- Assembles the transaction list for one account.

Responsibility:
    Runs the pipeline for one customer account snapshot:

        raw lines -> eligibility filter
                  -> classify / reason / DCA (per line, independent)
                  -> payable status (needs the surviving line count)
                  -> integrity tokens
                  -> TransactionList

Architecture position:
    Kernel > Domain -- pure composition, zero I/O.  Reason and payable
    status policies are injected through
    TransactionListItemEnrichmentProviders so regimes can change them
    without touching this module.

Invariants enforced:
    - Items are index-aligned with the surviving input lines.
    - Tokens: one per item in order, then one for the list (``stamp_list``).
    - Fail-fast: a token failure discards every item already built.

Failure modes:
    - ConfigurationMissingError if the descriptor is missing or belongs to
      another regime, or the allow-list has no entries for the regime.
    - TokenGenerationFailedError if any token call fails.
"""

from __future__ import annotations

from dataclasses import dataclass

from penalty_kernel.domain.classifier import ClassifiedLine, classify_line
from penalty_kernel.domain.dunning import is_dca
from penalty_kernel.domain.eligibility import filter_allowed_lines
from penalty_kernel.domain.integrity import EtagGenerator, IntegrityStamper, TokenGenerator
from penalty_kernel.domain.ledger import CustomerAccountSnapshot, LedgerLine
from penalty_kernel.domain.payable_status import (
    DefaultPayableStatusProvider,
    PayableStatusProvider,
)
from penalty_kernel.domain.reason import DefaultReasonProvider, ReasonProvider
from penalty_kernel.domain.reference import (
    AllowedTransactionRegistry,
    PenaltySubtypeReasonTable,
    RegimeDescriptor,
)
from penalty_kernel.domain.regime import Regime
from penalty_kernel.domain.transaction_list import (
    PayableStatus,
    TransactionList,
    TransactionListItem,
)
from penalty_kernel.exceptions import ConfigurationMissingError
from penalty_kernel.logging_config import get_logger

logger = get_logger("domain.transaction_list_builder")


@dataclass(frozen=True)
class TransactionListItemEnrichmentProviders:
    """Policies that enrich each item beyond its raw ledger fields."""

    reason_provider: ReasonProvider
    payable_status_provider: PayableStatusProvider

    @classmethod
    def default(
        cls, reason_table: PenaltySubtypeReasonTable | None = None
    ) -> TransactionListItemEnrichmentProviders:
        return cls(
            reason_provider=DefaultReasonProvider(reason_table),
            payable_status_provider=DefaultPayableStatusProvider(),
        )


def _classify(
    line: LedgerLine,
    descriptor: RegimeDescriptor,
    reason_provider: ReasonProvider,
) -> ClassifiedLine:
    classification = classify_line(line, descriptor)
    return ClassifiedLine(
        line=line,
        category=classification.category,
        kind=classification.kind,
        is_dca=is_dca(line.dunning_status),
        reason=reason_provider.get_reason(line),
    )


def _build_item(
    classified: ClassifiedLine,
    payable_status: PayableStatus,
    etag: str,
) -> TransactionListItem:
    line = classified.line
    return TransactionListItem(
        id=line.transaction_reference,
        etag=etag,
        kind=classified.kind,
        is_paid=line.is_paid,
        is_dca=classified.is_dca,
        due_date=line.due_date,
        made_up_date=line.made_up_date,
        transaction_date=line.transaction_date,
        original_amount=line.amount,
        outstanding=line.outstanding_amount,
        type=classified.category,
        reason=classified.reason,
        payable_status=payable_status,
    )


def generate_transaction_list(
    snapshot: CustomerAccountSnapshot,
    regime: Regime,
    descriptor: RegimeDescriptor | None,
    allowlist: AllowedTransactionRegistry,
    reason_table: PenaltySubtypeReasonTable | None = None,
    *,
    token_generator: TokenGenerator | None = None,
    providers: TransactionListItemEnrichmentProviders | None = None,
    stamp_list: bool = True,
) -> TransactionList:
    """
    Build the normalized transaction list for one account snapshot.

    Args:
        snapshot: The customer's ledger lines, in ledger order.
        regime: The regime the caller is asking about.
        descriptor: The regime's descriptor; None means not configured.
        allowlist: Allowed (type, subtype) codes per regime.
        reason_table: Subtype reasons used by the default reason provider.
        token_generator: Source of integrity tokens (EtagGenerator by default).
        providers: Reason / payable status policies; defaults built from
            ``reason_table``.
        stamp_list: Request one extra token for the list as a whole.

    Returns:
        A fresh TransactionList.

    Raises:
        ConfigurationMissingError: descriptor or allow-list not configured.
        TokenGenerationFailedError: a token call failed; nothing is returned.
    """
    if descriptor is None or descriptor.regime is not regime:
        raise ConfigurationMissingError(regime.value, "penalty details")

    providers = providers or TransactionListItemEnrichmentProviders.default(reason_table)
    stamper = IntegrityStamper(token_generator or EtagGenerator())

    lines = filter_allowed_lines(snapshot, regime, allowlist)
    classified = [
        _classify(line, descriptor, providers.reason_provider) for line in lines
    ]

    items: list[TransactionListItem] = []
    for entry in classified:
        status = providers.payable_status_provider.get_payable_status(entry, len(lines))
        items.append(_build_item(entry, status, stamper.stamp()))

    list_etag = stamper.stamp() if stamp_list else None

    logger.info(
        "PENALTY_TRANSACTION_LIST_TRACE",
        extra={
            "trace_type": "PENALTY_TRANSACTION_LIST_TRACE",
            "regime": regime.value,
            "input_lines": len(snapshot.lines),
            "surviving_lines": len(lines),
            "open_items": sum(1 for i in items if i.payable_status is PayableStatus.OPEN),
            "token_calls": stamper.calls,
        },
    )
    return TransactionList(items=tuple(items), etag=list_etag)
