"""
Reference data compiler (``penalty_config.compiler``).

Responsibility:
    Turns a validated ``PenaltyConfigurationSet`` into the frozen
    ``PenaltyReferenceData`` bundle the kernel consumes.

Compilation rules:
    - A subtype is penalty-bearing for a regime when its descriptor lists it
      and it is not disabled, either by a ``disabled: true`` penalty type
      row for that regime or by the ``disabled_subtypes`` argument.
    - The reason table holds the enabled, non-late-filing penalty type rows
      that carry a reason, in file order.

Preconditions:
    ``validate_configuration(config_set).is_valid`` -- the compiler does
    not repeat validation and raises UnknownRegimeError on unknown regimes.
"""

from __future__ import annotations

from collections.abc import Iterable

from penalty_config.schema import PenaltyConfigurationSet
from penalty_kernel.domain.reference import (
    AllowedTransactionRegistry,
    PenaltyReasonEntry,
    PenaltyReferenceData,
    PenaltySubtypeReasonTable,
    PenaltyType,
    RegimeDescriptor,
)
from penalty_kernel.domain.regime import Regime
from penalty_kernel.logging_config import get_logger

logger = get_logger("config.compiler")


def compile_reference_data(
    config_set: PenaltyConfigurationSet,
    disabled_subtypes: Iterable[str] = (),
) -> PenaltyReferenceData:
    """Compile a configuration set into a PenaltyReferenceData bundle."""
    globally_disabled = frozenset(disabled_subtypes)

    penalty_types = tuple(
        PenaltyType(
            transaction_type=row.transaction_type,
            transaction_subtype=row.transaction_subtype,
            regime=Regime.parse(row.regime),
            description=row.description,
            reason=row.reason,
            disabled=row.disabled or row.transaction_subtype in globally_disabled,
        )
        for row in config_set.penalty_types
    )

    descriptors: dict[Regime, RegimeDescriptor] = {}
    for details in config_set.penalty_details:
        regime = Regime.parse(details.regime)
        disabled = globally_disabled | {
            t.transaction_subtype for t in penalty_types
            if t.regime is regime and t.disabled
        }
        descriptors[regime] = RegimeDescriptor(
            regime=regime,
            description=details.description,
            description_id=details.description_id,
            class_of_payment=details.class_of_payment,
            resource_kind=details.resource_kind,
            product_type=details.product_type,
            email_received_app_id=details.email_received_app_id,
            email_msg_type=details.email_msg_type,
            penalty_subtypes=frozenset(details.penalty_subtypes) - disabled,
        )

    reason_table = PenaltySubtypeReasonTable(tuple(
        PenaltyReasonEntry(t.transaction_subtype, t.reason)
        for t in penalty_types
        if t.regime is not Regime.LATE_FILING and not t.disabled and t.reason
    ))

    allowed = AllowedTransactionRegistry.from_mapping(
        {a.regime: a.as_mapping() for a in config_set.allowed_transactions},
        description=config_set.allowed_transactions_description,
    )

    if globally_disabled:
        logger.info(
            "penalty_subtypes_disabled",
            extra={"disabled_subtypes": sorted(globally_disabled)},
        )

    return PenaltyReferenceData(
        config_id=config_set.config_id,
        version=config_set.version,
        checksum=config_set.checksum,
        allowed_transactions=allowed,
        descriptors=descriptors,
        reason_table=reason_table,
        penalty_types=penalty_types,
    )
