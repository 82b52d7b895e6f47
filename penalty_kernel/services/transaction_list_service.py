"""
TransactionListService -- entry point for callers holding reference data.

Responsibility:
    Resolves the regime's descriptor, allow-list and reason table from a
    PenaltyReferenceData bundle and runs ``generate_transaction_list`` with
    request-scoped log context bound.

Architecture position:
    Kernel > Services -- thin imperative shell over the pure domain
    pipeline.  Holds no mutable state; one instance may serve concurrent
    requests as long as the injected token generator is thread-safe.

Failure modes:
    - ConfigurationMissingError if the bundle has no descriptor for the regime.
    - UnknownRegimeError if ``regime`` is a string naming no regime.
    - TokenGenerationFailedError propagated from the builder.
"""

from __future__ import annotations

from penalty_kernel.domain.integrity import EtagGenerator, TokenGenerator
from penalty_kernel.domain.ledger import CustomerAccountSnapshot
from penalty_kernel.domain.reference import PenaltyReferenceData
from penalty_kernel.domain.regime import Regime
from penalty_kernel.domain.transaction_list import TransactionList
from penalty_kernel.domain.transaction_list_builder import (
    TransactionListItemEnrichmentProviders,
    generate_transaction_list,
)
from penalty_kernel.exceptions import ConfigurationMissingError
from penalty_kernel.logging_config import LogContext, get_logger

logger = get_logger("services.transaction_list")


class TransactionListService:
    """
    Generates transaction lists against one reference data bundle.

    Contract:
        The bundle is read, never modified.  To pick up reloaded
        configuration, build a new service from the provider's current
        bundle.
    """

    def __init__(
        self,
        reference_data: PenaltyReferenceData,
        token_generator: TokenGenerator | None = None,
        providers: TransactionListItemEnrichmentProviders | None = None,
        stamp_list: bool = True,
    ):
        self._reference_data = reference_data
        self._token_generator = token_generator or EtagGenerator()
        self._providers = providers or TransactionListItemEnrichmentProviders.default(
            reference_data.reason_table
        )
        self._stamp_list = stamp_list

    @property
    def reference_data(self) -> PenaltyReferenceData:
        return self._reference_data

    def generate(
        self,
        snapshot: CustomerAccountSnapshot,
        regime: Regime | str,
    ) -> TransactionList:
        regime = Regime.parse(regime)
        descriptor = self._reference_data.descriptor_for(regime)
        if descriptor is None:
            raise ConfigurationMissingError(regime.value, "penalty details")

        with LogContext.bind(
            customer_code=snapshot.customer_code,
            company_code=snapshot.company_code,
            regime=regime.value,
        ):
            logger.debug(
                "transaction_list_requested",
                extra={
                    "config_id": self._reference_data.config_id,
                    "line_count": len(snapshot.lines),
                },
            )
            return generate_transaction_list(
                snapshot,
                regime,
                descriptor,
                self._reference_data.allowed_transactions,
                self._reference_data.reason_table,
                token_generator=self._token_generator,
                providers=self._providers,
                stamp_list=self._stamp_list,
            )
