"""
ReferenceDataProvider -- holds the live reference data bundle.

Readers call ``current()`` and keep the returned bundle for the whole
request.  ``reload()`` builds a complete new bundle first and swaps it in
under a lock, so a reader never sees a half-loaded configuration and a
failed reload leaves the previous bundle in place.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any

from penalty_kernel.domain.reference import PenaltyReferenceData
from penalty_kernel.exceptions import InvalidConfigurationTypeError
from penalty_kernel.logging_config import get_logger

logger = get_logger("config.provider")

PENALTY_TYPES = "penalty_types"
PENALTY_DETAILS = "penalty_details"
ALLOWED_TRANSACTIONS = "allowed_transactions"

CONFIGURATION_TYPES = (PENALTY_TYPES, PENALTY_DETAILS, ALLOWED_TRANSACTIONS)


class ReferenceDataProvider:
    """Copy-and-swap holder for ``PenaltyReferenceData``."""

    def __init__(
        self,
        loader: Callable[[], PenaltyReferenceData],
        initial: PenaltyReferenceData | None = None,
    ):
        self._loader = loader
        self._lock = threading.Lock()
        self._current = initial if initial is not None else loader()

    def current(self) -> PenaltyReferenceData:
        return self._current

    def reload(self) -> PenaltyReferenceData:
        """Load a fresh bundle and swap it in.

        Loader errors propagate and the previous bundle stays current.
        """
        fresh = self._loader()
        with self._lock:
            previous = self._current
            self._current = fresh
        logger.info(
            "reference_data_reloaded",
            extra={
                "previous_checksum": previous.checksum,
                "checksum": fresh.checksum,
                "changed": previous.checksum != fresh.checksum,
            },
        )
        return fresh

    def describe(self, config_type: str) -> dict[str, Any]:
        """Return a read-only view of one configuration type.

        Raises:
            InvalidConfigurationTypeError: if ``config_type`` is not one of
                ``penalty_types``, ``penalty_details`` or
                ``allowed_transactions``.
        """
        data = self._current
        if config_type == PENALTY_TYPES:
            view: Any = [t.to_dict() for t in data.penalty_types]
        elif config_type == PENALTY_DETAILS:
            view = {
                regime.value: descriptor.to_dict()
                for regime, descriptor in data.descriptors.items()
            }
        elif config_type == ALLOWED_TRANSACTIONS:
            view = data.allowed_transactions.to_dict()
        else:
            raise InvalidConfigurationTypeError(config_type, CONFIGURATION_TYPES)
        return {"type": config_type, "data": view}
