"""
Configuration Validator (``penalty_config.validator``).

Responsibility
--------------
Validates a ``PenaltyConfigurationSet`` before it is compiled, so that the
kernel never sees a regime without a descriptor or allow-list.

Invariants enforced
-------------------
* Every supported regime has a descriptor and an allow-list entry set.
* Every regime key and penalty type row names a supported regime.
* Every descriptor penalty subtype is allowed somewhere in that regime's
  allow-list (otherwise it could never be classified as a penalty).

Warnings (do not block compilation)
-----------------------------------
* Reason rows for the late filing regime, which always uses a fixed reason.
* Duplicate reason subtypes; only the first row is used.

Failure modes
-------------
* ``ConfigValidationResult.errors`` non-empty -> configuration MUST NOT be
  compiled.  ``penalty_config.load_reference_data`` raises
  ``ConfigValidationError`` in that case.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from penalty_config.schema import PenaltyConfigurationSet
from penalty_kernel.domain.regime import Regime
from penalty_kernel.exceptions import ConfigurationError

_REGIME_IDS = frozenset(r.value for r in Regime)


@dataclass
class ConfigValidationResult:
    """
    Result of configuration validation.

    ``is_valid`` returns ``True`` only when ``errors`` is empty.
    """

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def add_error(self, msg: str) -> None:
        self.errors.append(msg)

    def add_warning(self, msg: str) -> None:
        self.warnings.append(msg)


class ConfigValidationError(ConfigurationError):
    """Configuration failed validation and was not compiled."""

    code: str = "CONFIG_VALIDATION_FAILED"

    def __init__(self, config_id: str, errors: list[str]):
        self.config_id = config_id
        self.errors = list(errors)
        super().__init__(
            f"Configuration validation failed for '{config_id}':\n"
            + "\n".join(f"  - {e}" for e in errors)
        )


def validate_configuration(config: PenaltyConfigurationSet) -> ConfigValidationResult:
    """Validate a configuration set."""
    result = ConfigValidationResult()

    _validate_regime_keys(config, result)
    _validate_regime_coverage(config, result)
    _validate_penalty_subtypes_allowed(config, result)
    _validate_penalty_types(config, result)

    return result


def _validate_regime_keys(config: PenaltyConfigurationSet, result: ConfigValidationResult) -> None:
    for details in config.penalty_details:
        if details.regime not in _REGIME_IDS:
            result.add_error(f"penalty_details: unknown regime '{details.regime}'")
    for allowed in config.allowed_transactions:
        if allowed.regime not in _REGIME_IDS:
            result.add_error(f"allowed_transactions: unknown regime '{allowed.regime}'")


def _validate_regime_coverage(config: PenaltyConfigurationSet, result: ConfigValidationResult) -> None:
    for regime in Regime:
        if config.details_for(regime.value) is None:
            result.add_error(f"regime {regime.value} has no penalty details")
        if config.allowed_for(regime.value) is None:
            result.add_error(f"regime {regime.value} has no allowed transactions")


def _validate_penalty_subtypes_allowed(
    config: PenaltyConfigurationSet, result: ConfigValidationResult
) -> None:
    for details in config.penalty_details:
        allowed = config.allowed_for(details.regime)
        if allowed is None:
            continue
        allowed_subtypes = {
            subtype
            for _, subtypes in allowed.types
            for subtype, is_allowed in subtypes
            if is_allowed
        }
        for subtype in details.penalty_subtypes:
            if subtype not in allowed_subtypes:
                result.add_error(
                    f"regime {details.regime}: penalty subtype '{subtype}' "
                    f"is not in its allowed transactions"
                )


def _validate_penalty_types(config: PenaltyConfigurationSet, result: ConfigValidationResult) -> None:
    seen: set[str] = set()
    for row in config.penalty_types:
        if row.regime not in _REGIME_IDS:
            result.add_error(
                f"penalty_types: subtype '{row.transaction_subtype}' has unknown regime '{row.regime}'"
            )
            continue
        if row.regime == Regime.LATE_FILING.value:
            if row.reason:
                result.add_warning(
                    f"penalty_types: reason for late filing subtype "
                    f"'{row.transaction_subtype}' is ignored"
                )
            continue
        if row.transaction_subtype in seen:
            result.add_warning(
                f"penalty_types: duplicate reason subtype '{row.transaction_subtype}'; "
                f"first row wins"
            )
        seen.add(row.transaction_subtype)
