"""
Typed Exception Hierarchy for the Penalty Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Callers of the kernel (an HTTP handler, a batch job) need to map failures to
responses without parsing message strings:

  - Every error has a TYPED exception class (catch by type, not message)
  - Every exception has a CODE attribute (machine-readable, API-safe)
  - Exceptions carry structured DATA (not just a message string)

Example:
    try:
        transaction_list = service.generate(snapshot, Regime.SANCTIONS)
    except ConfigurationMissingError as e:
        log.error(f"No {e.component} loaded for {e.regime}")
        api_response(code=e.code, regime=e.regime)
    except TokenGenerationFailedError as e:
        api_response(code=e.code, status=500)

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

All exceptions inherit from PenaltyKernelError:

    PenaltyKernelError (base)
    |
    +-- ConfigurationError
    |   +-- ConfigurationMissingError
    |   +-- InvalidConfigurationTypeError
    |
    +-- RegimeError
    |   +-- UnknownRegimeError
    |
    +-- TransactionListError
        +-- TokenGenerationFailedError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category         | Code                        | When Raised
-----------------|-----------------------------|-----------------------------------------
Configuration    | CONFIGURATION_MISSING       | Regime has no descriptor / allow-list
                 | INVALID_CONFIGURATION_TYPE  | Unknown configuration view requested
-----------------|-----------------------------|-----------------------------------------
Regime           | UNKNOWN_REGIME              | Value does not name a supported regime
-----------------|-----------------------------|-----------------------------------------
Transaction list | TOKEN_GENERATION_FAILED     | Integrity token generator failed

===============================================================================
WHAT IS NOT AN ERROR
===============================================================================

Malformed upstream ledger data never raises. Unknown subtypes degrade to the
"other" category, unknown dunning text degrades to non-DCA, and lines absent
from the allow-list are dropped.
"""


class PenaltyKernelError(Exception):
    """
    Base exception for all penalty kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "PENALTY_KERNEL_ERROR"


# Configuration exceptions


class ConfigurationError(PenaltyKernelError):
    """Base exception for reference configuration errors."""

    code: str = "CONFIGURATION_ERROR"


class ConfigurationMissingError(ConfigurationError):
    """
    Reference data required for a regime is not loaded.

    Fatal to the call: no partial transaction list is produced.
    """

    code: str = "CONFIGURATION_MISSING"

    def __init__(self, regime: str, component: str):
        self.regime = regime
        self.component = component
        super().__init__(f"No {component} configured for regime {regime}")


class InvalidConfigurationTypeError(ConfigurationError):
    """Requested configuration view does not exist."""

    code: str = "INVALID_CONFIGURATION_TYPE"

    def __init__(self, config_type: str, supported: tuple[str, ...] = ()):
        self.config_type = config_type
        self.supported = supported
        msg = f"invalid configuration type supplied: {config_type!r}"
        if supported:
            msg += f" (expected one of: {', '.join(supported)})"
        super().__init__(msg)


# Regime exceptions


class RegimeError(PenaltyKernelError):
    """Base exception for regime resolution errors."""

    code: str = "REGIME_ERROR"


class UnknownRegimeError(RegimeError):
    """Value does not identify one of the supported regimes."""

    code: str = "UNKNOWN_REGIME"

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Unknown penalty regime: {value!r}")


# Transaction list exceptions


class TransactionListError(PenaltyKernelError):
    """Base exception for transaction list generation errors."""

    code: str = "TRANSACTION_LIST_ERROR"


class TokenGenerationFailedError(TransactionListError):
    """
    The integrity token generator failed.

    Generation is fail-fast: the first failing call aborts the whole
    transaction list and any items already built are discarded.
    """

    code: str = "TOKEN_GENERATION_FAILED"

    def __init__(self, call_number: int, cause: BaseException):
        self.call_number = call_number
        self.cause = cause
        super().__init__(f"error generating etag (call {call_number}): {cause}")
