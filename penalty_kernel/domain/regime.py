"""
Regime -- Closed set of supported penalty regimes.

Responsibility:
    Names the three penalty regimes the kernel understands and binds each to
    its finance company code and penalty reference prefix.  Also holds the
    fixed ledger codes (invoice transaction type, DCA dunning status) that
    the classification rules compare against.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Failure modes:
    - UnknownRegimeError from ``Regime.parse`` / ``Regime.from_penalty_reference``
      when the value names no regime.

Adding a regime means adding an enum member plus configuration rows
(descriptor, allow-list, penalty types); no subclassing.
"""

from __future__ import annotations

from enum import Enum, unique

from penalty_kernel.exceptions import UnknownRegimeError

# Finance ledger codes
INVOICE_TRANSACTION_TYPE = "1"

DCA_DUNNING_STATUS = "DCA"

LATE_FILING_COMPANY_CODE = "LP"
SANCTIONS_COMPANY_CODE = "C1"

# Legacy route segment that predates the regime identifiers
_LEGACY_ALIASES = {
    "late-filing": "LATE_FILING",
}


@unique
class Regime(str, Enum):
    """Penalty regime identifier."""

    LATE_FILING = "LATE_FILING"
    SANCTIONS = "SANCTIONS"
    SANCTIONS_ROE = "SANCTIONS_ROE"

    @property
    def company_code(self) -> str:
        """Finance company code the regime's ledger lines are raised under."""
        if self is Regime.LATE_FILING:
            return LATE_FILING_COMPANY_CODE
        return SANCTIONS_COMPANY_CODE

    @property
    def reference_prefix(self) -> str:
        """First character of penalty references issued under the regime."""
        return _REFERENCE_PREFIXES[self]

    @classmethod
    def parse(cls, value: str | Regime) -> Regime:
        """
        Resolve a regime from its identifier.

        Accepts enum members, identifiers in any case, and the legacy
        ``late-filing`` route segment.

        Raises:
            UnknownRegimeError: if the value names no regime.
        """
        if isinstance(value, Regime):
            return value
        if not isinstance(value, str):
            raise UnknownRegimeError(repr(value))
        key = value.strip()
        key = _LEGACY_ALIASES.get(key.lower(), key)
        try:
            return cls(key.upper())
        except ValueError:
            raise UnknownRegimeError(value) from None

    @classmethod
    def from_penalty_reference(cls, penalty_reference: str) -> Regime:
        """
        Resolve the regime a penalty reference was issued under.

        Raises:
            UnknownRegimeError: if the reference prefix is not recognised.
        """
        prefix = (penalty_reference or "").strip()[:1].upper()
        for regime, regime_prefix in _REFERENCE_PREFIXES.items():
            if prefix == regime_prefix:
                return regime
        raise UnknownRegimeError(penalty_reference)


_REFERENCE_PREFIXES: dict[Regime, str] = {
    Regime.LATE_FILING: "A",
    Regime.SANCTIONS: "P",
    Regime.SANCTIONS_ROE: "U",
}


def is_invoice(transaction_type: str | None) -> bool:
    """True when the transaction type marks a genuine charge."""
    return transaction_type == INVOICE_TRANSACTION_TYPE
