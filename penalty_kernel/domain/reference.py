"""
Reference -- Immutable reference data consulted during classification.

Responsibility:
    Holds the per-regime allow-list of (transaction type, subtype) codes, the
    regime descriptors, the penalty type catalogue and the subtype reason
    table, bundled as a single PenaltyReferenceData value.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.  Built by
    ``penalty_config`` at startup and passed by reference into every call.

Invariants enforced:
    - All containers are read-only after construction (tuples, frozensets
      and MappingProxyType), so a bundle can be shared between threads
      without locking.  Reloads replace the bundle, never mutate it.

Failure modes:
    - UnknownRegimeError from ``AllowedTransactionRegistry.from_mapping``
      when a top-level key names no regime.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from penalty_kernel.domain.regime import Regime

# ---------------------------------------------------------------------------
# Allow-list
# ---------------------------------------------------------------------------


def _freeze_types(types: Mapping[Any, Mapping[Any, Any]]) -> Mapping[str, Mapping[str, bool]]:
    # YAML turns unquoted codes such as 1 into ints; codes are always compared as text
    return MappingProxyType({
        str(transaction_type): MappingProxyType({
            str(subtype): bool(allowed)
            for subtype, allowed in (subtypes or {}).items()
        })
        for transaction_type, subtypes in types.items()
    })


@dataclass(frozen=True)
class AllowedTransactionRegistry:
    """
    Regime -> transaction type -> transaction subtype -> allowed.

    Lines whose codes are absent are unsupported legacy codes and are
    dropped by the eligibility filter, not rejected.
    """

    entries: Mapping[Regime, Mapping[str, Mapping[str, bool]]]
    description: str = ""

    @classmethod
    def from_mapping(
        cls,
        mapping: Mapping[Any, Mapping[Any, Mapping[Any, Any]]],
        description: str = "",
    ) -> AllowedTransactionRegistry:
        entries = {
            Regime.parse(str(regime)): _freeze_types(types or {})
            for regime, types in mapping.items()
        }
        return cls(entries=MappingProxyType(entries), description=description)

    def has_regime(self, regime: Regime) -> bool:
        return regime in self.entries

    def regimes(self) -> tuple[Regime, ...]:
        return tuple(self.entries)

    def types_for(self, regime: Regime) -> Mapping[str, Mapping[str, bool]]:
        return self.entries.get(regime, MappingProxyType({}))

    def is_allowed(self, regime: Regime, transaction_type: str, transaction_subtype: str) -> bool:
        subtypes = self.types_for(regime).get(transaction_type)
        if subtypes is None:
            return False
        return subtypes.get(transaction_subtype, False)

    def allowed_subtypes(self, regime: Regime) -> frozenset[str]:
        """Every subtype allowed under any transaction type for the regime."""
        return frozenset(
            subtype
            for subtypes in self.types_for(regime).values()
            for subtype, allowed in subtypes.items()
            if allowed
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "description": self.description,
            "allowed_transactions": {
                regime.value: {t: dict(s) for t, s in types.items()}
                for regime, types in self.entries.items()
            },
        }


# ---------------------------------------------------------------------------
# Regime descriptors
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RegimeDescriptor:
    """
    Display and payment metadata for one regime.

    ``resource_kind`` is the display kind stamped on every transaction list
    item.  ``penalty_subtypes`` lists the subtype codes that are real
    penalties under the regime; everything else is an incidental cost.
    """

    regime: Regime
    description: str
    description_id: str
    class_of_payment: str
    resource_kind: str
    product_type: str
    email_received_app_id: str = ""
    email_msg_type: str = ""
    penalty_subtypes: frozenset[str] = field(default_factory=frozenset)

    def is_penalty_subtype(self, transaction_subtype: str) -> bool:
        return transaction_subtype in self.penalty_subtypes

    def to_dict(self) -> dict[str, Any]:
        return {
            "description": self.description,
            "description_id": self.description_id,
            "class_of_payment": self.class_of_payment,
            "resource_kind": self.resource_kind,
            "product_type": self.product_type,
            "email_received_app_id": self.email_received_app_id,
            "email_msg_type": self.email_msg_type,
            "penalty_subtypes": sorted(self.penalty_subtypes),
        }


# ---------------------------------------------------------------------------
# Penalty types and reasons
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PenaltyType:
    """One row of the finance penalty type catalogue."""

    transaction_type: str
    transaction_subtype: str
    regime: Regime
    description: str = ""
    reason: str = ""
    disabled: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "transaction_type": self.transaction_type,
            "transaction_subtype": self.transaction_subtype,
            "regime": self.regime.value,
            "description": self.description,
            "reason": self.reason,
            "disabled": self.disabled,
        }


@dataclass(frozen=True)
class PenaltyReasonEntry:
    transaction_subtype: str
    reason: str


@dataclass(frozen=True)
class PenaltySubtypeReasonTable:
    """Ordered subtype -> reason entries; the first matching entry wins."""

    entries: tuple[PenaltyReasonEntry, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.entries, tuple):
            object.__setattr__(self, "entries", tuple(self.entries))

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, str]]) -> PenaltySubtypeReasonTable:
        return cls(tuple(PenaltyReasonEntry(subtype, reason) for subtype, reason in pairs))

    def lookup(self, transaction_subtype: str) -> str | None:
        for entry in self.entries:
            if entry.transaction_subtype == transaction_subtype:
                return entry.reason
        return None

    def __len__(self) -> int:
        return len(self.entries)


# ---------------------------------------------------------------------------
# Bundle
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PenaltyReferenceData:
    """Everything the kernel needs from configuration, loaded once."""

    config_id: str
    version: int
    checksum: str
    allowed_transactions: AllowedTransactionRegistry
    descriptors: Mapping[Regime, RegimeDescriptor]
    reason_table: PenaltySubtypeReasonTable
    penalty_types: tuple[PenaltyType, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.descriptors, MappingProxyType):
            object.__setattr__(self, "descriptors", MappingProxyType(dict(self.descriptors)))

    def descriptor_for(self, regime: Regime) -> RegimeDescriptor | None:
        return self.descriptors.get(regime)
