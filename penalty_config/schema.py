"""
PenaltyConfigurationSet schema.

Defines the human-authored, reviewable source artifact for penalty reference
data.  YAML fragments are parsed into these types by the loader, composed by
the assembler, and compiled into a PenaltyReferenceData bundle by the
compiler.

Key distinction:
  PenaltyConfigurationSet = source artifact (human-authored, versioned)
  PenaltyReferenceData    = runtime artifact (validated, frozen)

Regime keys stay as plain strings here; the validator reports unknown ones
and the compiler turns them into ``Regime`` members.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PenaltyDetailsDef:
    """Descriptor row for one regime (``penalty_details.yaml``)."""

    regime: str
    description: str
    description_id: str
    class_of_payment: str
    resource_kind: str
    product_type: str
    email_received_app_id: str = ""
    email_msg_type: str = ""
    penalty_subtypes: tuple[str, ...] = ()


@dataclass(frozen=True)
class AllowedTransactionsDef:
    """Allow-list for one regime (``allowed_transactions.yaml``)."""

    regime: str
    types: tuple[tuple[str, tuple[tuple[str, bool], ...]], ...]  # (type, ((subtype, allowed), ...))

    def as_mapping(self) -> dict[str, dict[str, bool]]:
        return {t: dict(subtypes) for t, subtypes in self.types}


@dataclass(frozen=True)
class PenaltyTypeDef:
    """One finance penalty type row (``penalty_types.yaml``)."""

    transaction_type: str
    transaction_subtype: str
    regime: str
    description: str = ""
    reason: str = ""
    disabled: bool = False


@dataclass(frozen=True)
class PenaltyConfigurationSet:
    """The complete, versioned source configuration."""

    config_id: str
    version: int
    description: str
    penalty_details_name: str
    penalty_details: tuple[PenaltyDetailsDef, ...]
    allowed_transactions_description: str
    allowed_transactions: tuple[AllowedTransactionsDef, ...]
    penalty_types: tuple[PenaltyTypeDef, ...]
    checksum: str = ""

    def details_for(self, regime: str) -> PenaltyDetailsDef | None:
        for details in self.penalty_details:
            if details.regime == regime:
                return details
        return None

    def allowed_for(self, regime: str) -> AllowedTransactionsDef | None:
        for allowed in self.allowed_transactions:
            if allowed.regime == regime:
                return allowed
        return None
