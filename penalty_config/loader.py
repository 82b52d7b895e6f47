"""
Configuration Loader (``penalty_config.loader``).

Responsibility
--------------
Loads individual YAML fragment files and parses them into typed
``penalty_config.schema`` dataclass instances.  This is build/test tooling;
runtime callers go through ``penalty_config.load_reference_data()``.

Invariants enforced
-------------------
* Every parsed object is a frozen dataclass from ``schema.py``.
* Transaction type and subtype codes are always strings, even where YAML
  reads an unquoted code (``1``) as an integer.
* ``compute_checksum`` produces a deterministic SHA-256 hash for
  configuration identity and change detection.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing required keys in parsed dict  -> ``KeyError`` propagates.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from penalty_config.schema import (
    AllowedTransactionsDef,
    PenaltyDetailsDef,
    PenaltyTypeDef,
)
from penalty_kernel.utils.hashing import hash_payload


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
        ValueError: if the document is not a mapping.
    """
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping at the top of {path}, got {type(data).__name__}")
    return data


def _code(value: Any) -> str:
    return str(value).strip()


def parse_penalty_details(data: dict[str, Any]) -> tuple[str, tuple[PenaltyDetailsDef, ...]]:
    """
    Parse ``penalty_details.yaml``.

    Returns:
        (name, descriptor rows in file order)
    Raises:
        KeyError: if a regime entry lacks a required key.
    """
    rows = tuple(
        PenaltyDetailsDef(
            regime=_code(regime),
            description=entry["description"],
            description_id=entry["description_id"],
            class_of_payment=entry["class_of_payment"],
            resource_kind=entry["resource_kind"],
            product_type=entry["product_type"],
            email_received_app_id=entry.get("email_received_app_id", ""),
            email_msg_type=entry.get("email_msg_type", ""),
            penalty_subtypes=tuple(_code(s) for s in entry.get("penalty_subtypes", ())),
        )
        for regime, entry in (data.get("details") or {}).items()
    )
    return data.get("name", ""), rows


def parse_allowed_transactions(
    data: dict[str, Any],
) -> tuple[str, tuple[AllowedTransactionsDef, ...]]:
    """
    Parse ``allowed_transactions.yaml``.

    Layout: ``allowed_transactions: {REGIME: {type: {subtype: bool}}}``.

    Returns:
        (description, one AllowedTransactionsDef per regime)
    """
    rows = []
    for regime, types in (data.get("allowed_transactions") or {}).items():
        parsed_types = tuple(
            (
                _code(transaction_type),
                tuple(
                    (_code(subtype), bool(allowed))
                    for subtype, allowed in (subtypes or {}).items()
                ),
            )
            for transaction_type, subtypes in (types or {}).items()
        )
        rows.append(AllowedTransactionsDef(regime=_code(regime), types=parsed_types))
    return data.get("description", ""), tuple(rows)


def parse_penalty_type(data: dict[str, Any]) -> PenaltyTypeDef:
    """
    Parse one ``PenaltyTypeDef``.

    Raises:
        KeyError: if ``transaction_type``, ``transaction_subtype`` or
            ``regime`` is missing.
    """
    return PenaltyTypeDef(
        transaction_type=_code(data["transaction_type"]),
        transaction_subtype=_code(data["transaction_subtype"]),
        regime=_code(data["regime"]),
        description=data.get("description", ""),
        reason=data.get("reason", ""),
        disabled=bool(data.get("disabled", False)),
    )


def parse_penalty_types(data: dict[str, Any]) -> tuple[PenaltyTypeDef, ...]:
    """Parse ``penalty_types.yaml``, keeping file order (first match wins)."""
    return tuple(parse_penalty_type(row) for row in data.get("penalty_types") or [])


def compute_checksum(data: dict[str, Any]) -> str:
    """
    Compute SHA-256 checksum of canonical JSON serialization.

    Identical ``data`` always produces identical checksums.
    """
    return hash_payload(data)
