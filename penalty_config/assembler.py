"""
penalty_config.assembler -- composes YAML fragments into one configuration set.

Responsibility:
    Humans edit small, well-owned YAML fragments.  This module composes them
    into a single ``PenaltyConfigurationSet``.  Runtime only ever sees the
    compiled ``PenaltyReferenceData``.

Fragment structure::

    sets/default/
    +-- root.yaml                  # config_id, version, description
    +-- penalty_details.yaml       # Regime descriptors
    +-- allowed_transactions.yaml  # Regime -> type -> subtype -> allowed
    +-- penalty_types.yaml         # Finance penalty type rows and reasons

Invariants enforced:
    - ``root.yaml`` must exist and name a ``config_id``.
    - The checksum is computed over the parsed (string-keyed) fragments, so
      quoting a code differently in YAML does not change it.

Failure modes:
    - ``AssemblyError`` -- directory or ``root.yaml`` missing, or
      ``config_id`` absent.
    - ``FileNotFoundError`` -- a required fragment file is missing.
    - ``yaml.YAMLError`` (propagated from loader) -- invalid YAML syntax.
"""

from __future__ import annotations

from dataclasses import asdict, replace
from pathlib import Path

from penalty_config.loader import (
    compute_checksum,
    load_yaml_file,
    parse_allowed_transactions,
    parse_penalty_details,
    parse_penalty_types,
)
from penalty_config.schema import PenaltyConfigurationSet
from penalty_kernel.exceptions import ConfigurationError

ROOT_FILE = "root.yaml"
PENALTY_DETAILS_FILE = "penalty_details.yaml"
ALLOWED_TRANSACTIONS_FILE = "allowed_transactions.yaml"
PENALTY_TYPES_FILE = "penalty_types.yaml"


class AssemblyError(ConfigurationError):
    """Error during fragment assembly."""

    code: str = "ASSEMBLY_FAILED"


def assemble_from_directory(fragment_dir: Path) -> PenaltyConfigurationSet:
    """Compose the fragments in ``fragment_dir`` into one configuration set.

    Raises:
        AssemblyError: If the directory or root.yaml is missing, or
            root.yaml has no config_id.
        FileNotFoundError: If another required fragment is missing.
    """
    fragment_dir = Path(fragment_dir)
    if not fragment_dir.is_dir():
        raise AssemblyError(f"Configuration directory not found: {fragment_dir}")

    root_path = fragment_dir / ROOT_FILE
    if not root_path.is_file():
        raise AssemblyError(f"{ROOT_FILE} not found in {fragment_dir}")

    root = load_yaml_file(root_path)
    if not root.get("config_id"):
        raise AssemblyError(f"{root_path} must define config_id")

    details_name, details = parse_penalty_details(
        load_yaml_file(fragment_dir / PENALTY_DETAILS_FILE)
    )
    allowed_description, allowed = parse_allowed_transactions(
        load_yaml_file(fragment_dir / ALLOWED_TRANSACTIONS_FILE)
    )
    penalty_types = parse_penalty_types(load_yaml_file(fragment_dir / PENALTY_TYPES_FILE))

    config_set = PenaltyConfigurationSet(
        config_id=str(root["config_id"]),
        version=int(root.get("version", 1)),
        description=root.get("description", ""),
        penalty_details_name=details_name,
        penalty_details=details,
        allowed_transactions_description=allowed_description,
        allowed_transactions=allowed,
        penalty_types=penalty_types,
    )

    checksum = compute_checksum({
        k: v for k, v in asdict(config_set).items() if k != "checksum"
    })
    return replace(config_set, checksum=checksum)
