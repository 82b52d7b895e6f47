"""
penalty_config -- single public entrypoint for penalty reference data.

Responsibility:
    Provides the ONLY way to obtain reference data at runtime through
    ``load_reference_data()`` (or a ``ReferenceDataProvider`` wrapping it).
    Returns a frozen ``PenaltyReferenceData`` bundle.  YAML loading is
    internal tooling and never exposed to the kernel.

Architecture position:
    Configuration -- YAML-driven pipeline, load-time validation.  This
    package sits above ``penalty_kernel``; the kernel MUST NEVER import
    from ``penalty_config``.

Invariants enforced:
    - Load-time validation: every regime has a descriptor and an allow-list
      before a bundle is produced.
    - Fingerprint pinning: when an APPROVED_FINGERPRINT file exists, the
      assembled checksum must match the pinned value.
    - Deterministic assembly: the same YAML fragments always produce the
      same checksum.

Failure modes:
    - ``AssemblyError`` -- configuration directory or root.yaml missing.
    - ``ConfigValidationError`` -- structural validation failures.
    - ``ConfigIntegrityError`` -- checksum mismatch against an approved pin.

Audit relevance:
    Every successful ``load_reference_data()`` call emits a
    ``PENALTY_CONFIG_TRACE`` log entry with the config_id, version,
    checksum and disabled subtypes, tying each generated transaction list
    back to the reference data that shaped it.
"""

from penalty_config.assembler import AssemblyError
from penalty_config.integrity import ConfigIntegrityError
from penalty_config.pipeline import DEFAULT_CONFIG_DIR, load_reference_data
from penalty_config.provider import CONFIGURATION_TYPES, ReferenceDataProvider
from penalty_config.settings import PenaltySettings
from penalty_config.validator import ConfigValidationError

__all__ = [
    "AssemblyError",
    "CONFIGURATION_TYPES",
    "ConfigIntegrityError",
    "ConfigValidationError",
    "DEFAULT_CONFIG_DIR",
    "PenaltySettings",
    "ReferenceDataProvider",
    "load_reference_data",
]
