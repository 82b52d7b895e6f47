"""
Assemble -> validate -> compile -> verify, as one call.

``load_reference_data`` is re-exported from ``penalty_config``; see the
package docstring for its contract.
"""

from __future__ import annotations

from pathlib import Path

from penalty_config.assembler import assemble_from_directory
from penalty_config.compiler import compile_reference_data
from penalty_config.integrity import verify_fingerprint_pin
from penalty_config.settings import PenaltySettings
from penalty_config.validator import ConfigValidationError, validate_configuration
from penalty_kernel.domain.reference import PenaltyReferenceData
from penalty_kernel.logging_config import get_logger

logger = get_logger("config")

DEFAULT_CONFIG_DIR = Path(__file__).parent / "sets" / "default"


def resolve_config_dir(
    config_dir: Path | None = None,
    settings: PenaltySettings | None = None,
) -> Path:
    """Explicit argument, then ``PENALTY_CONFIG_DIR``, then the bundled set."""
    if config_dir is not None:
        return Path(config_dir)
    if settings is not None and settings.config_dir is not None:
        return settings.config_dir
    return DEFAULT_CONFIG_DIR


def load_reference_data(
    config_dir: Path | None = None,
    settings: PenaltySettings | None = None,
) -> PenaltyReferenceData:
    """Load, validate and compile the penalty reference data.

    Args:
        config_dir: Configuration set directory.  Defaults to the
            ``PENALTY_CONFIG_DIR`` setting, then the bundled default set.
        settings: Process settings.  Read from the environment when omitted.

    Raises:
        AssemblyError: If the directory or root.yaml is missing.
        ConfigValidationError: If the assembled configuration is invalid.
        ConfigIntegrityError: If APPROVED_FINGERPRINT exists and does not
            match the assembled checksum.
    """
    if settings is None:
        settings = PenaltySettings.from_env()
    fragment_dir = resolve_config_dir(config_dir, settings)

    config_set = assemble_from_directory(fragment_dir)

    validation = validate_configuration(config_set)
    for warning in validation.warnings:
        logger.warning("config_validation_warning", extra={"warning": warning})
    if not validation.is_valid:
        raise ConfigValidationError(config_set.config_id, validation.errors)

    verify_fingerprint_pin(
        config_id=config_set.config_id,
        checksum=config_set.checksum,
        config_dir=fragment_dir,
    )

    reference_data = compile_reference_data(config_set, settings.disabled_subtypes)

    logger.info(
        "PENALTY_CONFIG_TRACE",
        extra={
            "trace_type": "PENALTY_CONFIG_TRACE",
            "config_set_id": reference_data.config_id,
            "config_set_version": reference_data.version,
            "checksum": reference_data.checksum,
            "regimes": sorted(r.value for r in reference_data.descriptors),
            "penalty_type_count": len(reference_data.penalty_types),
            "reason_count": len(reference_data.reason_table),
            "disabled_subtypes": sorted(settings.disabled_subtypes),
        },
    )
    return reference_data
