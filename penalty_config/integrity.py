"""
Configuration Integrity -- fingerprint pinning for approved reference data.

When a config set directory contains an APPROVED_FINGERPRINT file, the
assembled checksum must match the pinned value.  Editing an approved
allow-list or reason table without re-approving it is therefore caught at
load time.

The pin file is a single line: the SHA-256 hex string produced by the
assembler's checksum.

If no APPROVED_FINGERPRINT file exists, the check is skipped (draft/dev
workflow).
"""

from __future__ import annotations

from pathlib import Path

from penalty_kernel.exceptions import ConfigurationError

PINFILE_NAME = "APPROVED_FINGERPRINT"


class ConfigIntegrityError(ConfigurationError):
    """Assembled config checksum does not match the approved pin.

    Attributes:
        config_id: The configuration set identifier.
        expected: The pinned (approved) fingerprint.
        actual: The assembled checksum.
        pin_path: Path to the APPROVED_FINGERPRINT file.
    """

    code: str = "CONFIG_INTEGRITY_MISMATCH"

    def __init__(
        self,
        config_id: str,
        expected: str,
        actual: str,
        pin_path: Path,
    ):
        self.config_id = config_id
        self.expected = expected
        self.actual = actual
        self.pin_path = pin_path
        super().__init__(
            f"Config integrity check failed for '{config_id}': "
            f"pinned fingerprint {expected[:16]}... != "
            f"assembled checksum {actual[:16]}... "
            f"(pin file: {pin_path})"
        )


def read_pinned_fingerprint(config_dir: Path) -> str | None:
    """Return the pinned SHA-256 hex string, or None if no pin file exists."""
    pin_path = Path(config_dir) / PINFILE_NAME
    if not pin_path.is_file():
        return None
    return pin_path.read_text().strip()


def write_pinned_fingerprint(config_dir: Path, checksum: str) -> Path:
    """Write ``checksum`` as the approved pin and return the pin path."""
    pin_path = Path(config_dir) / PINFILE_NAME
    pin_path.write_text(checksum + "\n")
    return pin_path


def verify_fingerprint_pin(
    config_id: str,
    checksum: str,
    config_dir: Path,
) -> None:
    """Verify that the assembled checksum matches the pin file.

    No-op if no APPROVED_FINGERPRINT file exists.

    Raises:
        ConfigIntegrityError: If pin exists and checksum does not match.
    """
    pinned = read_pinned_fingerprint(config_dir)
    if pinned is None:
        return

    if checksum != pinned:
        raise ConfigIntegrityError(
            config_id=config_id,
            expected=pinned,
            actual=checksum,
            pin_path=Path(config_dir) / PINFILE_NAME,
        )
