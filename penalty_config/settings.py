"""
Process settings read from the environment.

    PENALTY_CONFIG_DIR                     configuration set directory
    DISABLED_PENALTY_TRANSACTION_SUBTYPES  comma separated subtype codes
    PENALTY_LOG_LEVEL                      logging level name (default INFO)

Only ``penalty_config`` reads these; the kernel receives their effect
through the compiled reference data.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

CONFIG_DIR_ENV = "PENALTY_CONFIG_DIR"
DISABLED_SUBTYPES_ENV = "DISABLED_PENALTY_TRANSACTION_SUBTYPES"
LOG_LEVEL_ENV = "PENALTY_LOG_LEVEL"


@dataclass(frozen=True)
class PenaltySettings:
    config_dir: Path | None = None
    disabled_subtypes: frozenset[str] = frozenset()
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> PenaltySettings:
        env = os.environ if environ is None else environ

        config_dir = env.get(CONFIG_DIR_ENV, "").strip()
        disabled = frozenset(
            code.strip()
            for code in env.get(DISABLED_SUBTYPES_ENV, "").split(",")
            if code.strip()
        )
        return cls(
            config_dir=Path(config_dir) if config_dir else None,
            disabled_subtypes=disabled,
            log_level=env.get(LOG_LEVEL_ENV, "").strip().upper() or "INFO",
        )
