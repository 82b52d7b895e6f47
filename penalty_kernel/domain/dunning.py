"""
Dunning -- Debt collection agency (DCA) detection.

The finance ledger stores dunning status as fixed-width text, right padded
with spaces.  A line is under DCA handling when the trimmed text is exactly
the DCA sentinel.  Nothing here raises: missing or malformed text is simply
not DCA.
"""

from __future__ import annotations

from typing import Any

from penalty_kernel.domain.regime import DCA_DUNNING_STATUS


def normalize_dunning_status(raw: Any) -> str:
    """Strip trailing ledger padding from a dunning status; non-text becomes ''."""
    if not isinstance(raw, str):
        return ""
    return raw.rstrip()


def is_dca(raw: Any) -> bool:
    """True iff the trimmed dunning status equals the DCA sentinel (case-sensitive)."""
    return normalize_dunning_status(raw) == DCA_DUNNING_STATUS
