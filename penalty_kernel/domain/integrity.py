"""
Integrity -- Opaque tokens stamped on produced records.

Responsibility:
    Defines the TokenGenerator capability, the default EtagGenerator, and
    IntegrityStamper, which enforces the fail-fast call discipline used by
    the transaction list builder.

Architecture position:
    Kernel > Domain.  EtagGenerator is the only source of non-determinism in
    the kernel: a fresh UUID4 (OS randomness) plus the injected clock.

Invariants enforced:
    - Calls are sequential; the first failure aborts the whole generation.
    - Any exception from the generator surfaces as TokenGenerationFailedError
      with the original exception chained as ``cause``.

Failure modes:
    - TokenGenerationFailedError from ``IntegrityStamper.stamp``.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable
from uuid import uuid4

from penalty_kernel.domain.clock import Clock, SystemClock
from penalty_kernel.exceptions import TokenGenerationFailedError
from penalty_kernel.logging_config import get_logger
from penalty_kernel.utils.hashing import hash_payload

logger = get_logger("domain.integrity")


@runtime_checkable
class TokenGenerator(Protocol):
    """Protocol for producing one opaque integrity token per call.

    Implementations raise on failure; they must be safe to call from
    several threads at once.
    """

    def generate(self) -> str:
        ...


class EtagGenerator:
    """Default TokenGenerator: SHA-256 over a random nonce and the current time."""

    def __init__(self, clock: Clock | None = None):
        self._clock = clock or SystemClock()

    def generate(self) -> str:
        return hash_payload({
            "nonce": uuid4(),
            "generated_at": self._clock.now_utc(),
        })


class IntegrityStamper:
    """
    Wraps a TokenGenerator for a single transaction list generation.

    Not shared between calls: ``calls`` counts the tokens requested so far
    so a failure can report which call broke.
    """

    def __init__(self, generator: TokenGenerator):
        self._generator = generator
        self.calls = 0

    def stamp(self) -> str:
        self.calls += 1
        try:
            return self._generator.generate()
        except Exception as exc:
            logger.error(
                "token_generation_failed",
                extra={"call_number": self.calls},
                exc_info=True,
            )
            raise TokenGenerationFailedError(self.calls, exc) from exc
