from __future__ import annotations

import time
from typing import Protocol


class Clock(Protocol):
    """Source of monotonic time instants for a typing session.

    The typing core never reads wall-clock time directly: every operation
    either takes an explicit ``now`` or falls back to the injected clock.
    """

    def now(self) -> float:
        """Return monotonic seconds."""


class RealClock:
    """Production clock backed by time.monotonic()."""

    def now(self) -> float:
        return time.monotonic()


def resolve_now(clock: Clock, now: float | None) -> float:
    """Use the caller's instant when given, otherwise read the clock."""

    return float(clock.now()) if now is None else float(now)
