"""Ledger clocks."""

from __future__ import annotations

import time


class SystemClock:
    """Wall-clock time in whole seconds."""

    def timestamp(self) -> int:
        return int(time.time())


class ManualClock:
    """Settable clock for tests and simulations.

    Args:
        now: Initial timestamp.
    """

    def __init__(self, now: int = 0) -> None:
        self._now = now

    def timestamp(self) -> int:
        return self._now

    def set(self, timestamp: int) -> None:
        if timestamp < self._now:
            raise ValueError(f"Ledger time cannot go backwards ({timestamp} < {self._now})")
        self._now = timestamp

    def advance(self, seconds: int) -> int:
        """Move time forward and return the new timestamp."""
        self.set(self._now + seconds)
        return self._now
