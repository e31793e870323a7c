"""Millisecond clocks and elapsed-time counters used by the lamp's loops."""

from __future__ import annotations

import time
from typing import Callable

Clock = Callable[[], float]


def monotonic_ms() -> float:
    """Milliseconds from the system's monotonic clock."""
    return time.monotonic() * 1000.0


class ManualClock:
    """A clock that only moves when told to; handy for driving loops in tests."""

    def __init__(self, start: float = 0.0) -> None:
        self._now = float(start)

    def __call__(self) -> float:
        return self._now

    def advance(self, milliseconds: float) -> float:
        """Move the clock forward and return the new time."""
        if milliseconds < 0:
            raise ValueError("a clock cannot go backwards")
        self._now += milliseconds
        return self._now


class Stopwatch:
    """Counts milliseconds since it was last reset."""

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock = clock or monotonic_ms
        self._start = self._clock()

    def elapsed(self) -> float:
        return self._clock() - self._start

    def reset(self, value: float = 0.0) -> None:
        """Make the stopwatch read ``value`` milliseconds from now on."""
        self._start = self._clock() - value