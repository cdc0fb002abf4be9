"""
ghk-cursor: Time Sources
========================

The session never reads wall-clock time directly; it asks an injected
clock. MonotonicClock is used live, ManualClock in tests and replays.

License: MIT
"""

import time
from abc import ABC, abstractmethod


class Clock(ABC):
    """Source of timestamps in seconds."""

    @abstractmethod
    def now(self) -> float:
        pass


class MonotonicClock(Clock):
    """Process monotonic clock (time.monotonic)."""

    def now(self) -> float:
        return time.monotonic()


class ManualClock(Clock):
    """
    Clock that only moves when told to.

    Example:
        clock = ManualClock(start=0.0)
        clock.advance(0.016)
        clock.now()  # 0.016
    """

    def __init__(self, start: float = 0.0):
        self._now = float(start)

    def now(self) -> float:
        return self._now

    def set(self, value: float):
        self._now = float(value)

    def advance(self, seconds: float) -> float:
        if seconds < 0:
            raise ValueError(f"Cannot move a clock backwards ({seconds} s)")
        self._now += seconds
        return self._now
