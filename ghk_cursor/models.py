"""
ghk-cursor: Cursor State
========================

KalmanCursor is both a raw/measured sample and a filtered state:
a timestamp, an optional elapsed time since the previous state, and the
kinematic triple (acc, vel, pos).

License: MIT
"""

from dataclasses import dataclass, field, replace
from typing import Optional

from .vector import Vector2D


@dataclass(frozen=True)
class CursorData:
    """Kinematic state: acceleration, velocity and position."""
    acc: Vector2D = field(default_factory=Vector2D.zero)
    vel: Vector2D = field(default_factory=Vector2D.zero)
    pos: Vector2D = field(default_factory=Vector2D.zero)


@dataclass(frozen=True)
class KalmanCursor:
    """
    Filter state / sample.

    Args:
        time: Timestamp in seconds (monotonic clock)
        data: Kinematic triple
        delta: Elapsed time [s] since the previous state. None for freshly
            captured raw input before a delta is known.
    """
    time: float
    data: CursorData = field(default_factory=CursorData)
    delta: Optional[float] = None

    @classmethod
    def at_rest(cls, x: float, y: float, time: float,
                delta: Optional[float] = None) -> "KalmanCursor":
        """Sample at (x, y) with zero velocity and acceleration."""
        return cls(time=time, data=CursorData(pos=Vector2D(float(x), float(y))), delta=delta)

    @classmethod
    def initial(cls, time: float) -> "KalmanCursor":
        """Zero state used to seed the filter, with delta = 0."""
        return cls(time=time, data=CursorData(), delta=0.0)

    @property
    def pos(self) -> Vector2D:
        return self.data.pos

    @property
    def vel(self) -> Vector2D:
        return self.data.vel

    @property
    def acc(self) -> Vector2D:
        return self.data.acc

    def with_delta(self, delta: float) -> "KalmanCursor":
        return replace(self, delta=delta)

    def with_position(self, pos: Vector2D) -> "KalmanCursor":
        return replace(self, data=replace(self.data, pos=pos))
