"""
ghk-cursor: Trail Buffers
=========================

Bounded, most-recent-first histories of raw, measured and filtered
states. Trails exist for presentation only; nothing in the estimator
reads them back.

Render contract:
    segment i joins trail[i] and trail[i + 1]
    opacity(i) = log10(1 / i) + 1, clamped to [0, 1]  (i = 0 is opaque)

License: MIT
"""

import numpy as np
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Tuple

from .models import KalmanCursor
from .vector import Vector2D

PATH_LENGTH = 64


class TrailKind(Enum):
    """Trail identity and its stroke colour (RGB)."""
    RAW = "raw"
    MEASURED = "measured"
    FILTERED = "filtered"

    @property
    def color(self) -> Tuple[int, int, int]:
        return _TRAIL_COLORS[self]


_TRAIL_COLORS = {
    TrailKind.RAW: (0, 255, 255),       # cyan
    TrailKind.MEASURED: (255, 0, 255),  # magenta
    TrailKind.FILTERED: (255, 255, 0),  # yellow
}


def trail_opacity(index: int) -> float:
    """Opacity of the segment starting at `index` (0 = most recent)."""
    if index < 0:
        raise ValueError(f"Trail index must be >= 0, got {index}")
    if index == 0:
        return 1.0
    return float(np.clip(np.log10(1.0 / index) + 1.0, 0.0, 1.0))


def stroke_style(kind: TrailKind, index: int) -> str:
    """CSS rgba() stroke for segment `index` of a trail."""
    r, g, b = kind.color
    return f"rgba({r}, {g}, {b}, {trail_opacity(index)})"


class Trail:
    """
    Fixed-capacity history, front = most recent.

    push_front on a full trail evicts the oldest (back) element.
    """

    def __init__(self, kind: TrailKind, maxlen: int = PATH_LENGTH):
        if maxlen < 1:
            raise ValueError(f"Trail length must be >= 1, got {maxlen}")
        self.kind = kind
        self._items: deque = deque(maxlen=maxlen)

    @property
    def maxlen(self) -> int:
        return self._items.maxlen

    def push_front(self, item: KalmanCursor):
        self._items.appendleft(item)

    def clear(self):
        self._items.clear()

    def snapshot(self) -> Tuple[KalmanCursor, ...]:
        """Point-in-time copy, safe to hand to a renderer."""
        return tuple(self._items)

    def positions(self) -> np.ndarray:
        """(N, 2) array of positions, most recent first."""
        if not self._items:
            return np.zeros((0, 2))
        return np.array([item.pos.as_tuple() for item in self._items], dtype=np.float64)

    def segments(self) -> List[Tuple[Vector2D, Vector2D, float]]:
        """(start, end, opacity) for each consecutive pair, front first."""
        items = self.snapshot()
        return [
            (items[i].pos, items[i + 1].pos, trail_opacity(i))
            for i in range(len(items) - 1)
        ]

    def front(self) -> KalmanCursor:
        if not self._items:
            raise IndexError("Trail is empty")
        return self._items[0]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[KalmanCursor]:
        return iter(self.snapshot())

    def __getitem__(self, index: int) -> KalmanCursor:
        return self._items[index]


@dataclass(frozen=True)
class TrailSnapshot:
    """Read-only view of all three trails at one instant."""
    raw: Tuple[KalmanCursor, ...]
    measured: Tuple[KalmanCursor, ...]
    filtered: Tuple[KalmanCursor, ...]

    def __iter__(self) -> Iterator[Tuple[KalmanCursor, ...]]:
        return iter((self.raw, self.measured, self.filtered))


class TrailSet:
    """The raw, measured and filtered trails of one session."""

    def __init__(self, maxlen: int = PATH_LENGTH):
        self.raw = Trail(TrailKind.RAW, maxlen)
        self.measured = Trail(TrailKind.MEASURED, maxlen)
        self.filtered = Trail(TrailKind.FILTERED, maxlen)

    def __iter__(self) -> Iterator[Trail]:
        return iter((self.raw, self.measured, self.filtered))

    def get(self, kind: TrailKind) -> Trail:
        return {
            TrailKind.RAW: self.raw,
            TrailKind.MEASURED: self.measured,
            TrailKind.FILTERED: self.filtered,
        }[kind]

    def clear(self):
        for trail in self:
            trail.clear()

    def snapshot(self) -> TrailSnapshot:
        return TrailSnapshot(
            raw=self.raw.snapshot(),
            measured=self.measured.snapshot(),
            filtered=self.filtered.snapshot(),
        )
