"""
ghk-cursor: 2D Vector
=====================

Immutable 2D vector value type used for positions, velocities and
accelerations. Every operation returns a new instance.

License: MIT
"""

import numpy as np
from dataclasses import dataclass
from typing import Iterator, Tuple


@dataclass(frozen=True)
class Vector2D:
    """
    Immutable 2D vector with components (i, j).

    Example:
        >>> v = Vector2D(3.0, 4.0)
        >>> v.magnitude()
        5.0
        >>> v.add(Vector2D.left()).scale(2.0)
        Vector2D(i=4.0, j=8.0)
    """
    i: float
    j: float

    # ------------------------------------------------------------------
    # Named constants
    # ------------------------------------------------------------------
    @classmethod
    def zero(cls) -> "Vector2D":
        return cls(0.0, 0.0)

    @classmethod
    def up(cls) -> "Vector2D":
        return cls(0.0, 1.0)

    @classmethod
    def down(cls) -> "Vector2D":
        return cls(0.0, -1.0)

    @classmethod
    def left(cls) -> "Vector2D":
        return cls(-1.0, 0.0)

    @classmethod
    def right(cls) -> "Vector2D":
        return cls(1.0, 0.0)

    @classmethod
    def from_array(cls, values) -> "Vector2D":
        """Build from any length-2 sequence or numpy array."""
        return cls(float(values[0]), float(values[1]))

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    def dot(self, vector: "Vector2D") -> float:
        return (self.i * vector.i) + (self.j * vector.j)

    def magnitude(self) -> float:
        return float(np.sqrt(self.dot(self)))

    def normalized(self) -> "Vector2D":
        """
        Unit vector pointing the same way.

        Precondition: the vector is non-zero. A zero vector yields
        non-finite components (nan) instead of raising.
        """
        with np.errstate(divide="ignore", invalid="ignore"):
            c = np.float64(1.0) / np.float64(self.magnitude())
            return Vector2D(float(self.i * c), float(self.j * c))

    def add(self, vector: "Vector2D") -> "Vector2D":
        return Vector2D(self.i + vector.i, self.j + vector.j)

    def inverse(self) -> "Vector2D":
        return Vector2D(-self.i, -self.j)

    def scale(self, scalar: float) -> "Vector2D":
        return Vector2D(self.i * scalar, self.j * scalar)

    def flip(self, axis: str) -> "Vector2D":
        """
        Mirror the vector.

        Args:
            axis: "vertical" negates j, "horizontal" negates i
        """
        if axis == "vertical":
            return Vector2D(self.i, -self.j)
        if axis == "horizontal":
            return Vector2D(-self.i, self.j)
        raise ValueError(f"Unknown flip axis '{axis}'. Use 'vertical' or 'horizontal'")

    def rotate(self, theta: float) -> "Vector2D":
        """Rotate counter-clockwise by theta radians."""
        c, s = np.cos(theta), np.sin(theta)
        return Vector2D(float(c * self.i - s * self.j), float(s * self.i + c * self.j))

    def to_array(self) -> np.ndarray:
        return np.array([self.i, self.j], dtype=np.float64)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.i, self.j)

    # Operator sugar over the named operations
    def __add__(self, other: "Vector2D") -> "Vector2D":
        return self.add(other)

    def __sub__(self, other: "Vector2D") -> "Vector2D":
        return self.add(other.inverse())

    def __neg__(self) -> "Vector2D":
        return self.inverse()

    def __mul__(self, scalar: float) -> "Vector2D":
        return self.scale(scalar)

    __rmul__ = __mul__

    def __iter__(self) -> Iterator[float]:
        yield self.i
        yield self.j
