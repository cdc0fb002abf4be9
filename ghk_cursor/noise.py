"""
ghk-cursor: Measurement Noise Synthesizer
=========================================

Turns a true pointer sample into a simulated noisy measurement.

Per axis:
    p' = p + (U² · n − n/2),   U ~ Uniform[0, 1)

Squaring U skews the draw toward -n/2, so the perturbation is
quadratically weighted rather than uniform: mostly small shifts with the
occasional large excursion.

License: MIT
"""

import numpy as np
from typing import Optional

from .models import KalmanCursor
from .vector import Vector2D

# Process-wide random source shared by every synthesizer without its own rng
_DEFAULT_RNG = np.random.default_rng()


class NoiseSynthesizer:
    """
    Simulated measurement noise.

    Usage:
        noise = NoiseSynthesizer(rng=np.random.default_rng(42))
        measurement = noise.measure(raw_sample, amplitude=32.0)
    """

    def __init__(self, rng: Optional[np.random.Generator] = None):
        self.rng = rng if rng is not None else _DEFAULT_RNG

    def offset(self, amplitude: float) -> Vector2D:
        """Draw one (di, dj) perturbation for the given amplitude."""
        if amplitude < 0:
            raise ValueError(f"Noise amplitude must be >= 0, got {amplitude}")
        u = self.rng.random(2)
        d = u ** 2 * amplitude - amplitude / 2
        return Vector2D.from_array(d)

    def perturb(self, position: Vector2D, amplitude: float) -> Vector2D:
        return position.add(self.offset(amplitude))

    def measure(self, sample: KalmanCursor, amplitude: float) -> KalmanCursor:
        """
        Derive a measurement from a raw sample.

        Same timestamp as the sample, perturbed position, zero velocity and
        acceleration.
        """
        return KalmanCursor.at_rest(*self.perturb(sample.pos, amplitude), time=sample.time)
