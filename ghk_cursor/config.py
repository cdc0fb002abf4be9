"""
ghk-cursor: Tracker Configuration
=================================

Estimator method, gains and noise amplitude. Configuration is validated
at this boundary; an invalid configuration is never handed to a session.

The control form that drives a session sends a payload shaped like:
    {"method": "g-h-k", "gainG": 0.1, "gainH": 0.1, "gainK": 0.1, "noise": 32}

License: MIT
"""

import math
import warnings
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Mapping

from .exceptions import UnsupportedMethodError
from .filters import GHKGains

# Noise slider: amplitude = 2 ** level
NOISE_LEVELS = tuple(range(0, 11))


class FilterMethod(Enum):
    """Estimator variants."""
    GHK = "g-h-k"
    KALMAN = "kalman"   # Reserved, not implemented


IMPLEMENTED_METHODS = frozenset({FilterMethod.GHK})

# Form keys → TrackerConfig fields
_FORM_FIELDS = {
    "method": "method",
    "gainG": "gain_g",
    "gainH": "gain_h",
    "gainK": "gain_k",
    "noise": "noise_amplitude",
}


def parse_method(value) -> FilterMethod:
    """Accept a FilterMethod or its string name."""
    if isinstance(value, FilterMethod):
        return value
    try:
        return FilterMethod(value)
    except ValueError:
        raise UnsupportedMethodError(
            f"Unknown method '{value}'. Available: {[m.value for m in IMPLEMENTED_METHODS]}"
        ) from None


def noise_from_level(level: int) -> float:
    """Noise amplitude for an integer slider level (0..10)."""
    if level not in NOISE_LEVELS:
        raise ValueError(f"Noise level must be in {NOISE_LEVELS[0]}..{NOISE_LEVELS[-1]}, got {level}")
    return float(2 ** level)


def level_from_noise(noise: float) -> float:
    """Inverse of noise_from_level (log2), not rounded."""
    if noise <= 0:
        raise ValueError(f"Noise amplitude must be > 0 to map onto a level, got {noise}")
    return math.log2(noise)


@dataclass(frozen=True)
class TrackerConfig:
    """
    Session configuration.

    Args:
        method: Estimator variant; only g-h-k is implemented
        gain_g: Position gain
        gain_h: Velocity gain
        gain_k: Acceleration gain
        noise_amplitude: Width of the simulated measurement noise [px]
    """
    method: FilterMethod = FilterMethod.GHK
    gain_g: float = 0.1
    gain_h: float = 0.1
    gain_k: float = 0.1
    noise_amplitude: float = 32.0

    @property
    def gains(self) -> GHKGains:
        return GHKGains(g=self.gain_g, h=self.gain_h, k=self.gain_k)

    def validate(self) -> "TrackerConfig":
        """
        Check the configuration and return it, with a string method name
        resolved to its FilterMethod.

        Raises:
            UnsupportedMethodError: method is not implemented
            ValueError: non-finite values or negative noise amplitude
        """
        method = parse_method(self.method)
        if method not in IMPLEMENTED_METHODS:
            raise UnsupportedMethodError(f"Method '{method.value}' is not implemented")

        for name in ("gain_g", "gain_h", "gain_k", "noise_amplitude"):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise ValueError(f"{name} must be finite, got {value}")

        if self.noise_amplitude < 0:
            raise ValueError(f"noise_amplitude must be >= 0, got {self.noise_amplitude}")

        for name in ("gain_g", "gain_h", "gain_k"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                warnings.warn(f"{name}={value} is outside [0, 1]; the filter may diverge")

        return self if method is self.method else replace(self, method=method)

    def merged(self, values: Mapping[str, Any]) -> "TrackerConfig":
        """
        New config from a form payload; omitted or None keys keep their value.

        Raises:
            UnsupportedMethodError / ValueError: see validate()
        """
        changes = {}
        for key, value in values.items():
            if key not in _FORM_FIELDS:
                raise ValueError(f"Unknown configuration key '{key}'")
            if value is None:
                continue
            field_name = _FORM_FIELDS[key]
            changes[field_name] = parse_method(value) if field_name == "method" else float(value)
        return replace(self, **changes).validate()

    @classmethod
    def from_form(cls, values: Mapping[str, Any]) -> "TrackerConfig":
        """Config from a form payload, defaults for missing keys."""
        return cls().merged(values)

    def to_form(self) -> dict:
        return {
            "method": self.method.value,
            "gainG": self.gain_g,
            "gainH": self.gain_h,
            "gainK": self.gain_k,
            "noise": self.noise_amplitude,
        }
