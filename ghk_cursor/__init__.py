"""
ghk-cursor: g-h-k Pointer Tracking
==================================

Real-time tracking of a noisy 2D pointer with a fixed-gain g-h-k
estimator (position, velocity, acceleration), plus bounded trails of the
raw, measured and filtered paths for display.

Modules:
    vector: Immutable Vector2D
    models: KalmanCursor sample/state
    noise: Simulated measurement noise
    filters: g-h-k extrapolation and update
    trails: Bounded most-recent-first trails and render contract
    config: TrackerConfig and method validation
    session: TrackingSession per-sample controller

Example:
    >>> from ghk_cursor import TrackingSession, TrackerConfig
    >>> session = TrackingSession(TrackerConfig(gain_g=0.5, noise_amplitude=16))
    >>> estimate = session.process(120.0, 80.0)
    >>> raw, measured, filtered = (len(t) for t in session.snapshot())

License: MIT
"""

__version__ = "1.0.0"

from .vector import Vector2D
from .models import CursorData, KalmanCursor
from .exceptions import (
    GHKCursorError,
    InvalidStateError,
    DegenerateIntervalError,
    UnsupportedMethodError,
)
from .noise import NoiseSynthesizer
from .filters import GHKFilter, GHKGains, extrapolate, update
from .trails import (
    PATH_LENGTH,
    Trail,
    TrailKind,
    TrailSet,
    TrailSnapshot,
    stroke_style,
    trail_opacity,
)
from .config import FilterMethod, TrackerConfig, noise_from_level, level_from_noise
from .clock import Clock, ManualClock, MonotonicClock
from .session import TrackingSession

__all__ = [
    "Vector2D",
    "CursorData",
    "KalmanCursor",
    "GHKCursorError",
    "InvalidStateError",
    "DegenerateIntervalError",
    "UnsupportedMethodError",
    "NoiseSynthesizer",
    "GHKFilter",
    "GHKGains",
    "extrapolate",
    "update",
    "PATH_LENGTH",
    "Trail",
    "TrailKind",
    "TrailSet",
    "TrailSnapshot",
    "stroke_style",
    "trail_opacity",
    "FilterMethod",
    "TrackerConfig",
    "noise_from_level",
    "level_from_noise",
    "Clock",
    "ManualClock",
    "MonotonicClock",
    "TrackingSession",
]
