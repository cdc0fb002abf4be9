"""
ghk-cursor: Tracking Session
============================

Owns the configuration and the single authoritative filtered estimate,
and runs one synchronous cycle per raw pointer sample:

    1. raw sample           → raw trail
    2. noisy measurement    → measured trail
    3. extrapolate measurement over capture → now
    4. update from previous estimate over previous → now
    5. new estimate         → filtered trail

Readers get trails only through snapshot(), which returns tuples.

Not thread-safe; a multi-threaded host should guard the whole session
with one lock.

License: MIT
"""

import logging
import math
import numpy as np
from typing import Any, Mapping, Optional

from .clock import Clock, MonotonicClock
from .config import TrackerConfig
from .exceptions import DegenerateIntervalError
from .filters import GHKFilter
from .models import KalmanCursor
from .noise import NoiseSynthesizer
from .trails import PATH_LENGTH, TrailSet, TrailSnapshot

logger = logging.getLogger(__name__)


class TrackingSession:
    """
    Per-sample g-h-k tracking of a noisy pointer.

    Usage:
        session = TrackingSession(TrackerConfig(gain_g=0.5))
        for x, y in pointer_events:
            estimate = session.process(x, y)
        snapshot = session.snapshot()   # read-only trails for rendering
    """

    def __init__(self,
                 config: Optional[TrackerConfig] = None,
                 clock: Optional[Clock] = None,
                 rng: Optional[np.random.Generator] = None,
                 path_length: int = PATH_LENGTH):
        self.clock = clock if clock is not None else MonotonicClock()
        self._config = (config if config is not None else TrackerConfig()).validate()
        self._filter = GHKFilter(self._config.gains)
        self._noise = NoiseSynthesizer(rng)
        self._trails = TrailSet(path_length)
        self._estimation = KalmanCursor.initial(self.clock.now())
        self.coalesced = 0

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------
    @property
    def config(self) -> TrackerConfig:
        return self._config

    @property
    def estimation(self) -> KalmanCursor:
        return self._estimation

    def snapshot(self) -> TrailSnapshot:
        """Point-in-time copy of the raw, measured and filtered trails."""
        return self._trails.snapshot()

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    def configure(self, config: TrackerConfig) -> TrackerConfig:
        """
        Replace the configuration. Takes effect from the next sample;
        history is left untouched.

        Raises:
            UnsupportedMethodError: config selects an unimplemented method
        """
        self._config = config.validate()
        self._filter.gains = self._config.gains
        logger.info(
            "Config updated: method=%s g=%s h=%s k=%s noise=%s",
            self._config.method.value, self._config.gain_g, self._config.gain_h,
            self._config.gain_k, self._config.noise_amplitude,
        )
        return self._config

    def apply_form(self, values: Mapping[str, Any]) -> TrackerConfig:
        """Merge a form payload into the current configuration."""
        return self.configure(self._config.merged(values))

    def reset(self):
        """Clear the trails and reseed the estimate at the current time."""
        self._trails.clear()
        self._estimation = KalmanCursor.initial(self.clock.now())
        self.coalesced = 0

    # ------------------------------------------------------------------
    # Cycle
    # ------------------------------------------------------------------
    def process(self, x: float, y: float, timestamp: Optional[float] = None) -> KalmanCursor:
        """
        Run one full cycle for a raw pointer sample.

        Args:
            x, y: Pointer position
            timestamp: Capture time [s] on the session clock (default: now)

        Returns:
            Current filtered estimate. If the previous estimate is not older
            than now the sample is coalesced: it is recorded in the raw and
            measured trails but the estimate does not change.

        Raises:
            ValueError: x, y or timestamp is not finite (nothing is recorded)
        """
        captured = self.clock.now() if timestamp is None else float(timestamp)
        for name, value in (("x", x), ("y", y), ("timestamp", captured)):
            if not math.isfinite(value):
                raise ValueError(f"{name} must be finite, got {value}")

        raw = KalmanCursor.at_rest(x, y, time=captured)
        self._trails.raw.push_front(raw)

        measurement = self._noise.measure(raw, self._config.noise_amplitude)
        self._trails.measured.push_front(measurement)

        now = self.clock.now()
        pending = measurement.with_delta(now - measurement.time)
        try:
            estimation = self._filter.step(self._estimation, pending, now)
        except DegenerateIntervalError:
            self.coalesced += 1
            logger.debug("Coalesced sample at t=%.6f (no time elapsed since last estimate)", now)
            return self._estimation

        self._estimation = estimation
        self._trails.filtered.push_front(estimation)
        return estimation
