"""
ghk-cursor: g-h-k Filter Engine
===============================

Fixed-gain α-β-γ style estimator over position, velocity and
acceleration. No covariance and no computed gain: g, h and k are set by
the user, so low gains lag and high gains amplify noise.

Cycle:
    state = update(prev, extrapolate(measurement.with_delta(d_capture)))

Extrapolation (predict), over the state's own delta d:
    acc' = acc
    vel' = vel + acc · d
    pos' = pos + vel · d

Update (correct), over d = next.time − prev.time (next = extrapolated measurement):
    r    = next.pos − prev.pos
    acc' = prev.acc + r · 2k / d²
    vel' = prev.vel + r · h / d
    pos' = prev.pos + r · g

License: MIT
"""

from dataclasses import dataclass
from typing import Optional

from .exceptions import DegenerateIntervalError, InvalidStateError
from .models import CursorData, KalmanCursor


@dataclass(frozen=True)
class GHKGains:
    """Filter gains. Conventionally each in [0, 1]."""
    g: float = 0.1
    h: float = 0.1
    k: float = 0.1


def extrapolate(state: KalmanCursor, now: Optional[float] = None) -> KalmanCursor:
    """
    State extrapolation equation.

    Args:
        state: State with a defined delta [s]
        now: Timestamp for the projected state (defaults to state.time)

    Returns:
        Projected state carrying the same delta

    Raises:
        InvalidStateError: state.delta is None
    """
    if state.delta is None:
        raise InvalidStateError("Time delta is not specified")

    d = state.delta
    data = state.data
    return KalmanCursor(
        time=state.time if now is None else now,
        delta=d,
        data=CursorData(
            acc=data.acc,
            vel=data.vel.add(data.acc.scale(d)),
            pos=data.pos.add(data.vel.scale(d)),
        ),
    )


def update(prev: KalmanCursor, measured: KalmanCursor, gains: GHKGains,
           now: Optional[float] = None) -> KalmanCursor:
    """
    State update equation.

    Args:
        prev: Previous filtered state
        measured: Next (extrapolated) measurement
        gains: g, h, k
        now: Timestamp for the new state (defaults to measured.time)

    Returns:
        New filtered state with delta = measured.time - prev.time

    Raises:
        DegenerateIntervalError: measured.time is not after prev.time
            (including a nan interval)
    """
    d = measured.time - prev.time
    if not d > 0:
        raise DegenerateIntervalError(
            f"Elapsed time between states must be positive, got {d} s"
        )

    residual = measured.pos.add(prev.pos.inverse())
    return KalmanCursor(
        time=measured.time if now is None else now,
        delta=d,
        data=CursorData(
            acc=prev.acc.add(residual.scale((gains.k * 2) / (d * d))),
            vel=prev.vel.add(residual.scale(gains.h / d)),
            pos=prev.pos.add(residual.scale(gains.g)),
        ),
    )


class GHKFilter:
    """
    g-h-k filter with replaceable gains.

    Holds no state of its own besides the gains; the caller owns the
    previous estimate.

    Example:
        f = GHKFilter(GHKGains(g=0.5, h=0.1, k=0.1))
        est = f.step(est, measurement.with_delta(0.0), now=t)
    """

    def __init__(self, gains: Optional[GHKGains] = None):
        self.gains = gains if gains is not None else GHKGains()

    def step(self, prev: KalmanCursor, measurement: KalmanCursor,
             now: Optional[float] = None) -> KalmanCursor:
        """Extrapolate the measurement to `now`, then update from `prev`."""
        return update(prev, extrapolate(measurement, now), self.gains, now)
