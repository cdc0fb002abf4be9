"""
ghk-cursor: g-h-k Filter Engine Tests
"""
import math

import pytest
from ghk_cursor import (
    CursorData,
    DegenerateIntervalError,
    GHKFilter,
    GHKGains,
    InvalidStateError,
    KalmanCursor,
    Vector2D,
    extrapolate,
    update,
)


def moving_state(time=0.0, delta=0.5):
    return KalmanCursor(
        time=time,
        delta=delta,
        data=CursorData(acc=Vector2D(1.0, 0.0), vel=Vector2D(2.0, -1.0), pos=Vector2D(1.0, 1.0)),
    )


class TestExtrapolation:
    """State extrapolation equation."""

    def test_requires_delta(self):
        state = KalmanCursor.at_rest(5.0, 5.0, time=1.0)
        assert state.delta is None
        with pytest.raises(InvalidStateError):
            extrapolate(state)

    def test_zero_delta_is_allowed(self):
        state = moving_state(delta=0.0)
        projected = extrapolate(state)
        assert projected.pos == state.pos
        assert projected.vel == state.vel

    def test_kinematics(self):
        projected = extrapolate(moving_state(delta=0.5), now=9.0)
        assert projected.acc == Vector2D(1.0, 0.0)
        assert projected.vel == Vector2D(2.5, -1.0)
        assert projected.pos == Vector2D(2.0, 0.5)
        assert projected.delta == 0.5
        assert projected.time == 9.0

    def test_time_defaults_to_state_time(self):
        assert extrapolate(moving_state(time=4.0)).time == 4.0

    def test_input_untouched(self):
        state = moving_state()
        extrapolate(state, now=1.0)
        assert state == moving_state()


class TestUpdate:
    """State update equation."""

    def test_worked_example(self):
        """prev at rest at origin, measurement (10, 0) one second later."""
        prev = KalmanCursor.initial(time=0.0)
        measured = KalmanCursor.at_rest(10.0, 0.0, time=1.0)
        state = update(prev, measured, GHKGains(g=0.5, h=0.1, k=0.1))

        # acc = r · 2k/d² = 10 · 0.2, vel = r · h/d = 10 · 0.1, pos = r · g
        assert state.acc.i == pytest.approx(2.0)
        assert state.vel.i == pytest.approx(1.0)
        assert state.pos.i == pytest.approx(5.0)
        assert state.acc.j == state.vel.j == state.pos.j == 0.0
        assert state.delta == pytest.approx(1.0)
        assert state.time == 1.0

    def test_delta_scaling(self):
        prev = KalmanCursor.initial(time=0.0)
        measured = KalmanCursor.at_rest(4.0, -2.0, time=0.5)
        state = update(prev, measured, GHKGains(g=0.25, h=0.5, k=0.5))
        assert state.acc.i == pytest.approx(4.0 * 1.0 / 0.25)
        assert state.acc.j == pytest.approx(-2.0 * 1.0 / 0.25)
        assert state.vel.i == pytest.approx(4.0 * 0.5 / 0.5)
        assert state.pos.j == pytest.approx(-0.5)

    def test_residual_relative_to_previous(self):
        prev = KalmanCursor(time=0.0, delta=0.0, data=CursorData(
            acc=Vector2D(1.0, 1.0), vel=Vector2D(3.0, 3.0), pos=Vector2D(10.0, 10.0)))
        measured = KalmanCursor.at_rest(10.0, 10.0, time=2.0)
        state = update(prev, measured, GHKGains(g=0.9, h=0.9, k=0.9))
        # Zero residual leaves the state untouched
        assert state.data == prev.data

    def test_zero_gains_freeze_position(self):
        gains = GHKGains(g=0.0, h=0.0, k=0.0)
        state = KalmanCursor.initial(time=0.0)
        for t, (x, y) in enumerate([(5, 5), (-40, 3), (1000, -1000)], start=1):
            state = update(state, KalmanCursor.at_rest(x, y, time=float(t)), gains)
            assert state.pos == Vector2D.zero()

    def test_unit_g_tracks_measurement(self):
        gains = GHKGains(g=1.0, h=0.0, k=0.0)
        state = KalmanCursor.initial(time=0.0)
        for t, (x, y) in enumerate([(5.5, 2.0), (-40.1, 3.3), (0.1, 0.3)], start=1):
            state = update(state, KalmanCursor.at_rest(x, y, time=float(t)), gains)
            assert state.pos.i == pytest.approx(x)
            assert state.pos.j == pytest.approx(y)

    @pytest.mark.parametrize("dt", [0.0, -0.25])
    def test_non_positive_interval_rejected(self, dt):
        prev = KalmanCursor.initial(time=1.0)
        measured = KalmanCursor.at_rest(1.0, 1.0, time=1.0 + dt)
        with pytest.raises(DegenerateIntervalError):
            update(prev, measured, GHKGains())

    def test_nan_interval_rejected(self):
        """A nan elapsed time is not a positive interval."""
        prev = KalmanCursor.initial(time=math.nan)
        measured = KalmanCursor.at_rest(1.0, 1.0, time=1.0)
        with pytest.raises(DegenerateIntervalError):
            update(prev, measured, GHKGains())

    def test_degenerate_interval_is_value_error(self):
        assert issubclass(DegenerateIntervalError, ValueError)


class TestGHKFilter:
    """Extrapolate-then-update cycle."""

    def test_step_uses_now_for_both_steps(self):
        f = GHKFilter(GHKGains(g=0.5, h=0.1, k=0.1))
        prev = KalmanCursor.initial(time=0.0)
        measurement = KalmanCursor.at_rest(10.0, 0.0, time=0.75).with_delta(0.25)
        state = f.step(prev, measurement, now=1.0)
        assert state.time == 1.0
        assert state.delta == pytest.approx(1.0)
        assert state.pos.i == pytest.approx(5.0)

    def test_gains_replaceable(self):
        f = GHKFilter()
        assert f.gains == GHKGains(0.1, 0.1, 0.1)
        f.gains = GHKGains(g=1.0, h=0.0, k=0.0)
        prev = KalmanCursor.initial(time=0.0)
        state = f.step(prev, KalmanCursor.at_rest(3.0, 4.0, time=1.0).with_delta(0.0), now=1.0)
        assert state.pos == Vector2D(3.0, 4.0)

    def test_step_without_delta_fails(self):
        f = GHKFilter()
        with pytest.raises(InvalidStateError):
            f.step(KalmanCursor.initial(0.0), KalmanCursor.at_rest(1.0, 1.0, time=1.0), now=1.0)

    def test_converges_on_stationary_target(self):
        """Fixed gains in (0, 1] pull the position onto a still target."""
        f = GHKFilter(GHKGains(g=0.3, h=0.1, k=0.01))
        state = KalmanCursor.initial(time=0.0)
        for n in range(1, 80):
            t = n / 60
            state = f.step(state, KalmanCursor.at_rest(200.0, 100.0, time=t).with_delta(0.0), now=t)
        assert state.pos.i == pytest.approx(200.0, abs=1e-6)
        assert state.pos.j == pytest.approx(100.0, abs=1e-6)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
