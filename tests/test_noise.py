"""
ghk-cursor: Noise Synthesizer Tests
"""
import numpy as np
import pytest
from ghk_cursor import KalmanCursor, NoiseSynthesizer, Vector2D


class TestNoiseSynthesizer:
    """Test suite for simulated measurement noise."""

    def test_zero_amplitude_is_identity(self):
        noise = NoiseSynthesizer(np.random.default_rng(1))
        sample = KalmanCursor.at_rest(123.5, -42.25, time=3.0)
        measurement = noise.measure(sample, 0.0)
        assert measurement.pos == sample.pos

    def test_measurement_keeps_time_and_rests(self):
        noise = NoiseSynthesizer(np.random.default_rng(2))
        sample = KalmanCursor.at_rest(10.0, 20.0, time=7.5)
        measurement = noise.measure(sample, 32.0)
        assert measurement.time == 7.5
        assert measurement.vel == Vector2D.zero()
        assert measurement.acc == Vector2D.zero()

    def test_offset_range(self):
        """Offsets lie in [-n/2, n/2) on both axes."""
        noise = NoiseSynthesizer(np.random.default_rng(3))
        n = 64.0
        for _ in range(2000):
            d = noise.offset(n)
            assert -n / 2 <= d.i < n / 2
            assert -n / 2 <= d.j < n / 2

    def test_quadratic_bias(self):
        """E[U²] = 1/3, so the mean offset is n/3 - n/2 = -n/6."""
        noise = NoiseSynthesizer(np.random.default_rng(4))
        n = 60.0
        offsets = np.array([noise.offset(n).to_array() for _ in range(20000)])
        assert offsets.mean(axis=0) == pytest.approx([-n / 6, -n / 6], abs=0.5)

    def test_seeded_reproducible(self):
        a = NoiseSynthesizer(np.random.default_rng(42))
        b = NoiseSynthesizer(np.random.default_rng(42))
        p = Vector2D(100.0, 100.0)
        assert [a.perturb(p, 32.0) for _ in range(5)] == [b.perturb(p, 32.0) for _ in range(5)]

    def test_negative_amplitude_rejected(self):
        with pytest.raises(ValueError):
            NoiseSynthesizer().offset(-1.0)

    def test_default_rng_is_shared(self):
        assert NoiseSynthesizer().rng is NoiseSynthesizer().rng


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
