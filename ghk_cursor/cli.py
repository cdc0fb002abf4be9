"""
ghk-cursor: Demo
================

Replays a synthetic pointer sweep through a TrackingSession and reports
how far the measured and filtered trails sit from the true path.

Run:
    ghk-cursor-demo --gain-g 0.5 --noise 64
    ghk-cursor-demo --plot          # needs the 'viz' extra (matplotlib)

License: MIT
"""

import argparse
import logging
import sys
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from .clock import ManualClock
from .config import FilterMethod, TrackerConfig
from .session import TrackingSession
from .trails import TrailKind, TrailSnapshot, trail_opacity

logger = logging.getLogger(__name__)


@dataclass
class DemoResult:
    """Outcome of a demo replay."""
    samples: int
    measured_rmse: float
    filtered_rmse: float
    coalesced: int
    snapshot: TrailSnapshot

    @property
    def improvement(self) -> float:
        """Filtered vs measured RMSE reduction in percent."""
        if self.measured_rmse == 0:
            return 0.0
        return (self.measured_rmse - self.filtered_rmse) / self.measured_rmse * 100


def generate_pointer_path(n: int = 200,
                          dt: float = 1 / 60,
                          radius: float = 150.0,
                          center: tuple = (256.0, 256.0),
                          period: float = 4.0) -> np.ndarray:
    """
    Pointer sweeping a circle.

    Args:
        n: Number of samples
        dt: Sample spacing [s]
        radius: Circle radius [px]
        center: Circle centre [px]
        period: Seconds per revolution

    Returns:
        (n, 3) array of [x, y, t]
    """
    t = np.arange(n) * dt
    phase = 2 * np.pi * t / period
    x = center[0] + radius * np.cos(phase)
    y = center[1] + radius * np.sin(phase)
    return np.column_stack([x, y, t])


def rmse(estimates: np.ndarray, truth: np.ndarray) -> float:
    n = min(len(estimates), len(truth))
    if n == 0:
        return 0.0
    errs = np.linalg.norm(estimates[:n] - truth[:n], axis=1)
    return float(np.sqrt(np.mean(errs ** 2)))


def run_demo(config: Optional[TrackerConfig] = None,
             samples: int = 200,
             dt: float = 1 / 60,
             seed: Optional[int] = 42,
             settle: int = 16) -> DemoResult:
    """
    Replay a synthetic path through a session driven by a manual clock.

    Error is measured over the trail window (most recent samples), skipping
    the first `settle` estimates while the filter converges from the origin.
    """
    path = generate_pointer_path(samples, dt)
    clock = ManualClock(start=0.0)
    session = TrackingSession(config, clock=clock, rng=np.random.default_rng(seed))

    truth, measured, filtered = [], [], []
    for i, (x, y, t) in enumerate(path):
        clock.set(t + dt)
        estimate = session.process(x, y, timestamp=t)
        if i < settle:
            continue
        truth.append((x, y))
        measured.append(session.snapshot().measured[0].pos.as_tuple())
        filtered.append(estimate.pos.as_tuple())

    truth = np.array(truth).reshape(-1, 2)
    return DemoResult(
        samples=samples,
        measured_rmse=rmse(np.array(measured).reshape(-1, 2), truth),
        filtered_rmse=rmse(np.array(filtered).reshape(-1, 2), truth),
        coalesced=session.coalesced,
        snapshot=session.snapshot(),
    )


def plot_snapshot(snapshot: TrailSnapshot, ax=None):
    """Draw the three trails with the renderer's colour and opacity falloff."""
    import matplotlib.pyplot as plt

    if ax is None:
        _, ax = plt.subplots(figsize=(6, 6))
    ax.set_facecolor("black")

    for kind, items in ((TrailKind.RAW, snapshot.raw),
                        (TrailKind.MEASURED, snapshot.measured),
                        (TrailKind.FILTERED, snapshot.filtered)):
        rgb = tuple(c / 255 for c in kind.color)
        for i in range(len(items) - 1):
            a, b = items[i].pos, items[i + 1].pos
            ax.plot([a.i, b.i], [a.j, b.j], color=rgb, alpha=trail_opacity(i), linewidth=3)

    ax.invert_yaxis()   # screen coordinates
    ax.set_aspect("equal")
    return ax


def build_parser() -> argparse.ArgumentParser:
    defaults = TrackerConfig()
    parser = argparse.ArgumentParser(
        description="g-h-k pointer tracking demo",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--samples", type=int, default=200, help="Number of pointer samples")
    parser.add_argument("--dt", type=float, default=1 / 60, help="Sample spacing (s)")
    parser.add_argument("--method", type=str, default=defaults.method.value,
                        choices=[m.value for m in FilterMethod], help="Estimator method")
    parser.add_argument("--gain-g", type=float, default=defaults.gain_g, help="Position gain")
    parser.add_argument("--gain-h", type=float, default=defaults.gain_h, help="Velocity gain")
    parser.add_argument("--gain-k", type=float, default=defaults.gain_k, help="Acceleration gain")
    parser.add_argument("--noise", type=float, default=defaults.noise_amplitude,
                        help="Measurement noise amplitude (px)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    parser.add_argument("--plot", action="store_true", help="Plot the final trails")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def demo_cli(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(levelname)s %(name)s: %(message)s")

    try:
        config = TrackerConfig.from_form({
            "method": args.method,
            "gainG": args.gain_g,
            "gainH": args.gain_h,
            "gainK": args.gain_k,
            "noise": args.noise,
        })
    except ValueError as e:
        logger.error("%s", e)
        return 2

    result = run_demo(config, samples=args.samples, dt=args.dt, seed=args.seed)

    print(f"Samples:        {result.samples}")
    print(f"Measured RMSE:  {result.measured_rmse:.2f} px")
    print(f"Filtered RMSE:  {result.filtered_rmse:.2f} px")
    print(f"Improvement:    {result.improvement:+.1f}%")
    if result.coalesced:
        print(f"Coalesced:      {result.coalesced}")

    if args.plot:
        import matplotlib.pyplot as plt
        plot_snapshot(result.snapshot)
        plt.show()

    return 0


if __name__ == "__main__":
    sys.exit(demo_cli())
