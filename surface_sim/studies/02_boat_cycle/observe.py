"""
Study 02: Boat Cycle

Run: python -m surface_sim.studies.02_boat_cycle.observe

Leave the water alone and watch the boat: fifteen seconds of drifting,
ten of fishing, over and over. A small pond makes the edge matter.
"""

import argparse
import logging

import numpy as np

from surface_sim.config import SurfaceConfig, load_config
from surface_sim.core.boat import BoatMode
from surface_sim.environments.water_surface import WaterSurface
from surface_sim.observations.visualize import SurfaceVisualizer

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def run_study(
    config: SurfaceConfig,
    steps: int = 3000,
    dt: float = 1 / 30,
    animate: bool = True,
):
    """
    Observe the boat alone.

    Watch:
    - Mode alternation and time spent in each
    - Boundary reflections
    - Ripples caused by the wake and the line
    """
    print("=" * 50)
    print("Study 02: Boat Cycle")
    print("=" * 50)

    surface = WaterSurface(config)
    boat = surface.boat
    boat.record_history = True

    print(f"\nBoat launched: {boat}")
    print(f"Boundary at |x|, |z| > {config.boundary:.1f}")
    print(f"\nRunning {steps} steps ({steps * dt:.0f}s)...")

    viz = SurfaceVisualizer(surface) if animate else None

    try:
        for step in range(steps):
            surface.on_tick(dt)

            if viz is not None:
                viz.record_frame()
                if step % 2 == 0:
                    viz.render()

            if step % 300 == 0:
                print(f"  Step {step}: {boat}")
    finally:
        if viz is not None:
            viz.close()

    print("\n" + "=" * 50)
    print("Observations")
    print("=" * 50)

    if boat.history:
        modes = np.array([s.mode is BoatMode.FISHING for s in boat.history])
        positions = np.array([s.position for s in boat.history])
        distances = np.linalg.norm(np.diff(positions, axis=0), axis=1)

        print(f"\nTransitions: {boat.transitions}")
        print(f"Time fishing: {100 * modes.mean():.1f}%")
        print(f"Reflections at the edge: {boat.reflections}")
        print(f"Distance travelled: {distances.sum():.2f}")
        print(f"Ripples made: {surface.ripples.accepted} "
              f"(rate limited: {surface.ripples.rejected})")

    print("\n" + "=" * 50)
    print("Study complete. What did you observe?")
    print("=" * 50)

    return surface


def main():
    parser = argparse.ArgumentParser(description="Boat Cycle Study")
    parser.add_argument("--config", default=None, help="YAML surface config")
    parser.add_argument("--steps", type=int, default=3000, help="Simulation steps")
    parser.add_argument("--dt", type=float, default=1 / 30, help="Seconds per step")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--domain-size", type=float, default=None,
                        help="Override the water size")
    parser.add_argument("--no-animate", action="store_true", help="Disable animation")
    args = parser.parse_args()

    config = load_config(args.config)
    if args.seed is not None:
        config.seed = args.seed
    if args.domain_size is not None:
        config.domain_size = args.domain_size
        config.validate()

    run_study(
        config,
        steps=args.steps,
        dt=args.dt,
        animate=not args.no_animate,
    )


if __name__ == "__main__":
    main()
