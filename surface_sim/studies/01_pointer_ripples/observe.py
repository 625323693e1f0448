"""
Study 01: Pointer Ripples

Run: python -m surface_sim.studies.01_pointer_ripples.observe

Drag a virtual pointer in a circle across the water and watch
the ripples form, widen and fade.
"""

import argparse
import logging

import numpy as np

from surface_sim.config import SurfaceConfig, load_config
from surface_sim.environments.water_surface import WaterSurface
from surface_sim.observations.visualize import SurfaceVisualizer

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def run_study(
    config: SurfaceConfig,
    steps: int = 600,
    dt: float = 1 / 60,
    pointer_radius: float = 60.0,
    animate: bool = True,
):
    """
    Sweep a pointer around a circle, one touch per frame.

    Watch:
    - Acceptance rate under the rate limit
    - Live ripple count against capacity
    - Strength decay of the first ripple
    """
    print("=" * 50)
    print("Study 01: Pointer Ripples")
    print("=" * 50)

    surface = WaterSurface(config)
    print(f"\nSurface created: {surface}")
    print(f"Ripple strength: {surface.ripple_strength}, "
          f"expected lifetime: "
          f"{surface.ripples.ticks_to_expire(surface.ripple_strength)} ticks")
    print(f"\nRunning {steps} steps...")

    viz = SurfaceVisualizer(surface) if animate else None
    peak_live = 0

    try:
        for step in range(steps):
            angle = 2 * np.pi * step / steps
            surface.on_pointer_ripple(
                pointer_radius * np.cos(angle),
                pointer_radius * np.sin(angle),
            )
            surface.on_tick(dt)
            peak_live = max(peak_live, len(surface.ripples))

            if viz is not None:
                viz.record_frame()
                viz.render()

            if step % 100 == 0:
                print(f"  Step {step}: live={len(surface.ripples)}, "
                      f"accepted={surface.ripples.accepted}")
    finally:
        if viz is not None:
            viz.close()

    registry = surface.ripples
    touches = registry.accepted + registry.rejected

    print("\n" + "=" * 50)
    print("Observations")
    print("=" * 50)
    print(f"\nTouches: {touches}, accepted: {registry.accepted} "
          f"({100 * registry.accepted / max(touches, 1):.1f}%)")
    print(f"Peak live ripples: {peak_live} / {config.ripples.max_ripples}")
    print(f"Evicted: {registry.evicted}, expired: {registry.expired}")

    print("\n" + "=" * 50)
    print("Study complete. What did you observe?")
    print("=" * 50)

    return surface


def main():
    parser = argparse.ArgumentParser(description="Pointer Ripple Study")
    parser.add_argument("--config", default=None, help="YAML surface config")
    parser.add_argument("--steps", type=int, default=600, help="Simulation steps")
    parser.add_argument("--dt", type=float, default=1 / 60, help="Seconds per step")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--no-animate", action="store_true", help="Disable animation")
    args = parser.parse_args()

    config = load_config(args.config)
    if args.seed is not None:
        config.seed = args.seed

    run_study(
        config,
        steps=args.steps,
        dt=args.dt,
        animate=not args.no_animate,
    )


if __name__ == "__main__":
    main()
