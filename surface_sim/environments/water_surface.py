"""
environments/water_surface.py

The square pond: ripples, a boat, and a clock.

The host calls in; nothing here calls out.
A pointer touch becomes on_pointer_ripple. A frame becomes on_tick.
The renderer reads snapshots and never writes back.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from surface_sim.config import ConfigError, SurfaceConfig
from surface_sim.core.boat import Boat, BoatState
from surface_sim.core.clock import SimClock
from surface_sim.core.ripple import Ripple, RippleRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SurfaceSnapshot:
    """Everything a renderer needs for one frame, detached from live state."""
    time: float
    ripples: List[Ripple]
    boat: BoatState
    boat_yaw: float
    domain_size: float


class WaterSurface:
    """
    Single owner of the ripple registry and the boat.

    Each tick is one bounded unit of work:
    1. Advance the clock (bad deltas count as zero)
    2. Age the ripples
    3. Update the boat and turn its emissions into ripples

    A tick with zero effective delta changes nothing.
    """

    def __init__(
        self,
        config: Optional[SurfaceConfig] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        # Owned copy; resize mutates it
        self.config = copy.deepcopy(config or SurfaceConfig()).validate()
        self.rng = rng if rng is not None else np.random.default_rng(self.config.seed)

        self.clock = SimClock()
        self.ripples = RippleRegistry(self.config.ripples)
        self.boat = Boat(self.config.boat, boundary=self.config.boundary)
        self.ripple_strength = self.config.ripples.default_strength

        logger.info(
            f"Water surface ready: size={self.config.domain_size}, "
            f"max_ripples={self.config.ripples.max_ripples}"
        )

    # ==================== Host Interface ====================

    def on_pointer_ripple(self, x: float, z: float, strength: Optional[float] = None) -> bool:
        """A pointer touched the water at (x, z). Returns True if a ripple formed."""
        if strength is None:
            strength = self.ripple_strength
        return self.ripples.add(x, z, strength, self.clock.now) is not None

    def on_tick(self, dt: float) -> float:
        """Advance the surface by one frame. Returns the delta actually applied."""
        applied = SimClock.clamp(dt)
        if applied == 0.0:
            return 0.0

        self.clock.advance(applied)
        now = self.clock.now

        self.ripples.tick(now)

        for emission in self.boat.update(applied, now, self.rng):
            self.ripples.add(emission.x, emission.z, self.ripple_strength, now)

        return applied

    def run(self, steps: int, dt: float = 1 / 60) -> None:
        """Drive the surface for a fixed number of frames."""
        for _ in range(steps):
            self.on_tick(dt)

    # ==================== Tunables ====================

    def set_ripple_strength(self, strength: float) -> None:
        """Strength used for new ripples from now on."""
        if not (np.isfinite(strength) and strength > 0):
            raise ValueError(f"Ripple strength must be positive, got {strength}")
        self.ripple_strength = float(strength)

    def resize(self, domain_size: float) -> None:
        """
        Rebuild the water plane at a new size.

        Live ripples belong to the old plane and are dropped.
        """
        old_size = self.config.domain_size
        self.config.domain_size = float(domain_size)
        try:
            self.config.validate()
        except ConfigError:
            self.config.domain_size = old_size
            raise

        self.boat.boundary = self.config.boundary
        self.ripples.clear()
        logger.info(f"Water resized {old_size} -> {domain_size}")

    # ==================== Observation ====================

    def snapshot(self) -> SurfaceSnapshot:
        return SurfaceSnapshot(
            time=self.clock.now,
            ripples=self.ripples.snapshot(),
            boat=self.boat.state.copy(),
            boat_yaw=self.boat.yaw,
            domain_size=self.config.domain_size,
        )

    def __repr__(self) -> str:
        return (
            f"WaterSurface(time={self.clock.now:.2f}, "
            f"ripples={len(self.ripples)}, "
            f"boat={self.boat.state.mode.value})"
        )
