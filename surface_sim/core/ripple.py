"""
core/ripple.py

The surface remembers a disturbance for a little while.

A touch becomes a ring. The ring widens, weakens, and is gone.
Only the freshest few are kept; the water has a short memory.

Inspired by:
- Stones dropped in a pond
- Exponential decay
- Ring buffers
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import Iterator, List, Optional, Tuple

import numpy as np

from surface_sim.config import RippleConfig

logger = logging.getLogger(__name__)

RATE_LIMIT_TOLERANCE = 1e-9


@dataclass
class Ripple:
    """A single decaying disturbance on the water plane."""
    x: float
    z: float
    strength: float
    radius: float
    created_at: float             # Sim seconds at birth

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.z)

    def age(self, now: float) -> float:
        return max(0.0, now - self.created_at)


class RippleRegistry:
    """
    Bounded, insertion-ordered collection of live ripples.

    The registry only mutates itself. Whoever renders the water
    reads snapshots between ticks.

    Invariants:
    - Never more than max_ripples entries (earliest inserted evicted first)
    - Radius never shrinks and never exceeds max_radius
    - Strength only decreases; entries below expiry_threshold are removed
    """

    def __init__(self, config: Optional[RippleConfig] = None):
        self.config = config or RippleConfig()
        self.config.validate()

        self._ripples: List[Ripple] = []
        self._last_accepted: Optional[float] = None

        # Counters for observation
        self.accepted = 0
        self.rejected = 0
        self.evicted = 0
        self.expired = 0

    def add(self, x: float, z: float, strength: float, now: float) -> Optional[Ripple]:
        """
        Add a ripple at (x, z) unless one was accepted too recently.

        Returns the new ripple, or None if the call was rate limited.
        """
        if not (math.isfinite(strength) and strength > 0):
            raise ValueError(f"Ripple strength must be positive and finite, got {strength}")
        if not (math.isfinite(x) and math.isfinite(z)):
            raise ValueError(f"Ripple position must be finite, got ({x}, {z})")

        # Sim time is a sum of float deltas; 0.7 - 0.6 must count as 0.1
        if (
            self._last_accepted is not None
            and now - self._last_accepted < self.config.rate_limit - RATE_LIMIT_TOLERANCE
        ):
            self.rejected += 1
            return None

        self._last_accepted = now
        ripple = Ripple(
            x=float(x),
            z=float(z),
            strength=float(strength),
            radius=self.config.initial_radius,
            created_at=now,
        )
        self._ripples.append(ripple)
        self.accepted += 1

        if len(self._ripples) > self.config.max_ripples:
            oldest = self._ripples.pop(0)
            self.evicted += 1
            logger.debug(f"Evicted ripple at ({oldest.x:.1f}, {oldest.z:.1f})")

        return ripple

    def tick(self, now: float) -> None:
        """
        Age every ripple by one tick.

        - Radius follows age (growth_rate per second), capped
        - Strength decays geometrically
        - Faded ripples are dropped
        """
        survivors = []
        for ripple in self._ripples:
            grown = min(self.config.max_radius, ripple.age(now) * self.config.growth_rate)
            ripple.radius = max(ripple.radius, grown)
            ripple.strength *= self.config.decay_factor

            if ripple.strength < self.config.expiry_threshold:
                self.expired += 1
                continue
            survivors.append(ripple)

        self._ripples = survivors

    def clear(self) -> None:
        """Forget every ripple (the water plane was rebuilt)."""
        self._ripples = []
        self._last_accepted = None

    def snapshot(self) -> List[Ripple]:
        """Independent copies of the live ripples, oldest first."""
        return [replace(r) for r in self._ripples]

    def as_arrays(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Positions (n, 2), strengths (n,), radii (n,) for uniform upload."""
        if not self._ripples:
            return np.zeros((0, 2)), np.zeros(0), np.zeros(0)
        positions = np.array([r.position for r in self._ripples], dtype=np.float64)
        strengths = np.array([r.strength for r in self._ripples], dtype=np.float64)
        radii = np.array([r.radius for r in self._ripples], dtype=np.float64)
        return positions, strengths, radii

    def ticks_to_expire(self, strength: float) -> int:
        """Ticks until a ripple of the given strength is removed."""
        ratio = math.log(self.config.expiry_threshold / strength)
        return max(1, math.floor(ratio / math.log(self.config.decay_factor)) + 1)

    def __len__(self) -> int:
        return len(self._ripples)

    def __iter__(self) -> Iterator[Ripple]:
        return iter(list(self._ripples))

    def __repr__(self) -> str:
        return (
            f"RippleRegistry(live={len(self._ripples)}, "
            f"accepted={self.accepted}, rejected={self.rejected})"
        )
