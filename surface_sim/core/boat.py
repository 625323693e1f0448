"""
core/boat.py

A boat should be like a fisherman's afternoon:
drift a while, cast a line, wait, drift again.

Two modes, no more. Time alone decides when to switch.

Inspired by:
- Refractory periods (act, then rest)
- Duty cycles
- Billiard-ball boundaries
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

import numpy as np

from surface_sim.config import BoatConfig
from surface_sim.core.clock import SimClock

logger = logging.getLogger(__name__)


class BoatMode(Enum):
    MOVING = "moving"
    FISHING = "fishing"


@dataclass
class BoatState:
    """
    What the boat IS at this moment.

    The renderer reads this; only the boat writes it.
    """
    position: np.ndarray              # (x, z) on the water plane
    heading: np.ndarray               # Unit vector (x, z)
    mode: BoatMode = BoatMode.MOVING
    mode_elapsed: float = 0.0         # Seconds spent in the current mode
    line_visible: bool = False
    line_depth: float = -5.0          # Height of the fishing line end

    def __post_init__(self):
        self.position = np.asarray(self.position, dtype=np.float64)
        self.heading = np.asarray(self.heading, dtype=np.float64)

    def copy(self) -> "BoatState":
        return BoatState(
            position=self.position.copy(),
            heading=self.heading.copy(),
            mode=self.mode,
            mode_elapsed=self.mode_elapsed,
            line_visible=self.line_visible,
            line_depth=self.line_depth,
        )


@dataclass(frozen=True)
class RippleEmission:
    """A ripple the boat asks the surface to create."""
    x: float
    z: float
    source: str                       # "wake" or "line"


class Boat:
    """
    The boat agent.

    MOVING: advance along heading, leave a wake, turn back at the edge.
    FISHING: sit still, bob the line, disturb the water now and then.
    """

    def __init__(
        self,
        config: Optional[BoatConfig] = None,
        position: Optional[np.ndarray] = None,
        heading: Optional[np.ndarray] = None,
        boundary: float = 235.0,
    ):
        self.config = config or BoatConfig()
        self.config.validate()
        self.boundary = boundary

        init_pos = position if position is not None else np.zeros(2)
        init_heading = heading if heading is not None else np.array([1.0, 1.0])
        self.state = BoatState(
            position=init_pos,
            heading=_normalize(np.asarray(init_heading, dtype=np.float64)),
            line_depth=self.config.line_rest_depth,
        )

        self.transitions = 0
        self.reflections = 0

        self.history: List[BoatState] = []
        self.record_history = False

    # ==================== Core Loop ====================

    def update(
        self,
        dt: float,
        now: float,
        rng: np.random.Generator,
    ) -> List[RippleEmission]:
        """
        Advance the boat by dt seconds.

        Returns the ripples the boat wants to make this tick.
        """
        dt = SimClock.clamp(dt)
        if dt == 0.0:
            return []

        if self.state.mode is BoatMode.MOVING:
            emissions = self._move(dt, rng)
        else:
            emissions = self._fish(dt, now, rng)

        if self.record_history:
            self.history.append(self.state.copy())

        return emissions

    @property
    def yaw(self) -> float:
        """Heading as an angle in the x-z plane (radians)."""
        return float(np.arctan2(self.state.heading[1], self.state.heading[0]))

    @property
    def is_fishing(self) -> bool:
        return self.state.mode is BoatMode.FISHING

    def line_end(self) -> np.ndarray:
        """Where the fishing line meets the water."""
        return self.state.position + np.array([self.config.line_offset, 0.0])

    # ==================== Modes ====================

    def _move(self, dt: float, rng: np.random.Generator) -> List[RippleEmission]:
        state = self.state
        state.mode_elapsed += dt

        state.position = state.position + state.heading * self.config.speed * dt

        emissions = []
        if rng.random() < self.config.wake_probability:
            wake = state.position - state.heading * self.config.wake_distance
            emissions.append(RippleEmission(float(wake[0]), float(wake[1]), "wake"))

        # Both components flip together, even if only one axis crossed
        if np.any(np.abs(state.position) > self.boundary):
            state.heading = -state.heading
            self.reflections += 1

        if state.mode_elapsed >= self.config.movement_duration:
            self._enter(BoatMode.FISHING)
            state.line_visible = True

        return emissions

    def _fish(
        self,
        dt: float,
        now: float,
        rng: np.random.Generator,
    ) -> List[RippleEmission]:
        state = self.state
        state.mode_elapsed += dt

        state.line_depth = (
            self.config.line_rest_depth
            + np.sin(now * self.config.bob_frequency) * self.config.bob_amplitude
        )

        emissions = []
        if rng.random() < self.config.fishing_ripple_probability:
            end = self.line_end()
            emissions.append(RippleEmission(float(end[0]), float(end[1]), "line"))

        if state.mode_elapsed >= self.config.fishing_duration:
            self._enter(BoatMode.MOVING)
            state.line_visible = False
            state.line_depth = self.config.line_rest_depth
            angle = rng.uniform(0.0, 2 * np.pi)
            state.heading = np.array([np.cos(angle), np.sin(angle)])

        return emissions

    def _enter(self, mode: BoatMode) -> None:
        logger.info(
            f"Boat {self.state.mode.value} -> {mode.value} "
            f"after {self.state.mode_elapsed:.2f}s"
        )
        self.state.mode = mode
        self.state.mode_elapsed = 0.0
        self.transitions += 1

    def __repr__(self) -> str:
        return (
            f"Boat(mode={self.state.mode.value}, "
            f"pos=[{self.state.position[0]:.2f}, {self.state.position[1]:.2f}], "
            f"elapsed={self.state.mode_elapsed:.2f})"
        )


def _normalize(vector: np.ndarray) -> np.ndarray:
    norm = np.linalg.norm(vector)
    if norm == 0:
        raise ValueError("Heading must be a non-zero vector")
    return vector / norm
