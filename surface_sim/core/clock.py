"""
core/clock.py

The host decides when a frame happens. We decide how much time passed.

Bad deltas (negative, NaN, infinite) count as no time at all.
"""

from __future__ import annotations

import logging
import math

logger = logging.getLogger(__name__)


class SimClock:
    """Accumulates clamped frame deltas into simulation time."""

    def __init__(self, start: float = 0.0):
        self._start = float(start)
        self.elapsed = float(start)
        self.ticks = 0

    @property
    def now(self) -> float:
        return self.elapsed

    @staticmethod
    def clamp(dt: float) -> float:
        """Non-finite or negative deltas become zero."""
        try:
            dt = float(dt)
        except (TypeError, ValueError):
            return 0.0
        if not math.isfinite(dt) or dt < 0:
            return 0.0
        return dt

    def advance(self, dt: float) -> float:
        """Advance by dt (clamped) and return the delta actually applied."""
        applied = self.clamp(dt)
        if applied != dt:
            logger.debug(f"Clamped frame delta {dt!r} to {applied}")
        self.elapsed += applied
        self.ticks += 1
        return applied

    def reset(self) -> None:
        self.elapsed = self._start
        self.ticks = 0

    def __repr__(self) -> str:
        return f"SimClock(now={self.elapsed:.3f}, ticks={self.ticks})"
