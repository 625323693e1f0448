"""
observations/visualize.py

Look down on the pond.

A flat, top-down view: rings for ripples, an arrow for the boat,
a dot where the line meets the water. Enough to watch the rhythm.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

import numpy as np

if TYPE_CHECKING:
    from surface_sim.environments.water_surface import WaterSurface


class SurfaceVisualizer:
    """Top-down matplotlib view of a WaterSurface."""

    def __init__(
        self,
        surface: WaterSurface,
        figsize: tuple = (8, 8),
        trail_length: int = 200,
    ):
        self.surface = surface
        self.figsize = figsize
        self.trail_length = trail_length

        self.boat_trail: List[np.ndarray] = []

        # Lazy import matplotlib
        self._plt = None
        self._fig = None
        self._ax = None

    def _setup_plot(self):
        import matplotlib.pyplot as plt
        self._plt = plt

        self._fig, self._ax = plt.subplots(figsize=self.figsize)
        self._fig.patch.set_facecolor('#0b132b')

    def _limits(self) -> tuple:
        half = self.surface.config.domain_size / 2
        return (-half, half)

    def record_frame(self) -> None:
        """Remember where the boat was."""
        self.boat_trail.append(self.surface.boat.state.position.copy())
        if len(self.boat_trail) > self.trail_length:
            self.boat_trail = self.boat_trail[-self.trail_length:]

    def render(self, show_trail: bool = True, show_boundary: bool = True) -> None:
        if self._plt is None:
            self._setup_plot()

        snap = self.surface.snapshot()
        ax = self._ax
        ax.clear()
        ax.set_xlim(self._limits())
        ax.set_ylim(self._limits())
        ax.set_aspect('equal')
        ax.set_facecolor('#1c2541')

        if show_boundary:
            b = self.surface.config.boundary
            ax.plot([-b, b, b, -b, -b], [-b, -b, b, b, -b],
                    color='#3a506b', linestyle='--', linewidth=0.8)

        # Ripples fade with strength
        peak = self.surface.config.ripples.default_strength
        for ripple in snap.ripples:
            alpha = float(np.clip(ripple.strength / peak, 0.05, 1.0))
            ax.add_patch(self._plt.Circle(
                ripple.position, max(ripple.radius, 0.5),
                fill=False, color='#6fffe9', alpha=alpha, linewidth=1.2,
            ))

        if show_trail and len(self.boat_trail) > 1:
            trail = np.array(self.boat_trail)
            ax.plot(trail[:, 0], trail[:, 1], color='#5bc0be', alpha=0.4, linewidth=1)

        pos = snap.boat.position
        ax.quiver(pos[0], pos[1], snap.boat.heading[0], snap.boat.heading[1],
                  color='#f4a261', scale=20)
        ax.scatter([pos[0]], [pos[1]], c='#e76f51', s=60, edgecolors='white')

        if snap.boat.line_visible:
            end = self.surface.boat.line_end()
            ax.scatter([end[0]], [end[1]], c='white', s=10)

        ax.set_title(
            f"t={snap.time:.1f}s | ripples: {len(snap.ripples)} | "
            f"boat: {snap.boat.mode.value} ({snap.boat.mode_elapsed:.1f}s)",
            color='white', fontsize=11
        )

        self._plt.pause(0.001)

    def save_frame(self, path: str) -> None:
        if self._fig is not None:
            self._fig.savefig(path, dpi=150, facecolor=self._fig.get_facecolor())

    def close(self) -> None:
        if self._plt is not None:
            self._plt.close(self._fig)


def animate_study(
    surface: WaterSurface,
    steps: int = 600,
    dt: float = 1 / 30,
    render_every: int = 2,
    save_path: Optional[str] = None,
) -> None:
    """Run the surface and watch it."""
    viz = SurfaceVisualizer(surface)

    try:
        for step in range(steps):
            surface.on_tick(dt)
            viz.record_frame()
            if step % render_every == 0:
                viz.render()

        if save_path:
            viz.save_frame(save_path)

    finally:
        viz.close()
