"""
Tests for environments/water_surface.py

The controller that owns the ripples and the boat.
"""

import numpy as np
import pytest

from surface_sim.config import BoatConfig, ConfigError, RippleConfig, SurfaceConfig
from surface_sim.core.boat import BoatMode
from surface_sim.environments.water_surface import SurfaceSnapshot, WaterSurface


class TestWaterSurfaceInit:
    """Tests for building a surface."""

    def test_defaults(self):
        """Surface starts empty with a moving boat and default bounds."""
        surface = WaterSurface()
        assert surface.clock.now == 0.0
        assert len(surface.ripples) == 0
        assert surface.boat.state.mode is BoatMode.MOVING
        assert surface.boat.boundary == pytest.approx(235.0)
        assert surface.ripple_strength == 3.0

    def test_invalid_config(self):
        """Invalid config is refused at construction."""
        with pytest.raises(ConfigError):
            WaterSurface(SurfaceConfig(domain_size=20.0))

    def test_seeded_runs_match(self):
        """Same seed gives the same run."""
        a = WaterSurface(SurfaceConfig(seed=3))
        b = WaterSurface(SurfaceConfig(seed=3))
        a.run(900, dt=1 / 30)
        b.run(900, dt=1 / 30)

        np.testing.assert_array_equal(a.boat.state.position, b.boat.state.position)
        assert [r.position for r in a.ripples] == [r.position for r in b.ripples]


class TestPointerRipples:
    """Tests for pointer-driven ripples."""

    def test_pointer_ripple_accepted(self):
        """Pointer touch creates a ripple at default strength."""
        surface = WaterSurface()
        assert surface.on_pointer_ripple(5.0, -5.0) is True
        ripple = next(iter(surface.ripples))
        assert ripple.strength == 3.0
        assert ripple.position == (5.0, -5.0)

    def test_pointer_rate_limited_between_ticks(self):
        """Touches between ticks share the rate limit."""
        surface = WaterSurface(SurfaceConfig(boat=BoatConfig(wake_probability=0.0)))
        assert surface.on_pointer_ripple(0.0, 0.0) is True
        assert surface.on_pointer_ripple(1.0, 1.0) is False

        surface.on_tick(0.1)
        assert surface.on_pointer_ripple(1.0, 1.0) is True

    def test_custom_strength(self):
        """Pointer ripples use the configured strength."""
        surface = WaterSurface()
        surface.set_ripple_strength(1.5)
        surface.on_pointer_ripple(0.0, 0.0)
        assert next(iter(surface.ripples)).strength == 1.5

    def test_invalid_strength(self):
        """Strength must be positive."""
        with pytest.raises(ValueError):
            WaterSurface().set_ripple_strength(0.0)

    def test_touch_every_interval_always_accepted(self):
        """One touch per 0.1s frame is never rate limited."""
        surface = WaterSurface(SurfaceConfig(boat=BoatConfig(wake_probability=0.0)))
        for i in range(100):
            assert surface.on_pointer_ripple(float(i % 50), 0.0) is True
            surface.on_tick(0.1)

        assert surface.ripples.accepted == 100
        assert surface.ripples.rejected == 0

    def test_non_finite_touch_rejected(self):
        """A pointer touch at a non-finite position raises."""
        surface = WaterSurface()
        with pytest.raises(ValueError):
            surface.on_pointer_ripple(float("nan"), 0.0)
        assert len(surface.ripples) == 0

    def test_capacity_over_many_touches(self):
        """Live ripples stay within capacity under constant touching."""
        surface = WaterSurface(SurfaceConfig(seed=0))
        for i in range(300):
            surface.on_pointer_ripple(float(i % 50), 0.0)
            surface.on_tick(0.1)
            assert len(surface.ripples) <= 20


class TestTick:
    """Tests for the per-frame update."""

    def test_tick_advances_time(self):
        """Tick advances the clock by dt."""
        surface = WaterSurface()
        assert surface.on_tick(0.25) == pytest.approx(0.25)
        assert surface.clock.now == pytest.approx(0.25)

    def test_tick_decays_ripples(self):
        """Tick decays and grows live ripples."""
        surface = WaterSurface(SurfaceConfig(boat=BoatConfig(wake_probability=0.0)))
        surface.on_pointer_ripple(0.0, 0.0)
        surface.on_tick(0.1)
        ripple = next(iter(surface.ripples))
        assert ripple.strength == pytest.approx(3.0 * 0.98)
        assert ripple.radius == pytest.approx(1.0)

    def test_zero_dt_is_noop(self):
        """Zero-length ticks change nothing."""
        surface = WaterSurface(SurfaceConfig(seed=1))
        surface.on_pointer_ripple(0.0, 0.0)
        surface.on_tick(0.2)
        before = surface.snapshot()

        for _ in range(50):
            assert surface.on_tick(0.0) == 0.0

        after = surface.snapshot()
        assert after.time == before.time
        np.testing.assert_array_equal(after.boat.position, before.boat.position)
        assert [(r.strength, r.radius) for r in after.ripples] == [
            (r.strength, r.radius) for r in before.ripples
        ]

    @pytest.mark.parametrize("dt", [-1.0, float("nan"), float("inf")])
    def test_bad_deltas_are_noop(self, dt):
        """Negative and non-finite deltas change nothing."""
        surface = WaterSurface()
        surface.on_pointer_ripple(0.0, 0.0)
        surface.on_tick(dt)

        assert surface.clock.now == 0.0
        assert next(iter(surface.ripples)).strength == 3.0
        np.testing.assert_array_equal(surface.boat.state.position, [0.0, 0.0])

    def test_boat_wake_lands_in_registry(self):
        """Boat wake emissions become ripples."""
        config = SurfaceConfig(boat=BoatConfig(wake_probability=1.0))
        surface = WaterSurface(config)
        surface.on_tick(0.1)

        assert len(surface.ripples) == 1
        ripple = next(iter(surface.ripples))
        heading = surface.boat.state.heading
        expected = surface.boat.state.position - heading * 8.0
        assert ripple.position == pytest.approx(tuple(expected))

    def test_boat_ripples_respect_rate_limit(self):
        """Boat ripples go through the rate limit."""
        config = SurfaceConfig(boat=BoatConfig(wake_probability=1.0))
        surface = WaterSurface(config)
        surface.run(10, dt=0.02)   # 0.2s of frames, one wake request each
        assert surface.ripples.accepted <= 3

    def test_full_cycle(self):
        """Surface drives the boat through a full fishing cycle."""
        surface = WaterSurface(SurfaceConfig(seed=11))
        surface.run(int(15.5 * 20), dt=0.05)
        assert surface.boat.state.mode is BoatMode.FISHING
        assert surface.boat.state.line_visible is True

        surface.run(int(10.5 * 20), dt=0.05)
        assert surface.boat.state.mode is BoatMode.MOVING
        assert surface.boat.state.line_visible is False


class TestResize:
    """Tests for rebuilding the water plane."""

    def test_resize_clears_ripples(self):
        """Resizing drops ripples and moves the boundary."""
        surface = WaterSurface()
        surface.on_pointer_ripple(0.0, 0.0)
        surface.resize(200.0)

        assert len(surface.ripples) == 0
        assert surface.config.domain_size == 200.0
        assert surface.boat.boundary == pytest.approx(85.0)

    def test_resize_does_not_touch_shared_config(self):
        """Surfaces built from one config resize independently."""
        config = SurfaceConfig()
        a = WaterSurface(config)
        b = WaterSurface(config)
        a.resize(200.0)

        assert config.domain_size == 500.0
        assert b.config.domain_size == 500.0
        assert b.boat.boundary == pytest.approx(235.0)
        assert b.snapshot().domain_size == 500.0
        assert a.snapshot().domain_size == 200.0

    def test_invalid_resize_keeps_old_size(self):
        """A rejected resize leaves the surface unchanged."""
        surface = WaterSurface()
        with pytest.raises(ConfigError):
            surface.resize(10.0)
        assert surface.config.domain_size == 500.0
        assert surface.boat.boundary == pytest.approx(235.0)


class TestSnapshot:
    """Tests for renderer snapshots."""

    def test_snapshot_contents(self):
        """Snapshot carries ripples, boat state and domain."""
        surface = WaterSurface()
        surface.on_pointer_ripple(1.0, 2.0)
        snap = surface.snapshot()

        assert isinstance(snap, SurfaceSnapshot)
        assert len(snap.ripples) == 1
        assert snap.boat.mode is BoatMode.MOVING
        assert snap.boat_yaw == pytest.approx(np.pi / 4)
        assert snap.domain_size == 500.0

    def test_snapshot_detached(self):
        """Snapshot does not follow later ticks."""
        surface = WaterSurface(SurfaceConfig(ripples=RippleConfig(rate_limit=0.0)))
        snap = surface.snapshot()
        surface.on_pointer_ripple(0.0, 0.0)
        surface.on_tick(1.0)

        assert snap.ripples == []
        np.testing.assert_array_equal(snap.boat.position, [0.0, 0.0])
