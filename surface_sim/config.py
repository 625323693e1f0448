"""
surface_sim/config.py

Every tunable of the surface in one place.

Defaults reproduce the demo's feel: ripples fade within a few seconds,
the boat drifts for fifteen seconds and fishes for ten.
"""

from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "configs" / "default.yaml"


class ConfigError(ValueError):
    """Raised when a configuration value is out of range or unknown."""


@dataclass
class RippleConfig:
    """How ripples are born, grow and fade."""
    rate_limit: float = 0.1             # Minimum seconds between accepted ripples
    max_ripples: int = 20               # Live ripples kept, oldest evicted first
    decay_factor: float = 0.98          # Strength multiplier per tick
    expiry_threshold: float = 0.05      # Below this a ripple is gone
    growth_rate: float = 10.0           # Radius units per second of age
    max_radius: float = 20.0            # Radius cap
    initial_radius: float = 0.1         # Radius at birth
    default_strength: float = 3.0       # Strength used for pointer ripples

    def validate(self) -> None:
        if self.max_ripples < 1:
            raise ConfigError(f"max_ripples must be >= 1, got {self.max_ripples}")
        if not 0.0 < self.decay_factor < 1.0:
            raise ConfigError(f"decay_factor must be in (0, 1), got {self.decay_factor}")
        if self.rate_limit < 0:
            raise ConfigError(f"rate_limit must be >= 0, got {self.rate_limit}")
        if self.expiry_threshold <= 0:
            raise ConfigError(
                f"expiry_threshold must be positive, got {self.expiry_threshold}"
            )
        if self.growth_rate < 0 or self.max_radius < 0 or self.initial_radius < 0:
            raise ConfigError("radius parameters must be non-negative")
        if not (math.isfinite(self.default_strength) and self.default_strength > 0):
            raise ConfigError(
                f"default_strength must be positive, got {self.default_strength}"
            )


@dataclass
class BoatConfig:
    """The boat's temperament."""
    speed: float = 0.5                  # Units per second while moving
    movement_duration: float = 15.0     # Seconds spent moving
    fishing_duration: float = 10.0      # Seconds spent fishing
    margin: float = 15.0                # Distance kept from the domain edge
    wake_probability: float = 0.1       # Chance per tick of a wake ripple
    wake_distance: float = 8.0          # How far behind the boat the wake forms
    fishing_ripple_probability: float = 0.02
    line_offset: float = 4.0            # Line end, sideways from the boat
    line_rest_depth: float = -5.0       # Line end height at rest
    bob_amplitude: float = 0.5
    bob_frequency: float = 3.0          # Radians per second of sim time

    def validate(self) -> None:
        if self.speed < 0:
            raise ConfigError(f"speed must be >= 0, got {self.speed}")
        if self.movement_duration <= 0 or self.fishing_duration <= 0:
            raise ConfigError("mode durations must be positive")
        if self.margin < 0:
            raise ConfigError(f"margin must be >= 0, got {self.margin}")
        for name in ("wake_probability", "fishing_ripple_probability"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ConfigError(f"{name} must be in [0, 1], got {value}")


@dataclass
class SurfaceConfig:
    """Top-level configuration for a water surface."""
    domain_size: float = 500.0          # Side of the square water plane
    seed: Optional[int] = None
    ripples: RippleConfig = field(default_factory=RippleConfig)
    boat: BoatConfig = field(default_factory=BoatConfig)

    @property
    def boundary(self) -> float:
        """Coordinate magnitude past which the boat turns around."""
        return self.domain_size / 2 - self.boat.margin

    def validate(self) -> "SurfaceConfig":
        if not (math.isfinite(self.domain_size) and self.domain_size > 0):
            raise ConfigError(f"domain_size must be positive, got {self.domain_size}")
        self.ripples.validate()
        self.boat.validate()
        if self.boundary <= 0:
            raise ConfigError(
                f"margin {self.boat.margin} leaves no room in a domain of "
                f"size {self.domain_size}"
            )
        return self

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SurfaceConfig":
        data = dict(data or {})
        ripples = _build(RippleConfig, data.pop("ripples", None) or {}, "ripples")
        boat = _build(BoatConfig, data.pop("boat", None) or {}, "boat")
        surface = _build(cls, data, "surface", ripples=ripples, boat=boat)
        return surface.validate()


def _build(cls, values: Dict[str, Any], section: str, **extra):
    known = {f.name for f in fields(cls)}
    unknown = set(values) - known
    if unknown:
        raise ConfigError(f"Unknown {section} keys: {sorted(unknown)}")
    return cls(**values, **extra)


def load_config(config_path: Optional[Union[str, Path]] = None) -> SurfaceConfig:
    """Load a surface configuration from YAML (packaged defaults if no path)."""
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ConfigError(f"{config_path} must contain a mapping")

    config = SurfaceConfig.from_dict(raw)
    logger.info(f"Loaded surface config from {config_path}")
    return config
