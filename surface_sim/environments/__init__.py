"""Environments the surface components live in."""

from .water_surface import SurfaceSnapshot, WaterSurface

__all__ = ["SurfaceSnapshot", "WaterSurface"]
