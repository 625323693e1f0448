"""
Core components of the surface simulation.

- ripple: Decaying disturbances on the water
- boat: The moving/fishing agent
- clock: Clamped simulation time
"""

from .boat import Boat, BoatMode, BoatState, RippleEmission
from .clock import SimClock
from .ripple import Ripple, RippleRegistry

__all__ = [
    "Boat",
    "BoatMode",
    "BoatState",
    "RippleEmission",
    "SimClock",
    "Ripple",
    "RippleRegistry",
]
