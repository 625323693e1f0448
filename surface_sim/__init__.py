"""
Surface-Sim: a water surface disturbed by ripples and crossed by a fishing boat.

A small simulation loop that owns decaying ripples and a boat cycling
between moving and fishing, driven one tick at a time by a host clock.
"""

__version__ = "0.1.0"
