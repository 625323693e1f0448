"""
Study 01: Pointer Ripples

A finger drags across the water.

Questions to explore:
- How many touches survive the rate limit?
- How long does a ripple of a given strength live?
- Does the registry ever hold more than its capacity?
"""
