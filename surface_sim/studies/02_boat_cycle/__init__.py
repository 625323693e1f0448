"""
Study 02: Boat Cycle

Drift, fish, drift.

Questions to explore:
- Do the modes alternate on schedule?
- How often does the boat turn back at the edge?
- How much of the water's activity comes from the boat alone?
"""
