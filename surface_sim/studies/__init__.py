"""
Studies: structured runs for watching the surface.

Each study begins with observation, not hypothesis.

Study progression:
1. Pointer ripples - how the water forgets a touch
2. Boat cycle - how the boat alternates drifting and fishing
"""
