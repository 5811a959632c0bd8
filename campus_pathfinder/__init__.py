"""Top-level package for the Campus Pathfinder project.

This package loads a campus pathway graph (buildings, gates and the
walkways between them) and computes the shortest walkable route between
two named locations, with distance and estimated walking time.
"""
