"""Pure graph utilities for the campus pathway network.

This subpackage builds immutable graph snapshots from dataset documents,
holds the planar geometry (edge weights, canvas transform) and runs the
shortest-path search on top of a snapshot.
"""
