"""Ports layer - Abstract interfaces (Protocols) for the application.

Ports define the contracts between the pathway engine and external
adapters. They enable dependency injection and make the system testable.

This module follows the Hexagonal Architecture pattern:
- Input ports: How the application is driven (services)
- Output ports: How the application drives external systems (adapters)
"""

from .cache import CachePort
from .graph import DatasetSourcePort, GraphStorePort, RouteSolverPort
from .rendering import MapRendererPort

__all__ = [
    # Graph
    "DatasetSourcePort",
    "GraphStorePort",
    "RouteSolverPort",
    # Rendering
    "MapRendererPort",
    # Cache
    "CachePort",
]
