"""Graph adapters - Implementations of graph-related ports.

Available implementations:
- InMemoryGraphStore: Owns the loaded node/edge collections
- DijkstraRouteSolver: Finds shortest walkable routes
- JsonFileDatasetSource, HttpDatasetSource, CsvDatasetSource,
  StaticDatasetSource: Where datasets come from
"""

from .dijkstra_solver import DijkstraRouteSolver
from .memory_store import InMemoryGraphStore
from .sources import (
    CsvDatasetSource,
    HttpDatasetSource,
    JsonFileDatasetSource,
    StaticDatasetSource,
)

__all__ = [
    "InMemoryGraphStore",
    "DijkstraRouteSolver",
    "JsonFileDatasetSource",
    "HttpDatasetSource",
    "CsvDatasetSource",
    "StaticDatasetSource",
]
