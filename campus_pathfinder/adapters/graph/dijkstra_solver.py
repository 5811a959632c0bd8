"""Dijkstra Route Solver adapter.

This adapter turns two node ids into a RouteResult:
- Endpoint validation against the published graph
- Shortest path over walkable edges (graph/dijkstra.py)
- Distance and walking-time derivation
- Optional memoization, dropped whenever the store is reloaded
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from ...config import RoutingConfig, get_config
from ...domain.errors import (
    CampusMapError,
    ConfigurationError,
    NoRouteFoundError,
    UnknownEndpointError,
)
from ...domain.models import RouteResult
from ...graph.dijkstra import dijkstra
from ...graph.load_graph import GraphSnapshot
from ...ports.cache import CachePort
from ...ports.graph import GraphStorePort


@dataclass
class DijkstraRouteSolver:
    """Route solver using Dijkstra's shortest path algorithm.

    This adapter implements RouteSolverPort. Each call reads the store's
    current snapshot once, so a concurrent reload cannot change the
    graph halfway through a search.

    Attributes:
        store: Graph store supplying the walkable adjacency
        walking_speed: Map units walked per minute
        cache: Optional memo of results keyed on (generation, start, end)
    """

    store: GraphStorePort
    walking_speed: float = 84.0
    cache: Optional[CachePort[RouteResult]] = None

    _cache_generation: int = field(default=0, init=False, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)
        if not self.walking_speed > 0:
            raise ConfigurationError(
                f"Walking speed must be positive, got {self.walking_speed}",
                setting_name="walking_speed",
            )

    @classmethod
    def from_config(
        cls,
        store: GraphStorePort,
        config: Optional[RoutingConfig] = None,
        cache: Optional[CachePort[Any]] = None,
    ) -> DijkstraRouteSolver:
        config = config or get_config().routing
        return cls(
            store=store,
            walking_speed=config.walking_speed,
            cache=cache if config.cache_enabled else None,
        )

    def estimate_walking_time(self, distance: float) -> float:
        """Convert a distance in map units to fractional minutes."""
        return distance / self.walking_speed

    def find_shortest_path(self, start_id: str, end_id: str) -> RouteResult:
        """Find the shortest walkable route between two nodes.

        Args:
            start_id: Id of the start node.
            end_id: Id of the end node.

        Returns:
            RouteResult with node ids, map coordinates, distance and
            estimated walking time. Identical endpoints give a
            single-point route of distance 0.

        Raises:
            UnknownEndpointError: If either id is not in the graph.
            NoRouteFoundError: If no walkable path connects them.
        """
        snapshot = self.store.snapshot()

        if snapshot.get_node(start_id) is None:
            raise UnknownEndpointError(
                f"Start node not in graph: {start_id}", node_id=start_id
            )
        if snapshot.get_node(end_id) is None:
            raise UnknownEndpointError(
                f"End node not in graph: {end_id}", node_id=end_id
            )

        if self.cache is None:
            return self._solve(snapshot, start_id, end_id)

        if snapshot.generation != self._cache_generation:
            cleared = self.cache.clear()
            self._cache_generation = snapshot.generation
            self._logger.debug(
                "Route cache reset after reload",
                extra={"generation": snapshot.generation, "entries_cleared": cleared},
            )

        return self.cache.get_or_compute(
            (snapshot.generation, start_id, end_id),
            lambda: self._solve(snapshot, start_id, end_id),
        )

    def find_shortest_path_safe(self, start_id: str, end_id: str) -> Optional[RouteResult]:
        """Find the shortest path, returning None on failure."""
        try:
            return self.find_shortest_path(start_id, end_id)
        except CampusMapError as e:
            self._logger.debug("Route query failed", extra={"error": str(e)})
            return None

    def _solve(self, snapshot: GraphSnapshot, start_id: str, end_id: str) -> RouteResult:
        self._logger.debug("Solving route", extra={"start": start_id, "end": end_id})

        path, distance = dijkstra(snapshot.weighted_adjacency, start_id, end_id)

        if not path:
            self._logger.info(
                "No route found",
                extra={"start": start_id, "end": end_id},
            )
            raise NoRouteFoundError(
                f"No walkable path from {start_id} to {end_id}",
                start=start_id,
                end=end_id,
            )

        route = RouteResult(
            node_ids=tuple(path),
            coordinates=tuple(snapshot.nodes[node_id].point for node_id in path),
            distance=distance,
            estimated_time=self.estimate_walking_time(distance),
        )

        self._logger.info(
            "Route found",
            extra={
                "start": start_id,
                "end": end_id,
                "stops": route.num_stops,
                "distance": route.distance,
            },
        )
        return route
