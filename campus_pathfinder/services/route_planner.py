"""Route planner service - Main orchestrator.

This service is what a front end talks to: it loads the dataset into
the graph store, lists the locations a user may pick, computes routes
and optionally renders them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from ..domain.errors import (
    CampusMapError,
    DatasetLoadError,
    MalformedDataError,
    NoRouteFoundError,
    RenderingError,
    UnknownEndpointError,
)
from ..domain.models import ROUTABLE_TYPES, LoadReport, Node, RouteResult
from ..ports.graph import DatasetSourcePort, GraphStorePort, RouteSolverPort
from ..ports.rendering import MapRendererPort


@dataclass
class RoutePlannerService:
    """Main service for planning walks across campus.

    This service orchestrates the full flow:
    1. Dataset loading into the graph store
    2. Endpoint listing for selection UIs
    3. Route computation
    4. Optional map rendering

    Attributes:
        store: Graph store holding the pathway network
        source: Where the dataset is fetched from
        route_solver: Computes shortest routes
        map_renderer: Optional map rendering
    """

    store: GraphStorePort
    source: DatasetSourcePort
    route_solver: RouteSolverPort
    map_renderer: Optional[MapRendererPort] = None

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    async def load(self) -> LoadReport:
        """Load (or reload) the pathway dataset.

        Raises:
            DatasetLoadError: If the dataset cannot be fetched.
            MalformedDataError: If it is rejected by the strict policy.
        """
        return await self.store.load(self.source)

    async def load_safe(self) -> Optional[str]:
        """Load the dataset, returning an error message instead of raising."""
        try:
            await self.load()
            return None
        except DatasetLoadError as e:
            return f"Could not load campus map data: {e.message}"
        except MalformedDataError as e:
            return f"Campus map data is invalid: {e.message}"

    def list_locations(self) -> List[Node]:
        """Buildings and gates, sorted by name for selection lists."""
        locations: List[Node] = []
        for node_type in ROUTABLE_TYPES:
            locations.extend(self.store.get_nodes_by_type(node_type))
        return sorted(locations, key=lambda node: (node.name.casefold(), node.id))

    def plan(
        self,
        start_id: str,
        end_id: str,
        generate_map: bool = False,
        map_output_path: Optional[Path] = None,
    ) -> RouteResult:
        """Compute the route between two locations.

        Args:
            start_id: Id of the start node.
            end_id: Id of the end node.
            generate_map: Whether to render the route to a map file.
            map_output_path: Map file path (required if generate_map=True).

        Returns:
            RouteResult with the computed route.

        Raises:
            UnknownEndpointError: If an id is not in the graph.
            NoRouteFoundError: If no walkable path exists.
            RenderingError: If map generation fails.
        """
        self._logger.debug("Planning route", extra={"start": start_id, "end": end_id})

        route = self.route_solver.find_shortest_path(start_id, end_id)

        if generate_map and map_output_path and self.map_renderer:
            self.map_renderer.render(self.store, route, map_output_path)
            self._logger.info("Map generated", extra={"path": str(map_output_path)})

        return route

    def plan_safe(
        self,
        start_id: str,
        end_id: str,
        generate_map: bool = False,
        map_output_path: Optional[Path] = None,
    ) -> Tuple[Optional[RouteResult], Optional[str]]:
        """Compute a route, returning an error message instead of raising.

        Returns:
            Tuple of (RouteResult or None, error message or None).
        """
        try:
            return self.plan(start_id, end_id, generate_map, map_output_path), None
        except UnknownEndpointError as e:
            return None, f"Unknown location: {e.node_id}"
        except NoRouteFoundError as e:
            return None, (
                f"No walkable route between {self.display_name(e.start)} "
                f"and {self.display_name(e.end)}"
            )
        except RenderingError as e:
            return None, f"Map error: {e.message}"
        except CampusMapError as e:
            return None, f"Error: {e.message}"

    def render_network(self, output_path: Path) -> Path:
        """Render the walkable network without a route.

        Raises:
            RenderingError: If no renderer is configured or rendering fails.
        """
        if self.map_renderer is None:
            raise RenderingError(
                "No map renderer configured", output_path=str(output_path)
            )
        return self.map_renderer.render(self.store, None, output_path)

    def display_name(self, node_id: str) -> str:
        node = self.store.get_node(node_id)
        return node.label if node is not None else node_id
