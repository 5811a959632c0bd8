"""Graph ports - Abstractions for dataset loading, graph queries and routing.

These protocols define the contracts between the pathway engine and
whatever drives it (a CLI, a web front end, a test harness).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping, Optional, Protocol, Sequence, Tuple

if TYPE_CHECKING:
    from ..domain.models import Edge, LoadReport, Node, RouteResult
    from ..graph.load_graph import GraphSnapshot


class DatasetSourcePort(Protocol):
    """Port for fetching the raw pathway dataset.

    Implementations: adapters/graph/sources.py

    ``fetch`` is the only suspending operation in the engine.
    """

    @property
    def description(self) -> str:
        """Human-readable location of the data (path or URL)."""
        ...

    async def fetch(self) -> Mapping[str, Any]:
        """Fetch and decode the dataset document.

        Returns:
            Mapping with ``nodes`` and ``paths`` lists.

        Raises:
            DatasetLoadError: If the data is unreachable or undecodable.
        """
        ...


class GraphStorePort(Protocol):
    """Port for the authoritative node/edge collections.

    Implementation: adapters/graph/memory_store.py

    The store is empty until the first successful load and is replaced
    wholesale by every later one.
    """

    @property
    def generation(self) -> int:
        """Number of successful loads so far."""
        ...

    async def load(self, source: DatasetSourcePort) -> LoadReport:
        """Replace the graph with the dataset fetched from ``source``."""
        ...

    def snapshot(self) -> GraphSnapshot:
        """The currently published immutable graph."""
        ...

    def get_node(self, node_id: str) -> Optional[Node]:
        """Exact, case-sensitive lookup; None when absent."""
        ...

    def get_nodes_by_type(self, node_type: str) -> Sequence[Node]:
        """All nodes whose category equals ``node_type``."""
        ...

    def walkable_neighbors(self, node_id: str) -> Sequence[Tuple[Node, float]]:
        """Nodes one walkable edge away, with Euclidean edge weights."""
        ...

    def nodes(self) -> Sequence[Node]:
        ...

    def walkable_edges(self) -> Sequence[Edge]:
        ...


class RouteSolverPort(Protocol):
    """Port for route computation.

    Implementation: adapters/graph/dijkstra_solver.py
    """

    def find_shortest_path(self, start_id: str, end_id: str) -> RouteResult:
        """Find the shortest walkable route between two nodes.

        Raises:
            UnknownEndpointError: If either id is not in the graph.
            NoRouteFoundError: If no walkable path connects them.
        """
        ...
