"""In-memory graph store adapter.

The store owns exactly one published ``GraphSnapshot``. A load builds a
complete new snapshot off to the side and publishes it with a single
attribute assignment, so readers see either the old graph or the new
one, never a mix. Nothing mutates a snapshot after publication.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union

from ...config import GraphConfig, MalformedPolicy, get_config
from ...domain.errors import CampusMapError, MalformedDataError, UnknownEndpointError
from ...domain.models import Edge, LoadReport, Node
from ...graph.load_graph import EMPTY_SNAPSHOT, GraphSnapshot, load_graph
from ...ports.graph import DatasetSourcePort


@dataclass
class InMemoryGraphStore:
    """Graph store holding the campus pathway network in memory.

    This adapter implements GraphStorePort. Several stores can coexist
    (one per test, one per map).

    Attributes:
        policy: How malformed dataset entries are handled
    """

    policy: MalformedPolicy = "strict"

    _snapshot: GraphSnapshot = field(default=EMPTY_SNAPSHOT, repr=False)
    _last_error: Optional[CampusMapError] = field(default=None, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    @classmethod
    def from_config(cls, config: Optional[GraphConfig] = None) -> InMemoryGraphStore:
        config = config or get_config().graph
        return cls(policy=config.malformed_policy)

    async def load(self, source: DatasetSourcePort) -> LoadReport:
        """Fetch a dataset and replace the whole graph with it.

        Args:
            source: Where to fetch the dataset document from.

        Returns:
            Counts for the new graph and any lenient-policy drops.

        Raises:
            DatasetLoadError: If the dataset cannot be fetched or decoded.
            MalformedDataError: If the dataset breaks graph invariants
                under the strict policy.

        On failure the previously published graph stays in place.
        """
        self._logger.debug(
            "Loading dataset",
            extra={"source": source.description, "policy": self.policy},
        )

        document = await source.fetch()

        try:
            snapshot = load_graph(document, self.policy)
        except MalformedDataError as e:
            self._logger.warning(
                "Dataset rejected",
                extra={"source": source.description, "problems": len(e.problems)},
            )
            raise

        for line in snapshot.dropped:
            self._logger.warning("Dropped malformed entry", extra={"entry": line})

        snapshot = dataclasses.replace(
            snapshot, generation=self._snapshot.generation + 1
        )
        self._snapshot = snapshot
        self._last_error = None

        report = snapshot.report
        self._logger.info(
            "Graph loaded",
            extra={
                "source": source.description,
                "nodes": report.node_count,
                "edges": report.edge_count,
                "walkable_edges": report.walkable_edge_count,
                "generation": snapshot.generation,
            },
        )
        return report

    async def load_safe(self, source: DatasetSourcePort) -> bool:
        """Load like load(), but report failure as False.

        The failure is kept in ``last_error`` for the caller to display.
        """
        try:
            await self.load(source)
            return True
        except CampusMapError as e:
            self._last_error = e
            self._logger.warning(
                "Dataset load failed",
                extra={"source": source.description, "error": str(e)},
            )
            return False

    def snapshot(self) -> GraphSnapshot:
        """Return the currently published immutable graph."""
        return self._snapshot

    @property
    def generation(self) -> int:
        return self._snapshot.generation

    @property
    def is_loaded(self) -> bool:
        return self._snapshot.generation > 0

    @property
    def report(self) -> Optional[LoadReport]:
        return self._snapshot.report if self.is_loaded else None

    @property
    def last_error(self) -> Optional[CampusMapError]:
        return self._last_error

    def get_node(self, node_id: str) -> Optional[Node]:
        """Look a node up by its exact, case-sensitive id."""
        return self._snapshot.get_node(node_id)

    def get_node_or_raise(self, node_id: str) -> Node:
        """Look a node up by id.

        Raises:
            UnknownEndpointError: If no node has this id.
        """
        node = self.get_node(node_id)
        if node is None:
            raise UnknownEndpointError(f"Unknown node: {node_id}", node_id=node_id)
        return node

    def get_nodes_by_type(self, node_type: Union[str, Enum]) -> Tuple[Node, ...]:
        """Return every node of a category, in no guaranteed order."""
        key = node_type.value if isinstance(node_type, Enum) else node_type
        return self._snapshot.by_type.get(key, ())

    def walkable_neighbors(self, node_id: str) -> Tuple[Tuple[Node, float], ...]:
        """Nodes one walkable edge away from ``node_id``, with weights.

        Raises:
            UnknownEndpointError: If ``node_id`` is not in the graph.
        """
        return self._snapshot.walkable_neighbors(node_id)

    def nodes(self) -> Tuple[Node, ...]:
        return tuple(self._snapshot.nodes.values())

    def edges(self) -> Tuple[Edge, ...]:
        return self._snapshot.edges

    def walkable_edges(self) -> Tuple[Edge, ...]:
        return self._snapshot.walkable_edges
