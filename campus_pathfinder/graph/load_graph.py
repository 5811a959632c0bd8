"""Graph construction from a pathway dataset document.

A dataset is a mapping with two top-level lists: ``nodes`` and
``paths`` (``edges`` is accepted as an alias). Each entry is validated
with pydantic, then assembled into an immutable ``GraphSnapshot`` that
the graph store publishes in a single assignment.

Two policies govern bad entries:

- ``strict`` rejects the whole dataset with ``MalformedDataError``
  listing every problem found.
- ``lenient`` drops each offending node or path, records a line in
  ``GraphSnapshot.dropped`` and keeps the rest.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from ..config import MalformedPolicy
from ..domain.errors import MalformedDataError, UnknownEndpointError
from ..domain.models import ROUTABLE_TYPES, Edge, LoadReport, Node
from .geometry import euclidean_distance


class NodeRecord(BaseModel):
    """Raw node entry as found in the dataset.

    Ids and types are kept verbatim so lookups stay exact. Coordinates
    only have to be finite; positions outside 0-100 are off the map
    picture but still routable.
    """

    model_config = ConfigDict(extra="ignore")

    id: str = Field(min_length=1)
    x: float = Field(allow_inf_nan=False)
    y: float = Field(allow_inf_nan=False)
    type: str = Field(min_length=1)
    name: str = ""

    @field_validator("name", mode="before")
    @classmethod
    def _missing_name(cls, value: Any) -> Any:
        if value is None:
            return ""
        return value.strip() if isinstance(value, str) else value

    @model_validator(mode="after")
    def _landmarks_are_named(self) -> NodeRecord:
        if self.type in ROUTABLE_TYPES and not self.name:
            raise ValueError(f"{self.type} nodes need a non-empty name")
        return self

    def to_node(self) -> Node:
        return Node(id=self.id, x=self.x, y=self.y, type=self.type, name=self.name)


class PathRecord(BaseModel):
    """Raw path (edge) entry as found in the dataset."""

    model_config = ConfigDict(extra="ignore")

    start: str = Field(min_length=1)
    end: str = Field(min_length=1)
    # an absent flag means the path is not walkable
    walkable: bool = False

    def to_edge(self) -> Edge:
        return Edge(start=self.start, end=self.end, walkable=self.walkable)


@dataclass(frozen=True)
class GraphSnapshot:
    """Immutable node/edge collections plus the walkable adjacency.

    Attributes:
        nodes: Node id -> node, in dataset order
        edges: Every kept edge, walkable or not, in dataset order
        adjacency: Node id -> ids reachable over one walkable edge
        by_type: Category -> nodes of that category
        dropped: Lenient-policy diagnostics, one line per dropped entry
        generation: Load counter stamped by the store on publish
    """

    nodes: Mapping[str, Node] = field(default_factory=lambda: MappingProxyType({}))
    edges: Tuple[Edge, ...] = ()
    adjacency: Mapping[str, Tuple[str, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    by_type: Mapping[str, Tuple[Node, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    dropped: Tuple[str, ...] = ()
    generation: int = 0

    @property
    def walkable_edges(self) -> Tuple[Edge, ...]:
        return tuple(edge for edge in self.edges if edge.walkable)

    @property
    def report(self) -> LoadReport:
        return LoadReport(
            node_count=len(self.nodes),
            edge_count=len(self.edges),
            walkable_edge_count=len(self.walkable_edges),
            dropped=self.dropped,
        )

    def get_node(self, node_id: str) -> Optional[Node]:
        return self.nodes.get(node_id)

    def walkable_neighbors(self, node_id: str) -> Tuple[Tuple[Node, float], ...]:
        """Neighbours over walkable edges with their Euclidean weights.

        Raises:
            UnknownEndpointError: If ``node_id`` is not in the graph.
        """
        node = self.nodes.get(node_id)
        if node is None:
            raise UnknownEndpointError(f"Unknown node: {node_id}", node_id=node_id)
        return tuple(
            (self.nodes[other], euclidean_distance(node, self.nodes[other]))
            for other in self.adjacency[node_id]
        )

    def weighted_adjacency(self, node_id: str) -> Tuple[Tuple[str, float], ...]:
        """Same as walkable_neighbors, keyed by id (the search callback shape)."""
        return tuple(
            (neighbor.id, weight) for neighbor, weight in self.walkable_neighbors(node_id)
        )


EMPTY_SNAPSHOT = GraphSnapshot()


def _describe(prefix: str, error: ValidationError) -> str:
    details = "; ".join(
        f"{'.'.join(str(part) for part in item['loc']) or 'entry'}: {item['msg']}"
        for item in error.errors()
    )
    return f"{prefix}: {details}"


def _entries(document: Mapping[str, Any], *keys: str) -> Sequence[Any]:
    for key in keys:
        if key in document:
            entries = document[key]
            if not isinstance(entries, list):
                raise MalformedDataError(
                    f"Dataset field '{key}' must be a list",
                    problems=(f"{key}: expected a list, got {type(entries).__name__}",),
                )
            return entries
    raise MalformedDataError(
        f"Dataset is missing the '{keys[0]}' list",
        problems=(f"{keys[0]}: missing",),
    )


def load_graph(
    document: Mapping[str, Any], policy: MalformedPolicy = "strict"
) -> GraphSnapshot:
    """Validate a dataset document and build a graph snapshot.

    Args:
        document: Parsed dataset with ``nodes`` and ``paths`` lists.
        policy: ``"strict"`` or ``"lenient"`` handling of bad entries.

    Returns:
        The assembled, immutable snapshot.

    Raises:
        MalformedDataError: If the document shape is wrong, or if any
            entry is invalid under the strict policy.
    """
    if not isinstance(document, Mapping):
        raise MalformedDataError(
            "Dataset must be a mapping with 'nodes' and 'paths' lists",
            problems=(f"document: expected an object, got {type(document).__name__}",),
        )

    raw_nodes = _entries(document, "nodes")
    raw_paths = _entries(document, "paths", "edges")

    problems: List[str] = []
    nodes: Dict[str, Node] = {}

    for index, raw in enumerate(raw_nodes):
        try:
            node = NodeRecord.model_validate(raw).to_node()
        except ValidationError as e:
            problems.append(_describe(f"nodes[{index}]", e))
            continue
        if node.id in nodes:
            problems.append(f"nodes[{index}]: duplicate node id '{node.id}'")
            continue
        nodes[node.id] = node

    edges: List[Edge] = []
    for index, raw in enumerate(raw_paths):
        try:
            edge = PathRecord.model_validate(raw).to_edge()
        except ValidationError as e:
            problems.append(_describe(f"paths[{index}]", e))
            continue
        missing = [end for end in (edge.start, edge.end) if end not in nodes]
        if missing:
            problems.append(
                f"paths[{index}]: unknown node id(s) {', '.join(repr(m) for m in missing)}"
            )
            continue
        edges.append(edge)

    if problems and policy == "strict":
        raise MalformedDataError(
            f"Dataset rejected: {len(problems)} malformed entr{'y' if len(problems) == 1 else 'ies'}",
            problems=tuple(problems),
        )

    return _assemble(nodes, edges, tuple(problems))


def _assemble(
    nodes: Dict[str, Node], edges: List[Edge], dropped: Tuple[str, ...]
) -> GraphSnapshot:
    adjacency: Dict[str, List[str]] = {node_id: [] for node_id in nodes}
    for edge in edges:
        if not edge.walkable:
            continue
        adjacency[edge.start].append(edge.end)
        if edge.start != edge.end:
            adjacency[edge.end].append(edge.start)

    by_type: Dict[str, List[Node]] = {}
    for node in nodes.values():
        by_type.setdefault(node.type, []).append(node)

    return GraphSnapshot(
        nodes=MappingProxyType(dict(nodes)),
        edges=tuple(edges),
        adjacency=MappingProxyType({k: tuple(v) for k, v in adjacency.items()}),
        by_type=MappingProxyType({k: tuple(v) for k, v in by_type.items()}),
        dropped=dropped,
    )
