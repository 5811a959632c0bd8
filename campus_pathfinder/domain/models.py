"""Immutable domain models for the campus pathfinder.

All models are frozen dataclasses with slots. Coordinates live in the
normalized 0-100 map space (percent of map extent), never in pixels.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class NodeType(str, Enum):
    """Known node categories.

    Node types are compared as plain strings, so datasets may carry
    categories beyond these; only buildings and gates are offered as
    route endpoints.
    """

    BUILDING = "building"
    GATE = "gate"
    PATH = "path"
    JUNCTION = "junction"


ROUTABLE_TYPES: tuple[str, ...] = (NodeType.BUILDING.value, NodeType.GATE.value)


@dataclass(frozen=True, slots=True)
class Point:
    """A position in normalized map coordinates."""

    x: float
    y: float


@dataclass(frozen=True, slots=True)
class Node:
    """A point of interest or waypoint on the campus graph.

    Attributes:
        id: Unique, case-sensitive identifier
        x: Horizontal position (0-100)
        y: Vertical position (0-100)
        type: Category tag (see NodeType)
        name: Display label, empty for plain waypoints
    """

    id: str
    x: float
    y: float
    type: str
    name: str = ""

    @property
    def point(self) -> Point:
        return Point(self.x, self.y)

    @property
    def is_routable(self) -> bool:
        """Check if the node may be picked as a route endpoint."""
        return self.type in ROUTABLE_TYPES

    @property
    def label(self) -> str:
        return self.name or self.id


@dataclass(frozen=True, slots=True)
class Edge:
    """An undirected connection between two nodes.

    Non-walkable edges stay in the store but are ignored by routing
    and rendering. The weight is never stored; see graph.geometry.
    """

    start: str
    end: str
    walkable: bool = False


@dataclass(frozen=True, slots=True)
class RouteResult:
    """Result of a shortest-path query.

    Attributes:
        node_ids: Ordered node ids from start to end inclusive
        coordinates: Node positions in the same order, in map space
        distance: Sum of Euclidean segment lengths in map units
        estimated_time: Walking time in fractional minutes
    """

    node_ids: tuple[str, ...]
    coordinates: tuple[Point, ...]
    distance: float
    estimated_time: float

    @property
    def num_stops(self) -> int:
        return len(self.node_ids)

    @property
    def is_trivial(self) -> bool:
        """Check if start and end are the same node."""
        return len(self.node_ids) == 1

    @property
    def start(self) -> str:
        return self.node_ids[0]

    @property
    def end(self) -> str:
        return self.node_ids[-1]


@dataclass(frozen=True, slots=True)
class LoadReport:
    """Summary of a successful dataset load.

    Attributes:
        node_count: Number of nodes kept
        edge_count: Number of edges kept, walkable or not
        walkable_edge_count: Number of edges usable for routing
        dropped: Entries discarded by the lenient policy, one line each
    """

    node_count: int
    edge_count: int
    walkable_edge_count: int
    dropped: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_clean(self) -> bool:
        return not self.dropped
