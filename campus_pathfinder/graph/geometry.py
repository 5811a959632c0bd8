"""Planar geometry over normalized map coordinates.

Edge weights are Euclidean distances derived from node positions on
demand, so moving a node in the dataset re-derives every connected
edge cost. ``CanvasTransform`` is the one place where map coordinates
turn into pixels; every drawing call site goes through it so nodes,
edges and routes stay aligned.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Protocol, Tuple

if TYPE_CHECKING:
    from ..config import RenderingConfig


class Positioned(Protocol):
    """Anything with map coordinates (nodes and points)."""

    @property
    def x(self) -> float: ...

    @property
    def y(self) -> float: ...


def euclidean_distance(a: Positioned, b: Positioned) -> float:
    """Straight-line distance between two positions, in map units."""
    return math.hypot(b.x - a.x, b.y - a.y)


def path_length(points: Iterable[Positioned]) -> float:
    """Sum of segment lengths along an ordered sequence of positions."""
    total = 0.0
    previous = None
    for point in points:
        if previous is not None:
            total += euclidean_distance(previous, point)
        previous = point
    return total


@dataclass(frozen=True, slots=True)
class CanvasTransform:
    """Scale/offset transform from map space (0-100) to canvas pixels.

    ``x_px = (x + offset_x) / 100 * width * scale_x`` and the same for
    ``y``. The defaults line the pathway layer up with the campus
    background picture.
    """

    scale_x: float = 1.25
    scale_y: float = 1.25
    offset_x: float = -5.5
    offset_y: float = -5.5

    def to_canvas(
        self, point: Positioned, width: float, height: float
    ) -> Tuple[float, float]:
        """Convert a map position to pixel coordinates on a canvas."""
        return (
            (point.x + self.offset_x) / 100 * width * self.scale_x,
            (point.y + self.offset_y) / 100 * height * self.scale_y,
        )

    @classmethod
    def from_config(cls, config: RenderingConfig) -> CanvasTransform:
        return cls(
            scale_x=config.scale_x,
            scale_y=config.scale_y,
            offset_x=config.offset_x,
            offset_y=config.offset_y,
        )
