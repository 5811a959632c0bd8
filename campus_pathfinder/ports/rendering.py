"""Rendering port - Abstraction for drawing the campus graph and routes.

Renderers receive map-space coordinates and must convert them with the
shared ``CanvasTransform`` so nodes, edges and routes line up.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Optional, Protocol

if TYPE_CHECKING:
    from ..domain.models import RouteResult
    from .graph import GraphStorePort


class MapRendererPort(Protocol):
    """Port for map rendering.

    Implementation: adapters/rendering/folium_adapter.py
    """

    def render(
        self,
        store: GraphStorePort,
        route: Optional[RouteResult],
        output_path: Path,
    ) -> Path:
        """Draw the walkable network, its nodes and an optional route.

        Args:
            store: Loaded graph store providing nodes and walkable edges.
            route: Route to highlight, or None for the bare network.
            output_path: Where to save the rendered map.

        Returns:
            Path to the generated map file.
        """
        ...
