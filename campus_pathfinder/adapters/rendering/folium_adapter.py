"""Folium map renderer adapter.

Draws the campus pathway network and an optional highlighted route into
a standalone HTML map. Folium runs with the ``Simple`` CRS so positions
are plain pixels: every point goes through the shared CanvasTransform,
then the canvas y axis (pointing down) is flipped into map latitude.
"""

from __future__ import annotations

import html
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from ...config import RenderingConfig, get_config
from ...domain.errors import RenderingError
from ...domain.models import NodeType, RouteResult
from ...graph.geometry import CanvasTransform, Positioned
from ...ports.graph import GraphStorePort

NETWORK_COLOR = "#0066cc"
BUILDING_COLOR = "#ff0000"
LABEL_COLOR = "#000000"


@dataclass
class FoliumMapRenderer:
    """Folium-based campus map renderer.

    This adapter implements MapRendererPort.

    Attributes:
        transform: Map-space to canvas transform shared by all layers
        width: Canvas width in pixels
        height: Canvas height in pixels
        background_image: Optional campus picture laid under the graph
    """

    transform: CanvasTransform = field(default_factory=CanvasTransform)
    width: int = 1200
    height: int = 800
    background_image: Optional[Path] = None
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    @classmethod
    def from_config(cls, config: Optional[RenderingConfig] = None) -> FoliumMapRenderer:
        config = config or get_config().rendering
        return cls(
            transform=CanvasTransform.from_config(config),
            width=config.canvas_width,
            height=config.canvas_height,
            background_image=config.background_image,
        )

    def to_map_location(self, point: Positioned) -> List[float]:
        """Canvas pixel position as a folium [lat, lng] pair."""
        x, y = self.transform.to_canvas(point, self.width, self.height)
        return [-y, x]

    def render(
        self,
        store: GraphStorePort,
        route: Optional[RouteResult],
        output_path: Path,
    ) -> Path:
        """Render the walkable network and an optional route to HTML.

        Args:
            store: Loaded graph store.
            route: Route to highlight, or None.
            output_path: Where to save the rendered map.

        Returns:
            Path to the generated map file.

        Raises:
            RenderingError: If the graph is empty or rendering fails.
        """
        output_path = Path(output_path)
        snapshot = store.snapshot()
        if not snapshot.nodes:
            raise RenderingError(
                "Cannot render an empty graph",
                output_path=str(output_path),
                renderer_type="folium",
            )

        try:
            import folium
        except ImportError as e:
            raise RenderingError(
                "Folium not installed",
                output_path=str(output_path),
                renderer_type="folium",
                cause=e,
            )

        self._logger.info(
            "Rendering campus map",
            extra={
                "nodes": len(snapshot.nodes),
                "route_stops": route.num_stops if route else 0,
                "output_path": str(output_path),
            },
        )

        try:
            bounds = [[-float(self.height), 0.0], [0.0, float(self.width)]]
            m = folium.Map(
                location=[-self.height / 2, self.width / 2],
                zoom_start=0,
                crs="Simple",
                tiles=None,
            )

            if self.background_image is not None:
                folium.raster_layers.ImageOverlay(
                    image=str(self.background_image),
                    bounds=bounds,
                ).add_to(m)

            # Walkable network, drawn faint
            for edge in snapshot.walkable_edges:
                folium.PolyLine(
                    [
                        self.to_map_location(snapshot.nodes[edge.start]),
                        self.to_map_location(snapshot.nodes[edge.end]),
                    ],
                    color=NETWORK_COLOR,
                    weight=2,
                    opacity=0.27,
                ).add_to(m)

            for node in snapshot.nodes.values():
                location = self.to_map_location(node)
                color = BUILDING_COLOR if node.type == NodeType.BUILDING.value else NETWORK_COLOR
                folium.CircleMarker(
                    location=location,
                    radius=3,
                    color=color,
                    fill=True,
                    fill_color=color,
                    fill_opacity=1.0,
                    tooltip=node.label,
                ).add_to(m)
                if node.is_routable:
                    folium.Marker(
                        location=location,
                        icon=folium.DivIcon(
                            html=(
                                f'<div style="font: 10px Arial; color: {LABEL_COLOR}; '
                                f'white-space: nowrap">{html.escape(node.name)}</div>'
                            ),
                            icon_anchor=(-5, 5),
                        ),
                    ).add_to(m)

            if route is not None and len(route.coordinates) >= 2:
                route_locations = [self.to_map_location(p) for p in route.coordinates]
                folium.PolyLine(
                    route_locations,
                    color=NETWORK_COLOR,
                    weight=4,
                    opacity=1.0,
                ).add_to(m)
                for location in route_locations:
                    folium.CircleMarker(
                        location=location,
                        radius=5,
                        color=NETWORK_COLOR,
                        fill=True,
                        fill_color=NETWORK_COLOR,
                        fill_opacity=1.0,
                    ).add_to(m)

            m.fit_bounds(bounds)

            output_path.parent.mkdir(parents=True, exist_ok=True)
            m.save(str(output_path))

            self._logger.info(
                "Map rendered successfully",
                extra={"output_path": str(output_path)},
            )
            return output_path

        except Exception as e:
            self._logger.error(
                "Map rendering failed",
                extra={"error": str(e), "output_path": str(output_path)},
            )
            raise RenderingError(
                f"Map rendering failed: {e}",
                output_path=str(output_path),
                renderer_type="folium",
                cause=e,
            )
