"""Tests for the folium map renderer."""

import pytest

from campus_pathfinder.adapters.graph import DijkstraRouteSolver, InMemoryGraphStore
from campus_pathfinder.adapters.rendering import FoliumMapRenderer
from campus_pathfinder.config import RenderingConfig
from campus_pathfinder.domain.errors import RenderingError
from campus_pathfinder.domain.models import Point
from campus_pathfinder.graph.geometry import CanvasTransform


class TestFoliumMapRenderer:
    """Test suite for FoliumMapRenderer."""

    def test_map_location_flips_canvas_y(self):
        renderer = FoliumMapRenderer(
            transform=CanvasTransform(scale_x=1.0, scale_y=1.0, offset_x=0.0, offset_y=0.0),
            width=200,
            height=100,
        )

        assert renderer.to_map_location(Point(50, 20)) == [-20.0, 100.0]

    def test_from_config_uses_shared_transform(self):
        config = RenderingConfig(scale_x=2.0, offset_y=1.0, canvas_width=640, canvas_height=480)

        renderer = FoliumMapRenderer.from_config(config)

        assert renderer.transform == CanvasTransform.from_config(config)
        assert (renderer.width, renderer.height) == (640, 480)

    def test_render_network_writes_html(self, tmp_path, campus_store):
        output = tmp_path / "maps" / "campus.html"

        result = FoliumMapRenderer().render(campus_store, None, output)

        assert result == output
        content = output.read_text(encoding="utf-8")
        assert "Albertus" in content

    def test_render_route_writes_html(self, tmp_path, triangle_store):
        route = DijkstraRouteSolver(triangle_store).find_shortest_path("A", "C")
        output = tmp_path / "route.html"

        FoliumMapRenderer().render(triangle_store, route, output)

        assert output.exists()
        assert "Charlie Gate" in output.read_text(encoding="utf-8")

    def test_render_trivial_route(self, tmp_path, triangle_store):
        route = DijkstraRouteSolver(triangle_store).find_shortest_path("A", "A")

        result = FoliumMapRenderer().render(triangle_store, route, tmp_path / "one.html")

        assert result.exists()

    def test_empty_store_raises(self, tmp_path):
        with pytest.raises(RenderingError) as exc:
            FoliumMapRenderer().render(InMemoryGraphStore(), None, tmp_path / "empty.html")

        assert exc.value.renderer_type == "folium"
        assert not (tmp_path / "empty.html").exists()
