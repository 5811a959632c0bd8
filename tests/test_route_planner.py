"""Tests for the route planner service and its default wiring."""

import asyncio
from pathlib import Path

import pytest

import campus_pathfinder
from campus_pathfinder.adapters.cache import InMemoryCache
from campus_pathfinder.adapters.graph import (
    DijkstraRouteSolver,
    HttpDatasetSource,
    InMemoryGraphStore,
    JsonFileDatasetSource,
    StaticDatasetSource,
)
from campus_pathfinder.adapters.rendering import FoliumMapRenderer
from campus_pathfinder.config import AppConfig, GraphConfig, RoutingConfig
from campus_pathfinder.container import Container
from campus_pathfinder.domain.errors import DatasetLoadError, RenderingError
from campus_pathfinder.ports.graph import DatasetSourcePort, GraphStorePort, RouteSolverPort
from campus_pathfinder.services import RoutePlannerService


class FailingSource:
    description = "failing"

    async def fetch(self):
        raise DatasetLoadError("connection refused", source="failing")


def make_planner(document, renderer=None):
    store = InMemoryGraphStore()
    planner = RoutePlannerService(
        store=store,
        source=StaticDatasetSource(document),
        route_solver=DijkstraRouteSolver(store),
        map_renderer=renderer,
    )
    asyncio.run(planner.load())
    return planner


@pytest.fixture
def split_document():
    return {
        "nodes": [
            {"id": "A", "x": 0, "y": 0, "type": "building", "name": "Alpha Hall"},
            {"id": "B", "x": 3, "y": 0, "type": "junction"},
            {"id": "D", "x": 90, "y": 90, "type": "gate", "name": "Delta Gate"},
        ],
        "paths": [{"start": "A", "end": "B", "walkable": True}],
    }


class TestRoutePlannerService:
    """Test suite for RoutePlannerService."""

    def test_list_locations_sorted_by_name(self, campus_document):
        planner = make_planner(campus_document)

        locations = planner.list_locations()

        assert all(node.is_routable for node in locations)
        assert len(locations) == sum(
            1 for raw in campus_document["nodes"] if raw["type"] in ("building", "gate")
        )
        names = [node.name.casefold() for node in locations]
        assert names == sorted(names)

    def test_plan_returns_route(self, triangle_document):
        planner = make_planner(triangle_document)

        route = planner.plan("A", "C")

        assert route.node_ids == ("A", "B", "C")

    def test_plan_safe_unknown_location(self, triangle_document):
        planner = make_planner(triangle_document)

        route, error = planner.plan_safe("A", "Nowhere")

        assert route is None
        assert error == "Unknown location: Nowhere"

    def test_plan_safe_no_route_uses_names(self, split_document):
        planner = make_planner(split_document)

        route, error = planner.plan_safe("A", "D")

        assert route is None
        assert error == "No walkable route between Alpha Hall and Delta Gate"

    def test_plan_safe_success(self, triangle_document):
        planner = make_planner(triangle_document)

        route, error = planner.plan_safe("C", "A")

        assert error is None
        assert route.node_ids == ("C", "B", "A")

    def test_plan_with_map(self, tmp_path, triangle_document):
        planner = make_planner(triangle_document, renderer=FoliumMapRenderer())
        output = tmp_path / "route.html"

        planner.plan("A", "C", generate_map=True, map_output_path=output)

        assert output.exists()

    def test_render_network_without_renderer(self, tmp_path, triangle_document):
        planner = make_planner(triangle_document)

        with pytest.raises(RenderingError):
            planner.render_network(tmp_path / "network.html")

    def test_display_name_falls_back_to_id(self, triangle_document):
        planner = make_planner(triangle_document)

        assert planner.display_name("A") == "Alpha Hall"
        assert planner.display_name("B") == "B"
        assert planner.display_name("missing") == "missing"

    @pytest.mark.asyncio
    async def test_load_safe_reports_fetch_failure(self):
        store = InMemoryGraphStore()
        planner = RoutePlannerService(
            store=store,
            source=FailingSource(),
            route_solver=DijkstraRouteSolver(store),
        )

        error = await planner.load_safe()

        assert error == "Could not load campus map data: connection refused"
        assert not store.is_loaded

    @pytest.mark.asyncio
    async def test_load_safe_reports_invalid_data(self):
        store = InMemoryGraphStore()
        planner = RoutePlannerService(
            store=store,
            source=StaticDatasetSource({"nodes": []}),
            route_solver=DijkstraRouteSolver(store),
        )

        error = await planner.load_safe()

        assert error.startswith("Campus map data is invalid:")


class TestContainer:
    """Test suite for the default container wiring."""

    def test_default_source_is_json_file(self, tmp_path):
        config = AppConfig(graph=GraphConfig(data_dir=tmp_path, dataset_file="campus.json"))

        source = Container.create_default(config).resolve(DatasetSourcePort)

        assert isinstance(source, JsonFileDatasetSource)
        assert source.path == tmp_path / "campus.json"

    def test_default_dataset_ships_inside_package(self):
        package_dir = Path(campus_pathfinder.__file__).resolve().parent

        path = GraphConfig().dataset_path

        assert path.exists()
        assert path.parent == package_dir / "data"

    def test_url_selects_http_source(self):
        config = AppConfig(graph=GraphConfig(dataset_url="https://maps.example.edu/p.json"))

        source = Container.create_default(config).resolve(DatasetSourcePort)

        assert isinstance(source, HttpDatasetSource)
        assert source.url == "https://maps.example.edu/p.json"

    def test_planner_shares_one_store(self):
        container = Container.create_default(AppConfig())

        planner = container.resolve(RoutePlannerService)

        assert planner.store is container.resolve(GraphStorePort)
        assert planner.route_solver.store is planner.store
        assert isinstance(planner.route_solver.cache, InMemoryCache)

    def test_routing_config_reaches_solver(self):
        config = AppConfig(routing=RoutingConfig(walking_speed=60.0, cache_enabled=False))

        solver = Container.create_default(config).resolve(RouteSolverPort)

        assert solver.walking_speed == 60.0
        assert solver.cache is None

    def test_register_overrides_binding(self, triangle_document):
        container = Container.create_default(AppConfig())
        container.register(DatasetSourcePort, lambda: StaticDatasetSource(triangle_document))

        planner = container.resolve(RoutePlannerService)
        asyncio.run(planner.load())

        assert planner.plan("A", "C").distance == pytest.approx(7.0)

    def test_resolve_unregistered_type(self):
        with pytest.raises(KeyError):
            Container(config=AppConfig()).resolve(RoutePlannerService)

    @pytest.mark.asyncio
    async def test_default_dataset_loads(self):
        planner = Container.create_default(AppConfig()).resolve(RoutePlannerService)

        assert await planner.load_safe() is None
        assert planner.list_locations()
