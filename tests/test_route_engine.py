import asyncio
import itertools

import pytest

from campus_pathfinder.adapters.cache import InMemoryCache, NullCache
from campus_pathfinder.adapters.graph import DijkstraRouteSolver, StaticDatasetSource
from campus_pathfinder.config import RoutingConfig
from campus_pathfinder.domain.errors import (
    ConfigurationError,
    NoRouteFoundError,
    UnknownEndpointError,
)
from campus_pathfinder.domain.models import ROUTABLE_TYPES, Point


def test_route_follows_walkable_edges(triangle_store):
    solver = DijkstraRouteSolver(triangle_store)

    route = solver.find_shortest_path("A", "C")

    assert route.node_ids == ("A", "B", "C")
    assert route.coordinates == (Point(0, 0), Point(3, 0), Point(3, 4))
    assert route.distance == pytest.approx(7.0)
    assert route.estimated_time == pytest.approx(7.0 / 84.0)
    assert route.start == "A"
    assert route.end == "C"


def test_route_is_symmetric(triangle_store):
    solver = DijkstraRouteSolver(triangle_store)

    forward = solver.find_shortest_path("A", "C")
    backward = solver.find_shortest_path("C", "A")

    assert backward.node_ids == tuple(reversed(forward.node_ids))
    assert backward.distance == pytest.approx(forward.distance)


def test_same_start_and_end(triangle_store):
    route = DijkstraRouteSolver(triangle_store).find_shortest_path("A", "A")

    assert route.is_trivial
    assert route.node_ids == ("A",)
    assert route.coordinates == (Point(0, 0),)
    assert route.distance == 0.0
    assert route.estimated_time == 0.0


@pytest.mark.parametrize("start,end,missing", [("Z", "A", "Z"), ("A", "Z", "Z"), ("a", "C", "a")])
def test_unknown_endpoint(triangle_store, start, end, missing):
    solver = DijkstraRouteSolver(triangle_store)

    with pytest.raises(UnknownEndpointError) as exc:
        solver.find_shortest_path(start, end)

    assert exc.value.node_id == missing


def test_disconnected_components(store_factory):
    store = store_factory(
        {
            "nodes": [
                {"id": "A", "x": 0, "y": 0, "type": "building", "name": "Alpha"},
                {"id": "B", "x": 1, "y": 0, "type": "junction"},
                {"id": "D", "x": 90, "y": 90, "type": "gate", "name": "Delta"},
            ],
            "paths": [{"start": "A", "end": "B", "walkable": True}],
        }
    )

    with pytest.raises(NoRouteFoundError) as exc:
        DijkstraRouteSolver(store).find_shortest_path("A", "D")

    assert (exc.value.start, exc.value.end) == ("A", "D")


def test_closed_path_is_never_used(store_factory):
    store = store_factory(
        {
            "nodes": [
                {"id": "A", "x": 0, "y": 0, "type": "building", "name": "Alpha"},
                {"id": "B", "x": 10, "y": 0, "type": "building", "name": "Bravo"},
            ],
            "paths": [{"start": "A", "end": "B", "walkable": False}],
        }
    )

    with pytest.raises(NoRouteFoundError):
        DijkstraRouteSolver(store).find_shortest_path("A", "B")


def test_closed_shortcut_forces_detour(campus_store):
    # martin <-> albertus is closed, so the route goes round through j_west
    route = DijkstraRouteSolver(campus_store).find_shortest_path("martin", "albertus")

    assert route.node_ids[1] == "j_west"
    assert len(route.node_ids) > 2


def test_distance_matches_coordinates(campus_store):
    route = DijkstraRouteSolver(campus_store).find_shortest_path("gate4", "gate1")

    total = sum(
        ((b.x - a.x) ** 2 + (b.y - a.y) ** 2) ** 0.5
        for a, b in zip(route.coordinates, route.coordinates[1:])
    )
    assert route.distance == pytest.approx(total)
    assert route.coordinates[0] == campus_store.get_node("gate4").point
    assert route.coordinates[-1] == campus_store.get_node("gate1").point


def test_walking_speed_is_configurable(triangle_store):
    solver = DijkstraRouteSolver.from_config(triangle_store, RoutingConfig(walking_speed=7.0))

    route = solver.find_shortest_path("A", "C")

    assert route.estimated_time == pytest.approx(1.0)


def test_walking_speed_from_environment(monkeypatch, triangle_store):
    monkeypatch.setenv("CAMPUS_ROUTING_WALKING_SPEED", "14")

    solver = DijkstraRouteSolver.from_config(triangle_store)

    assert solver.walking_speed == 14.0
    assert solver.estimate_walking_time(7.0) == pytest.approx(0.5)


@pytest.mark.parametrize("speed", [0.0, -1.0])
def test_non_positive_walking_speed_is_rejected(triangle_store, speed):
    with pytest.raises(ConfigurationError) as exc:
        DijkstraRouteSolver(triangle_store, walking_speed=speed)

    assert exc.value.setting_name == "walking_speed"


def test_cache_returns_memoized_route(triangle_store):
    cache = InMemoryCache(name="routes")
    solver = DijkstraRouteSolver(triangle_store, cache=cache)

    first = solver.find_shortest_path("A", "C")
    second = solver.find_shortest_path("A", "C")

    assert first is second
    assert cache.size() == 1


def test_reload_invalidates_cache(triangle_store, triangle_document):
    cache = InMemoryCache(name="routes")
    solver = DijkstraRouteSolver(triangle_store, cache=cache)
    first = solver.find_shortest_path("A", "C")

    moved = {
        "nodes": [dict(raw) for raw in triangle_document["nodes"]],
        "paths": triangle_document["paths"],
    }
    moved["nodes"][2]["y"] = 8
    asyncio.run(triangle_store.load(StaticDatasetSource(moved)))

    second = solver.find_shortest_path("A", "C")

    assert second is not first
    assert second.distance == pytest.approx(11.0)
    assert cache.size() == 1


def test_failed_query_is_not_cached(triangle_store):
    cache = InMemoryCache(name="routes")
    solver = DijkstraRouteSolver(triangle_store, cache=cache)

    with pytest.raises(UnknownEndpointError):
        solver.find_shortest_path("A", "Z")

    assert cache.size() == 0


def test_null_cache_recomputes(triangle_store):
    solver = DijkstraRouteSolver(triangle_store, cache=NullCache())

    first = solver.find_shortest_path("A", "C")
    second = solver.find_shortest_path("A", "C")

    assert first == second
    assert first is not second


def test_cache_disabled_by_config(triangle_store):
    solver = DijkstraRouteSolver.from_config(
        triangle_store, RoutingConfig(cache_enabled=False), cache=InMemoryCache()
    )

    assert solver.cache is None


def test_safe_variant_returns_none(triangle_store):
    solver = DijkstraRouteSolver(triangle_store)

    assert solver.find_shortest_path_safe("A", "Z") is None
    assert solver.find_shortest_path_safe("A", "C") is not None


def test_all_campus_locations_are_reachable(campus_store):
    solver = DijkstraRouteSolver(campus_store, cache=InMemoryCache())
    locations = [
        node.id
        for node_type in ROUTABLE_TYPES
        for node in campus_store.get_nodes_by_type(node_type)
    ]

    for start, end in itertools.permutations(locations, 2):
        route = solver.find_shortest_path(start, end)
        assert route.start == start
        assert route.end == end
        assert route.distance > 0
