import asyncio
import json
from pathlib import Path

import pytest

from campus_pathfinder.adapters.graph import InMemoryGraphStore, StaticDatasetSource
from campus_pathfinder.config import reset_config

ROOT = Path(__file__).resolve().parent.parent
CAMPUS_DATASET = ROOT / "campus_pathfinder" / "data" / "pathways.json"


def make_store(document, policy="strict"):
    store = InMemoryGraphStore(policy=policy)
    asyncio.run(store.load(StaticDatasetSource(document)))
    return store


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    for name in (
        "CAMPUS_GRAPH_DATA_DIR",
        "CAMPUS_GRAPH_DATASET_URL",
        "CAMPUS_GRAPH_MALFORMED_POLICY",
        "CAMPUS_ROUTING_WALKING_SPEED",
        "CAMPUS_ROUTING_CACHE_ENABLED",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def triangle_document():
    # A(0,0) - B(3,0) - C(3,4): the 3-4-5 triangle, without the hypotenuse
    return {
        "nodes": [
            {"id": "A", "x": 0, "y": 0, "type": "building", "name": "Alpha Hall"},
            {"id": "B", "x": 3, "y": 0, "type": "junction"},
            {"id": "C", "x": 3, "y": 4, "type": "gate", "name": "Charlie Gate"},
        ],
        "paths": [
            {"start": "A", "end": "B", "walkable": True},
            {"start": "B", "end": "C", "walkable": True},
        ],
    }


@pytest.fixture
def triangle_store(triangle_document):
    return make_store(triangle_document)


@pytest.fixture
def campus_document():
    with CAMPUS_DATASET.open(encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def campus_store(campus_document):
    return make_store(campus_document)


@pytest.fixture
def store_factory():
    return make_store
