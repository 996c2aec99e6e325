from __future__ import annotations

import pytest

from pathtable.config import GraphConfig, reset_config
from pathtable.graph.store import GraphStore


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    for name in ("PATHTABLE_GRAPH_MAX_VERTICES", "PATHTABLE_GRAPH_FORMAT"):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def graph_config(tmp_path) -> GraphConfig:
    return GraphConfig(data_dir=tmp_path)


def make_store(labels, edges, config=None) -> GraphStore:
    store = GraphStore(config=config or GraphConfig())
    for label in labels:
        store.add_vertex(label)
    for source, destination, weight in edges:
        store.insert_edge(source, destination, weight)
    return store


@pytest.fixture
def build_store():
    return make_store


@pytest.fixture
def abc_store() -> GraphStore:
    # 1 -> 2 -> 3 is shorter than the direct 1 -> 3 edge
    return make_store(["A", "B", "C"], [(1, 2, 5), (2, 3, 2), (1, 3, 10)])
