import math
import random

import pytest

from pathtable.config import GraphConfig
from pathtable.domain.errors import TableNotComputedError, VertexNotFoundError
from pathtable.domain.models import NO_PREDECESSOR, UNREACHABLE
from pathtable.graph.engine import ShortestPathEngine
from pathtable.graph.store import GraphStore


def _computed(store):
    engine = ShortestPathEngine(store=store)
    engine.compute_all_pairs()
    return engine


def _path_weight(store, path):
    return sum(store.edge_weight(a, b) for a, b in zip(path, path[1:]))


def _random_store(seed, size, density=0.3, max_weight=9):
    rng = random.Random(seed)
    store = GraphStore(config=GraphConfig())
    for i in range(size):
        store.add_vertex(f"v{i + 1}")
    for source in range(1, size + 1):
        for destination in range(1, size + 1):
            if rng.random() < density:
                store.insert_edge(source, destination, rng.randint(0, max_weight))
    return store


def test_dijkstra_finds_direct_edge(build_store):
    engine = _computed(build_store(["A", "B"], [(1, 2, 10)]))

    assert engine.path(1, 2) == (1, 2)
    assert engine.distance(1, 2) == 10


def test_dijkstra_chooses_shortest_path(abc_store):
    engine = _computed(abc_store)

    assert engine.distance(1, 3) == 7
    assert engine.path(1, 3) == (1, 2, 3)
    assert engine.distance(1, 2) == 5
    assert engine.path(1, 2) == (1, 2)
    assert engine.distance(2, 3) == 2


def test_dijkstra_no_path_returns_inf(abc_store):
    engine = _computed(abc_store)

    assert math.isinf(engine.distance(3, 1))
    assert engine.distance(3, 1) == UNREACHABLE
    assert engine.path(3, 1) == ()
    assert engine.path(2, 1) == ()


def test_removing_unused_direct_edge_keeps_distance(abc_store):
    assert abc_store.remove_edge(1, 3) is True
    engine = _computed(abc_store)

    assert engine.distance(1, 3) == 7
    assert engine.path(1, 3) == (1, 2, 3)


def test_self_loop_never_appears_in_paths(abc_store):
    abc_store.insert_edge(1, 1, 3)
    engine = _computed(abc_store)

    assert engine.distance(1, 1) == 0
    assert engine.path(1, 1) == ()
    for destination in (2, 3):
        assert engine.path(1, destination).count(1) == 1


def test_zero_weight_edges_are_used(build_store):
    engine = _computed(build_store(["A", "B", "C"], [(1, 2, 0), (2, 3, 0), (1, 3, 1)]))

    assert engine.distance(1, 3) == 0
    assert engine.path(1, 3) == (1, 2, 3)


def test_ties_resolved_by_lowest_vertex_id(build_store):
    # Both 1 -> 2 -> 4 and 1 -> 3 -> 4 cost 2; vertex 2 is finalized first.
    engine = _computed(
        build_store(["A", "B", "C", "D"], [(1, 2, 1), (1, 3, 1), (2, 4, 1), (3, 4, 1)])
    )

    assert engine.distance(1, 4) == 2
    assert engine.path(1, 4) == (1, 2, 4)


def test_diagonal_entries(abc_store):
    engine = _computed(abc_store)

    for vertex in abc_store.vertex_ids():
        cell = engine.table.cell(vertex, vertex)
        assert cell.distance == 0
        assert cell.predecessor == vertex
        assert engine.path(vertex, vertex) == ()


def test_unreachable_cells_keep_sentinels(abc_store):
    engine = _computed(abc_store)

    cell = engine.table.cell(3, 1)
    assert cell.distance == UNREACHABLE
    assert cell.predecessor == NO_PREDECESSOR
    assert cell.visited is False


def test_single_vertex_graph(build_store):
    engine = _computed(build_store(["solo"], [(1, 1, 4)]))

    assert engine.distance(1, 1) == 0
    assert engine.path(1, 1) == ()
    assert list(engine.routes()) == []


def test_empty_graph_computes_empty_table():
    engine = _computed(GraphStore(config=GraphConfig()))

    assert engine.table.size == 0
    assert list(engine.routes()) == []


def test_query_before_compute_raises(abc_store):
    engine = ShortestPathEngine(store=abc_store)

    assert engine.is_computed is False
    with pytest.raises(TableNotComputedError):
        engine.distance(1, 2)
    with pytest.raises(TableNotComputedError):
        engine.path(1, 2)


def test_query_out_of_range_raises(abc_store):
    engine = _computed(abc_store)

    with pytest.raises(VertexNotFoundError):
        engine.distance(1, 4)
    with pytest.raises(VertexNotFoundError):
        engine.path(0, 1)
    with pytest.raises(VertexNotFoundError):
        engine.path(5, 5)


def test_compute_does_not_mutate_store(abc_store):
    revision = abc_store.revision
    edges = list(abc_store.iter_edges())

    _computed(abc_store)

    assert abc_store.revision == revision
    assert list(abc_store.iter_edges()) == edges


def test_stale_after_mutation_answers_old_table(abc_store, caplog):
    engine = _computed(abc_store)
    assert engine.is_stale is False

    abc_store.insert_edge(3, 1, 1)
    assert engine.is_stale is True

    with caplog.at_level("WARNING", logger="pathtable.graph.engine"):
        assert engine.distance(3, 1) == UNREACHABLE
    assert "stale" in caplog.text

    engine.compute_all_pairs()
    assert engine.is_stale is False
    assert engine.distance(3, 1) == 1
    assert engine.distance(3, 2) == 6


def test_stale_route_after_clear_uses_computed_labels(abc_store):
    engine = _computed(abc_store)
    abc_store.clear()

    assert engine.path(1, 3) == (1, 2, 3)
    route = engine.route(1, 3)
    assert route.labels == ("A", "B", "C")
    assert route.distance == 7
    assert len(list(engine.routes())) == 6


def test_engine_copy_keeps_computed_labels(abc_store):
    engine = _computed(abc_store)

    duplicate = engine.copy(store=abc_store.copy())
    abc_store.clear()

    assert engine.route(1, 2).labels == ("A", "B")
    assert duplicate.route(1, 2).labels == ("A", "B")
    assert duplicate.is_stale is False


def test_route_includes_labels(abc_store):
    engine = _computed(abc_store)

    route = engine.route(1, 3)
    assert route.path == (1, 2, 3)
    assert route.labels == ("A", "B", "C")
    assert route.distance == 7
    assert route.is_reachable
    assert route.num_stops == 3

    unreachable = engine.route(3, 1)
    assert unreachable.is_empty
    assert not unreachable.is_reachable
    assert unreachable.labels == ()


def test_routes_cover_every_ordered_pair(abc_store):
    engine = _computed(abc_store)

    pairs = [(r.source, r.destination) for r in engine.routes()]
    assert pairs == [(1, 2), (1, 3), (2, 1), (2, 3), (3, 1), (3, 2)]


def test_copy_has_independent_table(abc_store):
    engine = _computed(abc_store)
    duplicate = engine.copy(store=abc_store.copy())

    assert duplicate.table == engine.table
    assert duplicate.table is not engine.table
    assert duplicate.is_stale is False

    duplicate.store.insert_edge(3, 1, 1)
    duplicate.compute_all_pairs()

    assert duplicate.distance(3, 1) == 1
    assert engine.distance(3, 1) == UNREACHABLE
    assert engine.is_stale is False


def test_copy_of_stale_engine_stays_stale(abc_store):
    engine = _computed(abc_store)
    abc_store.insert_edge(3, 1, 1)

    assert engine.copy(store=abc_store.copy()).is_stale is True


@pytest.mark.parametrize("seed", range(8))
def test_paths_match_distances_on_random_graphs(seed):
    store = _random_store(seed, size=9)
    engine = _computed(store)
    n = store.vertex_count

    for source in range(1, n + 1):
        assert engine.distance(source, source) == 0
        for destination in range(1, n + 1):
            if source == destination:
                continue
            distance = engine.distance(source, destination)
            path = engine.path(source, destination)
            if math.isinf(distance):
                assert path == ()
                continue
            assert path[0] == source
            assert path[-1] == destination
            assert len(path) <= n
            assert _path_weight(store, path) == distance


@pytest.mark.parametrize("seed", range(8))
def test_distances_match_floyd_warshall(seed):
    store = _random_store(seed, size=8, density=0.25)
    engine = _computed(store)
    n = store.vertex_count

    expected = [[math.inf] * (n + 1) for _ in range(n + 1)]
    for v in range(1, n + 1):
        expected[v][v] = 0
    for edge in store.iter_edges():
        if edge.source != edge.destination:
            expected[edge.source][edge.destination] = min(
                expected[edge.source][edge.destination], edge.weight
            )
    for k in range(1, n + 1):
        for i in range(1, n + 1):
            for j in range(1, n + 1):
                if expected[i][k] + expected[k][j] < expected[i][j]:
                    expected[i][j] = expected[i][k] + expected[k][j]

    for i in range(1, n + 1):
        for j in range(1, n + 1):
            assert engine.distance(i, j) == expected[i][j]


def test_predecessor_chain_distances_never_increase():
    store = _random_store(42, size=10, density=0.4)
    engine = _computed(store)
    table = engine.table

    for source in store.vertex_ids():
        for destination in store.vertex_ids():
            if not table.cell(source, destination).is_reachable:
                continue
            current = destination
            steps = 0
            while current != source:
                previous = table.predecessor(source, current)
                assert table.distance(source, previous) <= table.distance(source, current)
                current = previous
                steps += 1
            assert steps <= store.vertex_count - 1
