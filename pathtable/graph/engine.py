"""All-pairs shortest paths using Dijkstra's algorithm.

Dijkstra is run once per source vertex. Each run selects the next vertex
with a linear scan over the table row instead of a priority queue, which
gives O(V^2) per source and O(V^3) for the whole graph. This is intended
for small graphs with a bounded number of vertices.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

from ..domain.errors import GraphError, TableNotComputedError
from ..domain.models import NO_PREDECESSOR, UNREACHABLE, Distance, RouteResult
from ..monitoring import log_duration
from .store import GraphStore
from .table import DistanceTable


@dataclass(eq=False)
class ShortestPathEngine:
    """Computes and answers shortest-path queries for a GraphStore.

    The engine reads the store only inside ``compute_all_pairs``. Any
    structural change to the store afterwards makes the table stale;
    ``is_stale`` reports that, and queries on a stale table log a
    warning and answer from the old table.

    Attributes:
        store: The graph the engine computes paths over
    """

    store: GraphStore
    _table: Optional[DistanceTable] = field(default=None, repr=False)
    _computed_revision: Optional[int] = field(default=None, repr=False)
    _labels: Tuple[str, ...] = field(default=(), repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    @property
    def table(self) -> DistanceTable:
        """The most recently computed distance table."""
        if self._table is None:
            raise TableNotComputedError(
                "Shortest paths have not been computed yet; "
                "call compute_all_pairs() first"
            )
        return self._table

    @property
    def is_computed(self) -> bool:
        return self._table is not None

    @property
    def is_stale(self) -> bool:
        """True if the store changed since the last computation."""
        return self._computed_revision != self.store.revision

    # ------------------------------------------------------------------
    # Computation
    # ------------------------------------------------------------------

    def compute_all_pairs(self) -> DistanceTable:
        """Recompute the shortest distance between every pair of vertices.

        Returns:
            The freshly computed table, also kept by the engine for
            subsequent queries.
        """
        vertex_count = self.store.vertex_count
        table = DistanceTable(vertex_count)

        with log_duration(
            self._logger,
            "All-pairs shortest paths computed",
            vertices=vertex_count,
            edges=self.store.edge_count,
        ):
            for source in range(1, vertex_count + 1):
                self._compute_from(table, source)

        self._table = table
        self._labels = self.store.labels()
        self._computed_revision = self.store.revision
        return table

    def _compute_from(self, table: DistanceTable, source: int) -> None:
        table.relax(source, source, 0, source)

        for _ in range(self.store.vertex_count - 1):
            vertex = self._closest_unvisited(table, source)
            if vertex == NO_PREDECESSOR:
                return

            table.mark_visited(source, vertex)
            base = table.distance(source, vertex)
            for neighbor, weight in self.store.neighbors(vertex):
                if table.is_visited(source, neighbor):
                    continue
                candidate = base + weight
                if candidate < table.distance(source, neighbor):
                    table.relax(source, neighbor, candidate, vertex)

    @staticmethod
    def _closest_unvisited(table: DistanceTable, source: int) -> int:
        """Return the unvisited vertex nearest to ``source``.

        Ties go to the lowest id. Returns NO_PREDECESSOR when every
        unvisited vertex is unreachable.
        """
        best_vertex = NO_PREDECESSOR
        best_distance: Distance = UNREACHABLE
        for vertex in range(1, table.size + 1):
            if table.is_visited(source, vertex):
                continue
            distance = table.distance(source, vertex)
            if distance < best_distance:
                best_distance = distance
                best_vertex = vertex
        return best_vertex

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def _checked_table(self) -> DistanceTable:
        table = self.table
        if self.is_stale:
            self._logger.warning(
                "Answering from a stale distance table",
                extra={
                    "computed_revision": self._computed_revision,
                    "revision": self.store.revision,
                },
            )
        return table

    def distance(self, source: int, destination: int) -> Distance:
        """Return the shortest distance, or UNREACHABLE if there is no path."""
        return self._checked_table().distance(source, destination)

    def path(self, source: int, destination: int) -> Tuple[int, ...]:
        """Return the vertices of the shortest path in travel order.

        The path is empty when ``source == destination`` or when the
        destination cannot be reached.
        """
        return self._walk(self._checked_table(), source, destination)

    @staticmethod
    def _walk(table: DistanceTable, source: int, destination: int) -> Tuple[int, ...]:
        if source == destination:
            table.predecessor(source, destination)  # range check
            return ()

        hops: List[int] = [destination]
        current = table.predecessor(source, destination)
        for _ in range(table.size):
            if current == NO_PREDECESSOR:
                return ()
            if current == source:
                hops.append(source)
                hops.reverse()
                return tuple(hops)
            hops.append(current)
            current = table.predecessor(source, current)

        raise GraphError(
            f"Predecessor chain from {destination} does not reach {source}"
        )

    def route(self, source: int, destination: int) -> RouteResult:
        """Return distance, path and labels for one pair.

        Labels are those the store held when the table was computed.
        """
        return self._route(self._checked_table(), source, destination)

    def _route(
        self, table: DistanceTable, source: int, destination: int
    ) -> RouteResult:
        path = self._walk(table, source, destination)
        return RouteResult(
            source=source,
            destination=destination,
            path=path,
            distance=table.distance(source, destination),
            labels=tuple(self._labels[v - 1] for v in path),
        )

    def routes(self) -> Iterator[RouteResult]:
        """Yield a RouteResult for every ordered pair of distinct vertices."""
        table = self._checked_table()
        for source in range(1, table.size + 1):
            for destination in range(1, table.size + 1):
                if source != destination:
                    yield self._route(table, source, destination)

    def copy(self, store: Optional[GraphStore] = None) -> ShortestPathEngine:
        """Return an engine with an independent copy of the table.

        Args:
            store: Store the copy reads from; defaults to this engine's
                own store. Pass a copied store to duplicate a whole graph.
        """
        duplicate = ShortestPathEngine(store=store if store is not None else self.store)
        if self._table is not None:
            duplicate._table = self._table.copy()
            duplicate._labels = self._labels
            if not self.is_stale:
                duplicate._computed_revision = duplicate.store.revision
        return duplicate
