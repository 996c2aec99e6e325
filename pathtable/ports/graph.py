"""Graph ports - Abstractions for graph loading and path queries.

These protocols define the contracts for graph operations: loading a
graph from persistent storage and answering shortest-path queries.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator, Optional, Protocol, Tuple

if TYPE_CHECKING:
    from ..domain.models import Distance, RouteResult
    from ..graph.store import GraphStore
    from ..graph.table import DistanceTable


class GraphRepositoryPort(Protocol):
    """Port for loading graph data.

    Implementations: adapters/graph/text_repository.py,
    adapters/graph/csv_repository.py

    The repository is responsible for reading the vertex labels and
    edge triples from storage and handing out a populated store.
    """

    def load(self) -> GraphStore:
        """Load the graph.

        Returns:
            A store the caller owns exclusively.
        """
        ...

    def clear_cache(self) -> None:
        """Forget any previously loaded graph."""
        ...


class PathSolverPort(Protocol):
    """Port for shortest-path computation over one graph store.

    Implementation: graph/engine.py (ShortestPathEngine)

    A solver reads its store only when computing; queries answer from
    the last computed table.
    """

    store: GraphStore

    @property
    def is_stale(self) -> bool:
        """Whether the underlying graph changed since the last computation."""
        ...

    def compute_all_pairs(self) -> DistanceTable:
        """Compute distances between every ordered pair of vertices."""
        ...

    def distance(self, source: int, destination: int) -> Distance:
        """Return the shortest distance, or UNREACHABLE."""
        ...

    def path(self, source: int, destination: int) -> Tuple[int, ...]:
        """Return the shortest path in travel order."""
        ...

    def route(self, source: int, destination: int) -> RouteResult:
        """Return distance, path and labels for one pair."""
        ...

    def routes(self) -> Iterator[RouteResult]:
        """Yield results for every ordered pair of distinct vertices."""
        ...

    def copy(self, store: Optional[GraphStore] = None) -> PathSolverPort:
        """Return a solver with an independent copy of the computed table."""
        ...
