"""Vertex and edge storage for a directed, weighted graph.

Vertices are identified by their 1-based position in the store. Each
vertex owns an ordered adjacency list of outgoing edges; inserting an
edge that already exists updates its weight in place, anything else is
appended to the tail of the list.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

from ..config import GraphConfig, get_config
from ..domain.errors import CapacityError, GraphError, VertexNotFoundError
from ..domain.models import Edge, Vertex


@dataclass(slots=True)
class _AdjacencyEntry:
    destination: int
    weight: int


@dataclass(eq=False)
class GraphStore:
    """Exclusive owner of vertex labels and adjacency lists.

    Attributes:
        config: Graph configuration (vertex bound, label length)
    """

    config: GraphConfig = field(default_factory=lambda: get_config().graph)
    _labels: List[str] = field(default_factory=list, repr=False)
    _adjacency: List[List[_AdjacencyEntry]] = field(default_factory=list, repr=False)
    _revision: int = field(default=0, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    # ------------------------------------------------------------------
    # Vertices
    # ------------------------------------------------------------------

    @property
    def vertex_count(self) -> int:
        return len(self._labels)

    def __len__(self) -> int:
        return len(self._labels)

    @property
    def revision(self) -> int:
        """Counter bumped on every structural mutation."""
        return self._revision

    def add_vertex(self, label: str) -> int:
        """Append a vertex and return its identifier.

        Args:
            label: Description of the vertex.

        Returns:
            The new vertex id (equal to the new vertex count).

        Raises:
            CapacityError: If the store is already full.
            GraphError: If the label exceeds the configured length.
        """
        limit = self.config.max_vertex_count
        if len(self._labels) >= limit:
            raise CapacityError(
                f"Graph cannot hold more than {limit} vertices",
                limit=limit,
            )
        if len(label) > self.config.max_label_length:
            raise GraphError(
                f"Vertex label longer than {self.config.max_label_length} "
                f"characters: {label[:20]!r}..."
            )

        self._labels.append(label)
        self._adjacency.append([])
        self._revision += 1
        return len(self._labels)

    def label(self, vertex: int) -> str:
        """Return the label of ``vertex``."""
        return self._labels[self._index(vertex)]

    def labels(self) -> Tuple[str, ...]:
        return tuple(self._labels)

    def vertices(self) -> Tuple[Vertex, ...]:
        return tuple(
            Vertex(id=i, label=label) for i, label in enumerate(self._labels, start=1)
        )

    def vertex_ids(self) -> range:
        return range(1, len(self._labels) + 1)

    def __contains__(self, vertex: object) -> bool:
        return isinstance(vertex, int) and 1 <= vertex <= len(self._labels)

    def _index(self, vertex: int) -> int:
        if vertex not in self:
            raise VertexNotFoundError(
                f"Vertex {vertex} not in graph of {len(self._labels)} vertices",
                vertex_id=vertex,
                vertex_count=len(self._labels),
            )
        return vertex - 1

    # ------------------------------------------------------------------
    # Edges
    # ------------------------------------------------------------------

    def insert_edge(self, source: int, destination: int, weight: int) -> bool:
        """Insert or update the edge ``source -> destination``.

        Args:
            source: Source vertex id.
            destination: Destination vertex id.
            weight: Non-negative edge weight. Zero is allowed.

        Returns:
            False if the weight is negative (nothing is stored),
            True otherwise.

        Raises:
            VertexNotFoundError: If either endpoint is not in the graph.
        """
        edges = self._adjacency[self._index(source)]
        self._index(destination)

        if weight < 0:
            self._logger.debug(
                "Rejected negative-weight edge",
                extra={"source": source, "destination": destination, "weight": weight},
            )
            return False

        self._revision += 1
        for entry in edges:
            if entry.destination == destination:
                entry.weight = weight
                return True

        edges.append(_AdjacencyEntry(destination=destination, weight=weight))
        return True

    def remove_edge(self, source: int, destination: int) -> bool:
        """Remove the edge ``source -> destination``.

        Returns:
            True if the edge existed and was removed, False otherwise.

        Raises:
            VertexNotFoundError: If either endpoint is not in the graph.
        """
        edges = self._adjacency[self._index(source)]
        self._index(destination)

        for position, entry in enumerate(edges):
            if entry.destination == destination:
                del edges[position]
                self._revision += 1
                return True
        return False

    def has_edge(self, source: int, destination: int) -> bool:
        return self.edge_weight(source, destination) is not None

    def edge_weight(self, source: int, destination: int) -> Optional[int]:
        """Return the weight of ``source -> destination``, or None if absent."""
        for entry in self._adjacency[self._index(source)]:
            if entry.destination == destination:
                return entry.weight
        return None

    def edges_from(self, source: int) -> Tuple[Edge, ...]:
        """Return the outgoing edges of ``source`` in insertion order."""
        return tuple(
            Edge(source=source, destination=entry.destination, weight=entry.weight)
            for entry in self._adjacency[self._index(source)]
        )

    def neighbors(self, source: int) -> Iterator[Tuple[int, int]]:
        """Yield ``(destination, weight)`` pairs for ``source``."""
        for entry in self._adjacency[self._index(source)]:
            yield entry.destination, entry.weight

    def iter_edges(self) -> Iterator[Edge]:
        """Yield every edge, grouped by source in increasing id order."""
        for source in self.vertex_ids():
            yield from self.edges_from(source)

    @property
    def edge_count(self) -> int:
        return sum(len(edges) for edges in self._adjacency)

    # ------------------------------------------------------------------
    # Whole-graph operations
    # ------------------------------------------------------------------

    def clear(self) -> None:
        """Discard every edge and label. Safe to call on an empty store."""
        if not self._labels:
            return
        self._labels.clear()
        self._adjacency.clear()
        self._revision += 1
        self._logger.debug("Graph cleared")

    def assign(self, source: GraphStore) -> GraphStore:
        """Replace this store's contents with a deep copy of ``source``.

        Assigning a store to itself leaves it untouched.

        Raises:
            CapacityError: If ``source`` holds more vertices than this
                store's configuration allows.
        """
        if source is self:
            return self

        limit = self.config.max_vertex_count
        if source.vertex_count > limit:
            raise CapacityError(
                f"Graph cannot hold more than {limit} vertices",
                limit=limit,
            )

        self._labels = list(source._labels)
        self._adjacency = [
            [_AdjacencyEntry(entry.destination, entry.weight) for entry in edges]
            for edges in source._adjacency
        ]
        self._revision += 1
        return self

    def copy(self) -> GraphStore:
        """Return an independent deep copy of this store."""
        return GraphStore(config=self.config).assign(self)

    def __copy__(self) -> GraphStore:
        return self.copy()

    def __deepcopy__(self, memo: dict) -> GraphStore:
        return self.copy()
