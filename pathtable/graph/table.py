"""Square distance table produced by the all-pairs computation.

The table is sized exactly to the vertex count it was built for and is
indexed by 1-based ``(source, destination)`` pairs. Each entry carries
the best known distance, the predecessor of the destination on that
path, and whether the destination has been finalized for the source.
"""

from __future__ import annotations

from typing import List, Tuple

from ..domain.errors import VertexNotFoundError
from ..domain.models import NO_PREDECESSOR, UNREACHABLE, Distance, DistanceCell


class DistanceTable:
    """Row-major ``size x size`` matrix of distance entries."""

    __slots__ = ("_size", "_distance", "_predecessor", "_visited")

    def __init__(self, size: int) -> None:
        if size < 0:
            raise ValueError(f"Table size must be non-negative, got {size}")
        self._size = size
        self._distance: List[Distance] = []
        self._predecessor: List[int] = []
        self._visited: List[bool] = []
        self.reset()

    @property
    def size(self) -> int:
        return self._size

    def __len__(self) -> int:
        return self._size

    def reset(self) -> None:
        """Put every entry back into the unreachable/unvisited state."""
        cells = self._size * self._size
        self._distance = [UNREACHABLE] * cells
        self._predecessor = [NO_PREDECESSOR] * cells
        self._visited = [False] * cells

    def _offset(self, source: int, destination: int) -> int:
        for vertex in (source, destination):
            if not 1 <= vertex <= self._size:
                raise VertexNotFoundError(
                    f"Vertex {vertex} outside table of size {self._size}",
                    vertex_id=vertex,
                    vertex_count=self._size,
                )
        return (source - 1) * self._size + (destination - 1)

    def distance(self, source: int, destination: int) -> Distance:
        return self._distance[self._offset(source, destination)]

    def predecessor(self, source: int, destination: int) -> int:
        return self._predecessor[self._offset(source, destination)]

    def is_visited(self, source: int, destination: int) -> bool:
        return self._visited[self._offset(source, destination)]

    def relax(
        self, source: int, destination: int, distance: Distance, predecessor: int
    ) -> None:
        """Record a better path to ``destination``."""
        offset = self._offset(source, destination)
        self._distance[offset] = distance
        self._predecessor[offset] = predecessor

    def mark_visited(self, source: int, destination: int) -> None:
        self._visited[self._offset(source, destination)] = True

    def cell(self, source: int, destination: int) -> DistanceCell:
        offset = self._offset(source, destination)
        return DistanceCell(
            distance=self._distance[offset],
            predecessor=self._predecessor[offset],
            visited=self._visited[offset],
        )

    def row(self, source: int) -> Tuple[DistanceCell, ...]:
        """Return the entries of ``source`` for destinations ``1..size``."""
        return tuple(self.cell(source, d) for d in range(1, self._size + 1))

    def copy(self) -> DistanceTable:
        """Return an independent copy of the table."""
        duplicate = DistanceTable.__new__(DistanceTable)
        duplicate._size = self._size
        duplicate._distance = list(self._distance)
        duplicate._predecessor = list(self._predecessor)
        duplicate._visited = list(self._visited)
        return duplicate

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DistanceTable):
            return NotImplemented
        return (
            self._size == other._size
            and self._distance == other._distance
            and self._predecessor == other._predecessor
            and self._visited == other._visited
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"DistanceTable(size={self._size})"
