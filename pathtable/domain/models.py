"""Immutable domain models for pathtable.

All models are frozen dataclasses with slots. They are the values the
graph store and the shortest-path engine hand out to callers, so no
caller ever holds a reference into the store's own storage.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Union

# Distance sentinel for pairs with no known path.
UNREACHABLE: float = math.inf

# Predecessor sentinel; vertex ids start at 1.
NO_PREDECESSOR: int = 0

Distance = Union[int, float]


def is_reachable(distance: Distance) -> bool:
    """Return True if ``distance`` is a finite path weight."""
    return not math.isinf(distance)


@dataclass(frozen=True, slots=True)
class Vertex:
    """A graph vertex.

    Attributes:
        id: 1-based position of the vertex in its store
        label: Free-form description of the vertex
    """

    id: int
    label: str


@dataclass(frozen=True, slots=True)
class Edge:
    """A directed, weighted arc."""

    source: int
    destination: int
    weight: int

    def __post_init__(self) -> None:
        if self.weight < 0:
            raise ValueError(f"Edge weight must be non-negative, got {self.weight}")


@dataclass(frozen=True, slots=True)
class DistanceCell:
    """Snapshot of one (source, destination) entry of a distance table.

    Attributes:
        distance: Best known path weight, or UNREACHABLE
        predecessor: Vertex preceding the destination on that path,
            or NO_PREDECESSOR
        visited: Whether the destination was finalized for this source
    """

    distance: Distance = UNREACHABLE
    predecessor: int = NO_PREDECESSOR
    visited: bool = False

    @property
    def is_reachable(self) -> bool:
        return is_reachable(self.distance)


@dataclass(frozen=True, slots=True)
class RouteResult:
    """Result of a shortest-path query between two vertices.

    Attributes:
        source: Source vertex id
        destination: Destination vertex id
        path: Vertex ids in travel order, empty when there is no route
            or when source and destination coincide
        distance: Total path weight, or UNREACHABLE
        labels: Vertex labels along ``path``
    """

    source: int
    destination: int
    path: tuple[int, ...] = field(default_factory=tuple)
    distance: Distance = UNREACHABLE
    labels: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_reachable(self) -> bool:
        """Check if a finite path exists."""
        return is_reachable(self.distance)

    @property
    def is_empty(self) -> bool:
        """Check if the path holds no vertices."""
        return len(self.path) == 0

    @property
    def num_stops(self) -> int:
        """Return the number of vertices on the path."""
        return len(self.path)
