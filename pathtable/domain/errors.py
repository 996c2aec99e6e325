"""Typed domain errors for pathtable.

Expected outcomes of graph operations (a rejected negative weight, a
missing edge on removal, an unreachable pair) are reported through
return values. The errors below cover everything else: malformed input,
misuse of vertex identifiers, capacity limits and I/O failures.

All errors inherit from PathTableError and can optionally wrap a root
cause exception for debugging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class PathTableError(Exception):
    """Base error for the pathtable domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class GraphError(PathTableError):
    """Graph loading or data integrity error.

    Attributes:
        file_path: Path to the graph data file if relevant
    """

    file_path: Optional[str] = None


@dataclass
class GraphFormatError(GraphError):
    """Graph description could not be parsed.

    Attributes:
        line_number: 1-based line of the offending input, if known
    """

    line_number: Optional[int] = None


@dataclass
class VertexNotFoundError(PathTableError):
    """Vertex identifier outside ``1..vertex_count``.

    Attributes:
        vertex_id: The identifier that was requested
        vertex_count: Number of vertices in the graph at the time
    """

    vertex_id: int = 0
    vertex_count: int = 0


@dataclass
class CapacityError(PathTableError):
    """Graph already holds the maximum number of vertices.

    Attributes:
        limit: Maximum vertex count allowed
    """

    limit: int = 0


@dataclass
class TableNotComputedError(PathTableError):
    """Distance or path queried before any all-pairs computation."""


@dataclass
class ConfigurationError(PathTableError):
    """Invalid or missing configuration.

    Attributes:
        setting_name: Name of the problematic setting
        expected_type: Expected type or format
    """

    setting_name: str = ""
    expected_type: Optional[str] = None


@dataclass
class RenderingError(PathTableError):
    """Report rendering or writing failed.

    Attributes:
        output_path: Path where writing was attempted
        renderer_type: Type of renderer that failed
    """

    output_path: Optional[str] = None
    renderer_type: str = ""
