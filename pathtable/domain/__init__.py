"""Domain layer - Core models and errors.

This module contains immutable domain models and typed errors
used throughout the package. No external dependencies.
"""

from .errors import (
    CapacityError,
    ConfigurationError,
    GraphError,
    GraphFormatError,
    PathTableError,
    RenderingError,
    TableNotComputedError,
    VertexNotFoundError,
)
from .models import (
    NO_PREDECESSOR,
    UNREACHABLE,
    Distance,
    DistanceCell,
    Edge,
    RouteResult,
    Vertex,
    is_reachable,
)

__all__ = [
    # Models
    "Vertex",
    "Edge",
    "DistanceCell",
    "RouteResult",
    "Distance",
    "UNREACHABLE",
    "NO_PREDECESSOR",
    "is_reachable",
    # Errors
    "PathTableError",
    "GraphError",
    "GraphFormatError",
    "VertexNotFoundError",
    "CapacityError",
    "TableNotComputedError",
    "ConfigurationError",
    "RenderingError",
]
