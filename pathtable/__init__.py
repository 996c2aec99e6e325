"""Top-level package for pathtable.

pathtable stores a directed, weighted graph over a bounded set of
vertices and computes the shortest distance and path between every
ordered pair of vertices.
"""

from .graph import DistanceTable, GraphStore, ShortestPathEngine
from .services import PathPlannerService

__all__ = ["GraphStore", "DistanceTable", "ShortestPathEngine", "PathPlannerService"]
