"""Graph storage and shortest-path computation.

This subpackage contains the vertex/edge store, the all-pairs
shortest-path engine built on top of it, and the parser for the
plain-text graph description.
"""

from .engine import ShortestPathEngine
from .load_graph import load_graph, parse_graph
from .store import GraphStore
from .table import DistanceTable

__all__ = [
    "GraphStore",
    "DistanceTable",
    "ShortestPathEngine",
    "load_graph",
    "parse_graph",
]
