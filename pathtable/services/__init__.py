"""Services layer - Application orchestration.

Available services:
- PathPlannerService: Graph mutation, shortest-path queries and reports
"""

from .path_planner import PathPlannerService

__all__ = ["PathPlannerService"]
