"""Ports layer - Abstract interfaces (Protocols) for the application.

Ports define the contracts between the core and external adapters.
They enable dependency injection and make the system testable.

This module follows the Hexagonal Architecture pattern:
- Input ports: How the application is driven (services)
- Output ports: How the application drives external systems (adapters)
"""

from .graph import GraphRepositoryPort, PathSolverPort
from .rendering import ReportRendererPort

__all__ = [
    # Graph
    "GraphRepositoryPort",
    "PathSolverPort",
    # Rendering
    "ReportRendererPort",
]
