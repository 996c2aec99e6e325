"""Rendering port - Abstraction for report generation.

This protocol defines the contract for turning query results into
human-readable reports, allowing different layouts to be plugged in.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Protocol, Sequence

if TYPE_CHECKING:
    from ..domain.models import RouteResult, Vertex


class ReportRendererPort(Protocol):
    """Port for report rendering.

    Implementation: adapters/rendering/table_renderer.py
    """

    def render_all(
        self,
        vertices: Sequence[Vertex],
        routes: Iterable[RouteResult],
    ) -> str:
        """Render the full table of every ordered vertex pair.

        Args:
            vertices: Vertices of the graph, in id order.
            routes: Results for every pair of distinct vertices.

        Returns:
            The rendered report.
        """
        ...

    def render_pair(self, route: RouteResult) -> str:
        """Render a single route including the labels along its path."""
        ...

    def write(self, report: str, output_path: Path) -> Path:
        """Save a rendered report to a file.

        Returns:
            Path to the written file.
        """
        ...
