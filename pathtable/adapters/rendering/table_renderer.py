"""Fixed-width text renderer for shortest-path reports.

Full report layout (one block per source vertex):

    Description           From    To  Dist  Path
    Aurora Station
                             1     2     5    1 2
                             1     3     7    1 2 3
                             1     4    --

Pair report layout (followed by the label of every vertex on the path):

    1     3     7      1 2 3
    Aurora Station
    Bay Bridge
    Cedar Park
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Sequence

from ...domain.errors import RenderingError
from ...domain.models import RouteResult, Vertex

UNREACHABLE_MARK = "--"


def _format_distance(route: RouteResult) -> str:
    return str(route.distance) if route.is_reachable else UNREACHABLE_MARK


def _format_path(path: Sequence[int], indent: int) -> str:
    if not path:
        return ""
    return " " * (indent - 1) + "".join(f" {vertex}" for vertex in path)


@dataclass
class TextTableRenderer:
    """Plain-text table renderer.

    This adapter implements ReportRendererPort.

    Attributes:
        label_width: Width of the label column; the source column is
            right-aligned at this position.
        column_width: Width of the To and Dist columns.
    """

    label_width: int = 26
    column_width: int = 6
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def header(self) -> str:
        w = self.column_width
        return (
            "Description"
            + "From".rjust(self.label_width - len("Description"))
            + "To".rjust(w)
            + "Dist".rjust(w)
            + "Path".rjust(w)
        )

    def render_all(
        self,
        vertices: Sequence[Vertex],
        routes: Iterable[RouteResult],
    ) -> str:
        """Render the full table of every ordered vertex pair."""
        by_source: Dict[int, List[RouteResult]] = defaultdict(list)
        for route in routes:
            by_source[route.source].append(route)

        w = self.column_width
        lines = [self.header()]
        for vertex in vertices:
            lines.append(vertex.label)
            for route in by_source.get(vertex.id, []):
                lines.append(
                    str(route.source).rjust(self.label_width)
                    + str(route.destination).rjust(w)
                    + _format_distance(route).rjust(w)
                    + _format_path(route.path, indent=4)
                )
            lines.append("")

        return "\n".join(lines) + "\n"

    def render_pair(self, route: RouteResult) -> str:
        """Render one route followed by the labels along its path."""
        w = self.column_width
        lines = [
            str(route.source)
            + str(route.destination).rjust(w)
            + _format_distance(route).rjust(w)
            + _format_path(route.path, indent=w)
        ]
        lines.extend(route.labels)
        return "\n".join(lines) + "\n"

    def write(self, report: str, output_path: Path) -> Path:
        """Save a rendered report to a file.

        Raises:
            RenderingError: If the file cannot be written.
        """
        output_path = Path(output_path)
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(report, encoding="utf-8")
        except OSError as e:
            raise RenderingError(
                f"Failed to write report: {e}",
                output_path=str(output_path),
                renderer_type="text",
                cause=e,
            )

        self._logger.info("Report written", extra={"output_path": str(output_path)})
        return output_path
