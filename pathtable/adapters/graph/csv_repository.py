"""CSV graph repository adapter.

Reads a graph from two CSV files:
- vertices.csv with columns ``vertex_id,label``; ids must run 1..n in order
- edges.csv with columns ``source,destination,weight``
"""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

from ...config import GraphConfig, get_config
from ...domain.errors import GraphError, GraphFormatError, VertexNotFoundError
from ...graph.store import GraphStore

VERTEX_COLUMNS = ("vertex_id", "label")
EDGE_COLUMNS = ("source", "destination", "weight")


@dataclass
class CSVGraphRepository:
    """Graph repository that loads from CSV files.

    This adapter implements GraphRepositoryPort. Rows with empty
    required fields are skipped; rows with malformed values raise.

    Attributes:
        config: Graph configuration (paths, file names, limits)
    """

    config: GraphConfig = field(default_factory=lambda: get_config().graph)
    _logger: logging.Logger = field(init=False, repr=False)

    # Cached data
    _graph: Optional[GraphStore] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def load(self) -> GraphStore:
        """Load the graph from CSV files.

        Returns:
            An independent copy of the loaded graph.

        Raises:
            GraphError: If a file cannot be read or decoded.
            GraphFormatError: If a required column is missing or a row
                holds a malformed value.
        """
        if self._graph is not None:
            return self._graph.copy()

        self._logger.debug(
            "Loading graph",
            extra={
                "vertices_path": str(self.config.vertices_path),
                "edges_path": str(self.config.edges_path),
            },
        )

        store = GraphStore(config=self.config)
        steps = (
            (self.config.vertices_path, self._load_vertices),
            (self.config.edges_path, self._load_edges),
        )
        for path, load_step in steps:
            try:
                load_step(store, path)
            except (OSError, UnicodeDecodeError, csv.Error) as e:
                raise GraphError(
                    f"Failed to load graph: {e}",
                    file_path=str(path),
                    cause=e,
                )

        self._graph = store
        self._logger.info(
            "Graph loaded",
            extra={"vertices": store.vertex_count, "edges": store.edge_count},
        )
        return store.copy()

    @staticmethod
    def _require_columns(
        reader: csv.DictReader, columns: Tuple[str, ...], path: Path
    ) -> None:
        present = set(reader.fieldnames or ())
        missing = [name for name in columns if name not in present]
        if missing:
            raise GraphFormatError(
                f"Missing CSV columns: {', '.join(missing)}",
                file_path=str(path),
                line_number=1,
            )

    def _load_vertices(self, store: GraphStore, path: Path) -> None:
        with path.open(newline="", encoding="utf-8") as f:
            reader = csv.DictReader(f)
            self._require_columns(reader, VERTEX_COLUMNS, path)
            for row in reader:
                vertex_str = (row.get("vertex_id") or "").strip()
                label = (row.get("label") or "").strip()

                if not vertex_str:
                    continue

                try:
                    vertex_id = int(vertex_str)
                except ValueError as e:
                    raise GraphFormatError(
                        f"Invalid vertex id {vertex_str!r}",
                        file_path=str(path),
                        line_number=reader.line_num,
                        cause=e,
                    )
                if vertex_id != store.vertex_count + 1:
                    raise GraphFormatError(
                        f"Expected vertex id {store.vertex_count + 1}, got {vertex_id}",
                        file_path=str(path),
                        line_number=reader.line_num,
                    )
                try:
                    store.add_vertex(label)
                except GraphError as e:
                    raise GraphFormatError(
                        f"Invalid vertex {vertex_id}",
                        file_path=str(path),
                        line_number=reader.line_num,
                        cause=e,
                    )

    def _load_edges(self, store: GraphStore, path: Path) -> None:
        with path.open(newline="", encoding="utf-8") as f:
            reader = csv.DictReader(f)
            self._require_columns(reader, EDGE_COLUMNS, path)
            for row in reader:
                source_str = (row.get("source") or "").strip()
                destination_str = (row.get("destination") or "").strip()
                weight_str = (row.get("weight") or "").strip()

                if not source_str or not destination_str or not weight_str:
                    continue

                try:
                    source = int(source_str)
                    destination = int(destination_str)
                    weight = int(weight_str)
                    inserted = store.insert_edge(source, destination, weight)
                except (ValueError, VertexNotFoundError) as e:
                    raise GraphFormatError(
                        f"Invalid edge row {source_str},{destination_str},{weight_str}",
                        file_path=str(path),
                        line_number=reader.line_num,
                        cause=e,
                    )

                if not inserted:
                    self._logger.warning(
                        "Skipped negative-weight edge",
                        extra={
                            "source": source,
                            "destination": destination,
                            "weight": weight,
                            "line_number": reader.line_num,
                        },
                    )

    def clear_cache(self) -> None:
        """Clear cached graph data."""
        self._graph = None
        self._logger.debug("Graph cache cleared")
