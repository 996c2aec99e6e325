"""Text graph repository adapter.

This adapter wraps graph/load_graph.py and adds:
- Configuration injection (path from config)
- Caching of the parsed graph
- Error wrapping into GraphError
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ...config import GraphConfig, get_config
from ...domain.errors import GraphError
from ...graph.load_graph import load_graph
from ...graph.store import GraphStore


@dataclass
class TextGraphRepository:
    """Graph repository that loads the plain-text graph description.

    Implements GraphRepositoryPort. Every ``load()`` returns a fresh
    copy of the cached graph, so callers may mutate what they get.

    Attributes:
        config: Graph configuration (data directory, file name, limits)
        path: Explicit file to read, overriding the configured one
    """

    config: GraphConfig = field(default_factory=lambda: get_config().graph)
    path: Optional[Path] = None
    _logger: logging.Logger = field(init=False, repr=False)

    # Cached data
    _graph: Optional[GraphStore] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    @property
    def graph_path(self) -> Path:
        return Path(self.path) if self.path is not None else self.config.graph_path

    def load(self) -> GraphStore:
        """Load the graph from the text file.

        Returns:
            An independent copy of the loaded graph.

        Raises:
            GraphError: If the file cannot be read or parsed.
        """
        if self._graph is None:
            self._logger.debug(
                "Loading graph", extra={"graph_path": str(self.graph_path)}
            )
            try:
                self._graph = load_graph(self.graph_path, self.config)
            except GraphError:
                raise
            except (OSError, UnicodeDecodeError) as e:
                raise GraphError(
                    f"Failed to load graph: {e}",
                    file_path=str(self.graph_path),
                    cause=e,
                )
            self._logger.info(
                "Graph loaded",
                extra={
                    "vertices": self._graph.vertex_count,
                    "edges": self._graph.edge_count,
                },
            )

        return self._graph.copy()

    def clear_cache(self) -> None:
        """Clear cached graph data."""
        self._graph = None
        self._logger.debug("Graph cache cleared")
