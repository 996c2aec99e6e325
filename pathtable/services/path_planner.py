"""Path planner service - store and engine behind one facade.

The bare ShortestPathEngine leaves recomputation after a mutation to the
caller. This service tracks that itself: every query first checks
whether the store changed since the last computation and recomputes if
so, so a caller going through the service never sees a stale table.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

from ..config import GraphConfig
from ..domain.models import Distance, RouteResult, Vertex
from ..graph.engine import ShortestPathEngine
from ..graph.store import GraphStore
from ..ports.graph import GraphRepositoryPort, PathSolverPort
from ..ports.rendering import ReportRendererPort


@dataclass(eq=False)
class PathPlannerService:
    """Graph mutation, shortest-path queries and reporting.

    Attributes:
        store: The graph being planned over
        renderer: Optional renderer used by display_all() and display()
        engine: Solver bound to ``store``; a ShortestPathEngine is created
            when none is given
    """

    store: GraphStore = field(default_factory=GraphStore)
    renderer: Optional[ReportRendererPort] = None
    engine: Optional[PathSolverPort] = field(default=None, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)
        if self.engine is None:
            self.engine = ShortestPathEngine(store=self.store)
        elif self.engine.store is not self.store:
            raise ValueError("The engine must be bound to the planner's store")

    @classmethod
    def from_repository(
        cls,
        repository: GraphRepositoryPort,
        renderer: Optional[ReportRendererPort] = None,
    ) -> PathPlannerService:
        """Create a planner over a freshly loaded graph."""
        return cls(store=repository.load(), renderer=renderer)

    @classmethod
    def empty(
        cls,
        config: Optional[GraphConfig] = None,
        renderer: Optional[ReportRendererPort] = None,
    ) -> PathPlannerService:
        store = GraphStore(config=config) if config is not None else GraphStore()
        return cls(store=store, renderer=renderer)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add_vertex(self, label: str) -> int:
        return self.store.add_vertex(label)

    def insert_edge(self, source: int, destination: int, weight: int) -> bool:
        return self.store.insert_edge(source, destination, weight)

    def remove_edge(self, source: int, destination: int) -> bool:
        return self.store.remove_edge(source, destination)

    def clear(self) -> None:
        self.store.clear()

    def copy(self) -> PathPlannerService:
        """Return a planner with an independent store and distance table."""
        store = self.store.copy()
        return PathPlannerService(
            store=store,
            renderer=self.renderer,
            engine=self.engine.copy(store=store),
        )

    def assign(self, source: PathPlannerService) -> PathPlannerService:
        """Make this planner an independent copy of ``source``.

        Assigning a planner to itself leaves it untouched.
        """
        if source is self:
            return self
        self.store.assign(source.store)
        self.engine = source.engine.copy(store=self.store)
        return self

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def ensure_computed(self) -> None:
        """Recompute all pairs if the graph changed since the last run."""
        if self.engine.is_stale:
            self._logger.debug(
                "Recomputing shortest paths", extra={"revision": self.store.revision}
            )
            self.engine.compute_all_pairs()

    def vertices(self) -> Tuple[Vertex, ...]:
        return self.store.vertices()

    def distance(self, source: int, destination: int) -> Distance:
        self.ensure_computed()
        return self.engine.distance(source, destination)

    def path(self, source: int, destination: int) -> Tuple[int, ...]:
        self.ensure_computed()
        return self.engine.path(source, destination)

    def route(self, source: int, destination: int) -> RouteResult:
        self.ensure_computed()
        return self.engine.route(source, destination)

    def routes(self) -> Tuple[RouteResult, ...]:
        """Results for every ordered pair of distinct vertices, row-major."""
        self.ensure_computed()
        return tuple(self.engine.routes())

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    def _require_renderer(self) -> ReportRendererPort:
        if self.renderer is None:
            from ..adapters.rendering import TextTableRenderer

            self.renderer = TextTableRenderer()
        return self.renderer

    def display_all(self, output_path: Optional[Path] = None) -> str:
        """Render the full table of shortest paths.

        Args:
            output_path: If given, the report is also written there.

        Returns:
            The rendered report.

        Raises:
            RenderingError: If writing to ``output_path`` fails.
        """
        renderer = self._require_renderer()
        report = renderer.render_all(self.vertices(), self.routes())
        if output_path is not None:
            renderer.write(report, output_path)
        return report

    def display(
        self,
        source: int,
        destination: int,
        output_path: Optional[Path] = None,
    ) -> str:
        """Render one pair, including the labels along its path."""
        renderer = self._require_renderer()
        route = self.route(source, destination)
        self._logger.info(
            "Route computed",
            extra={
                "source": source,
                "destination": destination,
                "stops": route.num_stops,
                "distance": route.distance,
            },
        )
        report = renderer.render_pair(route)
        if output_path is not None:
            renderer.write(report, output_path)
        return report
