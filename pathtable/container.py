"""Dependency injection container.

This module provides a simple DI container without external frameworks.
It allows registering and resolving dependencies for the application.

Design principles:
1. No magic - explicit registration and resolution
2. Testable - easy to swap implementations
3. Lazy loading - adapters instantiated on first use
4. Thread-safe - registration and resolution hold a lock
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, TypeVar

from .config import AppConfig, get_config
from .domain.errors import ConfigurationError

T = TypeVar("T")


@dataclass
class Container:
    """Dependency injection container.

    Usage:
        # Production
        container = Container.create_default()
        planner = container.resolve(PathPlannerService)

        # Testing
        container = Container()
        container.register(GraphRepositoryPort, lambda: FakeRepository())
        repository = container.resolve(GraphRepositoryPort)

    Attributes:
        config: Application configuration
    """

    config: AppConfig = field(default_factory=get_config)

    _factories: Dict[type[Any], Callable[[], Any]] = field(
        default_factory=dict, repr=False
    )
    _singletons: Dict[type[Any], Any] = field(default_factory=dict, repr=False)
    _singleton_types: set[type[Any]] = field(default_factory=set, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def register(
        self,
        port_type: type[Any],
        factory: Callable[[], Any],
        singleton: bool = True,
    ) -> None:
        """Register a factory for a port type.

        Args:
            port_type: The type (usually a Protocol) to register.
            factory: A callable that creates instances of the type.
            singleton: If True, only one instance is created.
        """
        with self._lock:
            self._factories[port_type] = factory
            if singleton:
                self._singleton_types.add(port_type)
            else:
                self._singleton_types.discard(port_type)
            self._singletons.pop(port_type, None)

    def resolve(self, port_type: type[Any]) -> Any:
        """Resolve an instance of a port type.

        Raises:
            KeyError: If the type is not registered.
        """
        with self._lock:
            if port_type not in self._factories:
                raise KeyError(f"Type not registered: {port_type}")

            if port_type in self._singleton_types:
                if port_type not in self._singletons:
                    self._singletons[port_type] = self._factories[port_type]()
                return self._singletons[port_type]

            return self._factories[port_type]()

    @classmethod
    def create_default(cls, config: Optional[AppConfig] = None) -> Container:
        """Create a container with default production bindings.

        The graph repository is chosen by ``config.graph.format``. The
        solver and the planner service are not singletons: every resolve
        loads its own independent copy of the graph.

        Raises:
            ConfigurationError: If the configured graph format is unknown.
        """
        from .adapters.graph import CSVGraphRepository, TextGraphRepository
        from .adapters.rendering import TextTableRenderer
        from .graph.engine import ShortestPathEngine
        from .ports.graph import GraphRepositoryPort, PathSolverPort
        from .ports.rendering import ReportRendererPort
        from .services import PathPlannerService

        config = config or get_config()
        container = cls(config=config)

        graph_format = config.graph.format
        if graph_format == "text":
            container.register(
                GraphRepositoryPort,
                lambda: TextGraphRepository(config.graph),
            )
        elif graph_format == "csv":
            container.register(
                GraphRepositoryPort,
                lambda: CSVGraphRepository(config.graph),
            )
        else:
            raise ConfigurationError(
                f"Unknown graph format: {graph_format!r}",
                setting_name="graph.format",
                expected_type="'text' or 'csv'",
            )

        container.register(ReportRendererPort, lambda: TextTableRenderer())

        container.register(
            PathSolverPort,
            lambda: ShortestPathEngine(
                store=container.resolve(GraphRepositoryPort).load()
            ),
            singleton=False,
        )

        def create_path_planner() -> PathPlannerService:
            solver = container.resolve(PathSolverPort)
            return PathPlannerService(
                store=solver.store,
                renderer=container.resolve(ReportRendererPort),
                engine=solver,
            )

        container.register(PathPlannerService, create_path_planner, singleton=False)

        return container

