"""Centralized configuration using Pydantic Settings.

This module provides a single source of truth for all configuration:
- graph capacity limits (vertex bound, label length)
- graph data locations and format
- logging

Configuration can be overridden via environment variables:
- PATHTABLE_GRAPH_MAX_VERTICES=200
- PATHTABLE_GRAPH_DATA_DIR=/path/to/data
- PATHTABLE_GRAPH_FORMAT=csv
- PATHTABLE_LOG_LEVEL=DEBUG
- etc.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GraphConfig(BaseSettings):
    """Graph capacity and data configuration.

    Environment variables prefixed with PATHTABLE_GRAPH_.
    """

    model_config = SettingsConfigDict(env_prefix="PATHTABLE_GRAPH_")

    # A store holds at most max_vertices - 1 vertices.
    max_vertices: int = Field(default=100, ge=2)
    max_label_length: int = Field(default=50, ge=1)

    data_dir: Path = Field(
        default_factory=lambda: Path(__file__).resolve().parent.parent / "data"
    )
    format: Literal["text", "csv"] = "text"
    graph_file: str = "graph.txt"
    vertices_file: str = "vertices.csv"
    edges_file: str = "edges.csv"

    @property
    def max_vertex_count(self) -> int:
        """Largest number of vertices a store may hold."""
        return self.max_vertices - 1

    @property
    def graph_path(self) -> Path:
        """Full path to the text graph description."""
        return self.data_dir / self.graph_file

    @property
    def vertices_path(self) -> Path:
        """Full path to vertices CSV file."""
        return self.data_dir / self.vertices_file

    @property
    def edges_path(self) -> Path:
        """Full path to edges CSV file."""
        return self.data_dir / self.edges_file


class ObservabilityConfig(BaseSettings):
    """Logging and observability configuration.

    Environment variables prefixed with PATHTABLE_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="PATHTABLE_LOG_")

    level: str = "WARNING"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = False  # Set True for JSON logging


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

    Sub-configurations can be accessed via attributes:

        config = get_config()
        print(config.graph.max_vertices)
        print(config.graph.graph_path)

    Environment variables prefixed with PATHTABLE_.
    """

    model_config = SettingsConfigDict(env_prefix="PATHTABLE_")

    graph: GraphConfig = Field(default_factory=GraphConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    @property
    def project_root(self) -> Path:
        """Return the project root directory."""
        return Path(__file__).resolve().parent.parent


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.

    Returns:
        The application configuration instance.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache.

    Call this in tests to ensure a fresh configuration is loaded.
    """
    get_config.cache_clear()
