"""Command-line entry point.

Usage:
    pathtable                                # full table for the configured graph
    pathtable --graph data/graph.txt         # full table for a given file
    pathtable --source 1 --destination 3     # one pair, with labels
    pathtable --format csv --data-dir data   # read vertices.csv / edges.csv
    pathtable --output report.txt --verbose

Exit Codes:
    0 - Report produced
    1 - The graph could not be loaded, a vertex was unknown, or the
        report could not be written
    2 - Invalid command-line arguments
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from .config import AppConfig, get_config
from .container import Container
from .domain.errors import PathTableError
from .monitoring import configure_logging
from .services import PathPlannerService

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pathtable",
        description="Compute shortest paths between every pair of vertices.",
    )
    parser.add_argument(
        "--graph",
        type=Path,
        help="Text graph description (overrides the configured file)",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        help="Directory holding the graph files",
    )
    parser.add_argument(
        "--format",
        choices=["text", "csv"],
        help="Graph file format",
    )
    parser.add_argument("--source", "-s", type=int, help="Source vertex id")
    parser.add_argument(
        "--destination", "-d", type=int, help="Destination vertex id"
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="Also write the report to this file",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log at DEBUG level",
    )
    return parser


def _apply_overrides(config: AppConfig, args: argparse.Namespace) -> AppConfig:
    graph = config.graph.model_copy()
    if args.graph is not None:
        graph.data_dir = args.graph.parent
        graph.graph_file = args.graph.name
        graph.format = "text"
    if args.data_dir is not None:
        graph.data_dir = args.data_dir
    if args.format is not None:
        graph.format = args.format

    observability = config.observability.model_copy()
    if args.verbose:
        observability.level = "DEBUG"

    return config.model_copy(update={"graph": graph, "observability": observability})


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if (args.source is None) != (args.destination is None):
        parser.error("--source and --destination must be given together")

    config = _apply_overrides(get_config(), args)
    configure_logging(config.observability)

    try:
        container = Container.create_default(config)
        planner: PathPlannerService = container.resolve(PathPlannerService)

        if args.source is not None:
            report = planner.display(args.source, args.destination, args.output)
        else:
            report = planner.display_all(args.output)
    except PathTableError as e:
        logger.error("Report failed", extra={"error": str(e)})
        print(f"Error: {e}", file=sys.stderr)
        return 1

    sys.stdout.write(report)
    return 0


if __name__ == "__main__":
    sys.exit(main())
