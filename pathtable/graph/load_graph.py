"""Graph loading from the plain-text graph description.

The format is line oriented at the top and token oriented at the end:

    3                 <- number of vertices
    Aurora Station    <- one label per vertex, whole line
    Bay Bridge
    Cedar Park
    1 2 5             <- "source destination weight" triples,
    2 3 2                whitespace separated, until a source of 0
    1 3 10               or the end of the input
    0 0 0
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple, Union

from ..config import GraphConfig, get_config
from ..domain.errors import GraphError, GraphFormatError, VertexNotFoundError
from .store import GraphStore

logger = logging.getLogger(__name__)


def _tokens(lines: Iterator[Tuple[int, str]]) -> Iterator[Tuple[int, str]]:
    for line_number, line in lines:
        for token in line.split():
            yield line_number, token


def _to_int(token: str, line_number: int, what: str) -> int:
    try:
        return int(token)
    except ValueError as e:
        raise GraphFormatError(
            f"Expected an integer {what} on line {line_number}, got {token!r}",
            line_number=line_number,
            cause=e,
        )


def parse_graph(
    lines: Iterable[str], config: Optional[GraphConfig] = None
) -> GraphStore:
    """Build a GraphStore from the lines of a text graph description.

    Args:
        lines: Input lines, with or without trailing newlines.
        config: Graph configuration; defaults to the application config.

    Returns:
        The populated store. Empty input yields an empty store.

    Raises:
        GraphFormatError: On non-integer tokens, a vertex count outside
            the configured bounds, missing labels or edges that refer to
            unknown vertices.
    """
    config = config or get_config().graph
    store = GraphStore(config=config)
    numbered = enumerate(lines, start=1)

    # 1) Vertex count on the first non-blank line
    count_line: Optional[Tuple[int, str]] = None
    for line_number, line in numbered:
        if line.strip():
            count_line = (line_number, line)
            break
    if count_line is None:
        return store

    line_number, line = count_line
    fields = line.split()
    if len(fields) != 1:
        raise GraphFormatError(
            f"Expected a single vertex count on line {line_number}",
            line_number=line_number,
        )
    size = _to_int(fields[0], line_number, "vertex count")
    if not 1 <= size <= config.max_vertex_count:
        raise GraphFormatError(
            f"Vertex count must be between 1 and {config.max_vertex_count}, got {size}",
            line_number=line_number,
        )

    # 2) One label per line
    for _ in range(size):
        try:
            line_number, line = next(numbered)
        except StopIteration:
            raise GraphFormatError(
                f"Expected {size} vertex labels, got {store.vertex_count}",
                line_number=line_number,
            )
        try:
            store.add_vertex(line.rstrip("\r\n"))
        except GraphError as e:
            raise GraphFormatError(
                f"Invalid vertex label on line {line_number}",
                line_number=line_number,
                cause=e,
            )

    # 3) Edge triples until a 0 source or end of input
    tokens = _tokens(numbered)
    while True:
        triple: List[Tuple[int, str]] = []
        for item in tokens:
            triple.append(item)
            if len(triple) == 3:
                break
        if len(triple) < 3:
            break

        line_number = triple[0][0]
        source = _to_int(triple[0][1], line_number, "source")
        if source == 0:
            break
        destination = _to_int(triple[1][1], triple[1][0], "destination")
        weight = _to_int(triple[2][1], triple[2][0], "weight")

        try:
            inserted = store.insert_edge(source, destination, weight)
        except VertexNotFoundError as e:
            raise GraphFormatError(
                f"Edge {source} -> {destination} on line {line_number} "
                f"refers to an unknown vertex",
                line_number=line_number,
                cause=e,
            )
        if not inserted:
            logger.warning(
                "Skipped negative-weight edge",
                extra={
                    "source": source,
                    "destination": destination,
                    "weight": weight,
                    "line_number": line_number,
                },
            )

    return store


def load_graph(
    path: Union[str, Path], config: Optional[GraphConfig] = None
) -> GraphStore:
    """Read a text graph description from ``path``."""
    path = Path(path)
    with path.open(encoding="utf-8") as f:
        try:
            return parse_graph(f, config)
        except GraphFormatError as e:
            e.file_path = str(path)
            raise
