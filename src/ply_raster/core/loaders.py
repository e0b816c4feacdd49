"""Streaming reader for ASCII point cloud files."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional, Union

from ..exceptions import MalformedVertexError

logger = logging.getLogger(__name__)

HEADER_END = "end_header"


@dataclass(frozen=True)
class Vertex:
    """A single 3D point."""

    x: float
    y: float
    z: float


def parse_vertex(line: str, line_number: int = 0, path: Optional[Path] = None) -> Vertex:
    """
    Parse one data line into a Vertex.

    Only the first three whitespace-separated fields are used; trailing
    fields such as colours or normals are ignored.

    Parameters
    ----------
    line : str
        Raw data line.
    line_number : int
        1-based line number, used in error messages.
    path : Path, optional
        Source file, used in error messages.

    Returns
    -------
    Vertex
        Parsed point.
    """
    fields = line.split()
    if len(fields) < 3:
        raise MalformedVertexError(
            path, line_number, line.rstrip("\r\n"), f"expected 3 fields, found {len(fields)}"
        )

    coords = []
    for token in fields[:3]:
        if "_" in token or not token.isascii():
            raise MalformedVertexError(
                path, line_number, line.rstrip("\r\n"), f"{token!r} is not a number"
            )
        try:
            value = float(token)
        except ValueError:
            raise MalformedVertexError(
                path, line_number, line.rstrip("\r\n"), f"{token!r} is not a number"
            ) from None
        if not math.isfinite(value):
            raise MalformedVertexError(
                path, line_number, line.rstrip("\r\n"), f"{token!r} is not finite"
            )
        coords.append(value)

    return Vertex(*coords)


def read_vertices(path: Union[str, Path]) -> Iterator[Vertex]:
    """
    Lazily yield the vertices of an ASCII point cloud file.

    Everything up to and including the ``end_header`` line is skipped.
    Bytes outside ASCII never fail the read: in the header they are
    ignored, in a data line they make that line malformed.
    Each call opens the file afresh, so two calls give two independent,
    identical passes.

    Parameters
    ----------
    path : str or Path
        Point cloud file.

    Yields
    ------
    Vertex
        One point per non-blank data line.
    """
    path = Path(path)
    with path.open("r", encoding="ascii", errors="surrogateescape") as fh:
        in_body = False
        for line_number, line in enumerate(fh, start=1):
            if not in_body:
                if line.rstrip("\r\n") == HEADER_END:
                    in_body = True
                    logger.debug("%s: header ends at line %d", path, line_number)
                continue

            if not line.strip():
                continue
            yield parse_vertex(line, line_number, path)

        if not in_body:
            logger.warning("%s: no %r line found", path, HEADER_END)


@dataclass(frozen=True)
class VertexStream:
    """Restartable view over a point cloud file; every iteration re-reads it."""

    path: Path

    def __iter__(self) -> Iterator[Vertex]:
        return read_vertices(self.path)

    def count(self) -> int:
        """Return number of vertices (one full pass)."""
        return sum(1 for _ in self)
