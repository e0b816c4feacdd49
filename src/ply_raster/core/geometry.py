"""Bounding box reduction and point-to-pixel geometry."""

from __future__ import annotations

import logging
import math
import sys
from dataclasses import dataclass
from typing import Iterable, Tuple

from ..exceptions import EmptyInputError, InvalidScaleError, RasterTooLargeError
from .loaders import Vertex

logger = logging.getLogger(__name__)

MAX_RASTER_SIDE = 1_000_000
MAX_RASTER_PIXELS = 400_000_000


def round_half_away(value: float) -> int:
    """Round to the nearest integer, ties away from zero (``2.5 -> 3``)."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned extremes of a point cloud."""

    min: Vertex
    max: Vertex

    @property
    def extent(self) -> Tuple[float, float, float]:
        """Return (dx, dy, dz)."""
        return (
            self.max.x - self.min.x,
            self.max.y - self.min.y,
            self.max.z - self.min.z,
        )


def compute_bounds(vertices: Iterable[Vertex]) -> BoundingBox:
    """
    Fold a vertex sequence into its bounding box.

    Each axis tracks its minimum and maximum with two independent
    comparisons, so a single point sets both extremes.

    Parameters
    ----------
    vertices : iterable of Vertex
        One full pass over the point cloud.

    Returns
    -------
    BoundingBox
        Exact per-axis minimum and maximum.
    """
    big = sys.float_info.max
    min_x = min_y = min_z = big
    max_x = max_y = max_z = -big
    count = 0

    for pt in vertices:
        count += 1
        if pt.x < min_x:
            min_x = pt.x
        if pt.x > max_x:
            max_x = pt.x
        if pt.y < min_y:
            min_y = pt.y
        if pt.y > max_y:
            max_y = pt.y
        if pt.z < min_z:
            min_z = pt.z
        if pt.z > max_z:
            max_z = pt.z

    if count == 0:
        raise EmptyInputError("Point cloud contains no vertices after the header")

    bounds = BoundingBox(min=Vertex(min_x, min_y, min_z), max=Vertex(max_x, max_y, max_z))
    logger.info("Bounds of %d vertices: %s .. %s", count, bounds.min, bounds.max)
    return bounds


def validate_scale(scale: float) -> float:
    """Return ``scale`` as float, raising InvalidScaleError unless it is positive and finite."""
    try:
        value = float(scale)
    except (TypeError, ValueError):
        raise InvalidScaleError(f"Scale must be a number, got {scale!r}") from None
    if not math.isfinite(value) or value <= 0:
        raise InvalidScaleError(f"Scale must be a positive number, got {scale!r}")
    return value


@dataclass(frozen=True)
class RasterGeometry:
    """Pixel grid size and the vertex-to-pixel mapping."""

    width: int
    height: int
    scale: float
    origin: Vertex

    @classmethod
    def from_bounds(cls, bounds: BoundingBox, scale: float) -> "RasterGeometry":
        """
        Size a raster so both boundary points of each axis fit.

        Parameters
        ----------
        bounds : BoundingBox
            Extent of the point cloud.
        scale : float
            Length covered by one pixel, in input units.

        Returns
        -------
        RasterGeometry
            Grid of ``round(1 + extent / scale)`` pixels per axis.
        """
        scale = validate_scale(scale)
        dx, dy, _ = bounds.extent
        cols = 1.0 + dx / scale
        rows = 1.0 + dy / scale
        if not (math.isfinite(cols) and math.isfinite(rows)) or max(cols, rows) > MAX_RASTER_SIDE:
            raise RasterTooLargeError(
                f"Raster too large: extent {dx:g} x {dy:g} at scale {scale:g} needs "
                f"{cols:.6g} x {rows:.6g} pixels (max {MAX_RASTER_SIDE} per side)"
            )
        width = max(1, round_half_away(cols))
        height = max(1, round_half_away(rows))
        if width * height > MAX_RASTER_PIXELS:
            raise RasterTooLargeError(
                f"Raster too large: {width}x{height} exceeds {MAX_RASTER_PIXELS:,} pixels; "
                "use a larger scale"
            )
        logger.info("Raster size %dx%d at scale %g", width, height, scale)
        return cls(width=width, height=height, scale=scale, origin=bounds.min)

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    def project(self, vertex: Vertex) -> Tuple[int, int]:
        """
        Map a vertex onto the grid, dropping z.

        The x-axis is mirrored, so larger x lands further left. The result
        is not clamped: the minimum-x point maps to ``width`` itself.
        """
        pixel_x = self.width - round_half_away((vertex.x - self.origin.x) / self.scale)
        pixel_y = round_half_away((vertex.y - self.origin.y) / self.scale)
        return pixel_x, pixel_y

    def contains(self, pixel_x: int, pixel_y: int) -> bool:
        return 0 <= pixel_x < self.width and 0 <= pixel_y < self.height

    def clamp(self, pixel_x: int, pixel_y: int) -> Tuple[int, int]:
        """Clamp a pixel coordinate into the grid."""
        return (
            min(max(pixel_x, 0), self.width - 1),
            min(max(pixel_y, 0), self.height - 1),
        )
