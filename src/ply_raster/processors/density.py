"""Stochastic density accumulation onto a pixel buffer."""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Literal, Optional

import numpy as np

from ..core.color import BLACK, Color
from ..core.geometry import RasterGeometry
from ..core.loaders import Vertex
from ..core.raster import PixelBuffer
from ..exceptions import OutOfBoundsError

logger = logging.getLogger(__name__)

ALPHA_STEP = 10
ALPHA_CEILING = 250

BoundaryPolicy = Literal["clamp", "raise"]
RandomByte = Callable[[], int]


class RandomByteSource:
    """
    Uniform random bytes in ``[0, 255]``, drawn from numpy in blocks.

    Instances are callable and return one byte per call.
    """

    def __init__(self, seed: Optional[int] = None, block_size: int = 65536) -> None:
        self._rng = np.random.default_rng(seed)
        self._block_size = block_size
        self._block = np.empty(0, dtype=np.uint8)
        self._pos = 0

    def __call__(self) -> int:
        if self._pos >= self._block.size:
            self._block = self._rng.integers(0, 256, size=self._block_size, dtype=np.uint8)
            self._pos = 0
        value = int(self._block[self._pos])
        self._pos += 1
        return value


_default_source: Optional[RandomByteSource] = None


def default_random_byte() -> RandomByte:
    """Return the process-wide random byte source."""
    global _default_source
    if _default_source is None:
        _default_source = RandomByteSource()
    return _default_source


def accumulate_alpha(alpha: int, rnd: int) -> int:
    """
    One step of the saturating accumulator.

    Alpha grows by ``ALPHA_STEP`` only while below ``ALPHA_CEILING`` and
    only when the random byte beats it, so repeat hits on a dense pixel
    become less and less likely to darken it further.
    """
    if alpha < ALPHA_CEILING and rnd > alpha:
        return alpha + ALPHA_STEP
    return alpha


def build_density_raster(
    vertices: Iterable[Vertex],
    geometry: RasterGeometry,
    color: Color = BLACK,
    random_byte: Optional[RandomByte] = None,
    boundary: BoundaryPolicy = "clamp",
) -> PixelBuffer:
    """
    Plot every vertex into a fresh buffer, accumulating alpha per pixel.

    Parameters
    ----------
    vertices : iterable of Vertex
        Second full pass over the point cloud.
    geometry : RasterGeometry
        Grid size and projection derived from the first pass.
    color : Color
        Colour of every pixel; only alpha varies.
    random_byte : callable, optional
        Returns one uniform byte per call. Defaults to a shared
        numpy-backed source.
    boundary : {"clamp", "raise"}
        What to do with a projected pixel outside the grid. The minimum-x
        column always projects to ``width`` and is folded onto the last
        column under both policies; ``"raise"`` only rejects points beyond
        that, such as vertices outside the bounds the geometry was built from.

    Returns
    -------
    PixelBuffer
        Finished raster.
    """
    if boundary not in ("clamp", "raise"):
        raise ValueError(f"Unknown boundary policy: {boundary!r}")
    if random_byte is None:
        random_byte = default_random_byte()

    buffer = PixelBuffer(geometry.width, geometry.height, color)
    points = 0
    clamped = 0

    for vertex in vertices:
        x, y = geometry.project(vertex)
        if x == geometry.width:
            # The mirrored minimum-x column lands one past the last column
            x = geometry.width - 1
        if not geometry.contains(x, y):
            if boundary == "raise":
                raise OutOfBoundsError((x, y), geometry.size, vertex)
            x, y = geometry.clamp(x, y)
            clamped += 1

        alpha = accumulate_alpha(buffer.alpha(x, y), random_byte())
        buffer.put(x, y, alpha)
        points += 1

    logger.info("Plotted %d points into %dx%d raster", points, buffer.width, buffer.height)
    if clamped:
        logger.debug("Clamped %d points onto the raster edge", clamped)
    return buffer
