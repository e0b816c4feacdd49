"""Core reading, geometry, raster and writing functions."""

from .loaders import Vertex, VertexStream, parse_vertex, read_vertices
from .geometry import (
    BoundingBox,
    RasterGeometry,
    compute_bounds,
    round_half_away,
    validate_scale,
)
from .color import BLACK, Color, parse_color
from .raster import PixelBuffer
from .writers import write_png

__all__ = [
    "Vertex",
    "VertexStream",
    "parse_vertex",
    "read_vertices",
    "BoundingBox",
    "RasterGeometry",
    "compute_bounds",
    "round_half_away",
    "validate_scale",
    "BLACK",
    "Color",
    "parse_color",
    "PixelBuffer",
    "write_png",
]
