"""Error types raised while rasterizing a point cloud."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Optional, Tuple

if TYPE_CHECKING:
    from .core.loaders import Vertex


class PlyRasterError(Exception):
    """Base class for all rasterizer errors."""


class MalformedVertexError(PlyRasterError, ValueError):
    """A data line could not be parsed into three finite floats."""

    def __init__(self, path: Optional[Path], line_number: int, line: str, reason: str) -> None:
        self.path = path
        self.line_number = line_number
        self.line = line
        self.reason = reason
        where = f"{path}:{line_number}" if path is not None else f"line {line_number}"
        super().__init__(f"Malformed vertex at {where}: {reason} ({line!r})")


class EmptyInputError(PlyRasterError, ValueError):
    """No vertices were found after the header."""


class InvalidScaleError(PlyRasterError, ValueError):
    """Pixel scale is not a positive finite number."""


class RasterTooLargeError(InvalidScaleError):
    """Extent divided by scale gives a grid too large to allocate."""


class InvalidColorError(PlyRasterError, ValueError):
    """Colour code is neither hex nor the 0/1 shorthand."""


class OutOfBoundsError(PlyRasterError, ValueError):
    """A projected point fell outside the pixel grid."""

    def __init__(
        self,
        pixel: Tuple[int, int],
        size: Tuple[int, int],
        vertex: Optional["Vertex"] = None,
    ) -> None:
        self.pixel = pixel
        self.size = size
        self.vertex = vertex
        point = f" (point {vertex.x}, {vertex.y}, {vertex.z})" if vertex is not None else ""
        super().__init__(
            f"Projected pixel {pixel}{point} is outside the {size[0]}x{size[1]} raster"
        )


class PostProcessError(PlyRasterError, RuntimeError):
    """The image transform collaborator failed."""
