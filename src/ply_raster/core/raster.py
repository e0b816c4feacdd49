"""RGBA pixel buffer backed by a numpy array."""

from __future__ import annotations

from typing import Tuple

import numpy as np

from .color import Color


class PixelBuffer:
    """
    Mutable ``width x height`` grid of RGBA pixels.

    Pixels are stored row-major in a ``(height, width, 4)`` uint8 array and
    addressed by ``(x, y)``. Every pixel starts as the given colour with
    zero alpha.
    """

    def __init__(self, width: int, height: int, color: Color) -> None:
        if width < 1 or height < 1:
            raise ValueError(f"Raster must be at least 1x1, got {width}x{height}")
        self.color = color
        self.data = np.zeros((height, width, 4), dtype=np.uint8)
        self.data[..., 0] = color.r
        self.data[..., 1] = color.g
        self.data[..., 2] = color.b

    @property
    def width(self) -> int:
        return self.data.shape[1]

    @property
    def height(self) -> int:
        return self.data.shape[0]

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    def alpha(self, x: int, y: int) -> int:
        return int(self.data[y, x, 3])

    def pixel(self, x: int, y: int) -> Tuple[int, int, int, int]:
        r, g, b, a = self.data[y, x]
        return int(r), int(g), int(b), int(a)

    def put(self, x: int, y: int, alpha: int) -> None:
        """Write ``(r, g, b, alpha)`` at ``(x, y)``."""
        self.data[y, x] = self.color.rgba(alpha)

    @property
    def alpha_channel(self) -> np.ndarray:
        """Return the alpha plane as a ``(height, width)`` view."""
        return self.data[..., 3]

    def touched(self) -> int:
        """Return number of pixels with non-zero alpha."""
        return int(np.count_nonzero(self.alpha_channel))

    def to_image(self):
        """Return the buffer as a Pillow RGBA image."""
        from PIL import Image

        return Image.fromarray(self.data)
