"""Raster image writers."""

from __future__ import annotations

import logging
from pathlib import Path

from .raster import PixelBuffer

logger = logging.getLogger(__name__)


def write_png(path: Path, buffer: PixelBuffer) -> Path:
    """
    Write a pixel buffer to a lossless RGBA PNG.

    Parameters
    ----------
    path : Path
        Output file path. Parent directories are created.
    buffer : PixelBuffer
        Finished raster.

    Returns
    -------
    Path
        The written path.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    buffer.to_image().save(path, format="PNG")
    logger.debug("Wrote %dx%d raster to %s", buffer.width, buffer.height, path)
    return path
