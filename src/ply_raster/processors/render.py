"""End-to-end point cloud to PNG rendering."""

from __future__ import annotations

import logging
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, Optional, Union

from ..config import PipelineConfig
from ..core.geometry import BoundingBox, RasterGeometry, compute_bounds, validate_scale
from ..core.loaders import Vertex, read_vertices
from ..core.writers import write_png
from .density import RandomByte, build_density_raster
from .postprocess import ImageTransform, get_transform

logger = logging.getLogger(__name__)


@dataclass
class RenderResult:
    """Summary of one render."""

    bounds: BoundingBox
    geometry: RasterGeometry
    output: Path
    points: int
    touched: int


class _Counter:
    """Pass-through iterable that counts what it yields."""

    def __init__(self, vertices: Iterable[Vertex]) -> None:
        self._vertices = vertices
        self.count = 0

    def __iter__(self) -> Iterator[Vertex]:
        for vertex in self._vertices:
            self.count += 1
            yield vertex


def compute_bounds_from_file(path: Union[str, Path]) -> BoundingBox:
    """Run the first pass over a point cloud file and return its bounds."""
    return compute_bounds(read_vertices(path))


def render_point_cloud(
    path: Union[str, Path],
    output: Optional[Path] = None,
    config: Optional[PipelineConfig] = None,
    transform: Optional[ImageTransform] = None,
    random_byte: Optional[RandomByte] = None,
) -> RenderResult:
    """
    Render a point cloud file to a post-processed density PNG.

    The file is read twice: once for the bounding box, once to plot. The
    raw raster goes through a temporary PNG which the transform turns into
    the final image; the temporary file is removed afterwards.

    Parameters
    ----------
    path : str or Path
        ASCII point cloud file.
    output : Path, optional
        Final image path. Defaults to ``config.output.path``.
    config : PipelineConfig, optional
        Pipeline configuration. Uses defaults if not provided.
    transform : ImageTransform, optional
        Post-processing collaborator. Defaults to the configured one.
    random_byte : callable, optional
        Random byte source for the density accumulator.

    Returns
    -------
    RenderResult
        Bounds, geometry and output location.
    """
    if config is None:
        config = PipelineConfig()
    path = Path(path)
    output = Path(output) if output is not None else config.output.path
    if transform is None:
        transform = get_transform(config.postprocess.transform, config.postprocess.convert_binary)

    scale = validate_scale(config.raster.scale)

    bounds = compute_bounds(read_vertices(path))
    geometry = RasterGeometry.from_bounds(bounds, scale)

    counted = _Counter(read_vertices(path))
    buffer = build_density_raster(
        counted,
        geometry,
        color=config.raster.rgb,
        random_byte=random_byte,
        boundary=config.raster.boundary,
    )
    touched = buffer.touched()

    with tempfile.TemporaryDirectory(prefix="ply_raster_") as tmp_dir:
        tmp_png = write_png(Path(tmp_dir) / "tmp.png", buffer)
        logger.info("Post-processing %s -> %s", tmp_png.name, output)
        transform(tmp_png, output, config.postprocess.angle, config.postprocess.bright)

    return RenderResult(
        bounds=bounds,
        geometry=geometry,
        output=output,
        points=counted.count,
        touched=touched,
    )
