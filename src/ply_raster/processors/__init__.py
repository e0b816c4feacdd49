"""Processing stages: density accumulation, post-processing, rendering."""

from .density import (
    ALPHA_CEILING,
    ALPHA_STEP,
    RandomByteSource,
    accumulate_alpha,
    build_density_raster,
)
from .postprocess import (
    ImageMagickTransform,
    NullTransform,
    PillowTransform,
    get_transform,
)
from .render import RenderResult, compute_bounds_from_file, render_point_cloud

__all__ = [
    "ALPHA_CEILING",
    "ALPHA_STEP",
    "RandomByteSource",
    "accumulate_alpha",
    "build_density_raster",
    "ImageMagickTransform",
    "NullTransform",
    "PillowTransform",
    "get_transform",
    "RenderResult",
    "compute_bounds_from_file",
    "render_point_cloud",
]
