"""Point cloud to density PNG rasterizer."""

__version__ = "0.1.0"

from .core.geometry import BoundingBox, RasterGeometry, compute_bounds
from .core.loaders import Vertex, VertexStream, read_vertices
from .core.raster import PixelBuffer
from .processors.density import build_density_raster
from .processors.render import RenderResult, render_point_cloud

__all__ = [
    "__version__",
    "BoundingBox",
    "RasterGeometry",
    "compute_bounds",
    "Vertex",
    "VertexStream",
    "read_vertices",
    "PixelBuffer",
    "build_density_raster",
    "RenderResult",
    "render_point_cloud",
]
