"""Configuration management for the rasterizer."""

from .models import (
    RasterConfig,
    PostProcessConfig,
    OutputConfig,
    PipelineConfig,
)

__all__ = [
    "RasterConfig",
    "PostProcessConfig",
    "OutputConfig",
    "PipelineConfig",
]
