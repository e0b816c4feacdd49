"""Pydantic configuration models for the rasterizer."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from ..core.color import Color, parse_color


class RasterConfig(BaseModel):
    """Configuration for projection and density accumulation."""

    scale: float = Field(default=0.01, gt=0)
    color: str = "0"
    boundary: Literal["clamp", "raise"] = "clamp"

    @field_validator("color", mode="before")
    @classmethod
    def _check_color(cls, value):
        if isinstance(value, int) and not isinstance(value, bool):
            value = str(value)
        parse_color(value)
        return value

    @property
    def rgb(self) -> Color:
        """Return the parsed colour."""
        return parse_color(self.color)


class PostProcessConfig(BaseModel):
    """Configuration for the rotate/brightness step."""

    angle: float = 0.0
    bright: int = Field(default=0, ge=-100, le=100)
    transform: Literal["pillow", "imagemagick", "none"] = "pillow"
    convert_binary: str = "convert"


class OutputConfig(BaseModel):
    """Configuration for the final image file."""

    path: Path = Path("scan.png")


class PipelineConfig(BaseModel):
    """Main configuration combining all sub-configs."""

    raster: RasterConfig = Field(default_factory=RasterConfig)
    postprocess: PostProcessConfig = Field(default_factory=PostProcessConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @classmethod
    def from_yaml(cls, path: Path) -> "PipelineConfig":
        """Load configuration from a YAML file."""
        import yaml

        with path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
        return cls(**data)

    def to_yaml(self, path: Path) -> None:
        """Save configuration to a YAML file."""
        import yaml

        with path.open("w", encoding="utf-8") as fh:
            yaml.dump(self.model_dump(mode="json"), fh, default_flow_style=False)
