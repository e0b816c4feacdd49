"""Rotation and brightness post-processing of the finished raster."""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Protocol

from ..exceptions import PostProcessError

logger = logging.getLogger(__name__)

BRIGHT_MIN = -100
BRIGHT_MAX = 100


class ImageTransform(Protocol):
    """Turns the temporary raster into the final output image."""

    def __call__(self, source: Path, destination: Path, angle: float, bright: int) -> None:
        ...


def check_bright(bright: int) -> int:
    """Validate a brightness delta."""
    if not BRIGHT_MIN <= bright <= BRIGHT_MAX:
        raise ValueError(f"Brightness must be between {BRIGHT_MIN} and {BRIGHT_MAX}, got {bright}")
    return int(bright)


class NullTransform:
    """Copy the raster through unchanged."""

    def __call__(self, source: Path, destination: Path, angle: float, bright: int) -> None:
        check_bright(bright)
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, destination)


class PillowTransform:
    """
    Normalize, brighten and rotate with Pillow.

    Mirrors ``convert -channel rgba -normalize -brightness-contrast B
    -rotate A``: every band, alpha included, is stretched to the full range
    and shifted by ``B`` percent, then the image is rotated clockwise by
    ``A`` degrees onto a transparent, enlarged canvas.
    """

    def __call__(self, source: Path, destination: Path, angle: float, bright: int) -> None:
        from PIL import Image, ImageOps

        bright = check_bright(bright)
        shift = round(bright * 255 / 100)

        with Image.open(source) as img:
            bands = []
            for band in img.convert("RGBA").split():
                band = ImageOps.autocontrast(band)
                if shift:
                    band = band.point(lambda v: max(0, min(255, v + shift)))
                bands.append(band)
            result = Image.merge("RGBA", bands)

        if angle % 360:
            # Pillow rotates counter-clockwise
            result = result.rotate(
                -angle,
                resample=Image.Resampling.BICUBIC,
                expand=True,
                fillcolor=(0, 0, 0, 0),
            )

        destination.parent.mkdir(parents=True, exist_ok=True)
        result.save(destination)
        logger.debug("Pillow transform wrote %s (angle=%g, bright=%d)", destination, angle, bright)


class ImageMagickTransform:
    """Delegate to the external ImageMagick ``convert`` binary."""

    def __init__(self, binary: str = "convert") -> None:
        self.binary = binary

    def command(self, source: Path, destination: Path, angle: float, bright: int) -> list[str]:
        return [
            self.binary,
            str(source),
            "-channel", "rgba",
            "-background", "transparent",
            "-normalize",
            "-brightness-contrast", f"{bright}",
            "-rotate", f"{angle}",
            str(destination),
        ]

    def __call__(self, source: Path, destination: Path, angle: float, bright: int) -> None:
        bright = check_bright(bright)
        destination.parent.mkdir(parents=True, exist_ok=True)
        cmd = self.command(source, destination, angle, bright)
        logger.debug("Running %s", " ".join(cmd))

        try:
            subprocess.run(cmd, check=True, capture_output=True, text=True)
        except FileNotFoundError as exc:
            raise PostProcessError(f"Image transform binary not found: {self.binary}") from exc
        except subprocess.CalledProcessError as exc:
            detail = (exc.stderr or "").strip()
            raise PostProcessError(
                f"{self.binary} failed with exit status {exc.returncode}: {detail}"
            ) from exc


TRANSFORMS = ("pillow", "imagemagick", "none")


def get_transform(name: str, convert_binary: str = "convert") -> ImageTransform:
    """
    Resolve a transform by name.

    Parameters
    ----------
    name : str
        One of ``"pillow"``, ``"imagemagick"`` or ``"none"``.
    convert_binary : str
        ImageMagick executable, for ``"imagemagick"``.

    Returns
    -------
    ImageTransform
        Transform callable.
    """
    if name == "pillow":
        return PillowTransform()
    if name == "imagemagick":
        return ImageMagickTransform(convert_binary)
    if name == "none":
        return NullTransform()
    raise ValueError(f"Unknown transform {name!r}; choose from {', '.join(TRANSFORMS)}")
