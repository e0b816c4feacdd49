"""Main CLI entry point for the rasterizer."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from .. import __version__
from ..config import PipelineConfig
from ..exceptions import PlyRasterError
from ..logging_config import setup_logging


@click.group()
@click.option(
    "-c", "--config",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to YAML config file.",
)
@click.option("-v", "--verbose", count=True, help="Increase verbosity.")
@click.version_option(version=__version__)
@click.pass_context
def cli(ctx: click.Context, config: Optional[Path], verbose: int) -> None:
    """Turn a PLY point cloud into a density PNG."""
    ctx.ensure_object(dict)
    setup_logging(verbose)

    if config:
        try:
            ctx.obj["config"] = PipelineConfig.from_yaml(config)
        except ValueError as exc:
            raise click.ClickException(f"Invalid config {config}: {exc}") from exc
    else:
        ctx.obj["config"] = PipelineConfig()

    ctx.obj["verbose"] = verbose


def _override(config: PipelineConfig, section: str, **values) -> PipelineConfig:
    """Return a copy of ``config`` with non-None CLI values applied to one section."""
    updates = {k: v for k, v in values.items() if v is not None}
    if not updates:
        return config
    sub = getattr(config, section)
    # Re-validate so CLI values get the same checks as YAML ones
    merged = type(sub).model_validate({**sub.model_dump(), **updates})
    return config.model_copy(update={section: merged})


@cli.command("render")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--scale", type=float, help="Size of each output pixel, in input units.")
@click.option("--color", type=str, help="Colour: #rrggbb or 0/1 shorthand such as 110.")
@click.option("--angle", type=float, help="Clockwise rotation of the final image, in degrees.")
@click.option(
    "--bright",
    type=click.IntRange(-100, 100),
    help="Brightness change on the final image (-100 to 100).",
)
@click.option(
    "--out", "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output PNG path.",
)
@click.option(
    "--transform",
    type=click.Choice(["pillow", "imagemagick", "none"]),
    help="Post-processing backend.",
)
@click.option("--raw", is_flag=True, help="Skip post-processing and write the raster as is.")
@click.option(
    "--boundary",
    type=click.Choice(["clamp", "raise"]),
    help="Handling of points that project outside the raster.",
)
@click.pass_context
def render(
    ctx: click.Context,
    path: Path,
    scale: Optional[float],
    color: Optional[str],
    angle: Optional[float],
    bright: Optional[int],
    out: Optional[Path],
    transform: Optional[str],
    raw: bool,
    boundary: Optional[str],
) -> None:
    """Render a point cloud to a density PNG."""
    from ..processors.render import render_point_cloud

    config: PipelineConfig = ctx.obj["config"]

    if raw and transform not in (None, "none"):
        raise click.UsageError(f"--raw cannot be combined with --transform {transform}")

    try:
        config = _override(config, "raster", scale=scale, color=color, boundary=boundary)
        config = _override(
            config, "postprocess",
            angle=angle, bright=bright, transform="none" if raw else transform,
        )
        config = _override(config, "output", path=out)
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc

    try:
        result = render_point_cloud(path, config=config)
    except (PlyRasterError, OSError) as exc:
        raise click.ClickException(str(exc)) from exc

    bounds = result.bounds
    click.echo(f"X: {bounds.min.x} to {bounds.max.x}")
    click.echo(f"Y: {bounds.min.y} to {bounds.max.y}")
    click.echo(f"Z: {bounds.min.z} to {bounds.max.z}")
    click.echo(f"Image Size : {result.geometry.width} {result.geometry.height}")
    click.echo(f"Angle : {config.postprocess.angle}")
    click.echo(f"Saved {result.points:,} points ({result.touched:,} pixels) to {result.output}")


@cli.command("bounds")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--scale", type=float, help="Pixel size used to report the image size.")
@click.pass_context
def bounds(ctx: click.Context, path: Path, scale: Optional[float]) -> None:
    """Print the bounding box of a point cloud."""
    from ..core.geometry import RasterGeometry
    from ..processors.render import compute_bounds_from_file

    config: PipelineConfig = ctx.obj["config"]
    if scale is None:
        scale = config.raster.scale

    try:
        box = compute_bounds_from_file(path)
        geometry = RasterGeometry.from_bounds(box, scale)
    except (PlyRasterError, OSError) as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo(f"X: {box.min.x} to {box.max.x}")
    click.echo(f"Y: {box.min.y} to {box.max.y}")
    click.echo(f"Z: {box.min.z} to {box.max.z}")
    click.echo(f"Image Size : {geometry.width} {geometry.height}")


if __name__ == "__main__":
    cli()
