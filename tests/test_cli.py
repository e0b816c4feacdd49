"""Tests for CLI commands."""

from pathlib import Path

import pytest
from click.testing import CliRunner
from PIL import Image

from ply_raster.cli.main import cli

from conftest import write_cloud


@pytest.fixture
def runner():
    """Create CLI test runner."""
    return CliRunner()


def test_cli_help(runner: CliRunner):
    """Test CLI help command."""
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "density PNG" in result.output


def test_cli_version(runner: CliRunner):
    """Test CLI version command."""
    result = runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert "0.1.0" in result.output


def test_render_help(runner: CliRunner):
    """Test render help."""
    result = runner.invoke(cli, ["render", "--help"])

    assert result.exit_code == 0
    assert "--scale" in result.output
    assert "--bright" in result.output


def test_render_raw(runner: CliRunner, two_point_ply: Path, tmp_path: Path):
    """Test render writes the raster and reports bounds and size."""
    out = tmp_path / "scan.png"

    result = runner.invoke(
        cli, ["render", str(two_point_ply), "--scale", "1", "--raw", "-o", str(out)]
    )

    assert result.exit_code == 0, result.output
    assert "X: 0.0 to 1.0" in result.output
    assert "Z: 0.0 to 1.0" in result.output
    assert "Image Size : 2 2" in result.output
    assert "Angle : 0.0" in result.output
    with Image.open(out) as img:
        assert img.size == (2, 2)


def test_render_with_color_and_angle(runner: CliRunner, sample_ply: Path, tmp_path: Path):
    """Test render with Pillow post-processing options."""
    out = tmp_path / "scan.png"

    result = runner.invoke(
        cli,
        [
            "render", str(sample_ply),
            "--scale", "0.5",
            "--color", "#00ff00",
            "--angle", "90",
            "--bright", "10",
            "--out", str(out),
        ],
    )

    assert result.exit_code == 0, result.output
    assert "Image Size : 13 13" in result.output
    assert "Angle : 90.0" in result.output
    assert out.exists()


def test_render_uses_config_file(runner: CliRunner, two_point_ply: Path, tmp_path: Path):
    """Test values from a YAML config are applied."""
    out = tmp_path / "from_config.png"
    config = tmp_path / "config.yaml"
    config.write_text(
        "raster:\n  scale: 0.5\npostprocess:\n  transform: none\n"
        f"output:\n  path: {out.as_posix()}\n"
    )

    result = runner.invoke(cli, ["-c", str(config), "render", str(two_point_ply)])

    assert result.exit_code == 0, result.output
    assert "Image Size : 3 3" in result.output
    assert out.exists()


def test_render_empty_input(runner: CliRunner, header_only_ply: Path, tmp_path: Path):
    """Test header-only input fails with a clear message."""
    result = runner.invoke(cli, ["render", str(header_only_ply), "-o", str(tmp_path / "x.png")])

    assert result.exit_code == 1
    assert "no vertices" in result.output


def test_render_malformed(runner: CliRunner, tmp_path: Path):
    """Test a malformed line fails with its location."""
    path = write_cloud(tmp_path / "bad.ply", ["1.0 abc 3.0"])

    result = runner.invoke(cli, ["render", str(path), "--raw", "-o", str(tmp_path / "x.png")])

    assert result.exit_code == 1
    assert "Malformed vertex" in result.output


def test_render_invalid_scale(runner: CliRunner, sample_ply: Path):
    """Test a zero scale is rejected."""
    result = runner.invoke(cli, ["render", str(sample_ply), "--scale", "0"])

    assert result.exit_code == 2


def test_render_invalid_color(runner: CliRunner, sample_ply: Path):
    """Test an unknown colour code is rejected."""
    result = runner.invoke(cli, ["render", str(sample_ply), "--color", "purple"])

    assert result.exit_code == 2


def test_render_bright_out_of_range(runner: CliRunner, sample_ply: Path):
    """Test brightness outside -100..100 is rejected."""
    result = runner.invoke(cli, ["render", str(sample_ply), "--bright", "150"])

    assert result.exit_code == 2


def test_bounds(runner: CliRunner, sample_ply: Path):
    """Test bounds reports the ranges and image size."""
    result = runner.invoke(cli, ["bounds", str(sample_ply), "--scale", "1"])

    assert result.exit_code == 0, result.output
    assert "X: 1.0 to 7.0" in result.output
    assert "Y: 2.0 to 8.0" in result.output
    assert "Z: -9.0 to 6.0" in result.output
    assert "Image Size : 7 7" in result.output


def test_bounds_invalid_scale(runner: CliRunner, sample_ply: Path):
    """Test bounds rejects a negative scale."""
    result = runner.invoke(cli, ["bounds", str(sample_ply), "--scale", "-1"])

    assert result.exit_code == 1
    assert "Scale must be a positive number" in result.output


def test_render_latin1_header(runner: CliRunner, tmp_path: Path):
    """Test a header comment in Latin-1 does not stop the render."""
    path = tmp_path / "latin1.ply"
    path.write_bytes(b"ply\ncomment scann\xe9 par moi\nend_header\n0 0 0\n1 1 1\n")
    out = tmp_path / "scan.png"

    result = runner.invoke(cli, ["render", str(path), "--scale", "1", "--raw", "-o", str(out)])

    assert result.exit_code == 0, result.output
    assert "Image Size : 2 2" in result.output
    assert out.exists()


def test_bounds_overflowing_extent(runner: CliRunner, tmp_path: Path):
    """Test an extent that overflows is reported as an error."""
    path = write_cloud(tmp_path / "huge.ply", ["-1e308 0 0", "1e308 0 0"])

    result = runner.invoke(cli, ["bounds", str(path), "--scale", "1"])

    assert result.exit_code == 1
    assert "Raster too large" in result.output


def test_render_boundary_raise_single_point(runner: CliRunner, tmp_path: Path):
    """Test the raise policy renders a single point."""
    path = write_cloud(tmp_path / "one.ply", ["5 5 5"])
    out = tmp_path / "scan.png"

    result = runner.invoke(
        cli, ["render", str(path), "--boundary", "raise", "--raw", "-o", str(out)]
    )

    assert result.exit_code == 0, result.output
    assert "Image Size : 1 1" in result.output


def test_render_boundary_raise_cloud(runner: CliRunner, sample_ply: Path, tmp_path: Path):
    """Test the raise policy renders an ordinary cloud."""
    out = tmp_path / "scan.png"

    result = runner.invoke(
        cli,
        ["render", str(sample_ply), "--scale", "1", "--boundary", "raise", "--raw", "-o", str(out)],
    )

    assert result.exit_code == 0, result.output
    assert out.exists()


def test_render_raw_conflicts_with_transform(runner: CliRunner, sample_ply: Path, tmp_path: Path):
    """Test --raw cannot be combined with another transform."""
    result = runner.invoke(
        cli,
        ["render", str(sample_ply), "--raw", "--transform", "imagemagick",
         "-o", str(tmp_path / "scan.png")],
    )

    assert result.exit_code == 2
    assert "--raw cannot be combined" in result.output
    assert not (tmp_path / "scan.png").exists()


def test_render_raw_with_transform_none(runner: CliRunner, sample_ply: Path, tmp_path: Path):
    """Test --raw with --transform none is accepted."""
    out = tmp_path / "scan.png"

    result = runner.invoke(
        cli, ["render", str(sample_ply), "--raw", "--transform", "none", "-o", str(out)]
    )

    assert result.exit_code == 0, result.output
