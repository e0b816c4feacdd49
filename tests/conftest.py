"""Pytest fixtures for rasterizer tests."""

from pathlib import Path
from typing import Iterable, Iterator

import pytest

PLY_HEADER = """ply
format ascii 1.0
element vertex {count}
property float x
property float y
property float z
property uchar red
property uchar green
property uchar blue
end_header
"""


def write_cloud(path: Path, rows: Iterable[str]) -> Path:
    """Write a PLY file with the given data rows."""
    rows = list(rows)
    path.write_text(PLY_HEADER.format(count=len(rows)) + "".join(f"{r}\n" for r in rows))
    return path


def byte_sequence(values: Iterable[int]):
    """Return a random-byte callable replaying ``values``."""
    it: Iterator[int] = iter(values)
    return lambda: next(it)


@pytest.fixture
def sample_ply(tmp_path: Path) -> Path:
    """Create a minimal valid PLY file with colour columns."""
    return write_cloud(
        tmp_path / "test_cloud.ply",
        [
            "1.0 2.0 3.0 255 0 0",
            "4.0 5.0 6.0 0 255 0",
            "7.0 8.0 -9.0 0 0 255",
        ],
    )


@pytest.fixture
def two_point_ply(tmp_path: Path) -> Path:
    """Two points at opposite corners of a unit cube."""
    return write_cloud(tmp_path / "two.ply", ["0 0 0", "1 1 1"])


@pytest.fixture
def header_only_ply(tmp_path: Path) -> Path:
    """PLY file with a header and no data lines."""
    return write_cloud(tmp_path / "empty.ply", [])
