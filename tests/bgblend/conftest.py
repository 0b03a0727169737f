"""Pytest configuration for bgblend tests."""

from typing import Any

import pytest
from PIL import Image

from .utils import make_image


@pytest.fixture
def source_file(tmp_path: Any) -> str:
    """A 4x3 RGB PNG with a horizontal gradient."""
    image = make_image((4, 3), "RGB", lambda x, y: (x * 80, y * 100, 255 - x * 60))
    path = str(tmp_path / "source.png")
    image.save(path)
    return path


@pytest.fixture
def rgba_file(tmp_path: Any) -> str:
    """A 2x2 RGBA PNG with one pixel of each alpha in 0, 64, 128, 255."""
    image = Image.new("RGBA", (2, 2))
    image.putdata(
        [
            (255, 255, 255, 0),
            (255, 255, 255, 64),
            (255, 255, 255, 128),
            (255, 255, 255, 255),
        ]
    )
    path = str(tmp_path / "source-rgba.png")
    image.save(path)
    return path
