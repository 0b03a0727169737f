import logging
from typing import Callable

import numpy as np
from PIL import Image

from bgblend.pixels import PixelBuffer

logging.basicConfig(level=logging.DEBUG)


def make_image(
    size: tuple[int, int], mode: str, func: Callable[[int, int], tuple]
) -> Image.Image:
    """Build a PIL Image by evaluating `func(x, y)` for every pixel."""
    width, height = size
    image = Image.new(mode, size)
    image.putdata([func(x, y) for y in range(height) for x in range(width)])
    return image


def single_pixel(*values: int) -> PixelBuffer:
    return PixelBuffer(np.array([[values]], dtype=np.uint8))


def filled(size: tuple[int, int], *values: int) -> PixelBuffer:
    width, height = size
    data = np.empty((height, width, len(values)), dtype=np.uint8)
    data[:, :] = values
    return PixelBuffer(data)


def random_pixels(size: tuple[int, int], channels: int, seed: int = 0) -> PixelBuffer:
    width, height = size
    rng = np.random.default_rng(seed)
    return PixelBuffer(
        rng.integers(0, 256, size=(height, width, channels), dtype=np.uint8)
    )
