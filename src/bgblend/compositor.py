"""
Compositor module.

Blends a foreground image over a solid background color at a given opacity
and returns the flattened result. The foreground's own alpha channel, when
present, attenuates the requested opacity pixel by pixel::

    t = opacity * (alpha / 255)
    out = round_half_up(background * (1 - t) + foreground * t)

Example usage::

    from bgblend.color import Color
    from bgblend.compositor import blend

    result = blend(Color.parse('#000000'), 0.6, foreground)

The blend is a single vectorized NumPy pass in float64; it never modifies
the foreground buffer and always returns a new one of the same size.
"""

import logging
import math
from typing import TYPE_CHECKING

import numpy as np

from bgblend.color import Color
from bgblend.exceptions import InvalidDimensions, InvalidOpacity
from bgblend.pixels import PixelBuffer

if TYPE_CHECKING:
    from PIL import Image

logger = logging.getLogger(__name__)


def clamp_opacity(value: float) -> float:
    """Clamp opacity into [0.0, 1.0]."""
    try:
        value = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidOpacity("Invalid opacity: %r" % (value,)) from e
    if math.isnan(value):
        raise InvalidOpacity("Invalid opacity: %r" % (value,))
    return min(max(value, 0.0), 1.0)


def round_half_up(x: np.ndarray) -> np.ndarray:
    """Round to the nearest integer with halves rounded up."""
    return np.floor(x + 0.5)


def blend(
    background: Color,
    opacity: float,
    foreground: PixelBuffer,
    alpha: bool = False,
) -> PixelBuffer:
    """
    Composite `foreground` over a solid `background` color.

    :param background: Backdrop color. Its alpha is ignored; the backdrop is
        always opaque.
    :param opacity: Foreground opacity, clamped to [0.0, 1.0].
    :param foreground: RGB or RGBA :py:class:`~bgblend.pixels.PixelBuffer`.
    :param alpha: Append an opaque alpha channel to the result.
    :return: New RGB (or RGBA) :py:class:`~bgblend.pixels.PixelBuffer` of the
        same size as `foreground`.
    :raise InvalidDimensions: if `foreground` is empty.
    """
    if foreground.is_empty():
        raise InvalidDimensions(
            "Foreground must not be empty: %dx%d"
            % (foreground.width, foreground.height)
        )
    opacity = clamp_opacity(opacity)
    logger.debug(
        "Blending %dx%d %s over %s at opacity %g"
        % (foreground.width, foreground.height, foreground.mode, background, opacity)
    )

    data = foreground.numpy()
    color = data[:, :, :3].astype(np.float64)
    if foreground.has_alpha:
        t = opacity * (data[:, :, 3:4].astype(np.float64) / 255.0)
    else:
        t = np.full(color.shape[:2] + (1,), opacity, dtype=np.float64)

    backdrop = np.asarray(background.rgb, dtype=np.float64).reshape((1, 1, 3))
    result = np.clip(round_half_up(backdrop * (1.0 - t) + color * t), 0, 255)
    result = result.astype(np.uint8)

    if alpha:
        opaque = np.full(result.shape[:2] + (1,), 255, dtype=np.uint8)
        result = np.concatenate([result, opaque], axis=2)
    return PixelBuffer(result)


def composite_pil(
    image: "Image.Image", background: Color, opacity: float
) -> "Image.Image":
    """
    Composite a PIL Image over a solid background and return an RGB Image.

    :param image: Source image in any mode Pillow can convert to RGB(A).
    :param background: Backdrop color.
    :param opacity: Foreground opacity, clamped to [0.0, 1.0].
    :return: :py:class:`PIL.Image.Image` of mode ``RGB``.
    """
    from bgblend import pil_io

    return blend(background, opacity, pil_io.topixels(image)).topil()
