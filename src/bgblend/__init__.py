"""
bgblend: composite an image over a solid background color.

Basic usage::

    from bgblend import Color, blend, open_image, save_image

    photo = open_image('photo.jpg')
    result = blend(Color.parse('#000000'), 0.6, photo)
    save_image(result, 'dimmed.jpg')

Or from the command line::

    bgblend --background '#000000' --opacity 0.6 photo.jpg dimmed.jpg

Architecture:

- :py:mod:`bgblend.color`: Hex color parsing
- :py:mod:`bgblend.pixels`: Immutable pixel buffer
- :py:mod:`bgblend.compositor`: Blending algorithm
- :py:mod:`bgblend.pil_io`: Image decoding and encoding with Pillow
"""

from bgblend.color import Color
from bgblend.compositor import blend, composite_pil
from bgblend.pil_io import open_image, save_image
from bgblend.pixels import PixelBuffer
from bgblend.version import __version__

__all__ = [
    "Color",
    "PixelBuffer",
    "blend",
    "composite_pil",
    "open_image",
    "save_image",
    "__version__",
]
