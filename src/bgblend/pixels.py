"""
Pixel buffer module.

:py:class:`PixelBuffer` is the decoded, in-memory form of an image that the
compositor works on: an immutable ``(height, width, channels)`` grid of 8-bit
values with 3 (RGB) or 4 (RGBA) channels.

Example usage::

    from PIL import Image
    from bgblend.pixels import PixelBuffer

    buffer = PixelBuffer.frompil(Image.open('photo.png'))
    print(buffer.size, buffer.mode)
    buffer.topil().save('copy.png')
"""

import logging
from typing import TYPE_CHECKING, Any, Optional, TypeVar, Union

import numpy as np
from attrs import define, field

from bgblend.validators import channels_

if TYPE_CHECKING:
    from PIL import Image

    from bgblend.color import Color

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="PixelBuffer")

MODES = {3: "RGB", 4: "RGBA"}


def _readonly(data: Any) -> np.ndarray:
    array = np.array(data, dtype=np.uint8, copy=True)
    array.setflags(write=False)
    return array


@define(frozen=True, eq=False, repr=False)
class PixelBuffer:
    """
    Immutable 8-bit RGB or RGBA pixel grid.

    The array is copied on construction and marked read-only, so a buffer
    never changes after it is created.

    .. py:attribute:: data

        Read-only :py:class:`numpy.ndarray` of dtype ``uint8`` and shape
        ``(height, width, channels)``.
    """

    data: np.ndarray = field(converter=_readonly, validator=channels_(3, 4))

    @classmethod
    def new(
        cls: type[T],
        size: tuple[int, int],
        color: Union["Color", tuple[int, ...]],
        alpha: bool = False,
    ) -> T:
        """
        Create a buffer filled with a single color.

        :param size: `(width, height)` tuple.
        :param color: :py:class:`~bgblend.color.Color` or channel tuple.
        :param alpha: Add an opaque alpha channel.
        :return: :py:class:`PixelBuffer`
        """
        width, height = size
        values = list(getattr(color, "rgb", color))[:3]
        if alpha:
            values.append(255)
        data = np.empty((height, width, len(values)), dtype=np.uint8)
        data[:, :] = values
        return cls(data)

    @classmethod
    def frompil(cls: type[T], image: "Image.Image") -> T:
        """
        Create a buffer from an RGB or RGBA PIL Image.

        Other modes must be converted first, see
        :py:func:`bgblend.pil_io.topixels`.
        """
        if image.mode not in MODES.values():
            raise ValueError("Unsupported PIL mode: %s" % image.mode)
        return cls(np.asarray(image, dtype=np.uint8))

    def topil(self) -> "Image.Image":
        """Convert to a PIL Image of mode ``RGB`` or ``RGBA``."""
        from PIL import Image

        return Image.fromarray(np.ascontiguousarray(self.data))

    def numpy(self) -> np.ndarray:
        """Read-only view of the pixel array."""
        return self.data

    def getpixel(self, xy: tuple[int, int]) -> tuple[int, ...]:
        """Pixel value at `(x, y)`."""
        x, y = xy
        return tuple(int(value) for value in self.data[y, x])

    @property
    def width(self) -> int:
        return int(self.data.shape[1])

    @property
    def height(self) -> int:
        return int(self.data.shape[0])

    @property
    def size(self) -> tuple[int, int]:
        """(width, height) tuple, in PIL order."""
        return self.width, self.height

    @property
    def channels(self) -> int:
        return int(self.data.shape[2])

    @property
    def has_alpha(self) -> bool:
        return self.channels == 4

    @property
    def mode(self) -> str:
        """PIL mode name."""
        return MODES[self.channels]

    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return bool(np.array_equal(self.data, other.data))

    def __hash__(self) -> int:
        return hash((self.data.shape, self.data.tobytes()))

    def __repr__(self) -> str:
        return "%s(mode=%s size=%dx%d)" % (
            self.__class__.__name__,
            self.mode,
            self.width,
            self.height,
        )

    def _repr_pretty_(self, p: Any, cycle: Optional[bool]) -> None:
        p.text(repr(self))
