"""
Color structure and hex conversion methods.
"""

import logging
import re
from typing import Any, TypeVar

from attrs import define, field

from bgblend.exceptions import InvalidColor
from bgblend.validators import range_

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="Color")

_HEX_COLOR = re.compile(r"^#(?P<rgb>[0-9a-fA-F]{6})(?P<alpha>[0-9a-fA-F]{2})?$")


@define(frozen=True, repr=False)
class Color:
    """
    8-bit RGB color with an optional alpha value.

    .. py:attribute:: r
    .. py:attribute:: g
    .. py:attribute:: b

        Color channels in [0, 255].

    .. py:attribute:: a

        Alpha in [0, 255]. Default is 255 (opaque).

    Example::

        color = Color.parse('#ff8000')
        assert color.rgb == (255, 128, 0)
    """

    r: int = field(converter=int, validator=range_(0, 255))
    g: int = field(converter=int, validator=range_(0, 255))
    b: int = field(converter=int, validator=range_(0, 255))
    a: int = field(default=255, converter=int, validator=range_(0, 255))

    @classmethod
    def parse(cls: type[T], value: str) -> T:
        """
        Parse a hex color string.

        :param value: `#RRGGBB` or `#RRGGBBAA`, case-insensitive.
        :return: :py:class:`Color`
        :raise InvalidColor: if the string is malformed.
        """
        match = _HEX_COLOR.match(value.strip()) if isinstance(value, str) else None
        if match is None:
            raise InvalidColor("Invalid color: %r" % (value,))
        rgb = match.group("rgb")
        alpha = match.group("alpha") or "ff"
        return cls(
            int(rgb[0:2], 16),
            int(rgb[2:4], 16),
            int(rgb[4:6], 16),
            int(alpha, 16),
        )

    @classmethod
    def white(cls: type[T]) -> T:
        return cls(255, 255, 255)

    @classmethod
    def black(cls: type[T]) -> T:
        return cls(0, 0, 0)

    @property
    def rgb(self) -> tuple[int, int, int]:
        """Color channels without alpha."""
        return (self.r, self.g, self.b)

    @property
    def rgba(self) -> tuple[int, int, int, int]:
        return (self.r, self.g, self.b, self.a)

    @property
    def has_alpha(self) -> bool:
        return self.a != 255

    def tofloat(self) -> tuple[float, ...]:
        """Color channels scaled to [0.0, 1.0], without alpha."""
        return tuple(value / 255.0 for value in self.rgb)

    def __str__(self) -> str:
        text = "#{:02x}{:02x}{:02x}".format(*self.rgb)
        if self.has_alpha:
            text += "{:02x}".format(self.a)
        return text

    def __repr__(self) -> str:
        return "{name}({value!r})".format(name=self.__class__.__name__, value=str(self))

    def _repr_pretty_(self, p: Any, cycle: bool) -> None:
        p.text(repr(self))
