"""
Validation functions for attrs.

Both validators raise :exc:`ValueError`, so attrs classes using them reject
bad values at construction time::

    @define
    class Channel:
        value: int = field(validator=range_(0, 255))
"""
from typing import Any

from attrs import Attribute, define

__all__ = ["range_", "channels_"]


@define(frozen=True, repr=False)
class _RangeValidator:
    minimum: Any
    maximum: Any

    def __call__(self, inst: Any, attribute: Attribute, value: Any) -> None:
        try:
            ok = bool(self.minimum <= value <= self.maximum)
        except TypeError:
            ok = False
        if not ok:
            raise ValueError(
                f"'{attribute.name}' must be in range "
                f"[{self.minimum!r}, {self.maximum!r}]: {value!r}"
            )

    def __repr__(self) -> str:
        return f"<range_ validator with [{self.minimum!r}, {self.maximum!r}]>"


def range_(minimum: Any, maximum: Any) -> _RangeValidator:
    """Reject values outside the closed interval [minimum, maximum]."""
    return _RangeValidator(minimum, maximum)


@define(frozen=True, repr=False)
class _ChannelsValidator:
    options: tuple[int, ...]

    def __call__(self, inst: Any, attribute: Attribute, value: Any) -> None:
        if value.ndim != 3:
            raise ValueError(
                f"'{attribute.name}' must be a (height, width, channels) array, "
                f"got {value.ndim} dimensions"
            )
        if value.shape[2] not in self.options:
            raise ValueError(
                f"'{attribute.name}' must have {self.options!r} channels, "
                f"got {value.shape[2]}"
            )

    def __repr__(self) -> str:
        return f"<channels_ validator with {self.options!r}>"


def channels_(*options: int) -> _ChannelsValidator:
    """
    Reject anything but a 3-D array whose last axis has one of the given
    lengths.
    """
    return _ChannelsValidator(tuple(options))
