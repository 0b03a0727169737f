"""
Exceptions raised by bgblend.

All errors derive from :py:class:`Error`, so callers can catch the whole
family at once. Errors about malformed values additionally derive from
:py:class:`ValueError`.
"""


class Error(Exception):
    """Base class of bgblend errors."""


class InvalidColor(Error, ValueError):
    """Background color string is not a well-formed hex color."""


class InvalidOpacity(Error, ValueError):
    """Opacity value is not a number."""


class InvalidDimensions(Error, ValueError):
    """Pixel buffer has zero width or height."""


class DecodeError(Error):
    """Source image cannot be read or decoded."""


class EncodeError(Error):
    """Result cannot be encoded or written to the destination."""
