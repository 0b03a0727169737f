"""
PIL IO module.

Decodes source images into :py:class:`~bgblend.pixels.PixelBuffer` and
encodes results back to files with Pillow.
"""
import logging
import os
from typing import BinaryIO, Optional, Union

import numpy as np
from PIL import Image

from bgblend.exceptions import DecodeError, EncodeError
from bgblend.pixels import PixelBuffer

logger = logging.getLogger(__name__)

DEFAULT_QUALITY = 60

# Formats whose encoders accept a quality setting.
LOSSY_FORMATS = {"JPEG", "WEBP"}

# Formats that cannot store an alpha channel.
OPAQUE_FORMATS = {"JPEG", "PPM", "PCX", "EPS"}

# Modes that carry an alpha channel.
ALPHA_MODES = {"RGBA", "RGBa", "LA", "La", "PA"}


def has_transparency(image: Image.Image) -> bool:
    """Check if the PIL Image carries transparency information."""
    return image.mode in ALPHA_MODES or "transparency" in image.info


def get_target_mode(image: Image.Image) -> str:
    """Get the RGB or RGBA mode to decode the image into."""
    return "RGBA" if has_transparency(image) else "RGB"


def _scale_16bit(data: np.ndarray) -> np.ndarray:
    """Keep the high byte of unsigned 16-bit samples."""
    return (data.astype(np.uint16) >> 8).astype(np.uint8)


def topixels(image: Image.Image) -> PixelBuffer:
    """
    Convert a PIL Image of any mode to a :py:class:`PixelBuffer`.

    Images with transparency become RGBA, everything else becomes RGB.
    """
    mode = get_target_mode(image)
    if image.mode != mode:
        if image.mode.startswith("I;16"):
            logger.debug("Scaling %s image to 8 bits per channel" % image.mode)
            image = Image.fromarray(_scale_16bit(np.asarray(image)))
        elif image.mode in ("I", "F"):
            logger.warning(
                "Reducing %s image to 8 bits per channel, values are clipped"
                % image.mode
            )
            image = image.convert("L")
        logger.debug("Converting %s image to %s" % (image.mode, mode))
        image = image.convert(mode)
    return PixelBuffer.frompil(image)


def open_image(fp: Union[str, bytes, os.PathLike, BinaryIO]) -> PixelBuffer:
    """
    Read and decode an image file.

    :param fp: Filename or file-like object.
    :return: :py:class:`~bgblend.pixels.PixelBuffer`
    :raise DecodeError: if the file cannot be read or decoded.
    """
    try:
        with Image.open(fp) as image:
            image.load()
            logger.debug(
                "Decoded %s image: format=%s size=%dx%d"
                % (image.mode, image.format, image.width, image.height)
            )
            return topixels(image)
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        raise DecodeError("Failed to decode %s: %s" % (_name(fp), e)) from e


def get_format(fp: Union[str, bytes, os.PathLike, BinaryIO]) -> str:
    """Guess the output format from the file extension."""
    ext = os.path.splitext(_name(fp))[1].lower()
    fmt = Image.registered_extensions().get(ext)
    if fmt is None:
        raise EncodeError("Unknown output format: %r" % ext)
    return fmt


def save_image(
    pixels: PixelBuffer,
    fp: Union[str, bytes, os.PathLike, BinaryIO],
    quality: int = DEFAULT_QUALITY,
    format: Optional[str] = None,
) -> None:
    """
    Encode a pixel buffer and write it out.

    :param pixels: :py:class:`~bgblend.pixels.PixelBuffer` to write.
    :param fp: Filename or file-like object.
    :param quality: Encoder quality for lossy formats.
    :param format: Pillow format name. Default is guessed from the extension.
    :raise EncodeError: if the format is unknown or the file cannot be written.
    """
    fmt = (format or get_format(fp)).upper()
    image = pixels.topil()
    if fmt in OPAQUE_FORMATS and image.mode == "RGBA":
        logger.debug("Dropping alpha channel for %s output" % fmt)
        image = image.convert("RGB")

    params = {}
    if fmt in LOSSY_FORMATS:
        params["quality"] = quality

    try:
        image.save(fp, format=fmt, **params)
    except (OSError, ValueError, KeyError) as e:
        raise EncodeError("Failed to encode %s: %s" % (_name(fp), e)) from e
    logger.debug(
        "Encoded %s image: format=%s size=%dx%d"
        % (image.mode, fmt, image.width, image.height)
    )


def _name(fp: Union[str, bytes, os.PathLike, BinaryIO]) -> str:
    name = getattr(fp, "name", fp)
    if isinstance(name, bytes):
        return os.fsdecode(name)
    return str(name)
