import argparse
import logging
import math
import sys
from typing import Optional

from bgblend import pil_io
from bgblend.color import Color
from bgblend.compositor import blend
from bgblend.exceptions import Error
from bgblend.version import __version__

logger = logging.getLogger(__name__)


def _color(value: str) -> Color:
    try:
        return Color.parse(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def _opacity(value: str) -> float:
    try:
        opacity = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError("Invalid opacity: %r" % value)
    if math.isnan(opacity):
        raise argparse.ArgumentTypeError("Invalid opacity: %r" % value)
    return opacity


def _quality(value: str) -> int:
    try:
        quality = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError("Invalid quality: %r" % value)
    if not 1 <= quality <= 95:
        raise argparse.ArgumentTypeError("Quality must be in [1, 95]: %d" % quality)
    return quality


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="bgblend",
        description="Composite an image over a solid background color.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Be more verbose.")
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "--background",
        type=_color,
        required=True,
        help="Background color, e.g. '#000000'.",
    )
    parser.add_argument(
        "--opacity",
        type=_opacity,
        required=True,
        help="Opacity of the source image in [0, 1]. Out of range values are clamped.",
    )
    parser.add_argument(
        "--quality",
        type=_quality,
        default=pil_io.DEFAULT_QUALITY,
        help="Encoder quality for lossy output formats [default: %(default)s].",
    )
    parser.add_argument("input_file", help="Source image file")
    parser.add_argument("output_file", help="Output image file")
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)

    logging.basicConfig(level=logging.WARNING)
    package_logger = logging.getLogger("bgblend")
    if args.verbose:
        package_logger.setLevel(logging.DEBUG)
    else:
        package_logger.setLevel(logging.INFO)

    try:
        foreground = pil_io.open_image(args.input_file)
        result = blend(args.background, args.opacity, foreground)
        pil_io.save_image(result, args.output_file, quality=args.quality)
    except Error as e:
        logger.error(str(e))
        return 1

    logger.info(
        "Wrote %s (%dx%d)" % (args.output_file, result.width, result.height)
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
