import logging

import pytest
from PIL import Image

from bgblend.__main__ import main, parse_args
from bgblend.color import Color

logger = logging.getLogger(__name__)


@pytest.mark.parametrize(
    "argv",
    [
        ["-h"],
        ["--version"],
    ],
)
def test_main_exits(argv):
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    assert excinfo.value.code == 0


def test_parse_args():
    args = parse_args(["--background", "#102030", "--opacity", "0.5", "a.jpg", "b.jpg"])
    assert args.background == Color(0x10, 0x20, 0x30)
    assert args.opacity == 0.5
    assert args.quality == 60
    assert args.input_file == "a.jpg"
    assert args.output_file == "b.jpg"
    assert not args.verbose


def test_parse_args_out_of_range_opacity():
    args = parse_args(["--background", "#000000", "--opacity", "1.5", "a", "b"])
    assert args.opacity == 1.5


@pytest.mark.parametrize(
    "argv",
    [
        ["--background", "#00000", "--opacity", "0.5", "a.png", "b.png"],
        ["--background", "red", "--opacity", "0.5", "a.png", "b.png"],
        ["--background", "#000000", "--opacity", "half", "a.png", "b.png"],
        ["--background", "#000000", "--opacity", "nan", "a.png", "b.png"],
        ["--background", "#000000", "--opacity", "-NaN", "a.png", "b.png"],
        ["--background", "#000000", "--opacity", "0.5", "--quality", "0", "a", "b"],
        ["--background", "#000000", "--opacity", "0.5", "--quality", "x", "a", "b"],
        ["--opacity", "0.5", "a.png", "b.png"],
        ["--background", "#000000", "a.png", "b.png"],
        ["--background", "#000000", "--opacity", "0.5", "a.png"],
    ],
)
def test_invalid_arguments(argv, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    assert excinfo.value.code == 2
    assert "error" in capsys.readouterr().err


def test_main_blend(source_file, tmp_path):
    output = str(tmp_path / "output.png")
    assert main(["--background", "#000000", "--opacity", "0.5", source_file, output]) == 0
    with Image.open(source_file) as source, Image.open(output) as result:
        assert result.size == source.size
        assert result.mode == "RGB"
        for x, y in [(0, 0), (3, 2), (1, 1)]:
            expected = tuple((c + 1) // 2 for c in source.getpixel((x, y)))
            assert result.getpixel((x, y)) == expected


def test_main_alpha(rgba_file, tmp_path):
    output = str(tmp_path / "output.png")
    assert main(["--background", "#000000", "--opacity", "1", rgba_file, output]) == 0
    with Image.open(output) as result:
        assert list(result.getdata()) == [
            (0, 0, 0),
            (64, 64, 64),
            (128, 128, 128),
            (255, 255, 255),
        ]


def test_main_jpeg_verbose(source_file, tmp_path):
    output = str(tmp_path / "output.jpg")
    argv = ["--background", "#FFFFFF", "--opacity", "0.25", "--quality", "90"]
    assert main(argv + ["--verbose", source_file, output]) == 0
    with Image.open(output) as result:
        assert result.format == "JPEG"
        assert result.size == (4, 3)


def test_main_missing_source(tmp_path, caplog):
    output = tmp_path / "output.png"
    argv = ["--background", "#000000", "--opacity", "0.5"]
    with caplog.at_level(logging.ERROR):
        assert main(argv + [str(tmp_path / "missing.png"), str(output)]) == 1
    assert "Failed to decode" in caplog.text
    assert not output.exists()


def test_main_unknown_output_format(source_file, tmp_path, caplog):
    argv = ["--background", "#000000", "--opacity", "0.5"]
    with caplog.at_level(logging.ERROR):
        assert main(argv + [source_file, str(tmp_path / "output.xyz")]) == 1
    assert "Unknown output format" in caplog.text


@pytest.mark.parametrize("value, expected", [("0", 0.0), ("-3", -3.0), ("inf", float("inf"))])
def test_parse_args_opacity_kept_unclamped(value, expected):
    args = parse_args(["--background", "#000000", "--opacity", value, "a", "b"])
    assert args.opacity == expected
