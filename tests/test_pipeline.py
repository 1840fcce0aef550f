import pytest
from PIL import Image

from asciimotion.errors import PipelineError
from asciimotion.maps import CharMap
from asciimotion.pipeline import DivisorResolution, FixedResolution, ImagePipeline


def test_fixed_resolution_ignores_image():
    img = Image.new("RGB", (100, 50))
    assert FixedResolution(12, 7).calc(img) == (12, 7)


def test_divisor_resolution():
    img = Image.new("RGB", (10, 7))
    assert DivisorResolution(2).calc(img) == (5, 3)
    assert DivisorResolution(1).calc(img) == (10, 7)


def test_divisor_must_be_positive():
    with pytest.raises(ValueError):
        DivisorResolution(0)


def test_resize_to_fixed_size_is_rgb():
    pipeline = ImagePipeline(FixedResolution(4, 3), CharMap.CHARS1)
    out = pipeline.resize(Image.new("RGBA", (40, 30), (10, 20, 30, 255)))
    assert out.size == (4, 3)
    assert out.mode == "RGB"
    assert set(out.getdata()) == {(10, 20, 30)}


def test_resize_to_zero_fails():
    pipeline = ImagePipeline(FixedResolution(0, 3), CharMap.CHARS1)
    with pytest.raises(PipelineError):
        pipeline.resize(Image.new("RGB", (10, 10)))


def test_to_ascii_black_and_white():
    pipeline = ImagePipeline(FixedResolution(3, 2), CharMap.CHARS1)
    black = pipeline.to_ascii(Image.new("L", (3, 2), 0))
    white = pipeline.to_ascii(Image.new("L", (3, 2), 255))
    assert black == " " * 6
    assert white == "@" * 6


def test_to_ascii_new_lines():
    pipeline = ImagePipeline(FixedResolution(4, 3), CharMap.CHARS1, new_lines=True)
    text = pipeline.to_ascii(Image.new("L", (4, 3), 0))
    rows = text.split("\r\n")
    assert len(rows) == 3
    assert all(row == "    " for row in rows)
    assert not text.endswith("\r\n")


def test_to_ascii_threshold_with_two_chars():
    pipeline = ImagePipeline(FixedResolution(2, 1), "ab")
    img = Image.new("L", (2, 1))
    img.putdata([127, 128])
    assert pipeline.to_ascii(img) == "ab"


def test_to_ascii_monotone_over_gradient():
    pipeline = ImagePipeline(FixedResolution(256, 1), CharMap.CHARS3)
    img = Image.new("L", (256, 1))
    img.putdata(list(range(256)))
    text = pipeline.to_ascii(img)
    chars = CharMap.CHARS3.chars()
    positions = [chars.index(c) for c in text]
    assert positions == sorted(positions)
    assert text[0] == chars[0] and text[-1] == chars[-1]


def test_to_ascii_converts_rgb_input():
    pipeline = ImagePipeline(FixedResolution(2, 2), CharMap.BLACK_WHITE)
    assert pipeline.to_ascii(Image.new("RGB", (2, 2), (255, 255, 255))) == "████"


def test_empty_char_map_rejected():
    with pytest.raises(ValueError):
        ImagePipeline(FixedResolution(1, 1), "")


def test_resolution_can_be_replaced():
    pipeline = ImagePipeline(FixedResolution(2, 2), CharMap.CHARS1)
    pipeline.resolution = FixedResolution(5, 1)
    assert pipeline.resize(Image.new("RGB", (10, 10))).size == (5, 1)