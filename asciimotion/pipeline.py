"""Resizing frames and mapping their brightness to characters."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from PIL import Image

from .errors import ERROR_RESIZE, PipelineError
from .maps import CharMap, resolve_chars


@dataclass(frozen=True)
class FixedResolution:
    """A fixed output size in characters."""

    width: int
    height: int

    def calc(self, img: Image.Image) -> tuple[int, int]:
        return self.width, self.height


@dataclass(frozen=True)
class DivisorResolution:
    """Scale the source down by an integer divisor, keeping the aspect ratio."""

    divisor: int

    def __post_init__(self) -> None:
        if self.divisor <= 0:
            raise ValueError("divisor must be positive")

    def calc(self, img: Image.Image) -> tuple[int, int]:
        return img.width // self.divisor, img.height // self.divisor


Resolution = Union[FixedResolution, DivisorResolution]


class ImagePipeline:
    """Converts images to text at a target resolution."""

    def __init__(
        self,
        resolution: Resolution,
        char_map: CharMap | str = CharMap.DOTTED,
        new_lines: bool = False,
    ) -> None:
        chars = resolve_chars(char_map)
        if not chars:
            raise ValueError("character map must not be empty")
        self.resolution = resolution
        self.char_map = chars
        self.new_lines = new_lines

    def resize(self, img: Image.Image) -> Image.Image:
        """Return an RGB copy of the image scaled to the pipeline's resolution."""
        width, height = self.resolution.calc(img)
        try:
            return img.convert("RGB").resize((width, height), Image.Resampling.NEAREST)
        except (ValueError, OSError) as err:
            raise PipelineError(f"{ERROR_RESIZE}:{err!r}") from err

    def to_ascii(self, gray: Image.Image) -> str:
        """Map each pixel's luminance to a character, one row per line."""
        if gray.mode != "L":
            gray = gray.convert("L")
        width, height = gray.size
        count = len(self.char_map)
        table = [self.char_map[count * lum // 256] for lum in range(256)]
        text = gray.tobytes().decode("latin-1").translate(table)
        if width:
            rows = [text[start:start + width] for start in range(0, width * height, width)]
        else:
            rows = [""] * height
        separator = "\r\n" if self.new_lines else ""
        return separator.join(rows)