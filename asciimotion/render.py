"""Timed conversion of frames into coloured text."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass, field
from typing import Callable

from PIL import Image, ImageDraw, ImageFont

from .errors import AsciiMotionError
from .frames import FrameSource
from .pipeline import ImagePipeline

_MAX_DURATION_NS = 2**64 - 1
_LUMA_MATRIX = (0.2126, 0.7152, 0.0722, 0.0)
_ROW_PADDING = bytes(6)


def _lines(text: str) -> list[str]:
    if not text:
        return []
    parts = text.split("\n")
    if parts[-1] == "":
        parts.pop()
    return [part[:-1] if part.endswith("\r") else part for part in parts]


def _load_font(font_px: float) -> ImageFont.ImageFont | ImageFont.FreeTypeFont:
    try:
        return ImageFont.load_default(size=font_px)
    except TypeError:
        return ImageFont.load_default()


@dataclass
class RenderFrame:
    """Text of one frame and the RGB colour of each of its characters."""

    text: str
    colors: bytes = field(default=b"")

    def render_to_image(
        self, font_px: float, background_color: tuple[int, int, int, int]
    ) -> Image.Image:
        """Draw the coloured text onto an RGBA image, one cell of ``font_px`` per character."""
        lines = _lines(self.text)
        first_width = len(lines[0]) if lines else 0
        img_width = math.ceil(first_width * font_px)
        img_height = math.ceil(len(lines) * font_px)
        image = Image.new("RGBA", (img_width, img_height))
        font = _load_font(font_px)
        background = tuple(background_color)

        color_idx = 0
        for row, line in enumerate(lines):
            colors = self.colors[color_idx:color_idx + 3 * len(line)]
            color_idx += 3 * len(line) + 6

            line_img = Image.new(
                "RGBA", (math.ceil(len(line) * font_px), math.ceil(font_px)), background
            )
            draw = ImageDraw.Draw(line_img)
            for x, ch in enumerate(line):
                local = 3 * x
                if local + 2 >= len(colors):
                    break
                fill = (colors[local], colors[local + 1], colors[local + 2], 255)
                draw.text((int(x * font_px), 0), ch, fill=fill, font=font)
            image.paste(line_img, (0, int(row * font_px)))
        return image


@dataclass
class CallbackState:
    """What the render loop hands to its callback on every turn."""

    frame: RenderFrame | None
    should_render: bool
    pipeline: ImagePipeline


@dataclass
class RenderOptions:
    """Playback settings."""

    fps: float
    w_mod: int = 1
    loop_playback: bool = False


class Renderer:
    """Pulls frames from a source at a target rate and converts them to text."""

    def __init__(
        self,
        pipeline: ImagePipeline,
        media: FrameSource,
        options: RenderOptions,
        clock: Callable[[], int] = time.monotonic_ns,
    ) -> None:
        self.pipeline = pipeline
        self.media = media
        self.options = options
        self.last_frame: Image.Image | None = None
        self._clock = clock

    def run(self, allow_frame_skip: bool, callback: Callable[[CallbackState], bool]) -> None:
        """Drive playback until the callback returns False."""
        time_count = self._clock()
        should_continue = True
        while should_continue:
            process, to_skip, time_count = self._time_to_send_next_frame(time_count)
            frame = None
            if process:
                if allow_frame_skip and to_skip > 0:
                    self.media.skip_frames(to_skip)
                current = next(self.media, None)
                if self.options.loop_playback and current is None:
                    # show the first frame of the replay without waiting
                    time_count -= self._target_frame_duration()
                    self.media.reset()
                frame = self._render_current_frame(current)
            should_continue = bool(
                callback(CallbackState(frame=frame, should_render=process, pipeline=self.pipeline))
            )

    def _target_frame_duration(self) -> int:
        fps = self.options.fps
        if not fps > 0:
            return _MAX_DURATION_NS
        duration = 1_000_000_000 / fps
        if duration >= _MAX_DURATION_NS:
            return _MAX_DURATION_NS
        return max(int(duration), 1)

    def _time_to_send_next_frame(self, time_count: int) -> tuple[bool, int, int]:
        elapsed = self._clock() - time_count
        target = self._target_frame_duration()
        if elapsed >= target:
            to_skip = elapsed // target - 1
            return True, to_skip, time_count + target * (to_skip + 1)
        return False, 0, time_count

    def render_frame(self, frame: Image.Image) -> RenderFrame:
        """Convert one image into text plus per-character colours."""
        processed = self.pipeline.resize(frame)
        width = processed.width
        gray = processed.convert("L", _LUMA_MATRIX)
        rgb = processed.tobytes()
        text = self.pipeline.to_ascii(gray)
        if not self.pipeline.new_lines or width == 0:
            return RenderFrame(text, rgb)
        stride = width * 3
        padded = bytearray()
        for start in range(0, len(rgb), stride):
            padded += rgb[start:start + stride]
            padded += _ROW_PADDING
        return RenderFrame(text, bytes(padded))

    def _render_current_frame(self, frame: Image.Image | None) -> RenderFrame | None:
        if frame is not None:
            self.last_frame = frame
            target = frame
        elif self.last_frame is not None:
            target = self.last_frame
        else:
            return None
        try:
            return self.render_frame(target)
        except AsciiMotionError:
            return None