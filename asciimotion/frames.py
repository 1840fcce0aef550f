"""Sources of frames: still images, animated images and videos."""

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Iterator

from PIL import Image, ImageSequence

from .errors import (
    ERROR_DECODING_IMAGE,
    ERROR_OPENING_RESOURCE,
    ERROR_OPENING_VIDEO,
    ERROR_READING_GIF_HEADER,
    ApplicationError,
)
from .util import extract_fps, probe_video_size, rgb_bytes_to_image

IMAGE_EXTENSIONS = frozenset({"png", "bmp", "ico", "tif", "tiff", "jpg", "jpeg"})
VIDEO_EXTENSIONS = frozenset({"mp4", "avi", "webm", "mkv", "mov", "flv", "ogg"})

PathLike = "str | os.PathLike[str]"


class FrameSource(Iterator[Image.Image]):
    """An iterator over frames that can also skip ahead and rewind."""

    def __iter__(self) -> FrameSource:
        return self

    def __next__(self) -> Image.Image:
        raise NotImplementedError

    def skip_frames(self, n: int) -> None:
        """Drop the next ``n`` frames."""
        raise NotImplementedError

    def reset(self) -> None:
        """Go back to the first frame."""
        raise NotImplementedError


class StillImage(FrameSource):
    """A single image, handed out once."""

    def __init__(self, image: Image.Image) -> None:
        self._image: Image.Image | None = image

    def __next__(self) -> Image.Image:
        image, self._image = self._image, None
        if image is None:
            raise StopIteration
        return image

    def skip_frames(self, n: int) -> None:
        """Skipping is meaningless for a single frame."""

    def reset(self) -> None:
        """A single image is not rewound; once taken it stays taken."""


class AnimatedImage(FrameSource):
    """A decoded animation held in memory."""

    def __init__(self, frames: list[Image.Image]) -> None:
        self.frames = list(frames)
        self.current_frame = 0

    def __len__(self) -> int:
        return len(self.frames)

    def __next__(self) -> Image.Image:
        if self.current_frame >= len(self.frames):
            raise StopIteration
        frame = self.frames[self.current_frame]
        self.current_frame += 1
        return frame.copy()

    def skip_frames(self, n: int) -> None:
        if self.frames:
            self.current_frame = (self.current_frame + n) % len(self.frames)

    def reset(self) -> None:
        self.current_frame = 0


class VideoStream(FrameSource):
    """Frames decoded by an ffmpeg process into raw RGB."""

    def __init__(self, path: str | os.PathLike[str], width: int, height: int) -> None:
        self.path = os.fspath(path)
        self.width = width
        self.height = height
        self._process: subprocess.Popen[bytes] | None = None
        self._start()

    @property
    def _frame_size(self) -> int:
        return self.width * self.height * 3

    def _start(self) -> None:
        command = [
            "ffmpeg",
            "-nostdin",
            "-v", "error",
            "-i", self.path,
            "-f", "rawvideo",
            "-pix_fmt", "rgb24",
            "-",
        ]
        try:
            self._process = subprocess.Popen(
                command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
            )
        except OSError as err:
            raise ApplicationError(ERROR_OPENING_VIDEO) from err

    def _read_raw(self) -> bytes | None:
        if self._process is None or self._process.stdout is None:
            return None
        stdout: IO[bytes] = self._process.stdout
        data = stdout.read(self._frame_size)
        if not data or len(data) < self._frame_size:
            return None
        return data

    def __next__(self) -> Image.Image:
        data = self._read_raw()
        image = None if data is None else rgb_bytes_to_image(data, self.width, self.height)
        if image is None:
            raise StopIteration
        return image

    def skip_frames(self, n: int) -> None:
        for _ in range(n):
            if self._read_raw() is None:
                break

    def reset(self) -> None:
        self.close()
        try:
            self._start()
        except ApplicationError:
            self._process = None

    def close(self) -> None:
        """Stop the decoding process."""
        process, self._process = self._process, None
        if process is None:
            return
        if process.stdout is not None:
            process.stdout.close()
        if process.poll() is None:
            process.kill()
        process.wait()

    def __enter__(self) -> VideoStream:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


@dataclass
class MediaData:
    """Opened media together with its frame rate, when known."""

    frames: FrameSource
    fps: float | None = None


def open_image(path: str | os.PathLike[str]) -> StillImage:
    """Decode a single still image."""
    try:
        handle = open(path, "rb")
    except OSError as err:
        raise ApplicationError(str(err)) from err
    with handle:
        try:
            with Image.open(handle) as img:
                img.load()
                image = img.copy()
        except (OSError, ValueError, Image.DecompressionBombError) as err:
            raise ApplicationError(f"{ERROR_DECODING_IMAGE}: {err!r}") from err
    return StillImage(image)


def open_video(path: str | os.PathLike[str]) -> VideoStream:
    """Start decoding a video file."""
    size = probe_video_size(path)
    if size is None:
        raise ApplicationError(ERROR_OPENING_VIDEO)
    width, height = size
    return VideoStream(path, width, height)


def _open_animation(path: str | os.PathLike[str], header_error: str) -> Image.Image:
    try:
        handle = open(path, "rb")
    except OSError as err:
        raise ApplicationError(f"{ERROR_OPENING_RESOURCE}: {err!r}") from err
    try:
        return Image.open(handle)
    except (OSError, ValueError, Image.DecompressionBombError) as err:
        handle.close()
        raise ApplicationError(f"{header_error}: {err!r}") from err


def open_gif(path: str | os.PathLike[str]) -> tuple[AnimatedImage, float]:
    """Decode every composed frame of a GIF and its average frame rate."""
    frames: list[Image.Image] = []
    delay_cs = 0
    with _open_animation(path, ERROR_READING_GIF_HEADER) as img:
        try:
            for frame in ImageSequence.Iterator(img):
                delay_cs += int(frame.info.get("duration", 0)) // 10
                frames.append(frame.convert("RGBA"))
        except (OSError, ValueError, EOFError) as err:
            raise ApplicationError(f"{ERROR_DECODING_IMAGE}: {err!r}") from err
    fps = len(frames) / (max(delay_cs, 1) / 100.0)
    return AnimatedImage(frames), fps


def open_webp(path: str | os.PathLike[str]) -> tuple[AnimatedImage, float]:
    """Decode every frame of a (possibly animated) WebP and its average frame rate."""
    frames: list[Image.Image] = []
    timestamps: list[int] = []
    with _open_animation(path, ERROR_DECODING_IMAGE) as img:
        repeats = max(int(img.info.get("loop", 0)), 1)
        try:
            for _ in range(repeats):
                timestamp = 0
                for frame in ImageSequence.Iterator(img):
                    timestamp += int(frame.info.get("duration", 0))
                    timestamps.append(timestamp)
                    frames.append(frame.convert("RGBA"))
        except (OSError, ValueError, EOFError) as err:
            raise ApplicationError(f"{ERROR_DECODING_IMAGE}: {err!r}") from err
    span = max(max(timestamps) - min(timestamps), 1) if timestamps else 1
    fps = len(frames) / (span / 1000.0)
    return AnimatedImage(frames), fps


def open_media(path: str | os.PathLike[str]) -> MediaData:
    """Open an image, animation or video, choosing the decoder by file extension."""
    suffix = Path(path).suffix
    ext = suffix[1:] if suffix else ""
    if ext in IMAGE_EXTENSIONS:
        return MediaData(open_image(path), None)
    if ext == "gif":
        frames, fps = open_gif(path)
        return MediaData(frames, fps)
    if ext == "webp":
        frames, fps = open_webp(path)
        return MediaData(frames, fps)
    fps = extract_fps(path)
    return MediaData(open_video(path), fps)