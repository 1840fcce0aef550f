"""Frame-rate probing and raw pixel helpers."""

from __future__ import annotations

import json
import os
import re
import subprocess
from typing import Any

from PIL import Image

from .errors import ApplicationError

_RATIO = re.compile(r"([+-]?\d+)(?:/([+-]?\d+))?")
_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1


def parse_frame_rate(text: str) -> float | None:
    """Parse an integer ratio such as ``30000/1001`` or ``25``; None if it is not one."""
    match = _RATIO.fullmatch(text)
    if match is None:
        return None
    numerator = int(match.group(1))
    denominator = int(match.group(2)) if match.group(2) is not None else 1
    if not (_I64_MIN <= numerator <= _I64_MAX and _I64_MIN <= denominator <= _I64_MAX):
        return None
    if denominator == 0:
        return None
    return numerator / denominator


def _first_stream(output: str | bytes) -> dict[str, Any] | None:
    if isinstance(output, bytes):
        try:
            output = output.decode("utf-8")
        except UnicodeDecodeError:
            return None
    try:
        value = json.loads(output)
    except ValueError:
        return None
    if not isinstance(value, dict):
        return None
    streams = value.get("streams")
    if not isinstance(streams, list) or not streams or not isinstance(streams[0], dict):
        return None
    return streams[0]


def fps_from_probe_output(output: str | bytes) -> float | None:
    """Read the first stream's frame rate from ffprobe's JSON output."""
    stream = _first_stream(output)
    if stream is None:
        return None
    rate = stream.get("r_frame_rate")
    return parse_frame_rate(rate) if isinstance(rate, str) else None


def _run_ffprobe(path: str | os.PathLike[str], entries: str) -> bytes:
    command = [
        "ffprobe",
        "-v", "error",
        "-select_streams", "v:0",
        "-show_entries", entries,
        "-of", "json",
        os.fspath(path),
    ]
    try:
        result = subprocess.run(
            command,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            check=False,
        )
    except OSError as err:
        raise ApplicationError(
            "Failed to extract fps from video. Is ffprobe installed?"
        ) from err
    return result.stdout


def extract_fps(path: str | os.PathLike[str]) -> float | None:
    """Ask ffprobe for the frame rate of the first video stream."""
    return fps_from_probe_output(_run_ffprobe(path, "stream=r_frame_rate"))


def probe_video_size(path: str | os.PathLike[str]) -> tuple[int, int] | None:
    """Ask ffprobe for the width and height of the first video stream."""
    stream = _first_stream(_run_ffprobe(path, "stream=width,height"))
    if stream is None:
        return None
    width, height = stream.get("width"), stream.get("height")
    if isinstance(width, int) and isinstance(height, int) and width > 0 and height > 0:
        return width, height
    return None


def rgb_bytes_to_image(data: bytes, width: int, height: int) -> Image.Image | None:
    """Build an RGB image from packed 8-bit RGB bytes; None if there are too few."""
    needed = width * height * 3
    if width < 0 or height < 0 or len(data) < needed:
        return None
    return Image.frombytes("RGB", (width, height), bytes(data[:needed]))