import subprocess
from unittest import mock

import pytest

from asciimotion.errors import ApplicationError
from asciimotion.util import (
    extract_fps,
    fps_from_probe_output,
    parse_frame_rate,
    probe_video_size,
    rgb_bytes_to_image,
)


def _completed(stdout):
    return subprocess.CompletedProcess(args=["ffprobe"], returncode=0, stdout=stdout)


@pytest.mark.parametrize(
    "text, expected",
    [("30/1", 30.0), ("30000/1001", 30000 / 1001), ("25", 25.0), ("-10/2", -5.0)],
)
def test_parse_frame_rate_valid(text, expected):
    assert parse_frame_rate(text) == pytest.approx(expected)


@pytest.mark.parametrize("text", ["", "abc", "0/0", "29.97", "1/", "/2"])
def test_parse_frame_rate_invalid(text):
    assert parse_frame_rate(text) is None


def test_fps_from_probe_output():
    output = b'{"streams": [{"r_frame_rate": "24/1"}]}'
    assert fps_from_probe_output(output) == 24.0
    assert fps_from_probe_output(output.decode()) == 24.0


@pytest.mark.parametrize(
    "output",
    [b"", b"not json", b'{"streams": []}', b'{"streams": [{}]}', b"[1, 2]", b"\xff\xfe"],
)
def test_fps_from_probe_output_missing(output):
    assert fps_from_probe_output(output) is None


def test_extract_fps_runs_ffprobe(tmp_path):
    video = tmp_path / "clip.mp4"
    stdout = b'{"streams": [{"r_frame_rate": "50/2"}]}'
    with mock.patch("asciimotion.util.subprocess.run", return_value=_completed(stdout)) as run:
        assert extract_fps(video) == 25.0
    command = run.call_args.args[0]
    assert command[0] == "ffprobe"
    assert command[-1] == str(video)
    assert "stream=r_frame_rate" in command


def test_extract_fps_without_ffprobe(tmp_path):
    with mock.patch("asciimotion.util.subprocess.run", side_effect=FileNotFoundError):
        with pytest.raises(ApplicationError):
            extract_fps(tmp_path / "clip.mp4")


def test_probe_video_size(tmp_path):
    stdout = b'{"streams": [{"width": 640, "height": 360}]}'
    with mock.patch("asciimotion.util.subprocess.run", return_value=_completed(stdout)):
        assert probe_video_size(tmp_path / "clip.mp4") == (640, 360)


def test_probe_video_size_missing(tmp_path):
    with mock.patch("asciimotion.util.subprocess.run", return_value=_completed(b"{}")):
        assert probe_video_size(tmp_path / "clip.mp4") is None


def test_rgb_bytes_round_trip():
    data = bytes(range(2 * 3 * 3))
    img = rgb_bytes_to_image(data, 2, 3)
    assert img.size == (2, 3)
    assert img.mode == "RGB"
    assert img.tobytes() == data


def test_rgb_bytes_too_short():
    assert rgb_bytes_to_image(b"\x00\x01", 2, 2) is None