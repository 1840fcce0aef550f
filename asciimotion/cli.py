"""Command line entry point: play images and videos as text in the terminal."""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from .errors import ERROR_DATA, ApplicationError, AsciiMotionError
from .frames import MediaData, VideoStream, open_media
from .maps import CharMap
from .pipeline import FixedResolution, ImagePipeline
from .render import Renderer, RenderOptions
from .terminal_player import TerminalPlayer

DEFAULT_FPS = 30.0
VERSION = "0.1.0"


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the command."""
    parser = argparse.ArgumentParser(
        prog="asciimotion", description="Show images, animations and videos as text."
    )
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument("action", choices=["export", "play"], help="Play or Export")
    parser.add_argument("input", help="Name of the file/stream to process")
    parser.add_argument("-o", "--output", help="Name of the file to output to")
    parser.add_argument("-f", "--fps", help="Force a user-specified FPS")
    parser.add_argument("-l", "--loop", action="store_true", help="Loop playing of video/gif")
    parser.add_argument("-c", "--char-map", help="Custom lookup char table")
    parser.add_argument("-g", "--gray", action="store_true", help="Grayscale mode")
    parser.add_argument(
        "-w", "--w-mod", type=int, default=1,
        help="Experimental width modifier (emojis have 2x width)",
    )
    parser.add_argument(
        "-a", "--allow-frame-skip", action="store_true", help="Experimental frame skip flag"
    )
    parser.add_argument(
        "-n", "--new-lines", action="store_true", help="Experimental flag to add newlines"
    )
    return parser


def resolve_fps(media_fps: float | None, requested: str | None) -> float:
    """Pick the playback rate: a requested value wins over the media's own, then the default."""
    fps = DEFAULT_FPS if media_fps is None else media_fps
    if requested is None:
        return fps
    if requested != requested.strip() or "_" in requested:
        raise ApplicationError(f"{ERROR_DATA}: invalid float literal {requested!r}")
    try:
        return float(requested)
    except ValueError as err:
        raise ApplicationError(f"{ERROR_DATA}: {err!r}") from err


def _release(media: MediaData) -> None:
    if isinstance(media.frames, VideoStream):
        media.frames.close()


def export(args: argparse.Namespace, media: MediaData) -> int:
    """Handle the export action: it writes nothing and releases the opened media."""
    _release(media)
    return 0


def play(args: argparse.Namespace, media: MediaData) -> int:
    """Play the media in the terminal until it is quit."""
    try:
        with TerminalPlayer("Title", args.gray) as player:
            width, height = TerminalPlayer.size()
            fps = resolve_fps(media.fps, args.fps)
            char_map = CharMap.DOTTED if args.char_map is None else args.char_map
            renderer = Renderer(
                ImagePipeline(FixedResolution(width, height), char_map, args.new_lines),
                media.frames,
                RenderOptions(fps=fps, w_mod=args.w_mod, loop_playback=args.loop),
            )
            renderer.run(args.allow_frame_skip, player.callback())
    finally:
        _release(media)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command and return its exit status."""
    args = build_parser().parse_args(argv)
    try:
        media = open_media(args.input)
        if args.action == "export":
            return export(args, media)
        return play(args, media)
    except (AsciiMotionError, ValueError) as err:
        print(f"Error: {err}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())