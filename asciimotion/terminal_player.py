"""Full-screen terminal playback of rendered frames."""

from __future__ import annotations

import enum
import os
import re
import select
import sys
import time
from dataclasses import dataclass
from typing import Callable, ClassVar, TextIO

from .errors import ApplicationError
from .pipeline import FixedResolution
from .render import CallbackState, RenderFrame

try:
    import termios
    import tty
except ImportError:  # pragma: no cover - non-POSIX platforms
    termios = None  # type: ignore[assignment]
    tty = None  # type: ignore[assignment]

_CSI = "\x1b["
_ENTER_ALTERNATE_SCREEN = "\x1b[?1049h"
_LEAVE_ALTERNATE_SCREEN = "\x1b[?1049l"
_CLEAR_ALL = "\x1b[2J"
_HIDE_CURSOR = "\x1b[?25l"
_SHOW_CURSOR = "\x1b[?25h"
_MOVE_HOME = "\x1b[1;1H"
_RESET_COLOR = "\x1b[0m"
_FG_WHITE = "\x1b[38;5;15m"
_BG_BLACK = "\x1b[48;5;0m"
_FG_DEFAULT = "\x1b[39m"

_POLL_SECONDS = 0.01
_ESCAPE_SEQUENCE = re.compile(rb"\x1b\[[0-9;?<>=]*[ -/]*[@-~]|\x1bO.|\x1b[\[O]?$(?<=.\x1b[\[O])")
_EXIT_KEYS = frozenset(b"qQ\x03\x1b")


class ControlKind(enum.Enum):
    """What a polled terminal event asks the player to do."""

    NONE = "none"
    EXIT = "exit"
    RESIZE = "resize"


@dataclass(frozen=True)
class Control:
    """A decoded terminal event."""

    kind: ControlKind
    width: int = 0
    height: int = 0

    NONE: ClassVar[Control]
    EXIT: ClassVar[Control]

    @classmethod
    def resize(cls, width: int, height: int) -> Control:
        return cls(ControlKind.RESIZE, width, height)


Control.NONE = Control(ControlKind.NONE)
Control.EXIT = Control(ControlKind.EXIT)


def parse_key(data: bytes) -> Control:
    """Decode raw keyboard input: q, Q, Ctrl-C or a lone Esc mean exit."""
    if data == b"\x1b":
        return Control.EXIT
    keys = re.sub(rb"\x1b\[[0-9;?<>=]*[ -/]*[@-~]|\x1bO.", b"", data)
    if any(byte in _EXIT_KEYS for byte in keys):
        return Control.EXIT
    return Control.NONE


def colorize(text: str, colors: bytes) -> str:
    """Give each character of ``text`` the 24-bit foreground colour from ``colors``."""
    triples = (colors[i:i + 3] for i in range(0, len(colors) - 2, 3))
    return "".join(
        f"{_CSI}38;2;{r};{g};{b}m{ch}{_FG_DEFAULT}" for ch, (r, g, b) in zip(text, triples)
    )


class TerminalPlayer:
    """Draws frames on an alternate screen and turns key presses into controls."""

    def __init__(
        self,
        title: str,
        use_grayscale: bool = False,
        *,
        output: TextIO | None = None,
        input_fd: int | None = None,
        size_provider: Callable[[], tuple[int, int]] | None = None,
    ) -> None:
        self.title = title
        self.use_grayscale = use_grayscale
        self._output = output if output is not None else sys.stdout
        self._input_fd = input_fd if input_fd is not None else self._default_input_fd()
        self._size_provider = size_provider or TerminalPlayer.size
        self._last_size: tuple[int, int] | None = None
        self._saved_mode: list | None = None
        self._active = False

    @staticmethod
    def _default_input_fd() -> int | None:
        try:
            return sys.stdin.fileno()
        except (AttributeError, OSError, ValueError):
            return None

    def _write(self, text: str) -> None:
        self._output.write(text)
        self._output.flush()

    def init(self) -> None:
        """Switch to the alternate screen, enter raw mode and clear the screen."""
        self._write(f"{_ENTER_ALTERNATE_SCREEN}\x1b]0;{self.title}\x07")
        self._enable_raw_mode()
        self._active = True
        self._write(f"{_CLEAR_ALL}{_HIDE_CURSOR}{_FG_WHITE}{_BG_BLACK}{_MOVE_HOME}")

    def _enable_raw_mode(self) -> None:
        fd = self._input_fd
        if termios is None or fd is None or not os.isatty(fd):
            return
        try:
            self._saved_mode = termios.tcgetattr(fd)
            tty.setraw(fd)
        except termios.error as err:
            raise ApplicationError(str(err)) from err

    def _disable_raw_mode(self) -> None:
        mode, self._saved_mode = self._saved_mode, None
        if mode is None or termios is None or self._input_fd is None:
            return
        try:
            termios.tcsetattr(self._input_fd, termios.TCSADRAIN, mode)
        except termios.error as err:
            raise ApplicationError(str(err)) from err

    def cleanup(self) -> None:
        """Restore the terminal to the state it had before ``init``."""
        if not self._active:
            return
        self._active = False
        self._write(f"{_RESET_COLOR}{_CLEAR_ALL}{_SHOW_CURSOR}{_LEAVE_ALTERNATE_SCREEN}")
        self._disable_raw_mode()

    def __enter__(self) -> TerminalPlayer:
        self.init()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.cleanup()

    @staticmethod
    def size() -> tuple[int, int]:
        """Return the terminal's (columns, rows)."""
        for stream in (sys.stdout, sys.__stdout__, sys.stdin):
            try:
                columns, rows = os.get_terminal_size(stream.fileno())
            except (AttributeError, OSError, ValueError):
                continue
            return columns, rows
        raise ApplicationError("Cannot determine terminal size")

    def _poll_input(self) -> Control:
        fd = self._input_fd
        if fd is None:
            time.sleep(_POLL_SECONDS)
            return Control.NONE
        try:
            readable, _, _ = select.select([fd], [], [], _POLL_SECONDS)
            if not readable:
                return Control.NONE
            data = os.read(fd, 1024)
        except (OSError, ValueError):
            return Control.NONE
        return parse_key(data) if data else Control.NONE

    def _poll_resize(self) -> Control:
        try:
            current = tuple(self._size_provider())
        except ApplicationError:
            return Control.NONE
        previous, self._last_size = self._last_size, current
        if previous is not None and current != previous:
            return Control.resize(*current)
        return Control.NONE

    def poll_events(self) -> Control:
        """Wait briefly for input and report an exit request or a size change."""
        control = self._poll_input()
        if control.kind is ControlKind.EXIT:
            return control
        return self._poll_resize()

    def callback(self) -> Callable[[CallbackState], bool]:
        """Return the render-loop callback; it returns False once the user asks to quit."""

        def handle(state: CallbackState) -> bool:
            control = self.poll_events()
            if control.kind is ControlKind.EXIT:
                return False
            if control.kind is ControlKind.RESIZE:
                state.pipeline.resolution = FixedResolution(control.width, control.height)
            if state.should_render and state.frame is not None:
                try:
                    self.draw(state.frame)
                except OSError:
                    pass
            return True

        return handle

    def draw(self, frame: RenderFrame) -> None:
        """Print a frame at the top-left corner, coloured unless in grayscale mode."""
        body = frame.text if self.use_grayscale else colorize(frame.text, frame.colors)
        self._write(f"{_MOVE_HOME}{body}{_MOVE_HOME}")