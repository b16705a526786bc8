# loom/display.py
# Display sinks: the interpreter hands them immutable 32x32 frames on commit.
# Contract:
#   commit(frame)                      frame is a tuple of 32 row tuples (frame[y][x])
#   await_quit()                       block until the host wants to exit
#   on_error(kind, position, detail)   fatal error report before the engine raises

from __future__ import annotations
import logging
import sys
from typing import Any, Dict, List, Optional, TextIO, Tuple

from .palette import color_for, SCREEN_FILL

log = logging.getLogger(__name__)

SIZE = 32

Frame = Tuple[Tuple[int, ...], ...]


def blank_frame(fill: int = SCREEN_FILL) -> Frame:
    return tuple(tuple(fill for _ in range(SIZE)) for _ in range(SIZE))


class DisplaySink:
    """Base sink. Subclasses override what they need; the defaults do nothing."""

    def commit(self, frame: Frame) -> None:
        pass

    def await_quit(self) -> None:
        pass

    def on_error(self, kind: str, position: Optional[int], detail: str) -> None:
        log.error("loom %s at %s: %s", kind, position, detail)


class HeadlessDisplay(DisplaySink):
    """Keeps every committed frame in memory. Used by tests and --display none."""

    def __init__(self):
        self.frames: List[Frame] = []
        self.errors: List[Dict[str, Any]] = []
        self.quit_calls = 0

    @property
    def last_frame(self) -> Optional[Frame]:
        return self.frames[-1] if self.frames else None

    def commit(self, frame: Frame) -> None:
        self.frames.append(frame)

    def await_quit(self) -> None:
        self.quit_calls += 1

    def on_error(self, kind: str, position: Optional[int], detail: str) -> None:
        super().on_error(kind, position, detail)
        self.errors.append({"kind": kind, "position": position, "detail": detail})


class TerminalDisplay(DisplaySink):
    """Paints the last committed frame with 24-bit ANSI background colours.

    Two spaces per cell keep the canvas roughly square in a terminal.
    Nothing is drawn until await_quit (or an explicit paint), so long programs
    do not flood the stream.
    """

    RESET = "\033[0m"

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream or sys.stdout
        self.frame: Frame = blank_frame()

    def commit(self, frame: Frame) -> None:
        self.frame = frame

    def render(self, frame: Optional[Frame] = None) -> str:
        rows = []
        for row in (frame or self.frame):
            cells = []
            for value in row:
                r, g, b = color_for(value)
                cells.append(f"\033[48;2;{r};{g};{b}m  ")
            rows.append("".join(cells) + self.RESET)
        return "\n".join(rows) + "\n"

    def paint(self) -> None:
        self.stream.write(self.render())
        self.stream.flush()

    def await_quit(self) -> None:
        self.paint()

    def on_error(self, kind: str, position: Optional[int], detail: str) -> None:
        super().on_error(kind, position, detail)
        self.stream.write(self.RESET)
        self.stream.flush()
