"""
Where text ends up on the terminal.

A Canvas knows how to put a piece of text at (row, col). The absolute
canvas moves the cursor there with a CSI sequence; the stream canvas
ignores the row, pads with spaces and ends the line. The layout code on
top of it never needs to know which one it is talking to.
"""

import logging
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)

CLEAR_SCREEN = "\x1b[2J\x1b[H"

# Column of the separator assumed when there is nothing to align against.
DEFAULT_SEPARATOR_COLUMN = 20


class DisplayMode(Enum):
    BOXED = "boxed"
    STREAM = "stream"


def move_to(row, col):
    """CSI cursor position; rows and columns are 0-based here, 1-based on the wire."""
    return f"\x1b[{row + 1};{col + 1}H"


class Canvas(ABC):
    """Sink for placed text. Subclasses decide how a placement reaches the terminal."""

    mode = None

    def __init__(self, out=None):
        self.out = out if out is not None else sys.stdout

    def begin(self):
        pass

    @abstractmethod
    def place(self, row, col, text):
        """Write ``text`` at ``(row, col)``."""

    def blank(self, row):
        pass

    def finish(self, last_row):
        self.out.flush()


class AbsoluteCanvas(Canvas):
    mode = DisplayMode.BOXED

    def __init__(self, out=None):
        super().__init__(out)
        self.cursor_ok = True

    def begin(self):
        self._write_control(CLEAR_SCREEN)

    def _write_control(self, seq):
        if not self.cursor_ok:
            return
        try:
            self.out.write(seq)
        except (OSError, ValueError) as e:
            # Keep rendering; text is appended where the stream is.
            logger.debug("cursor control failed, falling back to stream position: %s", e)
            self.cursor_ok = False

    def place(self, row, col, text):
        if row is None:
            raise ValueError("absolute placement needs a row")
        self._write_control(move_to(row, max(0, col)))
        self.out.write(text)

    def finish(self, last_row):
        self._write_control(move_to(last_row + 1, 0))
        self.out.write("\n")
        self.out.flush()


class StreamCanvas(Canvas):
    mode = DisplayMode.STREAM

    def place(self, row, col, text):
        self.out.write(" " * max(0, col) + text + "\n")

    def blank(self, row):
        self.out.write("\n")


def make_canvas(mode, out=None):
    if mode is DisplayMode.BOXED:
        return AbsoluteCanvas(out)
    return StreamCanvas(out)


@dataclass
class LayoutContext:
    """Active canvas plus the horizontal anchors everything is placed against."""

    canvas: Canvas
    offset_x: int = 0
    visual_center: int = 0

    @property
    def mode(self):
        return self.canvas.mode

    @property
    def boxed(self):
        return self.mode is DisplayMode.BOXED

    def centered_column(self, visual_width):
        return self.offset_x + max(0, self.visual_center - visual_width // 2)

    def print_centered(self, row, text, visual_width):
        self.canvas.place(row, self.centered_column(visual_width), text)

    def print_line(self, row, text):
        self.canvas.place(row, self.offset_x, text)

    def skip(self, row):
        """Leave ``row`` empty."""
        self.canvas.blank(row)


def stream_visual_center(separator_col):
    if separator_col is None:
        separator_col = DEFAULT_SEPARATOR_COLUMN
    return max(0, separator_col - 10)


def boxed_visual_center(box_width):
    return box_width // 4
