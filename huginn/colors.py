"""
ANSI colour helpers shared by every renderer.

Colours are 256-colour foreground codes ("38;5;N") so that the dark and
bright variants of each hue stay distinct on any modern terminal.
"""

import re

RESET = '\033[0m'
BOLD = '\033[1m'

DARK_RED = "38;5;1"
DARK_GREEN = "38;5;2"
DARK_YELLOW = "38;5;3"
DARK_BLUE = "38;5;4"
DARK_MAGENTA = "38;5;5"
DARK_CYAN = "38;5;6"
DARK_GREY = "38;5;8"
RED = "38;5;9"
GREEN = "38;5;10"
YELLOW = "38;5;11"
BLUE = "38;5;12"
MAGENTA = "38;5;13"
CYAN = "38;5;14"

ANSI_RE = re.compile(r'\x1b\[[0-9;?]*[a-zA-Z]')


def color(text, code):
    """Wrap text in ANSI colour code."""
    return f'\033[{code}m{text}{RESET}'


def color_bold(text, code):
    """Wrap text in bold ANSI colour."""
    return f'\033[{code};1m{text}{RESET}'


def strip_ansi(text):
    """Remove ANSI escape sequences from a string."""
    return ANSI_RE.sub('', text)


def visible_width(text):
    return len(strip_ansi(text))


# ----------------------------------------------------------------------
# Colour bar: twelve hues, two shaded cells each
# ----------------------------------------------------------------------

COLORBAR_WIDTH = 24

_FIRST_BLOCKS = ("░", "▒")
_MIDDLE_BLOCKS = ("▓", "▒")
_LAST_BLOCKS = ("▒", "░")

_COLORBAR_HUES = [
    DARK_RED, RED, DARK_YELLOW, YELLOW, DARK_GREEN, GREEN,
    DARK_CYAN, CYAN, DARK_BLUE, BLUE, DARK_MAGENTA, MAGENTA,
]


def get_colorbar():
    """
    Return the rainbow bar shown above the greeting.
    The first hue fades in and the last one fades out.
    """
    last = len(_COLORBAR_HUES) - 1
    parts = []
    for i, hue in enumerate(_COLORBAR_HUES):
        if i == 0:
            blocks = _FIRST_BLOCKS
        elif i == last:
            blocks = _LAST_BLOCKS
        else:
            blocks = _MIDDLE_BLOCKS
        parts.extend(color(block, hue) for block in blocks)
    return "".join(parts)
