"""
Colour-graded progress bars.

A bar is ``width`` cells of the same glyph: the filled part takes the
colour of the tier the percentage falls in, the rest is dark grey.
The tier lookup is a plain table so it can be checked without a
terminal.
"""

from enum import Enum

from huginn.colors import (
    CYAN, DARK_CYAN, DARK_GREEN, DARK_GREY, DARK_RED, DARK_YELLOW,
    GREEN, RED, YELLOW, color,
)

BAR_GLYPH = "━"
BAR_WIDTH = 14

# Lower bound of each tier, highest first. Tier numbers run 5 (top) to 1.
TIER_THRESHOLDS = (90, 70, 50, 30, 0)


class Palette(Enum):
    SYSTEM = "system"        # high is bad
    CHALLENGE = "challenge"  # high is good


PALETTES = {
    Palette.SYSTEM: {5: DARK_RED, 4: RED, 3: YELLOW, 2: DARK_GREEN, 1: GREEN},
    Palette.CHALLENGE: {5: GREEN, 4: DARK_GREEN, 3: DARK_YELLOW, 2: DARK_CYAN, 1: CYAN},
}


def clamp_percent(percent):
    return max(0, min(100, int(percent)))


def tier_for(percent):
    """Return the tier (5..1) of a percentage; the first threshold met wins."""
    percent = clamp_percent(percent)
    for tier, threshold in zip(range(len(TIER_THRESHOLDS), 0, -1), TIER_THRESHOLDS):
        if percent >= threshold:
            return tier
    return 1


def tier_color(percent, palette=Palette.SYSTEM):
    return PALETTES[palette][tier_for(percent)]


def split_bar(percent, width):
    """Return ``(filled, empty)`` cell counts for a clamped percentage."""
    width = max(0, int(width))
    filled = clamp_percent(percent) * width // 100
    return filled, width - filled


def render_bar(percent, width=BAR_WIDTH, palette=Palette.SYSTEM):
    filled, empty = split_bar(percent, width)
    full = color(BAR_GLYPH * filled, tier_color(percent, palette)) if filled else ""
    rest = color(BAR_GLYPH * empty, DARK_GREY) if empty else ""
    return full + rest


# ----------------------------------------------------------------------
# Gauge lines
# ----------------------------------------------------------------------

GAUGE_LABEL_WIDTH = 4


def gauge_line(label, percent, width=BAR_WIDTH):
    """
    Format one system gauge, e.g. ``cpu  42% ━━━━━━━━━━━━━━``.
    Labels are padded so cpu/ram/disk bars start in the same column.
    """
    percent = clamp_percent(percent)
    return (f"{color(label, GREEN)}{' ' * max(1, GAUGE_LABEL_WIDTH + 1 - len(label))}"
            f"{percent:>2}% {render_bar(percent, width)}")


def challenge_gauge_line(percent, width=BAR_WIDTH):
    percent = clamp_percent(percent)
    return f"{percent:>3}% {render_bar(percent, width, Palette.CHALLENGE)}"
