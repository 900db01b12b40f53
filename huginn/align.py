"""
Aligned ``label • value`` lines for the info panel and the challenge block.
"""

from huginn.colors import GREEN, color, strip_ansi

SEPARATOR = "•"
LEFT_MARGIN = 10


def max_label_width(entries):
    return max((len(label) for label, _ in entries), default=0)


def format_info_lines(entries, margin=LEFT_MARGIN):
    """
    Format (label, value) pairs so every label is right-justified to the
    longest one and the separators share one column.
    Values must already be truncated by the caller.
    """
    width = max_label_width(entries)
    sep = color(SEPARATOR, GREEN)
    return [f"{' ' * margin} {label:>{width}} {sep} {value}" for label, value in entries]


def separator_column(line):
    """Visible column of the separator glyph in a formatted line, or None."""
    col = strip_ansi(line).find(SEPARATOR)
    return col if col >= 0 else None
