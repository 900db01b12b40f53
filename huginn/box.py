"""
Rounded frame drawn around a boxed panel once all content is placed.
"""

BOX_WIDTH = 85
BOX_LEFT = 2
BOX_TOP = 1
# First row available to content, just under the top border.
CONTENT_TOP = BOX_TOP + 1
# Content starts this many columns right of the left border.
CONTENT_OFFSET_X = BOX_LEFT + 2
# Columns between the content start and the right border.
CONTENT_WIDTH = BOX_WIDTH + 3 - CONTENT_OFFSET_X


def box_height(max_row):
    """
    Number of side-border rows needed so the last content row plus one
    padding row sit inside the frame. Never below 1.
    """
    if max_row is None:
        return 1
    return max(1, max_row)


def draw_box(canvas, height, width=BOX_WIDTH):
    """Draw the frame; the bottom edge lands on row ``height + 2``."""
    height = max(1, height)
    canvas.place(BOX_TOP, BOX_LEFT, "╭" + "─" * width + "╮")
    for row in range(BOX_TOP + 1, height + 2):
        canvas.place(row, BOX_LEFT, "│")
        canvas.place(row, width + 3, "│")
    canvas.place(height + 2, BOX_LEFT, "╰" + "─" * width + "╯")
    return height + 2
