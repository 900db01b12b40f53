"""
Panel composition.

The panel is a fixed sequence of blocks: logo, colour bar, greeting,
uptime, info lines, the cpu/ram/disk gauges, the optional challenge
block and, in boxed mode, the frame. Every block takes the row it may
start on and returns the next free row, so the same sequence drives
both the boxed (cursor addressed) and the stream (line by line) canvas.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime

from huginn.align import format_info_lines, separator_column
from huginn.box import BOX_WIDTH, CONTENT_OFFSET_X, CONTENT_TOP, box_height, draw_box
from huginn.canvas import (
    DisplayMode, LayoutContext, boxed_visual_center, stream_visual_center,
)
from huginn.challenge import ChallengeWindow, render_challenge, resolve_install_time
from huginn.colors import (
    COLORBAR_WIDTH, CYAN, GREEN, YELLOW, color, color_bold, get_colorbar, visible_width,
)
from huginn.config import DisplayConfig
from huginn.gauge import gauge_line
from huginn.logo import LogoPlacement, find_logo, placeholder
from huginn.sysinfo import info_items

logger = logging.getLogger(__name__)

GREETING_WIDTH = 20
GAUGE_WIDTH = 23


@dataclass
class RenderOptions:
    display: DisplayConfig = field(default_factory=DisplayConfig)
    challenge: bool = False
    years: int = 2
    months: int = 0
    # Resolved from display.custom_install_date or the filesystem when None.
    install: datetime | None = None
    logo_width: int = 20
    logo_height: int = 10
    logo_path: str = ""
    box_width: int = BOX_WIDTH


@dataclass(frozen=True)
class RenderResult:
    mode: DisplayMode
    max_row: int
    box_height: int | None
    logo: LogoPlacement


def make_context(canvas, info_lines, box_width=BOX_WIDTH):
    if canvas.mode is DisplayMode.BOXED:
        return LayoutContext(canvas, offset_x=CONTENT_OFFSET_X,
                             visual_center=boxed_visual_center(box_width))
    first = separator_column(info_lines[0]) if info_lines else None
    return LayoutContext(canvas, offset_x=0, visual_center=stream_visual_center(first))


# ----------------------------------------------------------------------
# Blocks
# ----------------------------------------------------------------------

def render_logo(ctx, row, distro, options, blitter=None):
    """Reserve the logo area under ``row`` and fill it; returns (next_row, placement)."""
    placement = LogoPlacement(
        x=ctx.centered_column(options.logo_width),
        y=row + 1,
        width=options.logo_width,
        height=options.logo_height,
        path=find_logo(distro, options.logo_path),
        label=distro or "",
    )
    ctx.skip(row)
    shown = False
    if blitter is not None and placement.path is not None:
        # The blitter writes to the terminal itself; ours must be out first.
        ctx.canvas.out.flush()
        shown = blitter(placement, ctx.boxed)
    if not shown:
        text = placeholder(placement.label)
        ctx.print_centered(placement.y + placement.height // 2, text, visible_width(text))
    return placement.y + placement.height, placement


def render_colorbar(ctx, row):
    ctx.print_centered(row, get_colorbar(), COLORBAR_WIDTH)
    ctx.skip(row + 1)
    return row + 2


def render_greeting(ctx, row, user, uptime):
    ctx.print_centered(row, f"{color('Hi!', CYAN)} {color_bold(user, GREEN)}", GREETING_WIDTH)
    ctx.print_centered(row + 1, f"{color('up', YELLOW)} {color_bold(uptime, CYAN)}", GREETING_WIDTH)
    ctx.skip(row + 2)
    return row + 3


def render_info(ctx, row, lines):
    for line in lines:
        ctx.print_line(row, line)
        row += 1
    ctx.skip(row)
    return row + 1


def render_gauges(ctx, row, gauges):
    for label, percent in gauges:
        ctx.print_centered(row, gauge_line(label, percent), GAUGE_WIDTH)
        row += 1
    return row


# ----------------------------------------------------------------------
# Orchestration
# ----------------------------------------------------------------------

def compose(canvas, snapshot, options=None, blitter=None, now=None):
    """Render one panel for ``snapshot`` onto ``canvas``."""
    if options is None:
        options = RenderOptions()
    if now is None:
        now = datetime.now()

    entries = info_items(snapshot, options.display, include_age=not options.challenge)
    lines = format_info_lines(entries)
    ctx = make_context(canvas, lines, options.box_width)

    canvas.begin()
    row = CONTENT_TOP
    row, logo = render_logo(ctx, row, snapshot.distro, options, blitter)
    row = render_colorbar(ctx, row)
    row = render_greeting(ctx, row, snapshot.user, snapshot.uptime)
    row = render_info(ctx, row, lines)
    row = render_gauges(ctx, row, [
        ("cpu", snapshot.cpu_usage),
        ("ram", snapshot.ram_usage),
        ("disk", snapshot.disk_usage),
    ])
    if options.challenge:
        install = options.install
        if install is None:
            install = resolve_install_time(options.display.custom_install_date)
        window = ChallengeWindow.from_install(install, options.years, options.months)
        row = render_challenge(ctx, row, window, now)

    max_row = row - 1
    height = None
    last_row = max_row
    if ctx.boxed:
        height = box_height(max_row)
        last_row = draw_box(canvas, height, options.box_width)
    canvas.finish(last_row)
    logger.debug("rendered %s panel, max row %d, box height %s", ctx.mode.value, max_row, height)
    return RenderResult(mode=ctx.mode, max_row=max_row, box_height=height, logo=logo)
