"""
Challenge countdown: how long this install has lived against a target
duration, and the panel block that shows it.

A challenge of Y years and M months lasts ``Y*365 + round(M*30.44)``
days from the install date. Once that moment has passed the challenge
is complete and stays complete.
"""

import logging
import os
from dataclasses import dataclass
from datetime import datetime, timedelta

from huginn.align import format_info_lines, separator_column
from huginn.colors import GREEN, MAGENTA, color, color_bold
from huginn.errors import InstallDateError
from huginn.gauge import challenge_gauge_line, clamp_percent

logger = logging.getLogger(__name__)

# "100% " in front of the challenge bar
PERCENT_WIDTH = 5

DAYS_PER_YEAR = 365
DAYS_PER_MONTH = 30.44
MAX_YEARS = 10000
MAX_MONTHS = 12 * MAX_YEARS
DATE_FORMAT = "%Y-%m-%d"

STATUS_COMPLETE = "complete"
STATUS_IN_PROGRESS = "in_progress"


def total_challenge_days(years, months):
    years = min(MAX_YEARS, max(0, int(years)))
    months = min(MAX_MONTHS, max(0, int(months)))
    return years * DAYS_PER_YEAR + round(months * DAYS_PER_MONTH)


# ----------------------------------------------------------------------
# Install date
# ----------------------------------------------------------------------

def parse_install_date(text):
    """Parse a ``YYYY-MM-DD`` date into a naive local datetime at midnight."""
    try:
        return datetime.strptime(text.strip(), DATE_FORMAT)
    except (AttributeError, ValueError) as e:
        raise InstallDateError(f"invalid install date {text!r}, expected YYYY-MM-DD") from e


def filesystem_install_time():
    """
    Best guess at the install date: the modification time of the root
    filesystem (``/ostree`` on atomic systems). Falls back to the epoch.
    """
    path = "/ostree" if os.path.exists("/ostree") else "/"
    try:
        return datetime.fromtimestamp(os.stat(path).st_mtime)
    except OSError as e:
        logger.warning("could not stat %s for install date: %s", path, e)
        return datetime.fromtimestamp(0)


def resolve_install_time(custom_date=None):
    if custom_date:
        try:
            return parse_install_date(custom_date)
        except InstallDateError as e:
            logger.warning("%s; using filesystem timestamp", e)
    return filesystem_install_time()


# ----------------------------------------------------------------------
# Window arithmetic
# ----------------------------------------------------------------------

@dataclass(frozen=True)
class ChallengeWindow:
    install: datetime
    total_days: int

    @classmethod
    def from_install(cls, install, years, months):
        return cls(install=install, total_days=total_challenge_days(years, months))

    @property
    def target(self):
        """Install plus the challenge length, saturating at the last representable moment."""
        try:
            return self.install + timedelta(days=self.total_days)
        except OverflowError:
            return datetime.max

    def days_old(self, now):
        return max(0, (now - self.install).days)

    def remaining(self, now):
        return self.target - now

    def progress_percent(self, now):
        if self.total_days <= 0:
            return 100
        return clamp_percent(100 * self.days_old(now) // self.total_days)

    def status(self, now):
        if self.remaining(now).total_seconds() <= 0:
            return STATUS_COMPLETE
        return STATUS_IN_PROGRESS

    def time_left(self, now):
        """Return ``(days, hours)`` still to go; only meaningful while in progress."""
        remaining = self.remaining(now)
        total_hours = int(remaining.total_seconds() // 3600)
        return remaining.days, total_hours % 24

    def info_items(self, now):
        items = [
            ("Installed", self.install.strftime(DATE_FORMAT)),
            ("Current Age", f"{self.days_old(now)} days"),
        ]
        if self.status(now) == STATUS_COMPLETE:
            items.append(("Status", color_bold("Challenge Complete!", GREEN)))
        else:
            days, hours = self.time_left(now)
            items.append(("Time Left", color(f"{days} days, {hours} hours", MAGENTA)))
        return items


# ----------------------------------------------------------------------
# Panel block
# ----------------------------------------------------------------------

def render_challenge(ctx, row, window, now):
    """
    Append the challenge block starting at ``row`` and return the next
    free row: one spacer, the aligned info lines, then the progress bar.
    """
    lines = format_info_lines(window.info_items(now))
    ctx.skip(row)
    row += 1
    for line in lines:
        ctx.print_line(row, line)
        row += 1
    # The bar starts in the value column, the percentage sits left of it.
    value_col = separator_column(lines[0]) + 2
    ctx.canvas.place(row, ctx.offset_x + max(0, value_col - PERCENT_WIDTH),
                     challenge_gauge_line(window.progress_percent(now)))
    return row + 1
