"""Shared pytest fixtures: a fixed snapshot, a fixed clock and canvases that need no terminal."""

import io
from datetime import datetime

import pytest

from huginn.canvas import Canvas, DisplayMode
from huginn.sysinfo import SystemSnapshot


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Keep config and logo lookups away from the real home directory."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_DATA_HOME", str(home / ".local" / "share"))
    return home


@pytest.fixture
def now() -> datetime:
    return datetime(2026, 3, 1, 12, 0, 0)


@pytest.fixture
def snapshot() -> SystemSnapshot:
    return SystemSnapshot(
        user="ada",
        uptime="2 hrs, 5 mins",
        distro="Arch Linux",
        age="120 days",
        kernel="6.8.1-arch1-1",
        packages="1024",
        shell="zsh",
        term="Kitty",
        wm="Hyprland",
        cpu="AMD Ryzen 7 5800X 8-Core Processor",
        gpu=None,
        theme=None,
        nix=None,
        cpu_usage=12,
        ram_usage=55,
        disk_usage=91,
    )


class RecordingCanvas(Canvas):
    """Boxed canvas that remembers every placement instead of moving a cursor."""

    mode = DisplayMode.BOXED

    def __init__(self):
        super().__init__(io.StringIO())
        self.placed = []
        self.begun = False
        self.finished_at = None

    def begin(self):
        self.begun = True

    def place(self, row, col, text):
        self.placed.append((row, col, text))

    def finish(self, last_row):
        self.finished_at = last_row

    def rows_with(self, text, col=None):
        return [r for r, c, t in self.placed if t == text and (col is None or c == col)]


@pytest.fixture
def recording_canvas() -> RecordingCanvas:
    return RecordingCanvas()


@pytest.fixture
def out() -> io.StringIO:
    return io.StringIO()
