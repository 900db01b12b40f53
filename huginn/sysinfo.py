"""
Host metric collection.

Each metric has its own getter. The slow ones run side by side in a
thread pool; a getter that raises is logged and replaced by its default,
so the renderer always receives a complete, read-only SystemSnapshot.
"""

import getpass
import logging
import os
import platform
import re
import shutil
import subprocess
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

import psutil

from huginn.challenge import resolve_install_time

logger = logging.getLogger(__name__)

UNKNOWN = "Unknown"


@dataclass(frozen=True)
class SystemSnapshot:
    user: str = UNKNOWN
    uptime: str = UNKNOWN
    distro: str | None = None
    age: str | None = None
    kernel: str | None = None
    packages: str | None = None
    shell: str | None = None
    term: str | None = None
    wm: str | None = None
    cpu: str | None = None
    gpu: str | None = None
    theme: str | None = None
    nix: str | None = None
    cpu_usage: int = 0
    ram_usage: int = 0
    disk_usage: int = 0


# ----------------------------------------------------------------------
# Field table: label, enabling flag in DisplayConfig, max value length
# ----------------------------------------------------------------------

FIELDS = (
    ("distro", "distro", 50),
    ("age", "age", 50),
    ("kernel", "kernel", 50),
    ("packages", "packages", 50),
    ("shell", "shell", 50),
    ("term", "term", 50),
    ("wm", "wm", 50),
    ("cpu", "cpu", 50),
    ("gpu", "gpu", 55),
    ("theme", "theme", 50),
    ("nix", "nix", 50),
)


def truncate(value, max_len):
    return value[:max_len]


def info_items(snapshot, display, include_age=True):
    """
    Return the (label, value) pairs to show, in display order.
    Disabled fields and fields the collector left as None are skipped.
    """
    items = []
    for label, flag, max_len in FIELDS:
        if label == "age" and not include_age:
            continue
        if not getattr(display, flag, True):
            continue
        value = getattr(snapshot, label)
        if value is None:
            continue
        items.append((label, truncate(value, max_len)))
    return items


# ----------------------------------------------------------------------
# Getters
# ----------------------------------------------------------------------

def _run(cmd, timeout=5):
    return subprocess.run(cmd, capture_output=True, text=True, timeout=timeout,
                          check=False).stdout


def get_os_name():
    """Distribution name from /etc/os-release, else the platform name."""
    try:
        with open('/etc/os-release', 'r') as f:
            for line in f:
                if line.startswith('PRETTY_NAME='):
                    return line.split('=', 1)[1].strip().strip('"')
    except OSError:
        if os.path.exists('/data/data/com.termux'):
            return "Android (Termux)"
    if platform.system() == 'Darwin':
        return "macOS"
    return platform.system() or UNKNOWN


def get_kernel():
    return platform.release() or None


def format_uptime(seconds):
    seconds = max(0, int(seconds))
    days, remainder = divmod(seconds, 86400)
    hours, remainder = divmod(remainder, 3600)
    minutes = remainder // 60
    if days > 0:
        return f"{days} days, {hours} hrs"
    if hours > 0:
        return f"{hours} hrs, {minutes} mins"
    return f"{minutes} mins"


def get_uptime():
    return format_uptime(time.time() - psutil.boot_time())


def get_user():
    return os.environ.get("USER") or getpass.getuser()


def get_system_age(custom_install_date=""):
    install = resolve_install_time(custom_install_date)
    return f"{max(0, (datetime.now() - install).days)} days"


PACKAGE_COMMANDS = (
    ("dpkg-query", ["dpkg-query", "-f", ".\n", "-W"]),
    ("pacman", ["pacman", "-Qq"]),
    ("rpm", ["rpm", "-qa"]),
    ("xbps-query", ["xbps-query", "-l"]),
    ("apk", ["apk", "info"]),
    ("brew", ["brew", "list", "--formula"]),
    ("guix", ["guix", "package", "--list-installed"]),
    ("slackpkg", ["slackpkg", "search"]),
)


def get_package_count():
    """Sum the packages reported by every package manager on PATH."""
    total = 0
    for manager, cmd in PACKAGE_COMMANDS:
        if shutil.which(manager) is None:
            continue
        try:
            total += len(_run(cmd, timeout=10).splitlines())
        except (subprocess.SubprocessError, OSError) as e:
            logger.debug("package count via %s failed: %s", manager, e)
    return str(total)


def get_shell():
    shell = os.environ.get("SHELL")
    return os.path.basename(shell) if shell else UNKNOWN


TERMINAL_NAMES = {
    "ghostty": "Ghostty",
    "kitty": "Kitty",
    "wezterm": "Wezterm",
    "alacritty": "Alacritty",
}


def get_terminal():
    term = os.environ.get("TERM_PROGRAM") or os.environ.get("TERMINAL")
    if term:
        return TERMINAL_NAMES.get(term.lower(), term)
    if os.environ.get("KITTY_WINDOW_ID"):
        return "Kitty"
    return os.environ.get("TERM") or UNKNOWN


WM_NAMES = {"hyprland": "Hyprland", "sway": "Sway"}


def get_window_manager():
    wm = os.environ.get("XDG_CURRENT_DESKTOP") or os.environ.get("DESKTOP_SESSION")
    if wm:
        return WM_NAMES.get(wm.lower(), wm)
    return UNKNOWN


def clean_cpu_name(name):
    name = name.replace("(R)", "").replace("(TM)", "")
    return re.sub(r'\s+', ' ', name).strip()


def get_cpu_name():
    if platform.system() == 'Darwin':
        try:
            return clean_cpu_name(_run(['sysctl', '-n', 'machdep.cpu.brand_string']))
        except (subprocess.SubprocessError, OSError):
            return None
    try:
        with open('/proc/cpuinfo', 'r') as f:
            for line in f:
                if 'model name' in line:
                    return clean_cpu_name(line.split(':', 1)[1])
    except OSError:
        pass
    return platform.processor() or None


GPU_VENDORS = (
    ("NVIDIA Corporation", "NVIDIA"),
    ("Advanced Micro Devices, Inc. [AMD/ATI]", "AMD"),
    ("Advanced Micro Devices, Inc.", "AMD"),
    ("Intel Corporation", "Intel"),
    ("[AMD/ATI]", ""),
)


def clean_gpu_name(name):
    for long_name, short in GPU_VENDORS:
        name = name.replace(long_name, short)
    return re.sub(r'\s+', ' ', name).strip()


def get_gpu_name():
    if shutil.which('lspci') is None:
        return None
    for line in _run(['lspci']).splitlines():
        if 'VGA compatible controller' in line or '3D controller' in line:
            parts = line.split(':', 2)
            if len(parts) == 3:
                return clean_gpu_name(parts[2])
    return None


def get_theme():
    theme = os.environ.get("GTK_THEME")
    if theme:
        return theme
    settings = Path(os.path.expanduser("~")) / ".config" / "gtk-3.0" / "settings.ini"
    try:
        with open(settings, 'r') as f:
            for line in f:
                if line.startswith('gtk-theme-name'):
                    return line.split('=', 1)[1].strip()
    except OSError:
        pass
    return None


def extract_generation(link):
    """Generation number out of a profile link such as ``system-123-link``."""
    for part in os.path.basename(link).split('-'):
        if part.isdigit():
            return part
    return None


def get_nix_generation():
    if not (os.path.exists('/etc/NIXOS') or os.path.exists('/run/current-system')):
        return None
    for link in ('/nix/var/nix/profiles/system', '/run/current-system'):
        try:
            gen = extract_generation(os.readlink(link))
        except OSError:
            continue
        if gen:
            return gen
    return None


def get_cpu_usage(interval=0.2):
    return int(psutil.cpu_percent(interval=interval))


def get_ram_usage():
    return int(psutil.virtual_memory().percent)


def get_disk_usage(path="/"):
    return int(psutil.disk_usage(path).percent)


# ----------------------------------------------------------------------
# Collection
# ----------------------------------------------------------------------

def _collectors(display):
    """Snapshot field -> (getter, default on failure)."""
    return {
        "user": (get_user, UNKNOWN),
        "uptime": (get_uptime, UNKNOWN),
        "distro": (get_os_name, UNKNOWN),
        "age": (lambda: get_system_age(display.custom_install_date), None),
        "kernel": (get_kernel, None),
        "packages": (get_package_count, UNKNOWN),
        "shell": (get_shell, UNKNOWN),
        "term": (get_terminal, UNKNOWN),
        "wm": (get_window_manager, UNKNOWN),
        "cpu": (get_cpu_name, None),
        "gpu": (get_gpu_name, None),
        "theme": (get_theme, None),
        "nix": (get_nix_generation, None),
        "cpu_usage": (get_cpu_usage, 0),
        "ram_usage": (get_ram_usage, 0),
        "disk_usage": (get_disk_usage, 0),
    }


def _guarded(name, getter, default):
    try:
        return getter()
    except Exception:
        logger.warning("collecting %s failed", name, exc_info=True)
        return default


def collect(display, collectors=None, max_workers=8):
    """
    Run every getter concurrently and wait for all of them before
    returning the snapshot. Disabled info fields are not collected.
    """
    if collectors is None:
        collectors = _collectors(display)
    wanted = {name: entry for name, entry in collectors.items()
              if getattr(display, name, True) is not False}
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        futures = {name: pool.submit(_guarded, name, getter, default)
                   for name, (getter, default) in wanted.items()}
        values = {name: future.result() for name, future in futures.items()}
    return SystemSnapshot(**values)
