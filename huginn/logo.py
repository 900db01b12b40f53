"""
Distro logo lookup and placement.

Drawing the image itself is left to an external blitter (``viu`` when it
is installed). Without one, or without a logo file, a text placeholder
is centred in the area the image would have used.
"""

import logging
import os
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path

from huginn.colors import CYAN, color_bold

logger = logging.getLogger(__name__)

LOGO_NAMES = (
    ("arch", "arch.svg"),
    ("debian", "debian.svg"),
    ("endeavour", "endeavouros.svg"),
    ("fedora", "fedora.svg"),
    ("garuda", "garuda.svg"),
    ("gentoo", "gentoo.svg"),
    ("guix", "guix.svg"),
    ("lmde", "lmde.svg"),
    ("manjaro", "manjaro.svg"),
    ("mint", "mint.svg"),
    ("nixos", "nixos.svg"),
    ("obsidian", "obsidian.svg"),
    ("popos", "popos.svg"),
    ("ubuntu", "ubuntu.svg"),
    ("venom", "venom.svg"),
)
FALLBACK_LOGO = "linux.svg"


@dataclass(frozen=True)
class LogoPlacement:
    """Where the logo goes: column/row of its top-left cell and its size in cells."""

    x: int
    y: int
    width: int
    height: int
    path: Path | None
    label: str


def logo_dir():
    data_home = os.environ.get("XDG_DATA_HOME") or os.path.join(os.path.expanduser("~"), ".local", "share")
    return Path(data_home) / "huginn" / "logos"


def logo_name(distro):
    lowered = (distro or "").lower()
    for key, name in LOGO_NAMES:
        if key in lowered:
            return name
    return FALLBACK_LOGO


def find_logo(distro, custom_path=""):
    """Return the first logo file that exists, or None."""
    candidates = []
    if custom_path:
        candidates.append(Path(os.path.expanduser(custom_path)))
    candidates.append(logo_dir() / logo_name(distro))
    candidates.append(logo_dir() / FALLBACK_LOGO)
    for path in candidates:
        if path.is_file():
            return path
    logger.info("no logo found, place logos in %s", logo_dir())
    return None


def placeholder(label):
    return color_bold(f"[ {label or 'linux'} ]", CYAN)


def viu_blitter(placement, absolute):
    """
    Draw ``placement`` with viu. Returns False when the image could not
    be shown, so the caller can fall back to the placeholder.
    """
    viu = shutil.which("viu")
    if viu is None or placement.path is None:
        return False
    cmd = [viu, "-t", "-w", str(placement.width), "-h", str(placement.height),
           "-x", str(placement.x)]
    if absolute:
        cmd += ["-a", "-y", str(placement.y)]
    cmd.append(str(placement.path))
    try:
        result = subprocess.run(cmd, check=False, timeout=10)
    except (subprocess.SubprocessError, OSError) as e:
        logger.warning("viu failed: %s", e)
        return False
    return result.returncode == 0
