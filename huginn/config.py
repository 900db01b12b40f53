"""
Configuration file handling.

The config lives at ``~/.config/huginn/config.toml`` (or ``~/.huginn.toml``).
A broken or missing file never stops a fetch: bad values are reset to
their defaults with a warning, and a default file is written on first run.
"""

import logging
import os
import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path

from huginn.box import CONTENT_WIDTH
from huginn.challenge import MAX_MONTHS, MAX_YEARS
from huginn.errors import ConfigError

logger = logging.getLogger(__name__)

MODES = ("normal", "challenge")
LOGO_MIN, LOGO_MAX = 1, 100
# A logo wider than the frame would run over its right border.
LOGO_MAX_WIDTH = CONTENT_WIDTH


@dataclass
class DisplayConfig:
    mode: str = "normal"
    distro: bool = True
    age: bool = True
    kernel: bool = True
    packages: bool = True
    shell: bool = True
    term: bool = True
    wm: bool = True
    cpu: bool = True
    gpu: bool = True
    theme: bool = True
    nix: bool = True
    custom_install_date: str = ""


@dataclass
class ChallengeConfig:
    years: int = 2
    months: int = 0


@dataclass
class LogoConfig:
    custom_path: str = ""
    width: int = 20
    height: int = 10


@dataclass
class ScriptsConfig:
    pre_fetch: str = ""
    post_fetch: str = ""


@dataclass
class Config:
    display: DisplayConfig = field(default_factory=DisplayConfig)
    challenge: ChallengeConfig = field(default_factory=ChallengeConfig)
    logo: LogoConfig = field(default_factory=LogoConfig)
    scripts: ScriptsConfig = field(default_factory=ScriptsConfig)


SECTIONS = {
    "display": DisplayConfig,
    "challenge": ChallengeConfig,
    "logo": LogoConfig,
    "scripts": ScriptsConfig,
}


# ----------------------------------------------------------------------
# Locations
# ----------------------------------------------------------------------

def default_config_path():
    return Path(os.path.expanduser("~")) / ".config" / "huginn" / "config.toml"


def find_config_file():
    """Return the first existing config file, or None."""
    home = Path(os.path.expanduser("~"))
    for path in (default_config_path(), home / ".huginn.toml"):
        if path.exists():
            return path
    return None


# ----------------------------------------------------------------------
# Parsing
# ----------------------------------------------------------------------

def _section_from_dict(cls, data, name):
    section = cls()
    if not isinstance(data, dict):
        logger.warning("config section [%s] is not a table, using defaults", name)
        return section
    for f in fields(cls):
        if f.name not in data:
            continue
        value = data[f.name]
        expected = type(getattr(section, f.name))
        # bool is an int subclass; keep the two apart
        if isinstance(value, expected) and (expected is bool) == isinstance(value, bool):
            setattr(section, f.name, value)
        else:
            logger.warning("config %s.%s: expected %s, got %r; using default",
                           name, f.name, expected.__name__, value)
    return section


def sanitize(config):
    """Clamp values into their documented ranges."""
    display = config.display
    if display.mode not in MODES:
        logger.warning("unknown display mode %r, using 'normal'", display.mode)
        display.mode = "normal"
    challenge = config.challenge
    if challenge.years < 0 or challenge.months < 0:
        logger.warning("negative challenge duration, clamping to 0")
    challenge.years = min(MAX_YEARS, max(0, challenge.years))
    challenge.months = min(MAX_MONTHS, max(0, challenge.months))
    logo = config.logo
    logo.width = min(LOGO_MAX_WIDTH, max(LOGO_MIN, logo.width))
    logo.height = min(LOGO_MAX, max(LOGO_MIN, logo.height))
    return config


def parse_config(text, path=None):
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"failed to parse config: {e}", path=path) from e
    config = Config(**{name: _section_from_dict(cls, data.get(name, {}), name)
                       for name, cls in SECTIONS.items()})
    return sanitize(config)


def read_config(path):
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"cannot read {path}: {e}", path=path) from e
    return parse_config(text, path=path)


def load_config(path=None):
    """
    Load the config from ``path`` or the standard locations.
    Falls back to defaults (and writes them on first run) on any error.
    """
    if path is None:
        path = find_config_file()
        if path is None:
            try:
                save_config(Config(), default_config_path())
            except OSError as e:
                logger.info("could not create default config: %s", e)
            return Config()
    try:
        return read_config(path)
    except ConfigError as e:
        logger.warning("%s; using default configuration. "
                       "Run 'huginn --generate-config' to reset it.", e)
        return Config()


# ----------------------------------------------------------------------
# Writing
# ----------------------------------------------------------------------

def _toml_value(value):
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    escaped = str(value).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def dump_config(config):
    lines = ["# huginn configuration", ""]
    for name in SECTIONS:
        section = getattr(config, name)
        lines.append(f"[{name}]")
        for f in fields(section):
            lines.append(f"{f.name} = {_toml_value(getattr(section, f.name))}")
        lines.append("")
    return "\n".join(lines)


def save_config(config, path):
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_config(config), encoding="utf-8")
    return path
