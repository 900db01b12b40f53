"""Tests for config loading, sanitising and writing."""

import pytest

from huginn.box import BOX_WIDTH, CONTENT_OFFSET_X, CONTENT_WIDTH
from huginn.challenge import MAX_MONTHS, MAX_YEARS
from huginn.config import (
    Config, default_config_path, dump_config, find_config_file, load_config,
    parse_config, read_config, save_config,
)
from huginn.errors import ConfigError


class TestParseConfig:
    """Tests for TOML parsing."""

    def test_empty_file_gives_defaults(self) -> None:
        """Every section falls back to its defaults."""
        assert parse_config("") == Config()

    def test_values_are_read(self) -> None:
        """Known keys override the defaults."""
        config = parse_config(
            '[display]\nmode = "challenge"\ngpu = false\ncustom_install_date = "2024-01-02"\n'
            '[challenge]\nyears = 1\nmonths = 6\n'
            '[logo]\nwidth = 30\n'
            '[scripts]\npre_fetch = "echo hi"\n'
        )
        assert config.display.mode == "challenge"
        assert config.display.gpu is False
        assert config.display.custom_install_date == "2024-01-02"
        assert (config.challenge.years, config.challenge.months) == (1, 6)
        assert config.logo.width == 30
        assert config.logo.height == 10
        assert config.scripts.pre_fetch == "echo hi"

    def test_wrong_types_are_reset(self, caplog) -> None:
        """A value of the wrong type keeps the default and logs a warning."""
        config = parse_config('[display]\ndistro = "yes"\n[challenge]\nyears = true\n')
        assert config.display.distro is True
        assert config.challenge.years == 2
        assert "display.distro" in caplog.text

    def test_unknown_keys_are_ignored(self) -> None:
        """Extra keys and sections do not break loading."""
        config = parse_config('[display]\nfoo = 1\n[extra]\nbar = 2\n')
        assert config == Config()

    def test_out_of_range_values_are_clamped(self) -> None:
        """Negative durations, odd modes and huge logos are brought back in range."""
        config = parse_config(
            '[display]\nmode = "fancy"\n[challenge]\nyears = -3\nmonths = -1\n'
            '[logo]\nwidth = 0\nheight = 5000\n'
        )
        assert config.display.mode == "normal"
        assert (config.challenge.years, config.challenge.months) == (0, 0)
        assert (config.logo.width, config.logo.height) == (1, 100)

    def test_logo_width_is_capped_to_the_frame(self) -> None:
        """A logo can never be wider than the space inside the box."""
        config = parse_config("[logo]\nwidth = 100\n")
        assert config.logo.width == CONTENT_WIDTH
        assert CONTENT_OFFSET_X + config.logo.width <= BOX_WIDTH + 3

    def test_huge_challenge_duration_is_capped(self) -> None:
        """Absurd durations are held at the longest supported challenge."""
        config = parse_config("[challenge]\nyears = 99999999\nmonths = 99999999\n")
        assert (config.challenge.years, config.challenge.months) == (MAX_YEARS, MAX_MONTHS)

    def test_malformed_toml_raises(self) -> None:
        """Syntax errors surface as ConfigError."""
        with pytest.raises(ConfigError):
            parse_config("[display\nmode = ")


class TestLoadConfig:
    """Tests for locating and loading the config file."""

    def test_first_run_writes_defaults(self, isolated_home) -> None:
        """Without a config file the defaults are written and returned."""
        assert find_config_file() is None
        assert load_config() == Config()
        assert default_config_path().exists()
        assert default_config_path().is_relative_to(isolated_home)

    def test_home_fallback_location(self, isolated_home) -> None:
        """``~/.huginn.toml`` is used when the XDG file is absent."""
        (isolated_home / ".huginn.toml").write_text("[challenge]\nyears = 5\n")
        assert load_config().challenge.years == 5

    def test_broken_file_falls_back_to_defaults(self, tmp_path, caplog) -> None:
        """A file that does not parse is reported and ignored."""
        path = tmp_path / "config.toml"
        path.write_text("this is = = not toml")
        assert load_config(path) == Config()
        assert "using default configuration" in caplog.text

    def test_missing_explicit_file_raises_on_read(self, tmp_path) -> None:
        """Reading a file that is not there is a ConfigError."""
        with pytest.raises(ConfigError):
            read_config(tmp_path / "nope.toml")

    def test_saved_config_loads_back(self, tmp_path) -> None:
        """What dump_config writes, parse_config reads."""
        config = Config()
        config.display.wm = False
        config.logo.custom_path = 'C:\\logos\\"mine".png'
        path = save_config(config, tmp_path / "sub" / "config.toml")
        assert read_config(path) == config
        assert dump_config(config).startswith("# huginn configuration")
