"""
Tests for the XDG configuration manager and logging setup.
"""

import logging
from pathlib import Path

import click
import pytest
from omegaconf import OmegaConf

from termforge.config import DEFAULT_CONFIG, config_manager, setup_logging
from termforge.config.manager import ConfigManager


def write_config(path: Path, data: dict):
    path.parent.mkdir(parents=True, exist_ok=True)
    OmegaConf.save(OmegaConf.create(data), path)


class TestConfigManager:
    """Test loading and merging configuration."""

    def test_defaults(self):
        manager = ConfigManager()

        assert manager.get_config_value("defaults.palette") == "tokyonight"
        assert manager.get_config_value("defaults.plugin_manager") is None
        assert manager.get_config_value("output.starship") == "~/.config/starship.toml"
        assert manager.get_defaults() == DEFAULT_CONFIG["defaults"]

    def test_user_overrides_system(self, isolated_config):
        write_config(
            isolated_config / "system" / "termforge" / "config.yaml",
            {"defaults": {"palette": "gruvbox-dark", "shell": "bash"}},
        )
        write_config(
            isolated_config / "config" / "termforge" / "config.yaml",
            {"defaults": {"palette": "catppuccin-mocha"}},
        )

        manager = ConfigManager()

        assert manager.get_config_value("defaults.palette") == "catppuccin-mocha"
        assert manager.get_config_value("defaults.shell") == "bash"
        assert manager.get_config_value("defaults.plugin_dir") == "$HOME/.local/share/zsh/plugins"

    def test_missing_key(self):
        assert ConfigManager().get_config_value("defaults.nope") is None

    def test_section_as_dict(self):
        output = ConfigManager().get_config_value("output")

        assert isinstance(output, dict)
        assert set(output) == {"starship", "wezterm", "plugins"}

    def test_broken_user_config_warns(self, isolated_config, capsys):
        config_file = isolated_config / "config" / "termforge" / "config.yaml"
        config_file.parent.mkdir(parents=True)
        config_file.write_text("defaults: [unclosed\n")

        manager = ConfigManager()

        assert manager.user_config is None
        assert manager.get_config_value("defaults.palette") == "tokyonight"
        assert "Failed to load user config" in capsys.readouterr().err

    def test_set_user_config_value(self, isolated_config):
        manager = ConfigManager()

        manager.set_user_config_value("defaults.plugin_manager", "zinit")

        config_file = isolated_config / "config" / "termforge" / "config.yaml"
        assert OmegaConf.load(config_file).defaults.plugin_manager == "zinit"
        assert manager.get_config_value("defaults.plugin_manager") == "zinit"

    def test_set_system_config_value(self, isolated_config):
        manager = ConfigManager()

        manager.set_system_config_value("defaults.shell", "fish")

        assert (isolated_config / "system" / "termforge" / "config.yaml").exists()
        assert manager.get_config_value("defaults.shell") == "fish"

    def test_library_paths(self, monkeypatch):
        monkeypatch.setenv("TERMFORGE_TEST_ROOT", "/srv/resources")
        manager = ConfigManager()
        manager.set_user_config_value("library.paths", ["$TERMFORGE_TEST_ROOT/team", "~/mine"])

        paths = manager.get_library_paths()

        assert paths[0] == Path("/srv/resources/team")
        assert paths[1] == Path.home() / "mine"

    def test_library_paths_single_string(self):
        manager = ConfigManager()
        manager.set_user_config_value("library.paths", "/srv/resources")

        assert manager.get_library_paths() == [Path("/srv/resources")]

    def test_create_user_config(self, isolated_config):
        manager = ConfigManager()

        config_file = manager.create_user_config()

        assert config_file == isolated_config / "config" / "termforge" / "config.yaml"
        assert OmegaConf.load(config_file).defaults.palette == "tokyonight"

        with pytest.raises(click.ClickException, match="already exists"):
            manager.create_user_config()

        assert manager.create_user_config(overwrite=True) == config_file

    def test_config_files(self, isolated_config):
        files = ConfigManager().get_config_files()

        assert files["system_0"] == isolated_config / "system" / "termforge" / "config.yaml"
        assert files["user"] == isolated_config / "config" / "termforge" / "config.yaml"


class TestSetupLogging:
    """Test verbosity to log level mapping."""

    @pytest.mark.parametrize(
        "verbosity,level",
        [
            (0, logging.ERROR),
            (1, logging.WARNING),
            (2, logging.INFO),
            (3, logging.DEBUG),
            (5, logging.DEBUG),
        ],
    )
    def test_levels(self, verbosity, level):
        setup_logging(verbosity)

        assert logging.getLogger().level == level

    def test_verbosity_from_config(self):
        config_manager.set_user_config_value("verbosity", 2)

        setup_logging()

        assert logging.getLogger().level == logging.INFO
