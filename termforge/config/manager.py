"""
Configuration manager for termforge with XDG-compliant paths.

Configuration is merged in precedence order:
    built-in defaults < system ($XDG_CONFIG_DIRS/termforge/config.yaml)
                      < user ($XDG_CONFIG_HOME/termforge/config.yaml)
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import click
from omegaconf import DictConfig, OmegaConf

DEFAULT_CONFIG = {
    "defaults": {
        "palette": "tokyonight",
        "shell": "zsh",
        "plugin_manager": None,
        "plugin_dir": "$HOME/.local/share/zsh/plugins",
    },
    "library": {"paths": []},
    "output": {
        "starship": "~/.config/starship.toml",
        "wezterm": "~/.wezterm.lua",
        "plugins": "~/.config/termforge/plugins.zsh",
    },
    "verbosity": 0,
}


class ConfigManager:
    """Manages termforge configuration loading and merging."""

    def __init__(self):
        self.system_config: Optional[DictConfig] = None
        self.user_config: Optional[DictConfig] = None
        self.merged_config: Optional[DictConfig] = None
        self._load_configs()

    def _get_xdg_config_dirs(self) -> List[Path]:
        """Get XDG config directories in precedence order."""
        xdg_config_dirs = os.environ.get("XDG_CONFIG_DIRS", "/etc/xdg")
        return [Path(d) / "termforge" for d in xdg_config_dirs.split(":") if d]

    def _get_user_config_dir(self) -> Path:
        """Get user config directory following XDG spec."""
        xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
        if xdg_config_home:
            return Path(xdg_config_home) / "termforge"
        return Path.home() / ".config" / "termforge"

    def _load_file(self, config_file: Path, label: str) -> Optional[DictConfig]:
        try:
            return OmegaConf.load(config_file)
        except Exception as e:  # pylint: disable=broad-exception-caught
            click.echo(
                f"Warning: Failed to load {label} config {config_file}: {e}", err=True
            )
            return None

    def _load_system_config(self) -> Optional[DictConfig]:
        """Load system-wide configuration."""
        for config_dir in self._get_xdg_config_dirs():
            config_file = config_dir / "config.yaml"
            if config_file.exists():
                return self._load_file(config_file, "system")
        return None

    def _load_user_config(self) -> Optional[DictConfig]:
        """Load user configuration."""
        config_file = self._get_user_config_dir() / "config.yaml"
        if config_file.exists():
            return self._load_file(config_file, "user")
        return None

    def _load_configs(self):
        """Load and merge all configuration files."""
        self.system_config = self._load_system_config()
        self.user_config = self._load_user_config()

        configs = [OmegaConf.create(DEFAULT_CONFIG)]
        if self.system_config:
            configs.append(self.system_config)
        if self.user_config:
            configs.append(self.user_config)
        self.merged_config = OmegaConf.merge(*configs)

    def reload_configs(self):
        """Reload configuration files."""
        self._load_configs()

    def get_config_files(self) -> Dict[str, Path]:
        """Get paths to all relevant config files."""
        files = {}
        for i, config_dir in enumerate(self._get_xdg_config_dirs()):
            files[f"system_{i}"] = config_dir / "config.yaml"
        files["user"] = self._get_user_config_dir() / "config.yaml"
        return files

    def get_defaults(self) -> Dict[str, Any]:
        """Get default configuration values."""
        if not self.merged_config or "defaults" not in self.merged_config:
            return {}
        return OmegaConf.to_container(self.merged_config.defaults, resolve=True)

    def get_config_value(self, key_path: str) -> Any:
        """Get configuration value by dot-separated path (e.g., 'defaults.palette')."""
        if not self.merged_config:
            return None
        try:
            value = OmegaConf.select(self.merged_config, key_path)
        except Exception:  # pylint: disable=broad-exception-caught
            return None
        if OmegaConf.is_config(value):
            return OmegaConf.to_container(value, resolve=True)
        return value

    def get_library_paths(self) -> List[Path]:
        """Extra resource directories configured by the user."""
        paths = self.get_config_value("library.paths") or []
        if isinstance(paths, str):
            paths = [paths]
        return [Path(os.path.expandvars(p)).expanduser() for p in paths]

    def set_user_config_value(self, key_path: str, value: Any):
        """Set a configuration value in the user config file."""
        self._set_config_value(self._get_user_config_dir() / "config.yaml", key_path, value)

    def set_system_config_value(self, key_path: str, value: Any):
        """Set a configuration value in the system config file."""
        system_config_dirs = self._get_xdg_config_dirs()
        if not system_config_dirs:
            raise click.ClickException("No system config directories found")
        self._set_config_value(system_config_dirs[0] / "config.yaml", key_path, value)

    def _set_config_value(self, config_file: Path, key_path: str, value: Any):
        config_file.parent.mkdir(parents=True, exist_ok=True)
        if config_file.exists():
            config = OmegaConf.load(config_file)
        else:
            config = OmegaConf.create({})

        OmegaConf.update(config, key_path, value, force_add=True)
        OmegaConf.save(config, config_file)
        self.reload_configs()

    def create_user_config(self, overwrite: bool = False) -> Path:
        """Write the built-in defaults to the user config file."""
        config_file = self._get_user_config_dir() / "config.yaml"
        if config_file.exists() and not overwrite:
            raise click.ClickException(
                f"Config file {config_file} already exists (use --force to overwrite)"
            )
        config_file.parent.mkdir(parents=True, exist_ok=True)
        OmegaConf.save(OmegaConf.create(DEFAULT_CONFIG), config_file)
        self.reload_configs()
        return config_file


def setup_logging(verbosity: int = None):
    """
    Configures the logging level based on the verbosity provided by the user.

    Args:
        verbosity (int): The number of '-v' flags used, or from config.
                       - 0: ERROR level (default)
                       - 1: WARNING level
                       - 2: INFO level
                       - 3 or more: DEBUG level
    """
    if verbosity is None:
        verbosity = config_manager.get_config_value("verbosity") or 0

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if verbosity == 1:
        level = logging.WARNING
        format_str = "%(levelname)s: %(message)s"
    elif verbosity == 2:
        level = logging.INFO
        format_str = "%(levelname)s: %(message)s"
    elif verbosity >= 3:
        level = logging.DEBUG
        format_str = "%(levelname)s:%(name)s: %(message)s"
    else:
        level = logging.ERROR
        format_str = "%(levelname)s: %(message)s"

    root_logger.setLevel(level)
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(format_str))
    root_logger.addHandler(handler)


# Global config manager instance
config_manager = ConfigManager()
