"""
Configuration package for termforge.

Public API:
- ConfigManager: XDG config loading and merging
- config_manager: Process-wide ConfigManager instance
- setup_logging: Map -v count to a logging level
"""

from .manager import DEFAULT_CONFIG, ConfigManager, config_manager, setup_logging

__all__ = ["DEFAULT_CONFIG", "ConfigManager", "config_manager", "setup_logging"]
