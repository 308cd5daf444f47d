"""
Config renderers for termforge.

Package Structure:
- base.py: RenderError and file output helper
- starship.py: Prompt definitions -> starship.toml
- wezterm.py: WezTerm configs -> wezterm.lua
- shell.py: Plugins and shell definitions -> zsh/bash/fish snippets

Every renderer builds its whole output in memory and returns it; nothing is
written unless render_to_file is called.
"""

from .base import RenderError, write_output
from .shell import PluginRenderer, ShellRenderer
from .starship import StarshipRenderer
from .wezterm import LuaRenderer, lua_string

__all__ = [
    "LuaRenderer",
    "PluginRenderer",
    "RenderError",
    "ShellRenderer",
    "StarshipRenderer",
    "lua_string",
    "write_output",
]
