"""
Palette package for termforge.

Package Structure:
- palette.py: Palette model, key constants, terminal color derivation
- library.py: Built-in and user palette discovery

Public API:
- Palette: Named color mapping with semantic and terminal views
- PaletteLibrary: Name-indexed palette collection
- PaletteError, PaletteNotFoundError: Palette failures

Example Usage:
    from termforge.palette import PaletteLibrary

    palette = PaletteLibrary().get("tokyonight")
    palette.terminal_colors()["ansi_red"]
"""

from .library import PaletteLibrary
from .palette import (
    Palette,
    PaletteError,
    PaletteNotFoundError,
    is_valid_hex_color,
    normalize_hex_color,
)

__all__ = [
    "Palette",
    "PaletteError",
    "PaletteLibrary",
    "PaletteNotFoundError",
    "is_valid_hex_color",
    "normalize_hex_color",
]
