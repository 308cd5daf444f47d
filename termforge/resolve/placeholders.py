"""
Resolution of ``${theme.<name>}`` placeholders against a palette.

Names first go through a fixed alias table (so ``${theme.red}`` means the
palette's ANSI red and Catppuccin-style names like ``${theme.lavender}`` work
with any palette). Names without an alias are used as palette keys directly.
The terminal color view is consulted before the semantic one.

Substitution is best effort: a placeholder that cannot be resolved is left in
the text unchanged. Callers who want to fail on leftovers can check the result
with ``find_unresolved``.
"""

import re
from types import MappingProxyType
from typing import List

from ..palette.palette import Palette

THEME_VAR_RE = re.compile(r"\$\{theme\.([a-zA-Z_][a-zA-Z0-9_]*)\}")

THEME_VAR_ALIASES = MappingProxyType(
    {
        # Background/foreground
        "bg": "bg",
        "fg": "fg",
        # Accents
        "primary": "primary",
        "secondary": "secondary",
        "accent": "accent",
        # Standard colors map onto the ANSI view
        "red": "ansi_red",
        "green": "ansi_green",
        "yellow": "ansi_yellow",
        "blue": "ansi_blue",
        "magenta": "ansi_magenta",
        "cyan": "ansi_cyan",
        "black": "ansi_black",
        "white": "ansi_white",
        "bright_red": "ansi_bright_red",
        "bright_green": "ansi_bright_green",
        "bright_yellow": "ansi_bright_yellow",
        "bright_blue": "ansi_bright_blue",
        "bright_magenta": "ansi_bright_magenta",
        "bright_cyan": "ansi_bright_cyan",
        "bright_black": "ansi_bright_black",
        "bright_white": "ansi_bright_white",
        # Diagnostics
        "error": "error",
        "warning": "warning",
        "info": "info",
        "hint": "hint",
        "success": "success",
        # UI
        "comment": "comment",
        "border": "border",
        # Catppuccin-style names
        "crust": "bg",
        "mantle": "bg_dark",
        "base": "bg",
        "surface0": "bg_highlight",
        "surface1": "bg_highlight",
        "surface2": "bg_highlight",
        "text": "fg",
        "subtext0": "comment",
        "subtext1": "comment",
        "overlay0": "border",
        "overlay1": "border",
        "overlay2": "border",
        "lavender": "ansi_bright_magenta",
        "sky": "ansi_cyan",
        "sapphire": "ansi_blue",
        "teal": "teal",
        "peach": "orange",
        "maroon": "ansi_red",
        "pink": "pink",
        "mauve": "ansi_magenta",
        "flamingo": "pink",
        "rosewater": "fg",
    }
)


def palette_key(name: str) -> str:
    """Map a placeholder name to the palette key it refers to."""
    return THEME_VAR_ALIASES.get(name, name)


def resolve_theme_vars(text: str, palette: Palette) -> str:
    """Replace every resolvable ``${theme.X}`` in ``text``."""
    if not text or "${theme." not in text:
        return text
    terminal = palette.terminal_colors()

    def _replace(match):
        key = palette_key(match.group(1))
        return terminal.get(key) or palette.get(key) or match.group(0)

    return THEME_VAR_RE.sub(_replace, text)


def find_unresolved(text: str) -> List[str]:
    """Placeholder names still present in ``text``, in order of appearance."""
    return [match.group(1) for match in THEME_VAR_RE.finditer(text or "")]
