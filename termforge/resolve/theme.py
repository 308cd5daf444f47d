"""Populate WezTerm color tables from a palette referenced by ``theme_ref``."""

import dataclasses
import logging

from ..models.wezterm import ColorConfig, WezTermConfig
from ..palette import palette as keys
from ..palette.palette import Palette

logger = logging.getLogger(__name__)

# Tokyo Night values used for any key the palette cannot supply
FALLBACK_FOREGROUND = "#c0caf5"
FALLBACK_BACKGROUND = "#1a1b26"
FALLBACK_SELECTION = "#283457"
FALLBACK_ANSI = (
    "#15161e",
    "#f7768e",
    "#9ece6a",
    "#e0af68",
    "#7aa2f7",
    "#bb9af7",
    "#7dcfff",
    "#a9b1d6",
)
FALLBACK_BRIGHTS = (
    "#414868",
    "#f7768e",
    "#9ece6a",
    "#e0af68",
    "#7aa2f7",
    "#bb9af7",
    "#7dcfff",
    "#c0caf5",
)


class ThemeResolutionError(Exception):
    """Raised when a palette cannot supply terminal colors."""

    pass


def palette_color_config(palette: Palette) -> ColorConfig:
    """Build a WezTerm color table from a palette's terminal view."""
    terminal = palette.terminal_colors()
    if not terminal:
        raise ThemeResolutionError(f"theme {palette.name} has no terminal colors")

    def color(key, fallback):
        return terminal.get(key) or fallback

    foreground = terminal.get(keys.FG, "")
    background = terminal.get(keys.BG, "")
    return ColorConfig(
        foreground=color(keys.FG, FALLBACK_FOREGROUND),
        background=color(keys.BG, FALLBACK_BACKGROUND),
        cursor_bg=color(keys.CURSOR, foreground),
        cursor_fg=color(keys.CURSOR_TEXT, background),
        selection_bg=color(keys.SELECTION, FALLBACK_SELECTION),
        selection_fg=color(keys.SELECTION_TEXT, foreground),
        ansi=tuple(
            color(key, fallback) for key, fallback in zip(keys.ANSI_KEYS, FALLBACK_ANSI)
        ),
        brights=tuple(
            color(key, fallback)
            for key, fallback in zip(keys.ANSI_BRIGHT_KEYS, FALLBACK_BRIGHTS)
        ),
    )


def apply_theme_colors(config: WezTermConfig, palette: Palette) -> WezTermConfig:
    """
    Return a copy of ``config`` whose colors come from ``palette``.

    Configs without a ``theme_ref`` are returned unchanged.
    """
    if not config.theme_ref:
        return config
    logger.debug(f"Resolving theme '{config.theme_ref}' with palette {palette.name}")
    return dataclasses.replace(config, colors=palette_color_config(palette))
