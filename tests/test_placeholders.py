"""
Tests for ${theme.X} placeholder resolution and WezTerm theme colors.
"""

import pytest

from termforge.models import ColorConfig, WezTermConfig
from termforge.palette.palette import Palette
from termforge.resolve import (
    ThemeResolutionError,
    apply_theme_colors,
    find_unresolved,
    palette_color_config,
    resolve_theme_vars,
)
from termforge.resolve.placeholders import palette_key


class TestResolveThemeVars:
    """Test placeholder substitution."""

    def test_semantic_key(self, palette):
        assert resolve_theme_vars("bold ${theme.primary}", palette) == "bold #7aa2f7"

    def test_alias_to_ansi_key(self, palette):
        assert resolve_theme_vars("${theme.red}", palette) == "#f7768e"

    def test_third_party_alias(self, palette):
        # crust -> bg, text -> fg
        assert resolve_theme_vars("${theme.crust} ${theme.text}", palette) == "#1a1b26 #c0caf5"

    def test_terminal_view_wins(self):
        palette = Palette(name="p", colors={"ansi_red": "#111111", "red": "#222222"})

        # red maps to ansi_red, which the terminal view derives from "red"
        assert resolve_theme_vars("${theme.red}", palette) == "#222222"
        assert resolve_theme_vars("${theme.ansi_red}", palette) == "#222222"

    def test_falls_back_to_semantic(self, palette):
        # "comment" resolves through the semantic colors
        assert resolve_theme_vars("${theme.comment}", palette) == "#565f89"

    def test_unknown_placeholder_is_left_verbatim(self, palette):
        text = "fg:${theme.nonexistent} bg:${theme.bg}"

        assert resolve_theme_vars(text, palette) == "fg:${theme.nonexistent} bg:#1a1b26"

    def test_text_without_placeholders(self, palette):
        assert resolve_theme_vars("$directory$character", palette) == "$directory$character"
        assert resolve_theme_vars("", palette) == ""

    def test_other_variables_untouched(self, palette):
        assert resolve_theme_vars("⇡${count} ${theme.fg}", palette) == "⇡${count} #c0caf5"

    def test_round_trip(self, palette):
        text = "[$symbol]($style) ${theme.primary} ${theme.success}"
        resolved = resolve_theme_vars(text, palette)

        assert find_unresolved(resolved) == []
        assert "#7aa2f7" in resolved
        assert "#9ece6a" in resolved

    def test_palette_key(self):
        assert palette_key("red") == "ansi_red"
        assert palette_key("surface0") == "bg_highlight"
        assert palette_key("custom") == "custom"


class TestFindUnresolved:
    """Test detection of leftover placeholders."""

    def test_in_order(self):
        assert find_unresolved("${theme.a} x ${theme.b} ${theme.a}") == ["a", "b", "a"]

    def test_none(self):
        assert find_unresolved("plain") == []
        assert find_unresolved(None) == []


class TestApplyThemeColors:
    """Test filling WezTerm colors from a palette."""

    def test_theme_ref_fills_colors(self, palette):
        config = WezTermConfig(name="work", theme_ref="tokyonight")

        themed = apply_theme_colors(config, palette)

        assert themed.colors.background == "#1a1b26"
        assert themed.colors.foreground == "#c0caf5"
        assert len(themed.colors.ansi) == 8
        assert len(themed.colors.brights) == 8
        assert themed.colors.ansi[1] == "#f7768e"
        # The input config is not modified
        assert config.colors is None

    def test_theme_ref_overrides_literal_colors(self, palette):
        config = WezTermConfig(
            name="work", theme_ref="tokyonight", colors=ColorConfig(background="#000000")
        )

        assert apply_theme_colors(config, palette).colors.background == "#1a1b26"

    def test_without_theme_ref(self, palette):
        config = WezTermConfig(name="work", colors=ColorConfig(background="#000000"))

        assert apply_theme_colors(config, palette) is config

    def test_palette_without_colors(self):
        with pytest.raises(ThemeResolutionError, match="no terminal colors"):
            palette_color_config(Palette(name="empty"))

    def test_fallbacks_for_sparse_palette(self):
        colors = palette_color_config(Palette(name="sparse", colors={"bg": "#101010"}))

        assert colors.background == "#101010"
        assert colors.foreground == "#c0caf5"
        assert colors.selection_bg == "#283457"
