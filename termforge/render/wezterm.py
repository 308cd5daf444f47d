"""
WezTerm renderer: WezTermConfig -> wezterm.lua source.

The generated script always starts with the same preamble and ends with
``return config``. Everything in between is plain assignments onto the
config builder. Fields left at their zero value are not written.

Theme lookup is not done here: a config that references a theme must have
had its colors filled in (see ``termforge.resolve.theme``) before rendering.
"""

import logging
from pathlib import Path
from typing import List, Optional, Sequence, Union

from ..models.options import Bool, Number, OptionValue, Scalar, Table, ValueList
from ..models.wezterm import ColorConfig, Keybinding, WezTermConfig
from ..palette.palette import Palette
from ..resolve.placeholders import resolve_theme_vars
from .base import GENERATED_BY, RenderError, comment_lines, write_output

logger = logging.getLogger(__name__)

INDENT = "  "


def lua_string(value: str) -> str:
    """Quote a Lua string, escaping backslashes and double quotes."""
    escaped = (value or "").replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def lua_number(value: Union[int, float]) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int) or float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def lua_value(value: OptionValue, level: int = 0) -> str:
    """Format an option value as a Lua literal."""
    if isinstance(value, Scalar):
        return lua_string(value.value)
    if isinstance(value, Bool):
        return "true" if value.value else "false"
    if isinstance(value, Number):
        return lua_number(value.value)
    if isinstance(value, ValueList):
        return "{ " + ", ".join(lua_value(item, level) for item in value.items) + " }"
    if isinstance(value, Table):
        return lua_table(value, level)
    raise RenderError(f"unsupported value: {value!r}")


def lua_table(table: Table, level: int = 0) -> str:
    """Format a table as a multi-line Lua table literal with sorted keys."""
    if not table.entries:
        return "{}"
    inner = INDENT * (level + 1)
    lines = ["{"]
    for key, value in table.sorted_entries():
        lines.append(f"{inner}{lua_key(key)} = {lua_value(value, level + 1)},")
    lines.append(INDENT * level + "}")
    return "\n".join(lines)


def lua_key(key: str) -> str:
    if key.isidentifier():
        return key
    return f"[{lua_string(key)}]"


class LuaRenderer:
    """Renders WezTerm configurations to Lua."""

    def render(
        self, config: Optional[WezTermConfig], palette: Optional[Palette] = None
    ) -> str:
        """
        Render ``config`` to Lua. When a palette is given, ${theme.X}
        placeholders in string values are resolved first.
        """
        if config is None:
            raise RenderError("config is nil")
        return _LuaDocument(palette).build(config)

    def render_to_file(
        self,
        config: Optional[WezTermConfig],
        path: Union[str, Path],
        palette: Optional[Palette] = None,
    ) -> Path:
        content = self.render(config, palette)
        return write_output(content, path)


class _LuaDocument:
    """Builds one Lua script. A new instance is used for every render."""

    def __init__(self, palette: Optional[Palette]):
        self._palette = palette

    def build(self, config: WezTermConfig) -> str:
        lines: List[str] = [f"-- Generated by {GENERATED_BY} - do not edit"]
        lines.extend(comment_lines(f"WezTerm: {config.name}", marker="--"))
        lines += [
            "",
            'local wezterm = require("wezterm")',
            "local act = wezterm.action",
            "local config = wezterm.config_builder()",
            "",
        ]

        self._write_font(lines, config)
        self._write_window(lines, config)
        if config.colors is not None:
            self._write_colors(lines, config.colors)
        self._write_leader(lines, config)
        if config.keys:
            self._write_keys(lines, config.keys)
        if config.key_tables:
            self._write_key_tables(lines, config)
        self._write_tab_bar(lines, config)
        self._write_pane(lines, config)
        if config.scrollback:
            lines.append(f"config.scrollback_lines = {config.scrollback}")
        if config.workspace:
            lines.append(f"config.default_workspace = {self._str(config.workspace)}")
        if config.scrollback or config.workspace:
            lines.append("")
        self._write_plugins(lines, config)

        lines.append("return config")
        return "\n".join(lines) + "\n"

    def _str(self, value: str) -> str:
        if self._palette is not None:
            value = resolve_theme_vars(value, self._palette)
        return lua_string(value)

    def _value(self, value: OptionValue, level: int = 0) -> str:
        if self._palette is not None:
            value = _resolve_option(value, self._palette)
        return lua_value(value, level)

    def _write_font(self, lines: List[str], config: WezTermConfig):
        font = config.font
        if font.family:
            lines.append(f"config.font = wezterm.font({self._str(font.family)})")
        if font.size:
            lines.append(f"config.font_size = {lua_number(font.size)}")
        if font.family or font.size:
            lines.append("")

    def _write_window(self, lines: List[str], config: WezTermConfig):
        window = config.window
        start = len(lines)
        if window.opacity and window.opacity != 1.0:
            lines.append(
                f"config.window_background_opacity = {lua_number(window.opacity)}"
            )
        if window.blur:
            lines.append(f"config.macos_window_background_blur = {window.blur}")
        if window.decorations:
            lines.append(f"config.window_decorations = {self._str(window.decorations)}")
        if window.initial_rows:
            lines.append(f"config.initial_rows = {window.initial_rows}")
        if window.initial_cols:
            lines.append(f"config.initial_cols = {window.initial_cols}")
        if window.close_on_exit:
            lines.append(
                f"config.exit_behavior = {self._str(window.close_on_exit)}"
            )
        if window.has_padding:
            lines.append("config.window_padding = {")
            lines.append(f"{INDENT}left = {window.padding_left},")
            lines.append(f"{INDENT}right = {window.padding_right},")
            lines.append(f"{INDENT}top = {window.padding_top},")
            lines.append(f"{INDENT}bottom = {window.padding_bottom},")
            lines.append("}")
        if len(lines) > start:
            lines.append("")

    def _write_colors(self, lines: List[str], colors: ColorConfig):
        lines.append("config.colors = {")
        for key in (
            "foreground",
            "background",
            "cursor_bg",
            "cursor_fg",
            "cursor_border",
            "selection_bg",
            "selection_fg",
        ):
            value = getattr(colors, key)
            if value:
                lines.append(f"{INDENT}{key} = {self._str(value)},")
        for key in ("ansi", "brights"):
            values: Sequence[str] = getattr(colors, key)
            if values:
                if len(values) != 8:
                    logger.warning(
                        f"colors.{key} has {len(values)} entries, WezTerm expects 8"
                    )
                rendered = ", ".join(self._str(v) for v in values)
                lines.append(f"{INDENT}{key} = {{ {rendered} }},")
        lines.append("}")
        lines.append("")

    def _write_leader(self, lines: List[str], config: WezTermConfig):
        leader = config.leader
        if leader is None:
            return
        parts = [f"key = {self._str(leader.key)}"]
        if leader.mods:
            parts.append(f"mods = {self._str(leader.mods)}")
        if leader.timeout:
            parts.append(f"timeout_milliseconds = {leader.timeout}")
        lines.append("config.leader = { " + ", ".join(parts) + " }")
        lines.append("")

    def _write_keys(self, lines: List[str], bindings: Sequence[Keybinding]):
        rendered = [self._keybinding(binding) for binding in _valid_bindings(bindings)]
        if not rendered:
            return
        lines.append("config.keys = {")
        for binding in rendered:
            lines.append(f"{INDENT}{binding},")
        lines.append("}")
        lines.append("")

    def _keybinding(self, binding: Keybinding) -> str:
        parts = [f"key = {self._str(binding.key)}"]
        if binding.mods:
            parts.append(f"mods = {self._str(binding.mods)}")
        parts.append(f"action = {self._action(binding)}")
        return "{ " + ", ".join(parts) + " }"

    def _action(self, binding: Keybinding) -> str:
        if binding.args is None:
            return f"act.{binding.action}"
        return f"act.{binding.action}({self._value(binding.args, 1)})"

    def _write_key_tables(self, lines: List[str], config: WezTermConfig):
        lines.append("config.key_tables = {")
        for name in sorted(config.key_tables):
            lines.append(f"{INDENT}{lua_key(name)} = {{")
            for binding in _valid_bindings(config.key_tables[name]):
                lines.append(f"{INDENT * 2}{self._keybinding(binding)},")
            lines.append(f"{INDENT}}},")
        lines.append("}")
        lines.append("")

    def _write_tab_bar(self, lines: List[str], config: WezTermConfig):
        tab_bar = config.tab_bar
        if tab_bar is None:
            return
        lines.append(f"config.enable_tab_bar = {'true' if tab_bar.enabled else 'false'}")
        if tab_bar.position:
            at_bottom = tab_bar.position.lower() == "bottom"
            lines.append(
                f"config.tab_bar_at_bottom = {'true' if at_bottom else 'false'}"
            )
        if tab_bar.max_width:
            lines.append(f"config.tab_max_width = {tab_bar.max_width}")
        if tab_bar.show_new_tab:
            lines.append("config.show_new_tab_button_in_tab_bar = true")
        lines.append(
            f"config.use_fancy_tab_bar = {'true' if tab_bar.fancy_tab_bar else 'false'}"
        )
        if tab_bar.hide_if_only_one_tab:
            lines.append("config.hide_tab_bar_if_only_one_tab = true")
        lines.append("")

    def _write_pane(self, lines: List[str], config: WezTermConfig):
        pane = config.pane
        if pane is None or not (pane.inactive_saturation or pane.inactive_brightness):
            return
        lines.append("config.inactive_pane_hsb = {")
        if pane.inactive_saturation:
            lines.append(f"{INDENT}saturation = {lua_number(pane.inactive_saturation)},")
        if pane.inactive_brightness:
            lines.append(f"{INDENT}brightness = {lua_number(pane.inactive_brightness)},")
        lines.append("}")
        lines.append("")

    def _write_plugins(self, lines: List[str], config: WezTermConfig):
        for plugin in config.plugins:
            if not plugin.source:
                logger.warning(f"Skipping WezTerm plugin '{plugin.name}': no source")
                continue
            var = _lua_identifier(plugin.name or plugin.source)
            lines.append(f"local {var} = wezterm.plugin.require({self._str(plugin.source)})")
            if plugin.config:
                table = Table(tuple(plugin.config.items()))
                lines.append(f"{var}.apply_to_config(config, {self._value(table)})")
            else:
                lines.append(f"{var}.apply_to_config(config)")
            lines.append("")


def _resolve_option(value: OptionValue, palette: Palette) -> OptionValue:
    if isinstance(value, Scalar):
        return Scalar(resolve_theme_vars(value.value, palette))
    if isinstance(value, ValueList):
        return ValueList(tuple(_resolve_option(item, palette) for item in value.items))
    if isinstance(value, Table):
        return Table(
            tuple((k, _resolve_option(v, palette)) for k, v in value.entries),
            labels=value.labels,
        )
    return value


def _lua_identifier(name: str) -> str:
    cleaned = "".join(c if c.isalnum() else "_" for c in name.split("/")[-1])
    if not cleaned or cleaned[0].isdigit():
        cleaned = "plugin_" + cleaned
    return cleaned


def _valid_bindings(bindings: Sequence[Keybinding]) -> List[Keybinding]:
    valid = []
    for binding in bindings:
        if not binding.key:
            logger.warning("Skipping WezTerm keybinding without a key")
        elif not binding.action.isidentifier():
            logger.warning(
                f"Skipping WezTerm keybinding '{binding.key}': "
                f"invalid action {binding.action!r}"
            )
        else:
            valid.append(binding)
    return valid
