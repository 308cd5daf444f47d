"""WezTerm emulator configuration."""

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from .options import OptionValue, to_python

API_VERSION = "devopsmaestro.dev/v1alpha1"

DEFAULT_FONT_FAMILY = "MesloLGS Nerd Font Mono"
DEFAULT_FONT_SIZE = 14


@dataclass(frozen=True)
class FontConfig:
    family: str = ""
    size: float = 0


@dataclass(frozen=True)
class WindowConfig:
    opacity: float = 1.0
    blur: int = 0
    decorations: str = ""
    initial_rows: int = 0
    initial_cols: int = 0
    close_on_exit: str = ""
    padding_left: int = 0
    padding_right: int = 0
    padding_top: int = 0
    padding_bottom: int = 0

    @property
    def has_padding(self) -> bool:
        return any(
            (self.padding_left, self.padding_right, self.padding_top, self.padding_bottom)
        )


@dataclass(frozen=True)
class ColorConfig:
    foreground: str = ""
    background: str = ""
    cursor_bg: str = ""
    cursor_fg: str = ""
    cursor_border: str = ""
    selection_bg: str = ""
    selection_fg: str = ""
    ansi: Tuple[str, ...] = ()
    brights: Tuple[str, ...] = ()


@dataclass(frozen=True)
class LeaderKey:
    key: str
    mods: str = ""
    timeout: int = 0  # milliseconds


@dataclass(frozen=True)
class Keybinding:
    key: str
    action: str
    mods: str = ""
    args: Optional[OptionValue] = None


@dataclass(frozen=True)
class TabBarConfig:
    enabled: bool = True
    position: str = ""  # "Top" or "Bottom"
    max_width: int = 0
    show_new_tab: bool = False
    fancy_tab_bar: bool = False
    hide_if_only_one_tab: bool = False


@dataclass(frozen=True)
class PaneConfig:
    inactive_saturation: float = 0
    inactive_brightness: float = 0


@dataclass(frozen=True)
class WezTermPlugin:
    name: str
    source: str
    config: Dict[str, OptionValue] = field(default_factory=dict)


@dataclass(frozen=True)
class WezTermConfig:
    name: str
    description: str = ""
    font: FontConfig = field(default_factory=FontConfig)
    window: WindowConfig = field(default_factory=WindowConfig)
    colors: Optional[ColorConfig] = None
    theme_ref: str = ""
    leader: Optional[LeaderKey] = None
    keys: Tuple[Keybinding, ...] = ()
    key_tables: Dict[str, Tuple[Keybinding, ...]] = field(default_factory=dict)
    tab_bar: Optional[TabBarConfig] = None
    pane: Optional[PaneConfig] = None
    plugins: Tuple[WezTermPlugin, ...] = ()
    scrollback: int = 0
    workspace: str = ""
    category: str = ""
    tags: Tuple[str, ...] = ()
    enabled: bool = True

    def to_document(self) -> dict:
        metadata = {"name": self.name}
        if self.description:
            metadata["description"] = self.description
        if self.category:
            metadata["category"] = self.category
        if self.tags:
            metadata["tags"] = list(self.tags)

        window = self.window
        spec = {
            "font": {"family": self.font.family, "size": self.font.size},
            "window": _compact(
                {
                    "opacity": window.opacity,
                    "blur": window.blur,
                    "decorations": window.decorations,
                    "initialRows": window.initial_rows,
                    "initialCols": window.initial_cols,
                    "closeOnExit": window.close_on_exit,
                    "paddingLeft": window.padding_left,
                    "paddingRight": window.padding_right,
                    "paddingTop": window.padding_top,
                    "paddingBottom": window.padding_bottom,
                }
            ),
        }
        if self.colors is not None:
            colors = _compact(vars(self.colors))
            for key in ("ansi", "brights"):
                if key in colors:
                    colors[key] = list(colors[key])
            spec["colors"] = colors
        if self.theme_ref:
            spec["themeRef"] = self.theme_ref
        if self.leader is not None:
            spec["leader"] = _compact(vars(self.leader))
        if self.keys:
            spec["keys"] = [_key_dict(k) for k in self.keys]
        if self.key_tables:
            spec["keyTables"] = {
                name: [_key_dict(k) for k in keys]
                for name, keys in self.key_tables.items()
            }
        if self.tab_bar is not None:
            tab_bar = self.tab_bar
            spec["tabBar"] = {
                "enabled": tab_bar.enabled,
                **_compact(
                    {
                        "position": tab_bar.position,
                        "maxWidth": tab_bar.max_width,
                        "showNewTab": tab_bar.show_new_tab,
                        "fancyTabBar": tab_bar.fancy_tab_bar,
                        "hideTabBarIfOnly": tab_bar.hide_if_only_one_tab,
                    }
                ),
            }
        if self.pane is not None:
            spec["pane"] = _compact(
                {
                    "inactiveSaturation": self.pane.inactive_saturation,
                    "inactiveBrightness": self.pane.inactive_brightness,
                }
            )
        if self.plugins:
            spec["plugins"] = [
                _compact(
                    {
                        "name": p.name,
                        "source": p.source,
                        "config": {k: to_python(v) for k, v in p.config.items()},
                    }
                )
                for p in self.plugins
            ]
        if self.scrollback:
            spec["scrollback"] = self.scrollback
        if self.workspace:
            spec["workspace"] = self.workspace
        if not self.enabled:
            spec["enabled"] = False

        return {
            "apiVersion": API_VERSION,
            "kind": "WeztermConfig",
            "metadata": metadata,
            "spec": spec,
        }


def _key_dict(binding: Keybinding) -> dict:
    data = {"key": binding.key}
    if binding.mods:
        data["mods"] = binding.mods
    data["action"] = binding.action
    if binding.args is not None:
        data["args"] = to_python(binding.args)
    return data


def _compact(data: dict) -> dict:
    return {k: v for k, v in data.items() if v}
