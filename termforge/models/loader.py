"""
Resource document loader.

Turns kubectl-style YAML documents into termforge model objects:

    apiVersion: devopsmaestro.io/v1
    kind: TerminalPackage
    metadata:
      name: developer
    spec:
      extends: core
      plugins: [fzf]

Supported kinds: TerminalPackage, TerminalPlugin, TerminalPrompt,
TerminalShell, TerminalProfile, WeztermConfig and Palette. Documents are
validated here (required kind and name, enumerated sub-types) so that
resolvers and renderers can trust what they receive.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

import yaml

from ..palette.palette import Palette, PaletteError
from .options import parse_option, parse_options
from .package import Package
from .plugin import (
    DEFAULT_LOAD_MODE,
    DEFAULT_MANAGER,
    LOAD_MODES,
    MANAGERS,
    Plugin,
)
from .profile import Profile
from .prompt import PROMPT_TYPES, CharacterConfig, ModuleConfig, PromptDefinition
from .shell import (
    SHELL_TYPES,
    Alias,
    EnvVar,
    HistoryConfig,
    ShellDefinition,
    ShellFunction,
    ShellKeybinding,
)
from .wezterm import (
    DEFAULT_FONT_FAMILY,
    DEFAULT_FONT_SIZE,
    ColorConfig,
    FontConfig,
    Keybinding,
    LeaderKey,
    PaneConfig,
    TabBarConfig,
    WezTermConfig,
    WezTermPlugin,
    WindowConfig,
)

logger = logging.getLogger(__name__)

Resource = Union[
    Package,
    Plugin,
    Profile,
    PromptDefinition,
    ShellDefinition,
    WezTermConfig,
    Palette,
]


class ResourceLoadError(Exception):
    """Raised when a resource document is malformed or fails validation."""

    pass


def _string_list(value: Any, field_name: str) -> Tuple[str, ...]:
    """Accept either a single string or a list of strings."""
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    if isinstance(value, (list, tuple)):
        return tuple(str(item) for item in value)
    raise ResourceLoadError(f"{field_name} must be a string or a list of strings")


def _mapping(value: Any, field_name: str) -> Dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ResourceLoadError(f"{field_name} must be a mapping")
    return value


def _str(value: Any) -> str:
    return "" if value is None else str(value)


def _enabled(spec: Dict[str, Any]) -> bool:
    enabled = spec.get("enabled")
    return True if enabled is None else bool(enabled)


def _metadata_fields(metadata: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "description": _str(metadata.get("description")),
        "category": _str(metadata.get("category")),
        "tags": _string_list(metadata.get("tags"), "metadata.tags"),
    }


def _create_package(metadata: Dict[str, Any], spec: Dict[str, Any]) -> Package:
    return Package(
        name=metadata["name"],
        extends=_str(spec.get("extends")),
        plugins=_string_list(spec.get("plugins"), "spec.plugins"),
        prompts=_string_list(spec.get("prompts"), "spec.prompts"),
        profiles=_string_list(spec.get("profiles"), "spec.profiles"),
        enabled=_enabled(spec),
        **_metadata_fields(metadata),
    )


def _create_plugin(metadata: Dict[str, Any], spec: Dict[str, Any]) -> Plugin:
    repo = _str(spec.get("repo"))
    source = _str(spec.get("source"))
    ohmyzsh_plugin = _str(spec.get("ohmyzshPlugin"))
    if not (repo or source or ohmyzsh_plugin):
        raise ResourceLoadError("must specify repo, source, or ohmyzshPlugin")

    manager = _str(spec.get("manager")) or DEFAULT_MANAGER
    if manager not in MANAGERS:
        raise ResourceLoadError(f"invalid manager: {manager}")
    load_mode = _str(spec.get("loadMode")) or DEFAULT_LOAD_MODE
    if load_mode not in LOAD_MODES:
        raise ResourceLoadError(f"invalid loadMode: {load_mode}")

    env = _mapping(spec.get("env"), "spec.env")
    return Plugin(
        name=metadata["name"],
        repo=repo,
        source=source,
        branch=_str(spec.get("branch")),
        tag=_str(spec.get("tag")),
        manager=manager,
        load_mode=load_mode,
        ohmyzsh_plugin=ohmyzsh_plugin,
        source_files=_string_list(spec.get("sourceFiles"), "spec.sourceFiles"),
        config=_str(spec.get("config")),
        env={str(k): _str(v) for k, v in env.items()},
        dependencies=_string_list(spec.get("dependencies"), "spec.dependencies"),
        priority=int(spec.get("priority") or 0),
        enabled=_enabled(spec),
        **_metadata_fields(metadata),
    )


MODULE_FIELDS = ("disabled", "format", "style", "symbol")


def _create_module(name: str, data: Any) -> ModuleConfig:
    data = _mapping(data, f"spec.modules.{name}")
    known = set(MODULE_FIELDS) | {"options"}
    options = dict(_mapping(data.get("options"), f"spec.modules.{name}.options"))
    for key in MODULE_FIELDS:
        if key in options:
            raise ResourceLoadError(
                f"spec.modules.{name}.options.{key}: set {key} on the module itself"
            )
    # Unknown top-level keys are treated as options too
    for key, value in data.items():
        if key not in known:
            options[key] = value
    return ModuleConfig(
        disabled=bool(data.get("disabled", False)),
        format=_str(data.get("format")),
        style=_str(data.get("style")),
        symbol=_str(data.get("symbol")),
        options=parse_options(options),
    )


def _create_prompt(metadata: Dict[str, Any], spec: Dict[str, Any]) -> PromptDefinition:
    prompt_type = _str(spec.get("type"))
    if not prompt_type:
        raise ResourceLoadError("missing spec.type")
    if prompt_type not in PROMPT_TYPES:
        raise ResourceLoadError(
            f"invalid type: {prompt_type} (must be starship, powerlevel10k, or oh-my-posh)"
        )

    modules = {
        str(name): _create_module(str(name), data)
        for name, data in _mapping(spec.get("modules"), "spec.modules").items()
    }

    character = None
    if spec.get("character"):
        char_data = _mapping(spec["character"], "spec.character")
        character = CharacterConfig(
            success_symbol=_str(char_data.get("success_symbol")),
            error_symbol=_str(char_data.get("error_symbol")),
            vicmd_symbol=_str(char_data.get("vicmd_symbol")),
            viins_symbol=_str(char_data.get("viins_symbol")),
        )

    colors = _mapping(spec.get("colors"), "spec.colors")
    return PromptDefinition(
        name=metadata["name"],
        type=prompt_type,
        add_newline=bool(spec.get("addNewline", False)),
        palette=_str(spec.get("palette")),
        format=_str(spec.get("format")),
        modules=modules,
        character=character,
        palette_ref=_str(spec.get("paletteRef")),
        colors={str(k): _str(v) for k, v in colors.items()},
        raw_config=_str(spec.get("rawConfig")),
        enabled=_enabled(spec),
        **_metadata_fields(metadata),
    )


def _create_shell(metadata: Dict[str, Any], spec: Dict[str, Any]) -> ShellDefinition:
    shell_type = _str(spec.get("shellType"))
    if not shell_type:
        raise ResourceLoadError("missing spec.shellType")
    if shell_type not in SHELL_TYPES:
        raise ResourceLoadError(
            f"invalid shellType: {shell_type} (must be zsh, bash, or fish)"
        )

    history = None
    if spec.get("history"):
        history_data = _mapping(spec["history"], "spec.history")
        history = HistoryConfig(
            size=int(history_data.get("size") or 0),
            file=_str(history_data.get("file")),
            ignore_dups=bool(history_data.get("ignore_dups", False)),
            ignore_space=bool(history_data.get("ignore_space", False)),
            share_history=bool(history_data.get("share_history", False)),
            extended_format=bool(history_data.get("extended_format", False)),
        )

    return ShellDefinition(
        name=metadata["name"],
        shell_type=shell_type,
        env=tuple(
            EnvVar(
                name=_str(e.get("name")),
                value=_str(e.get("value")),
                description=_str(e.get("description")),
                expand=bool(e.get("expand", False)),
            )
            for e in spec.get("env") or []
        ),
        aliases=tuple(
            Alias(
                name=_str(a.get("name")),
                command=_str(a.get("command")),
                description=_str(a.get("description")),
                global_alias=bool(a.get("global", False)),
            )
            for a in spec.get("aliases") or []
        ),
        functions=tuple(
            ShellFunction(
                name=_str(f.get("name")),
                body=_str(f.get("body")),
                description=_str(f.get("description")),
            )
            for f in spec.get("functions") or []
        ),
        path_prepend=_string_list(spec.get("pathPrepend"), "spec.pathPrepend"),
        path_append=_string_list(spec.get("pathAppend"), "spec.pathAppend"),
        options=_string_list(spec.get("options"), "spec.options"),
        history=history,
        keybindings=tuple(
            ShellKeybinding(
                key=_str(k.get("key")),
                widget=_str(k.get("widget")),
                command=_str(k.get("command")),
                description=_str(k.get("description")),
            )
            for k in spec.get("keybindings") or []
        ),
        raw_config=_str(spec.get("rawConfig")),
        enabled=_enabled(spec),
        **_metadata_fields(metadata),
    )


def _create_profile(metadata: Dict[str, Any], spec: Dict[str, Any]) -> Profile:
    return Profile(
        name=metadata["name"],
        prompt_ref=_str(spec.get("promptRef")),
        plugin_refs=_string_list(spec.get("pluginRefs"), "spec.pluginRefs"),
        shell_ref=_str(spec.get("shellRef")),
        theme_ref=_str(spec.get("themeRef")),
        enabled=_enabled(spec),
        **_metadata_fields(metadata),
    )


def _create_keybinding(data: Any, field_name: str) -> Keybinding:
    data = _mapping(data, field_name)
    key = _str(data.get("key"))
    action = _str(data.get("action"))
    if not key:
        raise ResourceLoadError(f"{field_name}: missing key")
    if not action.isidentifier():
        raise ResourceLoadError(
            f"{field_name}: action must be a WezTerm action name, got {action!r}"
        )
    args = data.get("args")
    return Keybinding(
        key=key,
        mods=_str(data.get("mods")),
        action=action,
        args=None if args is None else parse_option(args),
    )


def _create_wezterm(metadata: Dict[str, Any], spec: Dict[str, Any]) -> WezTermConfig:
    font_data = _mapping(spec.get("font"), "spec.font")
    font = FontConfig(
        family=_str(font_data.get("family", DEFAULT_FONT_FAMILY)),
        size=font_data.get("size", DEFAULT_FONT_SIZE) or 0,
    )

    window_data = _mapping(spec.get("window"), "spec.window")
    window = WindowConfig(
        opacity=float(window_data.get("opacity", 1.0)),
        blur=int(window_data.get("blur") or 0),
        decorations=_str(window_data.get("decorations")),
        initial_rows=int(window_data.get("initialRows") or 0),
        initial_cols=int(window_data.get("initialCols") or 0),
        close_on_exit=_str(window_data.get("closeOnExit")),
        padding_left=int(window_data.get("paddingLeft") or 0),
        padding_right=int(window_data.get("paddingRight") or 0),
        padding_top=int(window_data.get("paddingTop") or 0),
        padding_bottom=int(window_data.get("paddingBottom") or 0),
    )

    colors = None
    if spec.get("colors"):
        color_data = _mapping(spec["colors"], "spec.colors")
        colors = ColorConfig(
            foreground=_str(color_data.get("foreground")),
            background=_str(color_data.get("background")),
            cursor_bg=_str(color_data.get("cursor_bg")),
            cursor_fg=_str(color_data.get("cursor_fg")),
            cursor_border=_str(color_data.get("cursor_border")),
            selection_bg=_str(color_data.get("selection_bg")),
            selection_fg=_str(color_data.get("selection_fg")),
            ansi=_string_list(color_data.get("ansi"), "spec.colors.ansi"),
            brights=_string_list(color_data.get("brights"), "spec.colors.brights"),
        )

    leader = None
    if spec.get("leader"):
        leader_data = _mapping(spec["leader"], "spec.leader")
        leader = LeaderKey(
            key=_str(leader_data.get("key")),
            mods=_str(leader_data.get("mods")),
            timeout=int(leader_data.get("timeout") or 0),
        )

    tab_bar = None
    if spec.get("tabBar"):
        tab_data = _mapping(spec["tabBar"], "spec.tabBar")
        tab_bar = TabBarConfig(
            enabled=bool(tab_data.get("enabled", True)),
            position=_str(tab_data.get("position")),
            max_width=int(tab_data.get("maxWidth") or 0),
            show_new_tab=bool(tab_data.get("showNewTab", False)),
            fancy_tab_bar=bool(tab_data.get("fancyTabBar", False)),
            hide_if_only_one_tab=bool(tab_data.get("hideTabBarIfOnly", False)),
        )

    pane = None
    if spec.get("pane"):
        pane_data = _mapping(spec["pane"], "spec.pane")
        pane = PaneConfig(
            inactive_saturation=pane_data.get("inactiveSaturation") or 0,
            inactive_brightness=pane_data.get("inactiveBrightness") or 0,
        )

    key_tables = {
        str(name): tuple(
            _create_keybinding(k, f"spec.keyTables.{name}[{i}]")
            for i, k in enumerate(keys or [])
        )
        for name, keys in _mapping(spec.get("keyTables"), "spec.keyTables").items()
    }

    return WezTermConfig(
        name=metadata["name"],
        font=font,
        window=window,
        colors=colors,
        theme_ref=_str(spec.get("themeRef")),
        leader=leader,
        keys=tuple(
            _create_keybinding(k, f"spec.keys[{i}]")
            for i, k in enumerate(spec.get("keys") or [])
        ),
        key_tables=key_tables,
        tab_bar=tab_bar,
        pane=pane,
        plugins=tuple(
            WezTermPlugin(
                name=_str(p.get("name")),
                source=_str(p.get("source")),
                config=parse_options(_mapping(p.get("config"), "plugin config")),
            )
            for p in spec.get("plugins") or []
        ),
        scrollback=int(spec.get("scrollback") or 0),
        workspace=_str(spec.get("workspace")),
        enabled=_enabled(spec),
        **_metadata_fields(metadata),
    )


def _create_palette(metadata: Dict[str, Any], spec: Dict[str, Any]) -> Palette:
    palette = Palette.from_dict({"metadata": metadata, "spec": spec})
    try:
        palette.validate()
    except PaletteError as e:
        raise ResourceLoadError(str(e)) from e
    return palette


KIND_FACTORIES = {
    "TerminalPackage": _create_package,
    "TerminalPlugin": _create_plugin,
    "TerminalPrompt": _create_prompt,
    "TerminalShell": _create_shell,
    "TerminalProfile": _create_profile,
    "WeztermConfig": _create_wezterm,
    "Palette": _create_palette,
}


def load_document(data: Any) -> Resource:
    """Validate one parsed YAML document and build its model object."""
    if not isinstance(data, dict):
        raise ResourceLoadError("resource document must be a mapping")

    kind = data.get("kind")
    if not kind:
        raise ResourceLoadError("missing kind")
    factory = KIND_FACTORIES.get(kind)
    if factory is None:
        raise ResourceLoadError(
            f"unknown kind: {kind} (expected one of {', '.join(sorted(KIND_FACTORIES))})"
        )
    if not data.get("apiVersion"):
        logger.debug(f"{kind} document has no apiVersion")

    metadata = _mapping(data.get("metadata"), "metadata")
    if not metadata.get("name"):
        raise ResourceLoadError("missing metadata.name")
    metadata = dict(metadata, name=str(metadata["name"]))
    spec = _mapping(data.get("spec"), "spec")

    try:
        return factory(metadata, spec)
    except (TypeError, ValueError, AttributeError) as e:
        raise ResourceLoadError(
            f"invalid {kind} '{metadata['name']}': {e}"
        ) from e


def load_documents(text: str) -> List[Resource]:
    """Parse a YAML stream that may contain several documents."""
    try:
        documents = [doc for doc in yaml.safe_load_all(text) if doc is not None]
    except yaml.YAMLError as e:
        raise ResourceLoadError(f"failed to parse YAML: {e}") from e
    return [load_document(doc) for doc in documents]


def load_file(path: Union[str, Path]) -> List[Resource]:
    path = Path(path).expanduser()
    logger.debug(f"Loading resources from {path}")
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ResourceLoadError(f"failed to read {path}: {e}") from e
    try:
        return load_documents(text)
    except ResourceLoadError as e:
        raise ResourceLoadError(f"{path}: {e}") from e
