"""
Resource models for termforge.

Package Structure:
- options.py: Typed option values (Scalar, Bool, Number, ValueList, Table)
- package.py: Package and ResolvedComponents
- profile.py: Profiles tying a prompt, plugins and a shell together
- plugin.py: Shell plugin definitions
- prompt.py: Prompt definitions and module settings
- shell.py: Shell env/aliases/functions/history definitions
- wezterm.py: WezTerm emulator configuration
- loader.py: YAML document -> model conversion and validation

Public API:
- load_document, load_documents, load_file: Parse resource documents
- ResourceLoadError: Raised for malformed documents

Example Usage:
    from termforge.models import load_file

    for resource in load_file("developer.yaml"):
        print(resource.name)
"""

from .loader import ResourceLoadError, load_document, load_documents, load_file
from .options import Bool, Number, OptionValue, Scalar, Table, ValueList, parse_option
from .package import COMPONENT_TYPES, Package, ResolvedComponents
from .plugin import Plugin
from .profile import Profile
from .prompt import CharacterConfig, ModuleConfig, PromptDefinition
from .shell import (
    Alias,
    EnvVar,
    HistoryConfig,
    ShellDefinition,
    ShellFunction,
    ShellKeybinding,
)
from .wezterm import (
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

__all__ = [
    # Loading
    "ResourceLoadError",
    "load_document",
    "load_documents",
    "load_file",
    # Option values
    "Bool",
    "Number",
    "OptionValue",
    "Scalar",
    "Table",
    "ValueList",
    "parse_option",
    # Packages
    "COMPONENT_TYPES",
    "Package",
    "ResolvedComponents",
    # Plugins, prompts, shells
    "Plugin",
    "Profile",
    "CharacterConfig",
    "ModuleConfig",
    "PromptDefinition",
    "Alias",
    "EnvVar",
    "HistoryConfig",
    "ShellDefinition",
    "ShellFunction",
    "ShellKeybinding",
    # WezTerm
    "ColorConfig",
    "FontConfig",
    "Keybinding",
    "LeaderKey",
    "PaneConfig",
    "TabBarConfig",
    "WezTermConfig",
    "WezTermPlugin",
    "WindowConfig",
]
