"""Shell settings: environment, aliases, functions, PATH, history, keybindings."""

from dataclasses import dataclass
from typing import Optional, Tuple

from .package import API_VERSION

SHELL_TYPES = ("zsh", "bash", "fish")


@dataclass(frozen=True)
class EnvVar:
    name: str
    value: str = ""
    description: str = ""
    expand: bool = False  # allow $VAR expansion in value


@dataclass(frozen=True)
class Alias:
    name: str
    command: str
    description: str = ""
    global_alias: bool = False  # zsh `alias -g`


@dataclass(frozen=True)
class ShellFunction:
    name: str
    body: str
    description: str = ""


@dataclass(frozen=True)
class HistoryConfig:
    size: int = 0
    file: str = ""
    ignore_dups: bool = False
    ignore_space: bool = False
    share_history: bool = False
    extended_format: bool = False


@dataclass(frozen=True)
class ShellKeybinding:
    key: str
    widget: str = ""
    command: str = ""
    description: str = ""


@dataclass(frozen=True)
class ShellDefinition:
    name: str
    shell_type: str = "zsh"
    description: str = ""
    env: Tuple[EnvVar, ...] = ()
    aliases: Tuple[Alias, ...] = ()
    functions: Tuple[ShellFunction, ...] = ()
    path_prepend: Tuple[str, ...] = ()
    path_append: Tuple[str, ...] = ()
    options: Tuple[str, ...] = ()
    history: Optional[HistoryConfig] = None
    keybindings: Tuple[ShellKeybinding, ...] = ()
    raw_config: str = ""
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

        spec = {"shellType": self.shell_type}
        if self.env:
            spec["env"] = [_compact(vars(e)) for e in self.env]
        if self.aliases:
            spec["aliases"] = [
                _compact(
                    {
                        "name": a.name,
                        "command": a.command,
                        "description": a.description,
                        "global": a.global_alias,
                    }
                )
                for a in self.aliases
            ]
        if self.functions:
            spec["functions"] = [_compact(vars(f)) for f in self.functions]
        if self.path_prepend:
            spec["pathPrepend"] = list(self.path_prepend)
        if self.path_append:
            spec["pathAppend"] = list(self.path_append)
        if self.options:
            spec["options"] = list(self.options)
        if self.history is not None:
            spec["history"] = _compact(vars(self.history))
        if self.keybindings:
            spec["keybindings"] = [_compact(vars(k)) for k in self.keybindings]
        if self.raw_config:
            spec["rawConfig"] = self.raw_config
        if not self.enabled:
            spec["enabled"] = False

        return {
            "apiVersion": API_VERSION,
            "kind": "TerminalShell",
            "metadata": metadata,
            "spec": spec,
        }


def _compact(data: dict) -> dict:
    return {k: v for k, v in data.items() if v}
