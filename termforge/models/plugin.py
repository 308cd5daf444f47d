"""Shell plugin definitions."""

from dataclasses import dataclass, field
from typing import Dict, Tuple

from .package import API_VERSION

MANAGERS = ("zinit", "oh-my-zsh", "antigen", "sheldon", "manual")
LOAD_MODES = ("immediate", "deferred", "lazy")

DEFAULT_MANAGER = "manual"
DEFAULT_LOAD_MODE = "immediate"


@dataclass(frozen=True)
class Plugin:
    """A zsh plugin and how to fetch and load it."""

    name: str
    description: str = ""
    repo: str = ""  # GitHub owner/name
    source: str = ""  # full URL or local path
    branch: str = ""
    tag: str = ""
    manager: str = DEFAULT_MANAGER
    load_mode: str = DEFAULT_LOAD_MODE
    ohmyzsh_plugin: str = ""
    source_files: Tuple[str, ...] = ()
    config: str = ""
    env: Dict[str, str] = field(default_factory=dict)
    dependencies: Tuple[str, ...] = ()
    priority: int = 0  # lower loads first
    category: str = ""
    tags: Tuple[str, ...] = ()
    enabled: bool = True

    @property
    def is_ohmyzsh_builtin(self) -> bool:
        return bool(self.ohmyzsh_plugin) and not self.repo

    def source_url(self) -> str:
        if self.source:
            return self.source
        if self.repo:
            return "https://github.com/" + self.repo
        return ""

    def to_document(self) -> dict:
        metadata = {"name": self.name}
        if self.description:
            metadata["description"] = self.description
        if self.category:
            metadata["category"] = self.category
        if self.tags:
            metadata["tags"] = list(self.tags)

        spec = {}
        for key, attr in (
            ("repo", "repo"),
            ("source", "source"),
            ("branch", "branch"),
            ("tag", "tag"),
            ("manager", "manager"),
            ("loadMode", "load_mode"),
            ("ohmyzshPlugin", "ohmyzsh_plugin"),
            ("config", "config"),
            ("priority", "priority"),
        ):
            value = getattr(self, attr)
            if value:
                spec[key] = value
        if self.source_files:
            spec["sourceFiles"] = list(self.source_files)
        if self.env:
            spec["env"] = dict(self.env)
        if self.dependencies:
            spec["dependencies"] = list(self.dependencies)
        if not self.enabled:
            spec["enabled"] = False

        return {
            "apiVersion": API_VERSION,
            "kind": "TerminalPlugin",
            "metadata": metadata,
            "spec": spec,
        }
