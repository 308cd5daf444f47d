"""Terminal profile: one prompt, a set of plugins and a shell, by reference."""

from dataclasses import dataclass
from typing import Tuple

API_VERSION = "devopsmaestro.io/v1"


@dataclass(frozen=True)
class Profile:
    """
    A profile names the library resources that make up a complete terminal
    setup. ``theme_ref`` picks the palette used for the prompt; when empty the
    prompt's own palette (or the configured default) applies.
    """

    name: str
    description: str = ""
    category: str = ""
    tags: Tuple[str, ...] = ()
    prompt_ref: str = ""
    plugin_refs: Tuple[str, ...] = ()
    shell_ref: str = ""
    theme_ref: str = ""
    enabled: bool = True

    @property
    def is_empty(self) -> bool:
        return not (self.prompt_ref or self.plugin_refs or self.shell_ref)

    def to_document(self) -> dict:
        metadata = {"name": self.name}
        if self.description:
            metadata["description"] = self.description
        if self.category:
            metadata["category"] = self.category
        if self.tags:
            metadata["tags"] = list(self.tags)

        spec = {}
        if self.prompt_ref:
            spec["promptRef"] = self.prompt_ref
        if self.plugin_refs:
            spec["pluginRefs"] = list(self.plugin_refs)
        if self.shell_ref:
            spec["shellRef"] = self.shell_ref
        if self.theme_ref:
            spec["themeRef"] = self.theme_ref
        if not self.enabled:
            spec["enabled"] = False

        return {
            "apiVersion": API_VERSION,
            "kind": "TerminalProfile",
            "metadata": metadata,
            "spec": spec,
        }
