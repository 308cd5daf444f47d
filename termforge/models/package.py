"""Terminal package: a named bundle of plugin, prompt and profile references."""

from dataclasses import dataclass
from typing import Tuple

API_VERSION = "devopsmaestro.io/v1"


@dataclass(frozen=True)
class Package:
    """
    A package may extend one parent package by name. Component lists keep the
    order they were declared in.
    """

    name: str
    description: str = ""
    category: str = ""
    tags: Tuple[str, ...] = ()
    extends: str = ""
    plugins: Tuple[str, ...] = ()
    prompts: Tuple[str, ...] = ()
    profiles: Tuple[str, ...] = ()
    enabled: bool = True

    def components(self, component_type: str) -> Tuple[str, ...]:
        """Return the declared components of one type (plugin/prompt/profile)."""
        if component_type == "plugin":
            return self.plugins
        if component_type == "prompt":
            return self.prompts
        if component_type == "profile":
            return self.profiles
        raise ValueError(f"unknown component type: {component_type}")

    def to_document(self) -> dict:
        metadata = {"name": self.name}
        if self.description:
            metadata["description"] = self.description
        if self.category:
            metadata["category"] = self.category
        if self.tags:
            metadata["tags"] = list(self.tags)

        spec = {}
        if self.extends:
            spec["extends"] = self.extends
        for key in ("plugins", "prompts", "profiles"):
            values = getattr(self, key)
            if values:
                spec[key] = list(values)
        if not self.enabled:
            spec["enabled"] = False

        return {
            "apiVersion": API_VERSION,
            "kind": "TerminalPackage",
            "metadata": metadata,
            "spec": spec,
        }


@dataclass(frozen=True)
class ResolvedComponents:
    """Component lists of a package with everything inherited merged in."""

    plugins: Tuple[str, ...] = ()
    prompts: Tuple[str, ...] = ()
    profiles: Tuple[str, ...] = ()

    def components(self, component_type: str) -> Tuple[str, ...]:
        return {
            "plugin": self.plugins,
            "prompt": self.prompts,
            "profile": self.profiles,
        }[component_type]

    @property
    def total(self) -> int:
        return len(self.plugins) + len(self.prompts) + len(self.profiles)


COMPONENT_TYPES = ("plugin", "prompt", "profile")
