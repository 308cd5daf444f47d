"""Prompt definitions (Starship and friends)."""

from dataclasses import dataclass, field
from typing import Dict, Optional

from .options import OptionValue, to_python
from .package import API_VERSION

PROMPT_TYPES = ("starship", "powerlevel10k", "oh-my-posh")


@dataclass(frozen=True)
class ModuleConfig:
    """Settings for one prompt module, e.g. ``directory`` or ``git_branch``."""

    disabled: bool = False
    format: str = ""
    style: str = ""
    symbol: str = ""
    options: Dict[str, OptionValue] = field(default_factory=dict)

    def to_dict(self) -> dict:
        data = {}
        if self.disabled:
            data["disabled"] = True
        for key in ("format", "style", "symbol"):
            value = getattr(self, key)
            if value:
                data[key] = value
        if self.options:
            data["options"] = {k: to_python(v) for k, v in self.options.items()}
        return data


@dataclass(frozen=True)
class CharacterConfig:
    success_symbol: str = ""
    error_symbol: str = ""
    vicmd_symbol: str = ""
    viins_symbol: str = ""

    def items(self):
        """Non-empty symbols in a fixed order."""
        for key in ("success_symbol", "error_symbol", "vicmd_symbol", "viins_symbol"):
            value = getattr(self, key)
            if value:
                yield key, value


@dataclass(frozen=True)
class PromptDefinition:
    name: str
    type: str = "starship"
    description: str = ""
    add_newline: bool = False
    palette: str = ""
    format: str = ""
    modules: Dict[str, ModuleConfig] = field(default_factory=dict)
    character: Optional[CharacterConfig] = None
    palette_ref: str = ""
    colors: Dict[str, str] = field(default_factory=dict)  # override palette colors
    raw_config: str = ""
    category: str = ""
    tags: tuple = ()
    enabled: bool = True

    def to_document(self) -> dict:
        metadata = {"name": self.name}
        if self.description:
            metadata["description"] = self.description
        if self.category:
            metadata["category"] = self.category
        if self.tags:
            metadata["tags"] = list(self.tags)

        spec = {"type": self.type}
        if self.add_newline:
            spec["addNewline"] = True
        if self.palette:
            spec["palette"] = self.palette
        if self.format:
            spec["format"] = self.format
        if self.modules:
            spec["modules"] = {
                name: module.to_dict() for name, module in self.modules.items()
            }
        if self.character is not None:
            spec["character"] = dict(self.character.items())
        if self.palette_ref:
            spec["paletteRef"] = self.palette_ref
        if self.colors:
            spec["colors"] = dict(self.colors)
        if self.raw_config:
            spec["rawConfig"] = self.raw_config
        if not self.enabled:
            spec["enabled"] = False

        return {
            "apiVersion": API_VERSION,
            "kind": "TerminalPrompt",
            "metadata": metadata,
            "spec": spec,
        }
