"""
Color palette model shared by every termforge generator.

A palette maps semantic color names (``bg``, ``fg``, ``error`` ...) to hex
values. Generators read palettes through two views:

- ``semantic_colors()``: the raw mapping as declared
- ``terminal_colors()``: a derived ANSI view (``ansi_red``, ``cursor`` ...)
  built from fallback chains over the semantic keys
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

HEX_COLOR_RE = re.compile(r"^#([0-9A-Fa-f]{3}|[0-9A-Fa-f]{6}|[0-9A-Fa-f]{8})$")

CATEGORIES = ("dark", "light", "both")

# Backgrounds
BG = "bg"
BG_DARK = "bg_dark"
BG_HIGHLIGHT = "bg_highlight"
BG_SEARCH = "bg_search"
BG_VISUAL = "bg_visual"
BG_FLOAT = "bg_float"
BG_POPUP = "bg_popup"
BG_SIDEBAR = "bg_sidebar"
BG_STATUSLINE = "bg_statusline"

# Foregrounds
FG = "fg"
FG_DARK = "fg_dark"
FG_GUTTER = "fg_gutter"
FG_SIDEBAR = "fg_sidebar"

# UI elements
BORDER = "border"
COMMENT = "comment"

# Diagnostics
ERROR = "error"
WARNING = "warning"
INFO = "info"
HINT = "hint"
SUCCESS = "success"

# Accents
PRIMARY = "primary"
SECONDARY = "secondary"
ACCENT = "accent"

SEMANTIC_KEYS = (
    BG,
    BG_DARK,
    BG_HIGHLIGHT,
    BG_SEARCH,
    BG_VISUAL,
    BG_FLOAT,
    BG_POPUP,
    BG_SIDEBAR,
    BG_STATUSLINE,
    FG,
    FG_DARK,
    FG_GUTTER,
    FG_SIDEBAR,
    BORDER,
    COMMENT,
    ERROR,
    WARNING,
    INFO,
    HINT,
    SUCCESS,
    PRIMARY,
    SECONDARY,
    ACCENT,
)

ANSI_NAMES = ("black", "red", "green", "yellow", "blue", "magenta", "cyan", "white")
ANSI_KEYS = tuple(f"ansi_{name}" for name in ANSI_NAMES)
ANSI_BRIGHT_KEYS = tuple(f"ansi_bright_{name}" for name in ANSI_NAMES)

CURSOR = "cursor"
CURSOR_TEXT = "cursor_text"
SELECTION = "selection"
SELECTION_TEXT = "selection_text"

# Terminal key -> ordered semantic keys; the first non-empty value wins.
TERMINAL_FALLBACKS = {
    "ansi_black": ("black", BG_DARK, BG),
    "ansi_red": ("red", ERROR),
    "ansi_green": ("green", SUCCESS),
    "ansi_yellow": ("yellow", WARNING),
    "ansi_blue": ("blue", INFO, PRIMARY),
    "ansi_magenta": ("magenta", "purple", "pink"),
    "ansi_cyan": ("cyan", "teal"),
    "ansi_white": ("white", FG),
    "ansi_bright_black": ("bright_black", COMMENT, FG_GUTTER),
    "ansi_bright_red": ("bright_red", "red", ERROR),
    "ansi_bright_green": ("bright_green", "green", SUCCESS),
    "ansi_bright_yellow": ("bright_yellow", "yellow", "orange", WARNING),
    "ansi_bright_blue": ("bright_blue", "blue", INFO),
    "ansi_bright_magenta": ("bright_magenta", "magenta", "purple", "lavender"),
    "ansi_bright_cyan": ("bright_cyan", "cyan", "teal", "sky"),
    "ansi_bright_white": ("bright_white", FG_DARK, FG),
    BG: (BG,),
    FG: (FG,),
    CURSOR: (CURSOR, FG),
    CURSOR_TEXT: (CURSOR_TEXT, BG),
    SELECTION: (SELECTION, BG_VISUAL, BG_HIGHLIGHT),
    SELECTION_TEXT: (SELECTION_TEXT, FG),
}


class PaletteError(Exception):
    """Raised when a palette definition is invalid."""

    pass


class PaletteNotFoundError(PaletteError):
    """Raised when a named palette is not available."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"palette '{name}' not found")


def is_valid_hex_color(color: str) -> bool:
    """Check whether a string is #RGB, #RRGGBB or #RRGGBBAA."""
    return bool(HEX_COLOR_RE.match(color or ""))


def normalize_hex_color(color: str) -> str:
    """
    Normalize a hex color to lowercase #rrggbb.

    Short forms are expanded and an alpha channel is dropped. Invalid input is
    returned unchanged.
    """
    if not is_valid_hex_color(color):
        return color
    digits = color[1:].lower()
    if len(digits) == 3:
        return "#" + "".join(c * 2 for c in digits)
    return "#" + digits[:6]


@dataclass(frozen=True)
class Palette:
    """A named set of colors keyed by semantic name."""

    name: str
    description: str = ""
    author: str = ""
    category: str = ""
    colors: Dict[str, str] = field(default_factory=dict)

    def get(self, key: str) -> str:
        """Return the color for ``key`` or an empty string."""
        return self.colors.get(key, "")

    def get_or_default(self, key: str, default: str) -> str:
        return self.colors.get(key) or default

    def has(self, key: str) -> bool:
        return key in self.colors

    def semantic_colors(self) -> Dict[str, str]:
        return dict(self.colors)

    def terminal_colors(self) -> Dict[str, str]:
        """Derive the ANSI/terminal view of this palette."""
        terminal = {}
        for key, chain in TERMINAL_FALLBACKS.items():
            for source in chain:
                value = self.colors.get(source)
                if value:
                    terminal[key] = value
                    break
        return terminal

    def merged(self, other: Optional["Palette"], overwrite: bool = False) -> "Palette":
        """Return a copy with colors from ``other`` added."""
        colors = dict(self.colors)
        if other is not None:
            for key, value in other.colors.items():
                if overwrite or key not in colors:
                    colors[key] = value
        return Palette(
            name=self.name,
            description=self.description,
            author=self.author,
            category=self.category,
            colors=colors,
        )

    def validate(self):
        """Raise PaletteError when the palette is malformed."""
        if not self.name:
            raise PaletteError("palette name is required")
        for key, color in self.colors.items():
            if color and not is_valid_hex_color(color):
                raise PaletteError(
                    f"invalid color format for {key}: {color} (expected hex like #RRGGBB)"
                )
        if self.category and self.category not in CATEGORIES:
            raise PaletteError(
                f"invalid category: {self.category} (expected dark, light, or both)"
            )

    def missing_required(self) -> List[str]:
        """Keys every complete theme should define but this one lacks."""
        return [key for key in REQUIRED_KEYS if not self.colors.get(key)]

    def to_document(self) -> dict:
        """Render as a kubectl-style resource document."""
        metadata = {"name": self.name}
        if self.description:
            metadata["description"] = self.description
        if self.author:
            metadata["author"] = self.author
        if self.category:
            metadata["category"] = self.category
        return {
            "apiVersion": "devopsmaestro.io/v1",
            "kind": "Palette",
            "metadata": metadata,
            "spec": {"colors": dict(self.colors)},
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Palette":
        """Build a palette from a flat dict or a resource document."""
        if "metadata" in data:
            metadata = data.get("metadata") or {}
            spec = data.get("spec") or {}
            colors = spec.get("colors") or {}
        else:
            metadata = data
            colors = data.get("colors") or {}
        return cls(
            name=str(metadata.get("name", "")),
            description=str(metadata.get("description", "") or ""),
            author=str(metadata.get("author", "") or ""),
            category=str(metadata.get("category", "") or ""),
            colors={str(k): str(v) for k, v in colors.items() if v is not None},
        )


REQUIRED_KEYS = (BG, FG, ERROR, WARNING, INFO)
