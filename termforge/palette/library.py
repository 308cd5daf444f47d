"""
Palette library: built-in palettes shipped with termforge plus any user
palette directories listed in configuration.
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional

import yaml

from .palette import Palette, PaletteError, PaletteNotFoundError

logger = logging.getLogger(__name__)

BUILTIN_DIR = Path(__file__).parent / "data"


class PaletteLibrary:
    """Name-indexed collection of palettes."""

    def __init__(self, search_paths: Optional[Iterable[Path]] = None):
        self._palettes: Dict[str, Palette] = {}
        self._load_dir(BUILTIN_DIR)
        for path in search_paths or []:
            self._load_dir(Path(path).expanduser())

    def _load_dir(self, directory: Path):
        if not directory.is_dir():
            logger.debug(f"Palette directory {directory} does not exist, skipping")
            return
        for path in sorted(directory.glob("*.yaml")):
            self.add(self.load_file(path))

    @staticmethod
    def load_file(path: Path) -> Palette:
        """Load and validate a single palette file."""
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise PaletteError(f"failed to read palette {path}: {e}") from e
        if not isinstance(data, dict):
            raise PaletteError(f"palette file must contain a mapping: {path}")
        palette = Palette.from_dict(data)
        palette.validate()
        return palette

    def add(self, palette: Palette):
        if palette.name in self._palettes:
            logger.debug(f"Palette '{palette.name}' overridden")
        self._palettes[palette.name] = palette

    def get(self, name: str) -> Palette:
        try:
            return self._palettes[name]
        except KeyError:
            raise PaletteNotFoundError(name) from None

    def has(self, name: str) -> bool:
        return name in self._palettes

    def names(self) -> List[str]:
        return sorted(self._palettes)

    def list(self) -> List[Palette]:
        return [self._palettes[name] for name in self.names()]
