"""
Resource library: the packages, plugins, prompts, shells, profiles and
WezTerm configs shipped with termforge, plus any user directories listed under
``library.paths`` in configuration.

Every ``*.yaml`` file below a library root is loaded with
``termforge.models.load_file`` and routed to a collection by kind. Later
roots override earlier ones, so user resources replace built-ins of the
same name.
"""

import logging
from pathlib import Path
from typing import Dict, Generic, Iterable, List, Mapping, Optional, TypeVar

from ..models.loader import load_file
from ..models.package import Package
from ..models.plugin import Plugin
from ..models.profile import Profile
from ..models.prompt import PromptDefinition
from ..models.shell import ShellDefinition
from ..models.wezterm import WezTermConfig
from ..palette.library import PaletteLibrary
from ..palette.palette import Palette

logger = logging.getLogger(__name__)

BUILTIN_DIR = Path(__file__).parent / "data"

T = TypeVar("T")


class ResourceNotFoundError(Exception):
    """Raised when a named resource is not in the library."""

    def __init__(self, kind: str, name: str):
        self.kind = kind
        self.name = name
        super().__init__(f"{kind} '{name}' not found")


class ResourceCollection(Generic[T]):
    """Name-indexed resources of a single kind."""

    def __init__(self, kind: str):
        self.kind = kind
        self._items: Dict[str, T] = {}

    def add(self, item: T):
        if item.name in self._items:
            logger.debug(f"{self.kind} '{item.name}' overridden")
        self._items[item.name] = item

    def get(self, name: str) -> T:
        try:
            return self._items[name]
        except KeyError:
            raise ResourceNotFoundError(self.kind, name) from None

    def has(self, name: str) -> bool:
        return name in self._items

    def names(self) -> List[str]:
        return sorted(self._items)

    def list(self) -> List[T]:
        return [self._items[name] for name in self.names()]

    def categories(self) -> List[str]:
        return sorted({item.category for item in self._items.values() if item.category})

    def by_category(self, category: str) -> List[T]:
        return [item for item in self.list() if item.category == category]

    def by_tag(self, tag: str) -> List[T]:
        return [item for item in self.list() if tag in item.tags]

    def lookup(self) -> Mapping[str, T]:
        """Read-only name -> resource view, as used by the package resolver."""
        return dict(self._items)

    def __len__(self) -> int:
        return len(self._items)


class ResourceLibrary:
    """All resources known to termforge, grouped by kind."""

    def __init__(self, search_paths: Optional[Iterable[Path]] = None):
        self.packages: ResourceCollection[Package] = ResourceCollection("package")
        self.plugins: ResourceCollection[Plugin] = ResourceCollection("plugin")
        self.prompts: ResourceCollection[PromptDefinition] = ResourceCollection("prompt")
        self.shells: ResourceCollection[ShellDefinition] = ResourceCollection("shell")
        self.profiles: ResourceCollection[Profile] = ResourceCollection("profile")
        self.wezterm: ResourceCollection[WezTermConfig] = ResourceCollection("wezterm")
        self.palettes = PaletteLibrary()

        self._load_dir(BUILTIN_DIR)
        for path in search_paths or []:
            self._load_dir(Path(path).expanduser())

    def _load_dir(self, directory: Path):
        if not directory.is_dir():
            logger.debug(f"Library directory {directory} does not exist, skipping")
            return
        for path in sorted(directory.rglob("*.yaml")):
            for resource in load_file(path):
                self.add(resource)

    def add(self, resource):
        """Route a loaded resource to the collection for its kind."""
        if isinstance(resource, Package):
            self.packages.add(resource)
        elif isinstance(resource, Plugin):
            self.plugins.add(resource)
        elif isinstance(resource, PromptDefinition):
            self.prompts.add(resource)
        elif isinstance(resource, ShellDefinition):
            self.shells.add(resource)
        elif isinstance(resource, Profile):
            self.profiles.add(resource)
        elif isinstance(resource, WezTermConfig):
            self.wezterm.add(resource)
        elif isinstance(resource, Palette):
            self.palettes.add(resource)
        else:
            raise TypeError(f"unsupported resource type: {type(resource).__name__}")

    def plugins_for(self, names: Iterable[str]) -> List[Plugin]:
        """Look up plugins by name, keeping the given order."""
        return [self.plugins.get(name) for name in names]

    def summary(self) -> Dict[str, int]:
        return {
            "packages": len(self.packages),
            "plugins": len(self.plugins),
            "prompts": len(self.prompts),
            "shells": len(self.shells),
            "profiles": len(self.profiles),
            "wezterm": len(self.wezterm),
            "palettes": len(self.palettes.names()),
        }
