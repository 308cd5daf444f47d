"""
Helpers shared by the termforge CLI commands: library access, resource and
palette lookup, error conversion and output handling.
"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

import click
from rich.console import Console

from .config import config_manager
from .library import ResourceLibrary, ResourceNotFoundError
from .models.loader import ResourceLoadError
from .models.package import Package
from .models.plugin import Plugin
from .models.profile import Profile
from .models.prompt import PromptDefinition
from .models.shell import ShellDefinition
from .models.wezterm import WezTermConfig
from .palette.palette import Palette, PaletteError
from .render.base import RenderError, write_output
from .render.shell import DEFAULT_PLUGIN_DIR, PluginRenderer
from .resolve.inheritance import PackageResolutionError
from .resolve.theme import ThemeResolutionError
from .sources import SourceLoader, SourceLoadError, is_source_ref

logger = logging.getLogger(__name__)

console = Console()

PIPELINE_ERRORS = (
    PackageResolutionError,
    PaletteError,
    RenderError,
    ResourceLoadError,
    ResourceNotFoundError,
    SourceLoadError,
    ThemeResolutionError,
)

COLLECTIONS = {
    "package": "packages",
    "plugin": "plugins",
    "prompt": "prompts",
    "shell": "shells",
    "profile": "profiles",
    "wezterm": "wezterm",
    "palette": "palettes",
}

RESOURCE_TYPES = {
    "package": Package,
    "plugin": Plugin,
    "prompt": PromptDefinition,
    "shell": ShellDefinition,
    "profile": Profile,
    "wezterm": WezTermConfig,
    "palette": Palette,
}


@contextmanager
def pipeline_errors():
    """Turn pipeline exceptions into ClickException so nothing partial is printed."""
    try:
        yield
    except PIPELINE_ERRORS as e:
        raise click.ClickException(str(e)) from e


def get_library() -> ResourceLibrary:
    """Build the resource library from built-ins plus configured paths."""
    return ResourceLibrary(config_manager.get_library_paths())


def _collection(library: ResourceLibrary, kind: str):
    return getattr(library, COLLECTIONS[kind])


def load_resource(ref: str, kind: str, library: ResourceLibrary):
    """
    Look up a resource by library name, or fetch it when ``ref`` is a path,
    URL or github: reference. A fetched document may hold several resources;
    the first one of the requested kind is used.
    """
    if not is_source_ref(ref):
        return _collection(library, kind).get(ref)

    resource_type = RESOURCE_TYPES[kind]
    matches = [r for r in SourceLoader().load(ref) if isinstance(r, resource_type)]
    if not matches:
        raise ResourceLoadError(f"no {kind} found in {ref}")
    if len(matches) > 1:
        logger.warning(f"{ref} contains {len(matches)} {kind} resources, using '{matches[0].name}'")
    return matches[0]


def get_palette(name: Optional[str], library: ResourceLibrary) -> Palette:
    """Resolve a palette by name or reference, falling back to defaults.palette."""
    name = name or config_manager.get_config_value("defaults.palette")
    if not name:
        raise PaletteError("no palette given and defaults.palette is not set")
    return load_resource(name, "palette", library)


def emit(content: str, output: Optional[Path]):
    """Print generated content, or write it to ``output``."""
    if output is None:
        click.echo(content, nl=False)
        return
    path = write_output(content, Path(output).expanduser())
    click.echo(f"Wrote {path}", err=True)


def configured_output(key: str) -> Path:
    """Install location for a generated file, from the output.* config section."""
    value = config_manager.get_config_value(f"output.{key}")
    if not value:
        raise click.ClickException(f"output.{key} is not configured")
    return Path(value).expanduser()


def prompt_palette(
    prompt: PromptDefinition, library: ResourceLibrary, name: Optional[str] = None
) -> Palette:
    """
    Palette for a prompt: an explicit name wins, then the prompt's paletteRef,
    then its starship palette name, then defaults.palette. Colors declared on
    the prompt itself are laid over the result.
    """
    palette = get_palette(name or prompt.palette_ref or prompt.palette or None, library)
    if prompt.colors:
        palette = palette.merged(
            Palette(name=palette.name, colors=dict(prompt.colors)), overwrite=True
        )
    return palette


def plugin_renderer(
    manager: Optional[str] = None, plugin_dir: Optional[str] = None
) -> PluginRenderer:
    """PluginRenderer with defaults.plugin_manager and defaults.plugin_dir applied."""
    manager = manager or config_manager.get_config_value("defaults.plugin_manager")
    plugin_dir = (
        plugin_dir
        or config_manager.get_config_value("defaults.plugin_dir")
        or DEFAULT_PLUGIN_DIR
    )
    return PluginRenderer(manager=manager or None, plugin_dir=plugin_dir)
