"""
Plugin CLI for termforge: list shell plugins and generate loader snippets.
"""

from pathlib import Path
from typing import Optional, Tuple

import click
from rich.table import Table

from .common import (
    console,
    emit,
    get_library,
    load_resource,
    pipeline_errors,
    plugin_renderer,
)
from .models.plugin import MANAGERS
from .resolve.inheritance import resolve_package


@click.group(name="plugin")
def plugin_cli():
    """List shell plugins and generate plugin loaders."""
    pass


@plugin_cli.command("list")
@click.option("--category", help="Only show plugins in this category")
@click.option("--tag", help="Only show plugins with this tag")
def list_plugins(category: Optional[str], tag: Optional[str]):
    """List available plugins."""
    with pipeline_errors():
        library = get_library()
        plugins = library.plugins.list()
    if category:
        plugins = [p for p in plugins if p.category == category]
    if tag:
        plugins = [p for p in plugins if tag in p.tags]

    if not plugins:
        click.echo("No plugins found")
        return

    table = Table(title="Plugins")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Source", style="green")
    table.add_column("Manager", style="magenta")
    table.add_column("Priority", justify="right")
    table.add_column("Description")
    for plugin in plugins:
        source = plugin.repo or plugin.source or f"oh-my-zsh:{plugin.ohmyzsh_plugin}"
        table.add_row(
            plugin.name,
            source,
            plugin.manager,
            str(plugin.priority),
            plugin.description,
        )
    console.print(table)


@plugin_cli.command("generate")
@click.argument("names", nargs=-1)
@click.option(
    "--package",
    "package_name",
    help="Generate the plugins of this package, including inherited ones",
)
@click.option(
    "--manager",
    type=click.Choice(MANAGERS),
    help="Plugin manager for every plugin (default: each plugin's own)",
)
@click.option("--plugin-dir", help="Clone directory for manually managed plugins")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write to this file instead of stdout",
)
def generate(
    names: Tuple[str, ...],
    package_name: Optional[str],
    manager: Optional[str],
    plugin_dir: Optional[str],
    output: Optional[Path],
):
    """
    Generate shell code that loads plugins.

    NAMES are library plugin names or plugin files. With no names and no
    --package, every plugin in the library is generated.

    Examples:
        termforge plugin generate fzf zsh-autosuggestions
        termforge plugin generate --package developer --manager zinit
    """
    with pipeline_errors():
        library = get_library()
        selected = []
        if package_name:
            package = load_resource(package_name, "package", library)
            resolved = resolve_package(package, library.packages.lookup())
            selected.extend(library.plugins_for(resolved.plugins))
        selected.extend(load_resource(name, "plugin", library) for name in names)
        if not names and not package_name:
            selected = library.plugins.list()

        content = plugin_renderer(manager, plugin_dir).render(selected)
        emit(content, output)
