"""
WezTerm CLI for termforge: list, show and generate wezterm.lua configs.
"""

import dataclasses
import logging
from pathlib import Path
from typing import Optional

import click
import yaml
from rich.syntax import Syntax
from rich.table import Table

from .common import (
    PIPELINE_ERRORS,
    configured_output,
    console,
    emit,
    get_library,
    load_resource,
    pipeline_errors,
)
from .render.wezterm import LuaRenderer
from .resolve.theme import apply_theme_colors

logger = logging.getLogger(__name__)


@click.group(name="wezterm")
def wezterm_cli():
    """List and generate WezTerm configurations."""
    pass


@wezterm_cli.command("list")
@click.option("--category", help="Only show configs in this category")
def list_configs(category: Optional[str]):
    """List available WezTerm configurations."""
    with pipeline_errors():
        library = get_library()
        configs = (
            library.wezterm.by_category(category) if category else library.wezterm.list()
        )

    if not configs:
        click.echo("No WezTerm configurations found")
        return

    table = Table(title="WezTerm configurations")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Theme", style="magenta")
    table.add_column("Font", style="green")
    table.add_column("Description")
    for config in configs:
        font = config.font.family
        if config.font.size:
            font = f"{font} {config.font.size}"
        table.add_row(config.name, config.theme_ref or "-", font, config.description)
    console.print(table)


@wezterm_cli.command("show")
@click.argument("config_ref")
def show(config_ref: str):
    """Show a WezTerm configuration as YAML."""
    with pipeline_errors():
        config = load_resource(config_ref, "wezterm", get_library())
    yaml_str = yaml.safe_dump(config.to_document(), sort_keys=False)
    console.print(Syntax(yaml_str, "yaml", theme="monokai", line_numbers=True))


@wezterm_cli.command("generate")
@click.argument("config_ref")
@click.option(
    "--palette",
    "palette_name",
    help="Palette for colors and ${theme.X} placeholders (overrides themeRef)",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write to this file instead of stdout",
)
@click.option(
    "--install", is_flag=True, help="Write to the configured output.wezterm path"
)
def generate(
    config_ref: str, palette_name: Optional[str], output: Optional[Path], install: bool
):
    """
    Generate wezterm.lua.

    When the configuration references a theme, its colors are filled in
    from the palette of that name. A missing theme is reported as a warning
    and the configuration is generated without it; a missing --palette is
    an error.
    """
    with pipeline_errors():
        library = get_library()
        config = load_resource(config_ref, "wezterm", library)

        palette = None
        if palette_name:
            palette = load_resource(palette_name, "palette", library)
            config = dataclasses.replace(config, theme_ref=palette.name)
        elif config.theme_ref:
            try:
                palette = load_resource(config.theme_ref, "palette", library)
            except PIPELINE_ERRORS as e:
                logger.warning(f"Could not resolve theme '{config.theme_ref}': {e}")
                click.echo(
                    f"Warning: theme '{config.theme_ref}' not resolved, using config colors",
                    err=True,
                )

        if palette is not None:
            config = apply_theme_colors(config, palette)
        content = LuaRenderer().render(config, palette)

        if install and output is None:
            output = configured_output("wezterm")
        emit(content, output)
