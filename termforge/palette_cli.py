"""
Palette CLI for termforge: list palettes and show their colors.
"""

from typing import Optional

import click
from rich.table import Table
from rich.text import Text

from .common import console, get_library, get_palette, pipeline_errors
from .palette.palette import normalize_hex_color


@click.group(name="palette")
def palette_cli():
    """List and inspect color palettes."""
    pass


@palette_cli.command("list")
def list_palettes():
    """List available palettes."""
    with pipeline_errors():
        palettes = get_library().palettes.list()

    table = Table(title="Palettes")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Category", style="magenta")
    table.add_column("Colors", justify="right")
    table.add_column("Description")
    for palette in palettes:
        table.add_row(
            palette.name,
            palette.category or "-",
            str(len(palette.colors)),
            palette.description,
        )
    console.print(table)


@palette_cli.command("show")
@click.argument("name", required=False)
@click.option(
    "--terminal", is_flag=True, help="Show the derived terminal (ANSI) colors"
)
def show(name: Optional[str], terminal: bool):
    """Show the colors of a palette (default: defaults.palette)."""
    with pipeline_errors():
        palette = get_palette(name, get_library())

    colors = palette.terminal_colors() if terminal else palette.semantic_colors()
    title = f"{palette.name} ({'terminal' if terminal else 'semantic'} colors)"
    table = Table(title=title)
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Value", style="green")
    table.add_column("Swatch")
    for key in sorted(colors):
        value = colors[key]
        swatch = Text("    ", style=f"on {normalize_hex_color(value)}") if value else ""
        table.add_row(key, value, swatch)
    console.print(table)
