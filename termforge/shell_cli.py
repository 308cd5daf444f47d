"""
Shell CLI for termforge: list shell definitions and generate rc snippets.
"""

from pathlib import Path
from typing import Optional

import click
from rich.table import Table

from .common import console, emit, get_library, load_resource, pipeline_errors
from .config import config_manager
from .render.shell import ShellRenderer


@click.group(name="shell")
def shell_cli():
    """List shell definitions and generate shell configuration."""
    pass


@shell_cli.command("list")
@click.option("--type", "shell_type", help="Only show definitions for this shell")
def list_shells(shell_type: Optional[str]):
    """List available shell definitions."""
    with pipeline_errors():
        shells = get_library().shells.list()
    if shell_type:
        shells = [s for s in shells if s.shell_type == shell_type]

    if not shells:
        click.echo("No shell definitions found")
        return

    table = Table(title="Shell definitions")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Shell", style="magenta")
    table.add_column("Aliases", justify="right")
    table.add_column("Functions", justify="right")
    table.add_column("Description")
    for shell in shells:
        table.add_row(
            shell.name,
            shell.shell_type,
            str(len(shell.aliases)),
            str(len(shell.functions)),
            shell.description,
        )
    console.print(table)


@shell_cli.command("generate")
@click.argument("shell_ref", required=False)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write to this file instead of stdout",
)
def generate(shell_ref: Optional[str], output: Optional[Path]):
    """
    Generate shell configuration for a shell definition.

    Without SHELL_REF, the built-in '<defaults.shell>-default' definition is
    used.
    """
    if not shell_ref:
        default_shell = config_manager.get_config_value("defaults.shell") or "zsh"
        shell_ref = f"{default_shell}-default"

    with pipeline_errors():
        shell = load_resource(shell_ref, "shell", get_library())
        content = ShellRenderer().render(shell)
        emit(content, output)
