"""
Prompt CLI for termforge: list prompt definitions and generate starship.toml.
"""

from pathlib import Path
from typing import Optional

import click
from rich.table import Table

from .common import (
    configured_output,
    console,
    emit,
    get_library,
    load_resource,
    pipeline_errors,
    prompt_palette,
)
from .render.starship import StarshipRenderer
from .resolve.placeholders import find_unresolved


@click.group(name="prompt")
def prompt_cli():
    """List prompts and generate prompt configuration."""
    pass


@prompt_cli.command("list")
@click.option("--category", help="Only show prompts in this category")
def list_prompts(category: Optional[str]):
    """List available prompts."""
    with pipeline_errors():
        library = get_library()
        prompts = (
            library.prompts.by_category(category) if category else library.prompts.list()
        )

    if not prompts:
        click.echo("No prompts found")
        return

    table = Table(title="Prompts")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Type", style="magenta")
    table.add_column("Palette", style="green")
    table.add_column("Modules", justify="right")
    table.add_column("Description")
    for prompt in prompts:
        table.add_row(
            prompt.name,
            prompt.type,
            prompt.palette_ref or prompt.palette or "-",
            str(len(prompt.modules)),
            prompt.description,
        )
    console.print(table)


@prompt_cli.command("generate")
@click.argument("prompt_ref")
@click.option("--palette", "palette_name", help="Palette name or file to render with")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write to this file instead of stdout",
)
@click.option(
    "--install", is_flag=True, help="Write to the configured output.starship path"
)
@click.option(
    "--strict", is_flag=True, help="Fail if any ${theme.X} placeholder is left unresolved"
)
def generate(
    prompt_ref: str,
    palette_name: Optional[str],
    output: Optional[Path],
    install: bool,
    strict: bool,
):
    """
    Generate starship.toml for a prompt.

    PROMPT_REF is a library prompt name, a YAML file, a URL or a
    github:owner/repo/path reference.

    Examples:
        termforge prompt generate starship-minimal
        termforge prompt generate starship-developer --palette catppuccin-mocha
        termforge prompt generate ./my-prompt.yaml -o ~/.config/starship.toml
    """
    with pipeline_errors():
        library = get_library()
        prompt = load_resource(prompt_ref, "prompt", library)
        if prompt.type != "starship":
            raise click.ClickException(
                f"prompt type '{prompt.type}' cannot be generated (only starship is supported)"
            )
        palette = prompt_palette(prompt, library, palette_name)
        content = StarshipRenderer().render(prompt, palette)

    if strict:
        unresolved = find_unresolved(content)
        if unresolved:
            names = ", ".join(sorted(set(unresolved)))
            raise click.ClickException(
                f"unresolved theme placeholders with palette '{palette.name}': {names}"
            )

    if install and output is None:
        output = configured_output("starship")
    with pipeline_errors():
        emit(content, output)
