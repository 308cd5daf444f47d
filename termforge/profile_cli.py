"""
Profile CLI for termforge: list terminal profiles and generate the prompt,
plugin loader and shell configuration a profile references in one go.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

import click
import yaml
from rich.syntax import Syntax
from rich.table import Table

from .common import (
    console,
    get_library,
    load_resource,
    pipeline_errors,
    plugin_renderer,
    prompt_palette,
)
from .library import ResourceLibrary
from .models.plugin import MANAGERS
from .models.profile import Profile
from .render.base import GENERATED_BY, comment_lines, write_output
from .render.shell import ShellRenderer
from .render.starship import StarshipRenderer

logger = logging.getLogger(__name__)

STARSHIP_FILE = "starship.toml"


@dataclass(frozen=True)
class GeneratedProfile:
    """Rendered output of one profile. Empty strings mean nothing was referenced."""

    starship: str = ""
    plugins: str = ""
    shell: str = ""
    shell_type: str = "zsh"

    @property
    def rc_name(self) -> str:
        return f".{self.shell_type}rc"

    @property
    def rc_file(self) -> str:
        return f"{self.rc_name}.{GENERATED_BY}"

    def rc_content(self) -> str:
        """Plugins and shell configuration combined into one sourceable file."""
        parts = [
            f"# Generated by {GENERATED_BY} - source this from your {self.rc_name}\n"
        ]
        if self.plugins:
            parts.append("# Plugins\n" + self.plugins)
        if self.shell:
            parts.append("# Shell config\n" + self.shell)
        return "\n".join(parts)

    def files(self) -> List[Tuple[str, str]]:
        files = []
        if self.starship:
            files.append((STARSHIP_FILE, self.starship))
        if self.plugins or self.shell:
            files.append((self.rc_file, self.rc_content()))
        return files


def generate_profile(
    profile: Profile,
    library: ResourceLibrary,
    palette_name: Optional[str] = None,
    manager: Optional[str] = None,
) -> GeneratedProfile:
    """
    Render everything a profile references. The prompt palette is taken from
    ``palette_name``, then the profile's themeRef, then the prompt itself.
    Missing references raise ResourceNotFoundError before anything is rendered.
    """
    prompt = library.prompts.get(profile.prompt_ref) if profile.prompt_ref else None
    plugins = library.plugins_for(profile.plugin_refs)
    shell = library.shells.get(profile.shell_ref) if profile.shell_ref else None

    starship = ""
    if prompt is not None:
        if prompt.type != "starship":
            logger.warning(
                f"Profile '{profile.name}': prompt type '{prompt.type}' cannot be "
                "generated, skipping the prompt"
            )
        else:
            palette = prompt_palette(
                prompt, library, palette_name or profile.theme_ref or None
            )
            starship = StarshipRenderer().render(prompt, palette)

    return GeneratedProfile(
        starship=starship,
        plugins=plugin_renderer(manager).render(plugins) if plugins else "",
        shell=ShellRenderer().render(shell) if shell is not None else "",
        shell_type=shell.shell_type if shell is not None else "zsh",
    )


@click.group(name="profile")
def profile_cli():
    """List terminal profiles and generate their configuration files."""
    pass


@profile_cli.command("list")
@click.option("--category", help="Only show profiles in this category")
def list_profiles(category: Optional[str]):
    """List available profiles."""
    with pipeline_errors():
        library = get_library()
        profiles = (
            library.profiles.by_category(category) if category else library.profiles.list()
        )

    if not profiles:
        click.echo("No profiles found")
        return

    table = Table(title="Profiles")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Prompt", style="magenta")
    table.add_column("Plugins", justify="right")
    table.add_column("Shell", style="green")
    table.add_column("Theme", style="yellow")
    table.add_column("Description")
    for profile in profiles:
        table.add_row(
            profile.name,
            profile.prompt_ref or "-",
            str(len(profile.plugin_refs)),
            profile.shell_ref or "-",
            profile.theme_ref or "-",
            profile.description,
        )
    console.print(table)


@profile_cli.command("show")
@click.argument("profile_ref")
def show_profile(profile_ref: str):
    """Show a profile as YAML."""
    with pipeline_errors():
        profile = load_resource(profile_ref, "profile", get_library())
    yaml_str = yaml.safe_dump(profile.to_document(), sort_keys=False)
    console.print(Syntax(yaml_str, "yaml", theme="monokai", line_numbers=True))


@profile_cli.command("generate")
@click.argument("profile_ref")
@click.option("--palette", "palette_name", help="Palette for the prompt (overrides themeRef)")
@click.option(
    "--manager",
    type=click.Choice(MANAGERS),
    help="Plugin manager for every plugin (default: each plugin's own)",
)
@click.option(
    "--output",
    "-o",
    "output_dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Write starship.toml and the rc snippet into this directory",
)
@click.option(
    "--dry-run", is_flag=True, help="Print to stdout and list the files that would be written"
)
def generate(
    profile_ref: str,
    palette_name: Optional[str],
    manager: Optional[str],
    output_dir: Optional[Path],
    dry_run: bool,
):
    """
    Generate the prompt, plugin and shell configuration of a profile.

    PROFILE_REF is a library profile name, a YAML file, a URL or a
    github:owner/repo/path reference. Without --output everything is printed
    to stdout in labelled sections.

    Examples:
        termforge profile generate default
        termforge profile generate developer --palette gruvbox-dark
        termforge profile generate developer -o ~/.config/termforge
    """
    with pipeline_errors():
        library = get_library()
        profile = load_resource(profile_ref, "profile", library)
        if profile.is_empty:
            raise click.ClickException(
                f"profile '{profile.name}' references no prompt, plugins or shell"
            )
        generated = generate_profile(profile, library, palette_name, manager)

    if output_dir is None or dry_run:
        click.echo(_profile_listing(profile, generated), nl=False)
        if dry_run and output_dir is not None:
            click.echo("\n# Would write to:")
            for name, _ in generated.files():
                click.echo(f"#   {output_dir.expanduser() / name}")
        return

    output_dir = output_dir.expanduser()
    written = []
    with pipeline_errors():
        for name, content in generated.files():
            written.append(write_output(content, output_dir / name))
    for path in written:
        click.echo(f"Wrote {path}")
    if generated.plugins or generated.shell:
        click.echo(f"\nAdd this line to your {generated.rc_name}:")
        click.echo(f"  source {output_dir / generated.rc_file}")


def _profile_listing(profile: Profile, generated: GeneratedProfile) -> str:
    lines = [f"# Generated by {GENERATED_BY} profile generate", "#"]
    lines.extend(comment_lines(f"Profile: {profile.name}"))
    if profile.description:
        lines.extend(comment_lines(f"Description: {profile.description}"))
    sections = [
        (f"# === {STARSHIP_FILE} ===", generated.starship),
        (f"# === {generated.rc_name} (plugins) ===", generated.plugins),
        (f"# === {generated.rc_name} (shell) ===", generated.shell),
    ]
    for title, content in sections:
        if content:
            lines += ["", title, content.rstrip("\n")]
    return "\n".join(lines) + "\n"
