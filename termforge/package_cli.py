"""
Package CLI for termforge.

Packages bundle plugins, prompts and profiles and may extend one parent
package. Every command here works on the inheritance-resolved view.
"""

from typing import Optional

import click
import yaml
from rich.syntax import Syntax
from rich.table import Table

from .common import (
    configured_output,
    console,
    get_library,
    load_resource,
    pipeline_errors,
    plugin_renderer,
    prompt_palette,
)
from .models.package import COMPONENT_TYPES
from .render.base import write_output
from .render.starship import StarshipRenderer
from .resolve.inheritance import component_source, resolve_package, resolved_document

SECTION_TITLES = {"plugin": "Plugins", "prompt": "Prompts", "profile": "Profiles"}


@click.group(name="package")
def package_cli():
    """Explore and install terminal packages."""
    pass


@package_cli.command("list")
@click.option("--category", help="Only show packages in this category")
@click.option("--tag", help="Only show packages with this tag")
def list_packages(category: Optional[str], tag: Optional[str]):
    """List available packages."""
    with pipeline_errors():
        library = get_library()
        packages = library.packages.list()
        if category:
            packages = [p for p in packages if p.category == category]
        if tag:
            packages = [p for p in packages if tag in p.tags]

        if not packages:
            click.echo("No packages found")
            return

        lookup = library.packages.lookup()
        table = Table(title="Packages")
        table.add_column("Name", style="cyan", no_wrap=True)
        table.add_column("Extends", style="magenta")
        table.add_column("Category", style="green")
        table.add_column("Components", justify="right")
        table.add_column("Description")
        for package in packages:
            resolved = resolve_package(package, lookup)
            table.add_row(
                package.name,
                package.extends or "-",
                package.category or "-",
                str(resolved.total),
                package.description,
            )
        console.print(table)


@package_cli.command("get")
@click.argument("name")
@click.option(
    "--raw", is_flag=True, help="Show the package as declared, without inheritance"
)
def get_package(name: str, raw: bool):
    """Show a package with all components from inheritance."""
    with pipeline_errors():
        library = get_library()
        package = load_resource(name, "package", library)
        if raw:
            document = package.to_document()
        else:
            document = resolved_document(package, library.packages.lookup())

    yaml_str = yaml.safe_dump(document, sort_keys=False)
    console.print(Syntax(yaml_str, "yaml", theme="monokai", line_numbers=True))


@package_cli.command("install")
@click.argument("name")
@click.option(
    "--dry-run", is_flag=True, help="Show what would be installed without installing"
)
def install_package(name: str, dry_run: bool):
    """Install a package and everything it inherits."""
    with pipeline_errors():
        library = get_library()
        package = load_resource(name, "package", library)
        lookup = library.packages.lookup()
        components = resolve_package(package, lookup)

        click.echo(f"Installing package: {package.name}\n")
        for component_type in COMPONENT_TYPES:
            names = components.components(component_type)
            if not names:
                continue
            click.echo(f"{SECTION_TITLES[component_type]} to install ({len(names)}):")
            for component in names:
                source = component_source(component, package, lookup, component_type)
                if source:
                    click.echo(f"  - {component} (from {source})")
                else:
                    click.echo(f"  - {component}")
            click.echo()

        if components.total == 0:
            click.echo("No components to install.")
            return

        if dry_run:
            click.echo(
                f"Use 'termforge package install {package.name}' without --dry-run to install."
            )
            return

        written = []
        if components.plugins:
            plugins = library.plugins_for(components.plugins)
            renderer = plugin_renderer()
            written.append(
                write_output(renderer.render(plugins), configured_output("plugins"))
            )
        if components.prompts:
            prompt = library.prompts.get(components.prompts[0])
            palette = prompt_palette(prompt, library)
            written.append(
                write_output(
                    StarshipRenderer().render(prompt, palette),
                    configured_output("starship"),
                )
            )

    for path in written:
        click.echo(f"Wrote {path}")
    click.echo(
        f"Package '{package.name}' installed - {components.total} components."
    )
    for profile in components.profiles:
        click.echo(
            f"Run 'termforge profile generate {profile}' to generate its files."
        )
