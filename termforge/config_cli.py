"""
Configuration management CLI for termforge.

Provides commands for viewing and editing termforge configuration
(default palette, shell, plugin manager, library paths and output files).
"""

from typing import Optional

import click
from omegaconf import OmegaConf
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

from .config import config_manager

console = Console()


def _print_yaml(data):
    yaml_str = OmegaConf.to_yaml(OmegaConf.create(data))
    syntax = Syntax(yaml_str, "yaml", theme="monokai", line_numbers=True)
    console.print(syntax)


@click.group(name="config")
def config_cli():
    """Manage termforge configuration."""
    pass


@config_cli.command()
@click.argument("key_path", required=False)
def get(key_path: Optional[str]):
    """Get configuration value by key path (e.g., 'defaults.palette')."""
    if key_path:
        value = config_manager.get_config_value(key_path)
        if value is None:
            click.echo(f"Configuration key '{key_path}' not found")
            raise click.Abort()
        if isinstance(value, (dict, list)):
            _print_yaml({key_path: value})
        else:
            click.echo(value)
    else:
        if config_manager.merged_config:
            yaml_str = OmegaConf.to_yaml(config_manager.merged_config)
            syntax = Syntax(yaml_str, "yaml", theme="monokai", line_numbers=True)
            console.print(syntax)
        else:
            click.echo("No configuration found")


@config_cli.command(name="set")
@click.argument("key_path")
@click.argument("value")
@click.option(
    "--system",
    is_flag=True,
    help="Set value in system config (requires appropriate permissions)",
)
def set_config(key_path: str, value: str, system: bool):
    """Set configuration value by key path (e.g., 'defaults.palette' 'gruvbox-dark')."""
    # Parse as YAML so numbers, booleans and lists keep their type
    try:
        parsed_value = OmegaConf.create(f"temp: {value}").temp
    except Exception:  # pylint: disable=broad-exception-caught
        parsed_value = value
    if OmegaConf.is_config(parsed_value):
        parsed_value = OmegaConf.to_container(parsed_value, resolve=True)

    try:
        if system:
            config_manager.set_system_config_value(key_path, parsed_value)
            click.echo(f"Set {key_path} = {parsed_value} (system config)")
        else:
            config_manager.set_user_config_value(key_path, parsed_value)
            click.echo(f"Set {key_path} = {parsed_value} (user config)")
    except OSError as e:
        raise click.ClickException(f"Error setting configuration: {e}") from e


@config_cli.command(name="list")
@click.argument("section", required=False)
@click.option("--user-only", is_flag=True, help="Show only user configuration")
@click.option("--system-only", is_flag=True, help="Show only system configuration")
def list_config(section: Optional[str], user_only: bool, system_only: bool):
    """List configuration values, optionally filtered by section."""
    if user_only and system_only:
        click.echo("Error: Cannot specify both --user-only and --system-only")
        raise click.Abort()

    if user_only:
        config_to_show = config_manager.user_config
    elif system_only:
        config_to_show = config_manager.system_config
    else:
        config_to_show = config_manager.merged_config

    if not config_to_show:
        if user_only:
            click.echo("No user configuration found")
        elif system_only:
            click.echo("No system configuration found")
        else:
            click.echo("No configuration found")
        return

    config_dict = OmegaConf.to_container(config_to_show, resolve=True)
    if section:
        if section not in config_dict:
            click.echo(f"Section '{section}' not found")
            raise click.Abort()
        config_dict = {section: config_dict[section]}

    _print_yaml(config_dict)


@config_cli.command()
def files():
    """List all configuration files and their locations."""
    config_files = config_manager.get_config_files()

    table = Table(title="Configuration Files")
    table.add_column("Type", style="cyan", no_wrap=True)
    table.add_column("File Path", style="green")
    table.add_column("Status", style="yellow")

    for name, config_file in config_files.items():
        status = "Exists" if config_file.exists() else "Missing"
        table.add_row(name, str(config_file), status)

    console.print(table)


@config_cli.command()
@click.option("--force", is_flag=True, help="Overwrite an existing user config")
def init(force: bool):
    """Create a user config file populated with the defaults."""
    config_file = config_manager.create_user_config(overwrite=force)
    click.echo(f"Created {config_file}")
