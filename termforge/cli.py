"""
Command line entry point for termforge.

termforge turns declarative terminal resources (packages, profiles, shell
plugins, prompts, shell definitions and WezTerm configs) into the files the
tools themselves read: starship.toml, wezterm.lua and shell snippets.
"""

import click

from .config import setup_logging
from .config_cli import config_cli
from .package_cli import package_cli
from .palette_cli import palette_cli
from .plugin_cli import plugin_cli
from .profile_cli import profile_cli
from .prompt_cli import prompt_cli
from .shell_cli import shell_cli
from .wezterm_cli import wezterm_cli


@click.group(invoke_without_command=True)
@click.option(
    "--version",
    is_flag=True,
    help="Show version and exit",
)
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Increase verbosity (-v warnings, -vv info, -vvv debug)",
)
@click.pass_context
def termforge(ctx, version, verbose):
    """
    termforge - terminal configuration generator

    Explore packages and install everything they inherit:
        termforge package install developer --dry-run

    Generate tool configuration:
        termforge prompt generate starship-developer --palette catppuccin-mocha
        termforge wezterm generate tmux-style -o ~/.wezterm.lua
        termforge plugin generate --package developer --manager zinit
        termforge shell generate zsh-default
        termforge profile generate developer -o ~/.config/termforge
    """
    if version:
        from . import __version__

        click.echo(f"termforge {__version__}")
        ctx.exit()

    setup_logging(verbose or None)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit(0)


# Register all subcommands
termforge.add_command(package_cli)
termforge.add_command(prompt_cli)
termforge.add_command(wezterm_cli)
termforge.add_command(plugin_cli)
termforge.add_command(shell_cli)
termforge.add_command(profile_cli)
termforge.add_command(palette_cli)
termforge.add_command(config_cli)
