"""
Shell snippet renderers.

PluginRenderer turns plugin definitions into the loading lines of a zsh
plugin manager. ShellRenderer turns a ShellDefinition into zsh, bash or fish
statements. Both produce bare newline-terminated statements (no shebang, no
guards) for the caller to place into a larger rc file.

Entries that lack the field identifying them (a name, a key, a command) are
skipped with a warning; the rest of the render still succeeds.
"""

import logging
import shlex
from pathlib import Path
from typing import Iterable, List, Optional, Union

from ..models.plugin import MANAGERS, Plugin
from ..models.shell import ShellDefinition
from .base import RenderError, comment_lines, write_output

logger = logging.getLogger(__name__)

DEFAULT_PLUGIN_DIR = "$HOME/.local/share/zsh/plugins"
OMZ_CUSTOM_DIR = "${ZSH_CUSTOM:-$HOME/.oh-my-zsh/custom}"


def double_quote(value: str) -> str:
    """Quote for a double-quoted shell word, leaving $VAR expansion intact."""
    escaped = (
        value.replace("\\", "\\\\").replace('"', '\\"').replace("`", "\\`")
    )
    return f'"{escaped}"'


class PluginRenderer:
    """
    Renders zsh plugin loading code.

    Args:
        manager: Plugin manager for every plugin. When None, each plugin's own
            ``manager`` field is used.
        plugin_dir: Clone directory used by the manual manager
    """

    def __init__(self, manager: Optional[str] = None, plugin_dir: str = DEFAULT_PLUGIN_DIR):
        if manager is not None and manager not in MANAGERS:
            raise RenderError(
                f"invalid manager: {manager} (must be one of {', '.join(MANAGERS)})"
            )
        self.manager = manager
        self.plugin_dir = plugin_dir.rstrip("/")

    def render(self, plugins: Iterable[Plugin]) -> str:
        if plugins is None:
            raise RenderError("plugins is nil")

        selected = []
        for plugin in plugins:
            if not plugin.name:
                logger.warning("Skipping plugin without a name")
                continue
            if not plugin.enabled:
                logger.debug(f"Skipping disabled plugin {plugin.name}")
                continue
            selected.append(plugin)
        # sorted() is stable, so equal priorities keep their input order
        selected = sorted(selected, key=lambda p: p.priority)

        blocks = []
        for plugin in selected:
            block = self._render_plugin(plugin)
            if block:
                blocks.append(block)
        if not blocks:
            return "# No plugins to load\n"
        return "\n".join(blocks)

    def render_to_file(self, plugins: Iterable[Plugin], path: Union[str, Path]) -> Path:
        return write_output(self.render(plugins), path)

    def _render_plugin(self, plugin: Plugin) -> str:
        manager = self.manager or plugin.manager
        if not (plugin.repo or plugin.source or plugin.ohmyzsh_plugin):
            logger.warning(
                f"Skipping plugin '{plugin.name}': no repo, source, or ohmyzsh plugin"
            )
            return ""
        if manager not in MANAGERS:
            logger.warning(f"Skipping plugin '{plugin.name}': invalid manager {manager!r}")
            return ""

        render = getattr(self, "_" + manager.replace("-", "_"))
        body = render(plugin)
        if not body:
            return ""

        lines = comment_lines(plugin.name)
        for key, value in plugin.env.items():
            lines.append(f"export {key}={shlex.quote(value)}")
        lines.extend(body)
        if plugin.config:
            lines.append(plugin.config.rstrip("\n"))
        return "\n".join(lines) + "\n"

    @staticmethod
    def _zinit(plugin: Plugin) -> List[str]:
        ice = []
        if plugin.load_mode == "deferred":
            ice.append("wait")
        elif plugin.load_mode == "lazy":
            ice.append("wait'1'")
        if ice:
            ice.append("lucid")
        if plugin.branch:
            ice.append(f"ver'{plugin.branch}'")
        elif plugin.tag:
            ice.append(f"ver'{plugin.tag}'")

        lines = []
        if ice:
            lines.append("zinit ice " + " ".join(ice))
        if plugin.repo:
            lines.append(f"zinit light {plugin.repo}")
        elif plugin.source:
            lines.append(f"zinit snippet {shlex.quote(plugin.source)}")
        else:
            lines.append(f"zinit snippet OMZP::{plugin.ohmyzsh_plugin}")
        return lines

    @staticmethod
    def _oh_my_zsh(plugin: Plugin) -> List[str]:
        if plugin.is_ohmyzsh_builtin:
            return [f"plugins+=({plugin.ohmyzsh_plugin})"]
        target = double_quote(f"{OMZ_CUSTOM_DIR}/plugins/{plugin.name}")
        clone = _git_clone(plugin, target)
        return [
            f"[[ -d {target} ]] || {clone}",
            f"plugins+=({plugin.name})",
        ]

    @staticmethod
    def _antigen(plugin: Plugin) -> List[str]:
        if plugin.is_ohmyzsh_builtin:
            return [f"antigen bundle {plugin.ohmyzsh_plugin}"]
        line = f"antigen bundle {plugin.repo or shlex.quote(plugin.source)}"
        if plugin.branch or plugin.tag:
            line += f" --branch={plugin.branch or plugin.tag}"
        return [line]

    @staticmethod
    def _sheldon(plugin: Plugin) -> List[str]:
        if plugin.is_ohmyzsh_builtin:
            name = plugin.ohmyzsh_plugin
            return [
                f"sheldon add {plugin.name} --github ohmyzsh/ohmyzsh "
                f"--use plugins/{name}/{name}.plugin.zsh"
            ]
        if plugin.repo:
            line = f"sheldon add {plugin.name} --github {plugin.repo}"
        else:
            line = f"sheldon add {plugin.name} --git {shlex.quote(plugin.source)}"
        if plugin.branch:
            line += f" --branch {plugin.branch}"
        elif plugin.tag:
            line += f" --tag {plugin.tag}"
        return [line]

    def _manual(self, plugin: Plugin) -> List[str]:
        if plugin.is_ohmyzsh_builtin:
            name = plugin.ohmyzsh_plugin
            path = double_quote(f"$ZSH/plugins/{name}/{name}.plugin.zsh")
            return [f"[[ -f {path} ]] && source {path}"]

        plugin_path = f"{self.plugin_dir}/{plugin.name}"
        target = double_quote(plugin_path)
        lines = [
            f"if [[ ! -d {target} ]]; then",
            f"  {_git_clone(plugin, target)}",
            "fi",
        ]
        for source_file in plugin.source_files or (f"{plugin.name}.plugin.zsh",):
            lines.append(f"source {double_quote(f'{plugin_path}/{source_file}')}")
        return lines


def _git_clone(plugin: Plugin, target: str) -> str:
    parts = ["git clone --depth 1"]
    if plugin.branch or plugin.tag:
        parts.append(f"--branch {shlex.quote(plugin.branch or plugin.tag)}")
    parts.append(shlex.quote(plugin.source_url()))
    parts.append(target)
    return " ".join(parts)


class ShellRenderer:
    """Renders shell definitions for zsh, bash and fish."""

    def render(self, shell: Optional[ShellDefinition]) -> str:
        if shell is None:
            raise RenderError("shell is nil")
        if shell.shell_type not in ("zsh", "bash", "fish"):
            raise RenderError(f"unsupported shell type: {shell.shell_type}")
        return _ShellDocument(shell).build()

    def render_to_file(
        self, shell: Optional[ShellDefinition], path: Union[str, Path]
    ) -> Path:
        return write_output(self.render(shell), path)


class _ShellDocument:
    def __init__(self, shell: ShellDefinition):
        self.shell = shell
        self.fish = shell.shell_type == "fish"
        self.sections: List[List[str]] = []

    def build(self) -> str:
        self._section("Environment", self._env())
        self._section("PATH", self._path())
        self._section("Aliases", self._aliases())
        self._section("Functions", self._functions())
        self._section("Options", self._options())
        self._section("History", self._history())
        self._section("Keybindings", self._keybindings())
        if self.shell.raw_config:
            self._section("Raw configuration", [self.shell.raw_config.rstrip("\n")])
        if not self.sections:
            lines = comment_lines(f"{self.shell.name}: nothing to configure")
            return "\n".join(lines) + "\n"
        return "\n".join("\n".join(lines) + "\n" for lines in self.sections)

    def _section(self, title: str, lines: List[str]):
        if lines:
            self.sections.append([f"# {title}"] + lines)

    def _env(self) -> List[str]:
        lines = []
        for var in self.shell.env:
            if not var.name:
                logger.warning("Skipping environment variable without a name")
                continue
            value = double_quote(var.value) if var.expand else shlex.quote(var.value)
            if self.fish:
                lines.append(f"set -gx {var.name} {value}")
            else:
                lines.append(f"export {var.name}={value}")
        return lines

    def _path(self) -> List[str]:
        lines = []
        for directory in self.shell.path_prepend:
            if self.fish:
                lines.append(f"fish_add_path --prepend {double_quote(directory)}")
            else:
                lines.append(f"export PATH={double_quote(directory + ':$PATH')}")
        for directory in self.shell.path_append:
            if self.fish:
                lines.append(f"fish_add_path --append {double_quote(directory)}")
            else:
                lines.append(f"export PATH={double_quote('$PATH:' + directory)}")
        return lines

    def _aliases(self) -> List[str]:
        lines = []
        for alias in self.shell.aliases:
            if not alias.name or not alias.command:
                logger.warning(
                    f"Skipping alias '{alias.name or '?'}': name and command are required"
                )
                continue
            command = shlex.quote(alias.command)
            if self.fish:
                lines.append(f"alias {alias.name} {command}")
            elif alias.global_alias and self.shell.shell_type == "zsh":
                lines.append(f"alias -g {alias.name}={command}")
            else:
                if alias.global_alias:
                    logger.warning(
                        f"Global alias '{alias.name}' is zsh-only, writing a regular alias"
                    )
                lines.append(f"alias {alias.name}={command}")
        return lines

    def _functions(self) -> List[str]:
        lines = []
        for function in self.shell.functions:
            if not function.name or not function.body:
                logger.warning(
                    f"Skipping function '{function.name or '?'}': name and body are required"
                )
                continue
            body = [
                "  " + line if line else ""
                for line in function.body.rstrip("\n").splitlines()
            ]
            if function.description:
                lines.extend(comment_lines(function.description))
            if self.fish:
                lines.append(f"function {function.name}")
                lines.extend(body)
                lines.append("end")
            else:
                lines.append(f"{function.name}() {{")
                lines.extend(body)
                lines.append("}")
        return lines

    def _options(self) -> List[str]:
        if not self.shell.options:
            return []
        if self.fish:
            logger.warning("Shell options are not supported for fish, skipping")
            return []
        command = "setopt" if self.shell.shell_type == "zsh" else "shopt -s"
        return [f"{command} {option}" for option in self.shell.options if option]

    def _history(self) -> List[str]:
        history = self.shell.history
        if history is None:
            return []
        if self.fish:
            logger.warning("History settings are not supported for fish, skipping")
            return []

        lines = []
        if history.size:
            lines.append(f"HISTSIZE={history.size}")
            if self.shell.shell_type == "zsh":
                lines.append(f"SAVEHIST={history.size}")
            else:
                lines.append(f"HISTFILESIZE={history.size}")
        if history.file:
            lines.append(f"HISTFILE={double_quote(history.file)}")

        if self.shell.shell_type == "zsh":
            for enabled, option in (
                (history.ignore_dups, "HIST_IGNORE_DUPS"),
                (history.ignore_space, "HIST_IGNORE_SPACE"),
                (history.share_history, "SHARE_HISTORY"),
                (history.extended_format, "EXTENDED_HISTORY"),
            ):
                if enabled:
                    lines.append(f"setopt {option}")
        else:
            control = []
            if history.ignore_dups:
                control.append("ignoredups")
            if history.ignore_space:
                control.append("ignorespace")
            if control:
                lines.append(f"HISTCONTROL={':'.join(control)}")
            if history.share_history:
                lines.append("shopt -s histappend")
                lines.append('PROMPT_COMMAND="history -a; history -n; ${PROMPT_COMMAND}"')
            if history.extended_format:
                lines.append("HISTTIMEFORMAT='%F %T '")
        return lines

    def _keybindings(self) -> List[str]:
        lines = []
        for binding in self.shell.keybindings:
            if not binding.key:
                logger.warning("Skipping keybinding without a key")
                continue
            if not (binding.widget or binding.command):
                logger.warning(
                    f"Skipping keybinding '{binding.key}': widget or command is required"
                )
                continue
            key = binding.key
            if self.fish:
                target = binding.widget or shlex.quote(binding.command)
                lines.append(f"bind {shlex.quote(key)} {target}")
            elif self.shell.shell_type == "zsh":
                if binding.widget:
                    lines.append(f"bindkey {shlex.quote(key)} {binding.widget}")
                else:
                    command = shlex.quote(binding.command + "\\n")
                    lines.append(f"bindkey -s {shlex.quote(key)} {command}")
            else:
                target = binding.widget or binding.command
                spec = '"' + key + '": ' + target
                flag = "bind" if binding.widget else "bind -x"
                lines.append(f"{flag} {shlex.quote(spec)}")
        return lines
