"""
Starship renderer: PromptDefinition + Palette -> starship.toml text.

Output layout:

    # header comments
    palette = "<name>"
    add_newline = false
    format = \"\"\" ... \"\"\"

    [palettes.<name>]
    ...sorted colors...

    [<module>]            # one per module, sorted by name
    disabled = false
    style = "..."
    ...options, then nested [<module>.<option>] tables...

Every string that may carry ``${theme.X}`` placeholders is resolved against
the palette before it is written. Strings are escaped with tomlkit so the
result is always valid TOML.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Set, Union

import tomlkit

from ..models.options import Bool, Number, OptionValue, Scalar, Table, ValueList
from ..models.prompt import ModuleConfig, PromptDefinition
from ..palette import palette as keys
from ..palette.palette import Palette
from ..resolve.placeholders import resolve_theme_vars
from .base import GENERATED_BY, RenderError, comment_lines, write_output

logger = logging.getLogger(__name__)

# Semantic keys added to the palette section when the terminal view lacks them
PALETTE_SEMANTIC_KEYS = (
    keys.BG,
    keys.FG,
    keys.PRIMARY,
    keys.SECONDARY,
    keys.ACCENT,
    keys.ERROR,
    keys.WARNING,
    keys.INFO,
    keys.HINT,
    keys.SUCCESS,
    keys.COMMENT,
    keys.BORDER,
)


def toml_string(value: str) -> str:
    return tomlkit.string(value).as_string()


def toml_key(key: str) -> str:
    return tomlkit.key(key).as_string()


def format_number(number: Number) -> str:
    """Integral values print without a fractional part."""
    if number.is_integral:
        return str(int(number.value))
    return repr(float(number.value))


class StarshipRenderer:
    """Renders prompt definitions to starship.toml."""

    def render(self, prompt: Optional[PromptDefinition], palette: Optional[Palette]) -> str:
        if prompt is None:
            raise RenderError("prompt is nil")
        if palette is None:
            raise RenderError("palette is nil")

        lines: List[str] = []
        self._write_header(lines, prompt, palette)
        self._write_globals(lines, prompt, palette)
        self._write_palette(lines, palette)
        for name, module in sorted(self._sections(prompt).items()):
            self._write_module(lines, name, module, palette)
        if prompt.raw_config:
            lines.append("# Raw configuration")
            lines.append(prompt.raw_config.rstrip("\n"))
            lines.append("")
        return "\n".join(lines) + "\n"

    def render_to_file(
        self,
        prompt: Optional[PromptDefinition],
        palette: Optional[Palette],
        path: Union[str, Path],
    ) -> Path:
        content = self.render(prompt, palette)
        return write_output(content, path)

    @staticmethod
    def _sections(prompt: PromptDefinition) -> Dict[str, ModuleConfig]:
        sections = dict(prompt.modules)
        if prompt.character is not None and "character" not in sections:
            sections["character"] = ModuleConfig(
                options={k: Scalar(v) for k, v in prompt.character.items()}
            )
        return sections

    @staticmethod
    def _write_header(lines: List[str], prompt: PromptDefinition, palette: Palette):
        lines.append(f"# Generated by {GENERATED_BY} - do not edit")
        lines.extend(comment_lines(f"Prompt: {prompt.name}"))
        if prompt.description:
            lines.extend(comment_lines(f"Description: {prompt.description}"))
        lines.extend(comment_lines(f"Theme: {palette.name}"))
        lines.append("")

    @staticmethod
    def _write_globals(lines: List[str], prompt: PromptDefinition, palette: Palette):
        lines.append(f"palette = {toml_string(palette.name)}")
        lines.append(f"add_newline = {'true' if prompt.add_newline else 'false'}")
        if prompt.format:
            resolved = resolve_theme_vars(prompt.format, palette)
            # Keep the multi-line form; the newline after the opening quotes is
            # trimmed by TOML parsers.
            body = tomlkit.string(resolved, multiline=True).as_string()[3:-3]
            lines.append("")
            lines.append(f'format = """\n{body}\n"""')
        lines.append("")

    @staticmethod
    def _write_palette(lines: List[str], palette: Palette):
        lines.append(f"[palettes.{toml_key(palette.name)}]")
        colors = dict(palette.terminal_colors())
        for key in PALETTE_SEMANTIC_KEYS:
            value = palette.get(key)
            if value and key not in colors:
                colors[key] = value
        for key in sorted(colors):
            lines.append(f"{toml_key(key)} = {toml_string(colors[key])}")
        lines.append("")

    def _write_module(
        self, lines: List[str], name: str, module: ModuleConfig, palette: Palette
    ):
        lines.append(f"[{toml_key(name)}]")
        lines.append(f"disabled = {'true' if module.disabled else 'false'}")
        written = {"disabled"}
        for field_name in ("style", "format", "symbol"):
            value = getattr(module, field_name)
            if value:
                lines.append(
                    f"{field_name} = {toml_string(resolve_theme_vars(value, palette))}"
                )
                written.add(field_name)
        self._write_options(
            lines, toml_key(name), module.options, palette, written=written
        )
        lines.append("")

    def _write_options(
        self,
        lines: List[str],
        section: str,
        options: Dict[str, OptionValue],
        palette: Palette,
        labels: bool = False,
        written: Optional[Set[str]] = None,
    ):
        """
        Write scalar options first, then one subsection per nested table.
        A key may appear only once per table; later duplicates are skipped.
        """
        written = set(written or ())
        tables = []
        for key, value in sorted(options.items()):
            if labels:
                key = key[:1].upper() + key[1:]
            if key in written:
                logger.warning(f"Skipping duplicate key '{key}' in [{section}]")
                continue
            written.add(key)
            if isinstance(value, Table):
                tables.append((key, value))
                continue
            lines.append(f"{toml_key(key)} = {self._format_value(value, palette)}")
        for key, table in tables:
            subsection = f"{section}.{toml_key(key)}"
            lines.append("")
            lines.append(f"[{subsection}]")
            self._write_options(
                lines, subsection, dict(table.entries), palette, labels=table.labels
            )

    def _format_value(self, value: OptionValue, palette: Palette) -> str:
        if isinstance(value, Scalar):
            return toml_string(resolve_theme_vars(value.value, palette))
        return self._format_item(value)

    def _format_item(self, value: OptionValue) -> str:
        """List items are written as-is, without placeholder resolution."""
        if isinstance(value, Scalar):
            return toml_string(value.value)
        if isinstance(value, Bool):
            return "true" if value.value else "false"
        if isinstance(value, Number):
            return format_number(value)
        if isinstance(value, ValueList):
            return "[" + ", ".join(self._format_item(item) for item in value.items) + "]"
        if isinstance(value, Table):
            entries = ", ".join(
                f"{toml_key(k)} = {self._format_item(v)}" for k, v in value.sorted_entries()
            )
            return "{ " + entries + " }" if entries else "{}"
        raise RenderError(f"unsupported option value: {value!r}")
