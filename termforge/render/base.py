"""Shared pieces of the config renderers."""

import logging
from pathlib import Path
from typing import List, Union

logger = logging.getLogger(__name__)

GENERATED_BY = "termforge"


class RenderError(Exception):
    """Raised when a renderer is given missing or invalid input."""

    pass


def comment_lines(text: str, marker: str = "#") -> List[str]:
    """
    Turn free text into comment lines. Every line of a multi-line value gets
    its own marker so no part of it can end up as a live statement.
    """
    lines = (text or "").splitlines() or [""]
    return [f"{marker} {line}".rstrip() for line in lines]


def write_output(content: str, path: Union[str, Path]) -> Path:
    """
    Write rendered content to ``path``, creating parent directories.

    The content is fully rendered before this is called, so a failed render
    never leaves a partial file behind.
    """
    target = Path(path).expanduser()
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    except OSError as e:
        raise RenderError(f"failed to write file: {e}") from e
    logger.info(f"Wrote {len(content)} bytes to {target}")
    return target
