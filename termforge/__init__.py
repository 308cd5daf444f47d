"""
This package generates terminal configuration from declarative resources.
Packages bundle shell plugins, prompts and profiles and may extend each other;
prompts and WezTerm configs reference color palettes through ${theme.X}
placeholders that are resolved when the files are generated.
"""

# __init__.py

__version__ = "0.1.0"

from .cli import termforge  # noqa: E402

__all__ = ["termforge"]
