"""
Resolution steps that run before rendering.

Package Structure:
- inheritance.py: Package extends-chain merging and provenance lookup
- placeholders.py: ${theme.X} substitution against a palette
- theme.py: WezTerm color tables from a referenced palette

Public API:
- resolve_package, component_source, resolved_document
- resolve_theme_vars, find_unresolved, THEME_VAR_ALIASES
- apply_theme_colors
- PackageResolutionError, CircularDependencyError, ParentNotFoundError
- ThemeResolutionError
"""

from .inheritance import (
    CircularDependencyError,
    PackageResolutionError,
    ParentNotFoundError,
    component_source,
    inheritance_chain,
    resolve_package,
    resolved_document,
)
from .placeholders import (
    THEME_VAR_ALIASES,
    find_unresolved,
    resolve_theme_vars,
)
from .theme import ThemeResolutionError, apply_theme_colors, palette_color_config

__all__ = [
    "CircularDependencyError",
    "PackageResolutionError",
    "ParentNotFoundError",
    "component_source",
    "inheritance_chain",
    "resolve_package",
    "resolved_document",
    "THEME_VAR_ALIASES",
    "find_unresolved",
    "resolve_theme_vars",
    "ThemeResolutionError",
    "apply_theme_colors",
    "palette_color_config",
]
