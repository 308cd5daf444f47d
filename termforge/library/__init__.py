"""
Built-in resource library for termforge.

Package Structure:
- library.py: ResourceLibrary and per-kind ResourceCollection
- data/: Shipped packages, plugins, prompts, shells and WezTerm configs

Public API:
- ResourceLibrary: Loads built-ins plus configured user directories
- ResourceNotFoundError: Raised by collection lookups for unknown names

Example Usage:
    from termforge.library import ResourceLibrary

    library = ResourceLibrary()
    developer = library.packages.get("developer")
"""

from .library import (
    BUILTIN_DIR,
    ResourceCollection,
    ResourceLibrary,
    ResourceNotFoundError,
)

__all__ = [
    "BUILTIN_DIR",
    "ResourceCollection",
    "ResourceLibrary",
    "ResourceNotFoundError",
]
