"""
Package inheritance resolution.

A package names at most one parent through ``extends``. Resolving a package
walks that chain up to its root and merges the component lists, ancestors
first, keeping only the first occurrence of each name.

The lookup is anything with a ``get(name)`` method returning a Package or
None (a plain dict works). Nothing here mutates the packages it is given.
"""

import logging
from typing import Dict, List, Mapping, Optional

from ..models.package import COMPONENT_TYPES, Package, ResolvedComponents

logger = logging.getLogger(__name__)

PackageLookup = Mapping[str, Package]


class PackageResolutionError(Exception):
    """Base class for inheritance resolution failures."""

    pass


class CircularDependencyError(PackageResolutionError):
    """Raised when an extends chain revisits a package."""

    def __init__(self, package: str):
        self.package = package
        super().__init__(f"circular dependency detected: {package}")


class ParentNotFoundError(PackageResolutionError):
    """Raised when a package extends a package missing from the lookup."""

    def __init__(self, package: str, parent: str):
        self.package = package
        self.parent = parent
        super().__init__(
            f"package {package} extends {parent}, but {parent} not found in library"
        )


def inheritance_chain(package: Package, lookup: PackageLookup) -> List[Package]:
    """
    Return the extends chain from ``package`` up to its root.

    Raises:
        CircularDependencyError: if a package appears twice in the chain
        ParentNotFoundError: if a parent is missing from the lookup
    """
    chain = []
    visiting = set()
    current = package
    while current is not None:
        if current.name in visiting:
            raise CircularDependencyError(current.name)
        visiting.add(current.name)
        chain.append(current)

        if not current.extends:
            break
        parent = lookup.get(current.extends)
        if parent is None:
            raise ParentNotFoundError(current.name, current.extends)
        current = parent
    return chain


def resolve_package(package: Package, lookup: PackageLookup) -> ResolvedComponents:
    """Merge the components of ``package`` and all of its ancestors."""
    chain = inheritance_chain(package, lookup)
    logger.debug(
        f"Resolving {package.name} through chain: "
        + " -> ".join(p.name for p in chain)
    )

    merged: Dict[str, List[str]] = {t: [] for t in COMPONENT_TYPES}
    seen: Dict[str, set] = {t: set() for t in COMPONENT_TYPES}
    for member in reversed(chain):
        for component_type in COMPONENT_TYPES:
            for name in member.components(component_type):
                if name not in seen[component_type]:
                    seen[component_type].add(name)
                    merged[component_type].append(name)

    return ResolvedComponents(
        plugins=tuple(merged["plugin"]),
        prompts=tuple(merged["prompt"]),
        profiles=tuple(merged["profile"]),
    )


def component_source(
    name: str, package: Package, lookup: PackageLookup, component_type: str
) -> str:
    """
    Find which package in the chain declares a component.

    The most specific package is checked first. Returns an empty string when
    no package declares it, or when the chain is broken before one does.
    """
    if component_type not in COMPONENT_TYPES:
        raise ValueError(f"unknown component type: {component_type}")

    visited = set()
    current: Optional[Package] = package
    while current is not None and current.name not in visited:
        if name in current.components(component_type):
            return current.name
        visited.add(current.name)
        current = lookup.get(current.extends) if current.extends else None
    return ""


def resolved_document(package: Package, lookup: PackageLookup) -> dict:
    """The package document with inherited components merged in."""
    resolved = resolve_package(package, lookup)
    document = package.to_document()
    spec = document["spec"]
    for key, values in (
        ("plugins", resolved.plugins),
        ("prompts", resolved.prompts),
        ("profiles", resolved.profiles),
    ):
        if values:
            spec[key] = list(values)
    if package.extends:
        document["metadata"]["description"] = (
            f"{package.description} (includes {resolved.total} components from inheritance)"
        )
    return document
