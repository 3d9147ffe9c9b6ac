"""Structural hierarchy discovery for model sources."""

from __future__ import annotations

from pathlib import Path
from typing import AbstractSet, Dict, Iterable, List, Mapping, Optional

from ..config import FamilyNames
from ..errors import StructuralScanFailure
from .base import HierarchyLink, ParentResolver, normalise_lines
from .inherit_call import InheritCallResolver


def default_resolvers(families: FamilyNames | None = None) -> List[ParentResolver]:
    """Return the built-in resolvers, one per supported language family."""
    return [InheritCallResolver(families)]


def scan_hierarchy(
    text: str,
    path: Path,
    families: FamilyNames | None = None,
    resolvers: Optional[Iterable[ParentResolver]] = None,
) -> HierarchyLink:
    """Return the parent and own-member boundary for the class defined in ``path``."""
    class_name = path.stem
    candidates = list(resolvers) if resolvers is not None else default_resolvers(families)
    lines = normalise_lines(text)
    for resolver in candidates:
        if not resolver.supports(path):
            continue
        link = resolver.resolve(lines, class_name)
        if link is not None:
            return link
    raise StructuralScanFailure(class_name, str(path))


def find_broken_chains(
    parents: Mapping[str, Optional[str]],
    families: FamilyNames | None = None,
    failed: AbstractSet[str] = frozenset(),
) -> Dict[str, str]:
    """Return classes whose parent chain dangles or loops, with the reason.

    ``parents`` maps each derived class to its parent. A chain is whole when it
    reaches the root class or a family name outside the batch. Chains passing
    through a class in ``failed`` are broken too.
    """
    families = families or FamilyNames()
    broken: Dict[str, str] = {}
    for name in parents:
        seen = [name]
        current = name
        while True:
            parent = parents[current]
            if parent is None:
                if current != families.root:
                    broken[name] = f"stops at {current}, which has no parent"
                break
            if parent in failed:
                broken[name] = f"passes through failed class {parent}"
                break
            if parent in seen:
                broken[name] = "loops: " + " -> ".join(seen + [parent])
                break
            if parent not in parents:
                if parent not in families.all():
                    broken[name] = f"references unknown class {parent}"
                break
            seen.append(parent)
            current = parent
    return broken


__all__ = [
    "HierarchyLink",
    "InheritCallResolver",
    "ParentResolver",
    "default_resolvers",
    "find_broken_chains",
    "normalise_lines",
    "scan_hierarchy",
]
