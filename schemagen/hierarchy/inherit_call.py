"""Parent recovery for JavaScript models registered through ``inherit(...)``."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Optional, Sequence

from ..config import FamilyNames
from .base import HierarchyLink, ParentResolver


class InheritCallResolver(ParentResolver):
    """Finds ``inherit(Parent, Child)`` or, for the root, its ``defineProperties`` block.

    TerriaJS models have no ``extends`` keyword; the relationship is a module-level
    call. The right-hand side must mention a family name, which keeps unrelated
    ``inherit`` helpers from matching.
    """

    _EXTENSIONS = (".js", ".jsx", ".mjs", ".cjs")

    def __init__(self, families: FamilyNames | None = None) -> None:
        self.families = families or FamilyNames()
        family_pattern = "|".join(re.escape(name) for name in self.families.all())
        self._inherit = re.compile(
            rf"\binherit\s*\(\s*([A-Za-z0-9_$-]+)\s*,.*(?:{family_pattern})"
        )
        self._root_marker = re.compile(
            rf"\bdefineProperties\s*\(\s*{re.escape(self.families.root)}\.prototype\b"
        )

    def supports(self, path: Path) -> bool:
        return path.suffix.lower() in self._EXTENSIONS

    def resolve(self, lines: Sequence[str], class_name: str) -> Optional[HierarchyLink]:
        is_root = class_name == self.families.root
        pattern = self._root_marker if is_root else self._inherit
        for number, line in enumerate(lines, start=1):
            match = pattern.search(line)
            if match:
                parent = None if is_root else match.group(1)
                return HierarchyLink(parent_name=parent, inherits_at_line=number)
        return None


__all__ = ["InheritCallResolver"]
