"""Error kinds raised while deriving schemas from model sources."""

from __future__ import annotations

from typing import Dict, Sequence


class SchemaGenError(RuntimeError):
    """Base class for derivation failures scoped to a single class or run."""


class StructuralScanFailure(SchemaGenError):
    """Raised when no inheritance or root marker is found in a source file."""

    def __init__(self, class_name: str, path: str) -> None:
        super().__init__(f"Couldn't find 'inherits' line for {class_name} in {path}")
        self.class_name = class_name
        self.path = path


class MissingClassDeclaration(SchemaGenError):
    """Raised when the documentation set carries no class-level record."""

    def __init__(self, class_name: str) -> None:
        super().__init__(f"No @class comment in {class_name}")
        self.class_name = class_name


class UnsupportedArrayType(SchemaGenError):
    """Raised when an array property has no mappable item type."""

    def __init__(self, property_name: str, declared_type: str | None) -> None:
        super().__init__(
            f"Not an array type for property '{property_name}': {declared_type or '(none)'}"
        )
        self.property_name = property_name
        self.declared_type = declared_type


class BrokenInheritanceChain(SchemaGenError):
    """Raised when a class's parent chain does not reach the root family."""

    def __init__(self, class_name: str, reason: str) -> None:
        super().__init__(f"Inheritance chain of {class_name} {reason}")
        self.class_name = class_name
        self.reason = reason


class DuplicateTypeId(SchemaGenError):
    """Raised when two or more classes resolve to the same type identifier."""

    def __init__(self, duplicates: Dict[str, Sequence[str]]) -> None:
        details = "; ".join(
            f"'{type_id}' used by {', '.join(names)}" for type_id, names in sorted(duplicates.items())
        )
        super().__init__(f"Duplicate type ids: {details}")
        self.duplicates = {type_id: list(names) for type_id, names in duplicates.items()}


__all__ = [
    "BrokenInheritanceChain",
    "DuplicateTypeId",
    "MissingClassDeclaration",
    "SchemaGenError",
    "StructuralScanFailure",
    "UnsupportedArrayType",
]
