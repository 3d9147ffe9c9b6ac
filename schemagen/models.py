"""Core data models shared across schemagen components."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple


@dataclass(frozen=True)
class PropertyAnnotation:
    """A documented member declared directly on a class."""

    name: str
    declared_types: Tuple[str, ...]
    tags: Mapping[str, str] = field(default_factory=dict)
    raw_description: Optional[str] = None
    declaration_line: int = 0

    def tag(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.tags.get(name, default)


@dataclass(frozen=True)
class ClassModel:
    """Structural and documentation facts recovered for one source class."""

    name: str
    parent_name: Optional[str]
    inherits_at_line: int
    own_properties: Tuple[PropertyAnnotation, ...] = ()
    type_id: Optional[str] = None
    type_name: Optional[str] = None
    source_path: Optional[Path] = None
    doc_name: Optional[str] = None
    editor_title: Optional[str] = None
    editor_description: Optional[str] = None

    @property
    def is_concrete(self) -> bool:
        return self.type_id is not None


@dataclass
class PropertyModel:
    """Schema-facing view of a property after type and tag resolution."""

    name: str
    resolved_type: Optional[str]
    title: Optional[str] = None
    description: Optional[str] = None
    format: Optional[str] = None
    options: Optional[Dict[str, Any]] = None
    items: Optional[Dict[str, Any]] = None
    overrides: Dict[str, Any] = field(default_factory=dict)

    def to_schema(self) -> Dict[str, Any]:
        """Return the JSON Schema fragment, omitting unset keys."""
        fragment: Dict[str, Any] = {}
        for key, value in (
            ("type", self.resolved_type),
            ("title", self.title),
            ("description", self.description),
            ("format", self.format),
            ("items", self.items),
            ("options", self.options),
        ):
            if value is not None:
                fragment[key] = value
        fragment.update(self.overrides)
        return fragment
