"""Composition of per-class schemas and their type-pinning shells."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from ..config import FamilyNames
from ..models import ClassModel, PropertyModel
from .constants import (
    COLLECTION_FILENAME,
    DEFAULT_PROPERTIES,
    SYNTHETIC_PROPERTIES,
    ref,
    schema_filename,
)
from .resolver import replace_links


@dataclass
class ComposedSchema:
    """The documents produced for one class."""

    class_name: str
    schema: Dict[str, Any]
    shell: Optional[Dict[str, Any]] = None


def _in_family(class_name: str, family: str) -> bool:
    return class_name.endswith(family) and len(class_name) > len(family)


def inheritance_refs(model: ClassModel, families: FamilyNames) -> List[Dict[str, str]]:
    """Return the ordered ``allOf`` references for a non-root class."""
    refs: List[Dict[str, str]] = []
    if _in_family(model.name, families.item):
        refs.append(ref(schema_filename(families.item)))
    elif _in_family(model.name, families.group):
        refs.append(ref(schema_filename(families.group)))
    # The family roots are already referenced above or below.
    if model.parent_name and model.parent_name not in families.all():
        refs.append(ref(schema_filename(model.parent_name)))
    refs.append(ref(schema_filename(families.root)))
    return refs


def compose_class_schema(
    model: ClassModel, properties: Iterable[PropertyModel], families: FamilyNames
) -> Dict[str, Any]:
    schema: Dict[str, Any] = {
        "type": "object",
        "defaultProperties": list(DEFAULT_PROPERTIES),
        "properties": {},
    }
    if model.name != families.root:
        schema["allOf"] = inheritance_refs(model, families)
    for prop in properties:
        schema["properties"][prop.name] = prop.to_schema()
    for name in SYNTHETIC_PROPERTIES:
        schema["properties"].pop(name, None)
    return schema


def shell_title(model: ClassModel, families: FamilyNames) -> str:
    if model.editor_title:
        return model.editor_title
    if model.type_name:
        return model.type_name
    for family in (families.item, families.group):
        if _in_family(model.name, family):
            return model.name[: -len(family)]
    return model.name


def compose_shell(model: ClassModel, schema: Dict[str, Any], families: FamilyNames) -> Dict[str, Any]:
    """Wrap a class schema with a hidden ``type`` pinned to the class's type id."""
    shell: Dict[str, Any] = {
        "type": "object",
        "properties": {
            "type": {
                "options": {"hidden": True},
                "type": "string",
                "enum": [model.type_id],
            }
        },
    }
    description = replace_links(model.editor_description)
    if description is not None:
        shell["description"] = description
    shell["title"] = shell_title(model, families)
    # The editor needs the ancestors repeated here as well as in the class schema.
    shell["allOf"] = list(schema.get("allOf", [])) + [ref(schema_filename(model.name))]
    if model.name == families.group:
        shell["properties"]["items"] = ref(COLLECTION_FILENAME)
    return shell


def compose(
    model: ClassModel, properties: Iterable[PropertyModel], families: FamilyNames
) -> ComposedSchema:
    """Build the class schema and, for concrete classes, its shell."""
    schema = compose_class_schema(model, properties, families)
    shell = compose_shell(model, schema, families) if model.type_id is not None else None
    return ComposedSchema(class_name=model.name, schema=schema, shell=shell)


__all__ = [
    "ComposedSchema",
    "compose",
    "compose_class_schema",
    "compose_shell",
    "inheritance_refs",
    "shell_title",
]
