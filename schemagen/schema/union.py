"""Builder for the collection schema describing a heterogeneous list of members."""

from __future__ import annotations

from collections import defaultdict
from typing import Any, Dict, List, Sequence

from ..config import FamilyNames, OutputMode
from ..errors import DuplicateTypeId
from ..models import ClassModel
from .constants import ref, schema_filename, shell_filename


def find_duplicate_type_ids(models: Sequence[ClassModel]) -> Dict[str, List[str]]:
    """Return type ids claimed by more than one class, with the claiming class names."""
    claims: Dict[str, List[str]] = defaultdict(list)
    for model in models:
        if model.type_id is not None:
            claims[model.type_id].append(model.name)
    return {type_id: names for type_id, names in claims.items() if len(names) > 1}


def guarded_pair(model: ClassModel) -> Dict[str, Any]:
    """Either the object is not of this type, or it is and satisfies the type's shell.

    Splitting the check this way lets a validator report the failing branch of
    the one type that matched, rather than "matched none of N alternatives".
    """
    type_prop = {"type": {"enum": [model.type_id]}}
    return {
        "oneOf": [
            {"not": {"properties": type_prop}},
            {
                "allOf": [
                    # The type is pinned here rather than in the shell so that a
                    # type may inherit from another concrete type.
                    {"properties": type_prop},
                    ref(shell_filename(model.name)),
                ]
            },
        ]
    }


def build_collection_schema(
    models: Sequence[ClassModel],
    mode: OutputMode,
    families: FamilyNames | None = None,
) -> Dict[str, Any]:
    """Return the ``items`` schema accepting any concrete member type."""
    families = families or FamilyNames()
    concrete = [model for model in models if model.type_id is not None]
    duplicates = find_duplicate_type_ids(concrete)
    if duplicates:
        raise DuplicateTypeId(duplicates)

    items: Dict[str, Any] = {
        "type": "object",
        "title": "item",
        "headerTemplate": "{{ self.name }}",
        "required": ["name", "type"],
    }
    root_ref = ref(schema_filename(families.root))
    if mode is OutputMode.EDITOR:
        ordered = sorted(concrete, key=lambda model: model.name != families.group)
        items["allOf"] = [root_ref]
        items["oneOf"] = [ref(shell_filename(model.name)) for model in ordered]
    else:
        items["allOf"] = [root_ref] + [guarded_pair(model) for model in concrete]

    return {
        "title": "Items",
        "description": "List of items or groups",
        "type": "array",
        "format": "tabs",
        "items": items,
    }


__all__ = ["build_collection_schema", "find_duplicate_type_ids", "guarded_pair"]
