"""Loading of per-class documentation into typed property annotations."""

from __future__ import annotations

import re
from typing import Iterable, List, Optional, Sequence

from ..errors import MissingClassDeclaration
from ..models import PropertyAnnotation
from ..parsing.records import DocRecord, normalise_type_name
from .constants import RECTANGLE_EXPANSION, RECTANGLE_TYPE, SUPPORTED_TYPE_PATTERN

EDITOR_TYPE_TAG = "editortype"

_EDITOR_TYPE_FORM = re.compile(r"^\s*(?:\{(.*)\})?(.*)$", re.DOTALL)


def is_supported_type(type_name: str) -> bool:
    """Is the documented type something the editor can represent?"""
    return bool(SUPPORTED_TYPE_PATTERN.match(type_name))


def parse_editor_types(value: str) -> List[str]:
    """Parse an ``@editortype`` value, either ``{Number} ignored text`` or ``Number|String``."""
    match = _EDITOR_TYPE_FORM.match(value)
    braced, bare = (match.group(1), match.group(2)) if match else (None, value)
    expression = braced if braced is not None else bare
    return [normalise_type_name(part) for part in expression.split("|") if part.strip()]


def find_class_record(records: Iterable[DocRecord], class_name: str) -> DocRecord:
    """Return the first class-level record, which names the class in the docs."""
    for record in records:
        if record.kind == "class":
            return record
    raise MissingClassDeclaration(class_name)


def find_class_tag(
    records: Sequence[DocRecord],
    class_name: str,
    tag: str,
    fallback_field: Optional[str] = None,
) -> Optional[str]:
    """Return a class-level custom tag, else a field, from any record naming the class.

    Documentation tooling may split one class comment across several records, so
    every record named ``class_name`` is searched.
    """
    matching = [record for record in records if record.name == class_name]
    for record in matching:
        value = record.tag(tag)
        if value:
            return value
    if fallback_field is None:
        return None
    for record in matching:
        value = getattr(record, fallback_field, None)
        if value:
            return value
    return None


def load_own_properties(
    records: Iterable[DocRecord], class_name: str, inherits_at_line: int
) -> List[PropertyAnnotation]:
    """Return the editable members declared on ``class_name`` before its inherit line."""
    annotations: List[PropertyAnnotation] = []
    for record in records:
        if record.kind != "member" or record.memberof != class_name:
            continue
        # Members below the boundary live in getter/setter blocks and are not own properties.
        if record.declaration_line >= inherits_at_line:
            continue

        declared = list(record.declared_type_names)
        if declared and declared[0] == RECTANGLE_TYPE:
            declared = list(RECTANGLE_EXPANSION)

        override = record.tag(EDITOR_TYPE_TAG)
        if override is not None:
            declared = parse_editor_types(override)
            if not declared:
                continue
        elif not any(is_supported_type(name) for name in declared):
            continue

        annotations.append(
            PropertyAnnotation(
                name=record.name,
                declared_types=tuple(declared),
                tags=dict(record.custom_tags),
                raw_description=record.description,
                declaration_line=record.declaration_line,
            )
        )
    annotations.sort(key=lambda annotation: annotation.declaration_line)
    return annotations


__all__ = [
    "EDITOR_TYPE_TAG",
    "find_class_record",
    "find_class_tag",
    "is_supported_type",
    "load_own_properties",
    "parse_editor_types",
]
