"""Resolution of documented members into schema-facing property models."""

from __future__ import annotations

import copy
import re
from typing import Any, Dict, Optional, Sequence

from ..errors import UnsupportedArrayType
from ..logging import get_logger
from ..models import PropertyAnnotation, PropertyModel
from .annotations import is_supported_type
from .constants import (
    ABBREVIATION_PATTERN,
    ARRAY_ITEM_TYPES,
    FEATURE_INFO_FORMAT_TYPE,
    FEATURE_INFO_FORMATS,
    SPECIAL_PROPERTIES,
)

logger = get_logger("schema.resolver")

_WORD_PATTERN = re.compile(r"[A-Z]+(?![a-z])|[A-Z]?[^A-Z\s]+")
_ARRAY_PATTERN = re.compile(r"Array", re.IGNORECASE)
_LEGEND_URL_PATTERN = re.compile(r"LegendUrl", re.IGNORECASE)
_LINK_TO_MEMBER = re.compile(r"\{@link ([^|}#]+)#([^}]*)\}", re.IGNORECASE)
_LINK_WITH_LABEL = re.compile(r"\{@link ([^|}]+\|)?([^}]+)\}", re.IGNORECASE)
_ITEM_TYPES_BY_LOWER = {key.lower(): value for key, value in ARRAY_ITEM_TYPES.items()}


def titleify(name: str) -> str:
    """'myWmsPropName' -> 'My WMS prop name'."""
    words = [word for chunk in name.split() for word in _WORD_PATTERN.findall(chunk)]
    if not words:
        return name
    titled = []
    for index, word in enumerate(words):
        if ABBREVIATION_PATTERN.match(word):
            titled.append(word.upper())
        elif index == 0:
            titled.append(word[0].upper() + word[1:])
        else:
            titled.append(word.lower())
    return " ".join(titled)


def clean_description(text: str) -> str:
    text = re.sub(r"^Gets or sets the", "The", text)
    text = re.sub(r"^Gets or sets a", "A", text)
    return re.sub(r"\s*This property is observable\.", "", text)


def replace_links(text: Optional[str]) -> Optional[str]:
    """Render ``{@link ...}`` markup as plain text."""
    if text is None:
        return None
    text = _LINK_TO_MEMBER.sub(r"\1's \2", text)
    return _LINK_WITH_LABEL.sub(r"\2", text)


def editor_type(type_name: str) -> str:
    """Convert a JSDoc type name to a JSON Editor type."""
    if _ARRAY_PATTERN.search(type_name):
        return "array"
    if _LEGEND_URL_PATTERN.search(type_name):
        return "string"
    return type_name.lower()


def resolve_type(declared_types: Sequence[str]) -> Optional[str]:
    resolved = [editor_type(name) for name in declared_types if is_supported_type(name)]
    return resolved[0] if resolved else None


def array_items(annotation: PropertyAnnotation) -> Dict[str, Any]:
    """Return the ``items`` schema for an array-typed property."""
    array_type = next(
        (name for name in annotation.declared_types if _ARRAY_PATTERN.search(name)), None
    )
    item_type = annotation.tag("editoritemstype") or (
        _ITEM_TYPES_BY_LOWER.get(array_type.lower()) if array_type else None
    )
    if item_type is None:
        raise UnsupportedArrayType(annotation.name, array_type)

    items: Dict[str, Any] = {"type": item_type}
    title = annotation.tag("editoritemstitle")
    if title:
        items["title"] = title
        logger.debug("%s items titled '%s'", annotation.name, title)
    description = annotation.tag("editoritemsdescription")
    if description:
        items["description"] = description
    if array_type and array_type.lower() == FEATURE_INFO_FORMAT_TYPE.lower():
        items["enum"] = list(FEATURE_INFO_FORMATS)
    return items


def resolve_property(annotation: PropertyAnnotation) -> PropertyModel:
    """Resolve type, title, description and format for one documented member."""
    resolved_type = resolve_type(annotation.declared_types)

    description = annotation.tag("editordescription")
    if description is None and annotation.raw_description is not None:
        description = clean_description(annotation.raw_description)

    model = PropertyModel(
        name=annotation.name,
        resolved_type=resolved_type,
        title=annotation.tag("editortitle") or titleify(annotation.name),
        description=replace_links(description),
    )

    if resolved_type == "array":
        model.format = "tabs"
        model.items = array_items(annotation)
    elif resolved_type == "boolean":
        model.format = "checkbox"
    elif resolved_type == "string" and annotation.name == "description":
        model.format = "textarea"

    model.format = annotation.tag("editorformat") or model.format
    if model.format == "textarea":
        model.options = {"expand_height": True}

    special = SPECIAL_PROPERTIES.get(annotation.name)
    if special:
        model.overrides = copy.deepcopy(special)
    return model


__all__ = [
    "array_items",
    "clean_description",
    "editor_type",
    "replace_links",
    "resolve_property",
    "resolve_type",
    "titleify",
]
