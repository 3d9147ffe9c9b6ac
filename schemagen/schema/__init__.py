"""Schema derivation: documentation loading, resolution, composition and union."""

from .annotations import find_class_record, find_class_tag, load_own_properties
from .composer import ComposedSchema, compose
from .resolver import resolve_property, titleify
from .union import build_collection_schema, find_duplicate_type_ids

__all__ = [
    "ComposedSchema",
    "build_collection_schema",
    "compose",
    "find_class_record",
    "find_class_tag",
    "find_duplicate_type_ids",
    "load_own_properties",
    "resolve_property",
    "titleify",
]
