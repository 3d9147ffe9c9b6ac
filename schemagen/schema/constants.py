"""Constants shared by schema resolution and composition."""

from __future__ import annotations

import re

ABBREVIATIONS = (
    "wms",
    "url",
    "kml",
    "csv",
    "json",
    "id",
    "gpx",
    "czml",
    "wfs",
    "wmts",
    "geojson",
    "ckan",
)

ABBREVIATION_PATTERN = re.compile(rf"^({'|'.join(ABBREVIATIONS)})$", re.IGNORECASE)

SUPPORTED_TYPE_PATTERN = re.compile(
    r"^(Boolean|Number|String|Object|LegendUrl|Array(\.<(String|Number|Object|GetFeatureInfoFormat)>)?)$",
    re.IGNORECASE,
)

RECTANGLE_TYPE = "Rectangle"
RECTANGLE_EXPANSION = ("Array.<Number>", "Array.<String>")

FEATURE_INFO_FORMAT_TYPE = "Array.<GetFeatureInfoFormat>"
FEATURE_INFO_FORMATS = ["json", "xml", "html", "text"]

ARRAY_ITEM_TYPES = {
    "Array.<String>": "string",
    "Array.<Number>": "number",
    "Array.<Object>": "object",
    FEATURE_INFO_FORMAT_TYPE: "string",
    "Array": "string",
}

DEFAULT_PROPERTIES = ["name", "type", "url"]

# Bookkeeping properties that never appear in an output schema.
SYNTHETIC_PROPERTIES = ("typeName",)

SPECIAL_PROPERTIES = {
    "rectangle": {
        "type": "array",
        "items": {"type": ["number", "string"]},
        "format": "table",
        "options": {"collapsed": True, "disable_array_reorder": True},
        "maxItems": 4,
        "minItems": 2,
    },
    "blacklist": {
        "additionalProperties": {"type": "boolean", "format": "checkbox"},
    },
    "whitelist": {
        "additionalProperties": {"type": "boolean", "format": "checkbox"},
    },
}

COLLECTION_FILENAME = "items.json"
SHELL_SUFFIX = "_type"


def schema_filename(class_name: str) -> str:
    return f"{class_name}.json"


def shell_filename(class_name: str) -> str:
    return f"{class_name}{SHELL_SUFFIX}.json"


def ref(filename: str) -> dict:
    return {"$ref": filename}


__all__ = [
    "ABBREVIATIONS",
    "ABBREVIATION_PATTERN",
    "ARRAY_ITEM_TYPES",
    "COLLECTION_FILENAME",
    "DEFAULT_PROPERTIES",
    "FEATURE_INFO_FORMATS",
    "FEATURE_INFO_FORMAT_TYPE",
    "RECTANGLE_EXPANSION",
    "RECTANGLE_TYPE",
    "SHELL_SUFFIX",
    "SPECIAL_PROPERTIES",
    "SUPPORTED_TYPE_PATTERN",
    "SYNTHETIC_PROPERTIES",
    "ref",
    "schema_filename",
    "shell_filename",
]
