"""Typed documentation records and conversion from jsdoc JSON output."""

from __future__ import annotations

import json
import re
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..logging import get_logger
from .javascript import ParsedSource

_ARRAY_SUFFIX = re.compile(r"^(.+)\[\]$")
_ANGLE_ARRAY = re.compile(r"^Array<(.+)>$")

logger = get_logger("parsing.records")


class DocRecord(BaseModel):
    """One documentation comment, normalised to the fields the pipeline reads."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: str
    name: str
    memberof: Optional[str] = None
    declaration_line: int = Field(ge=1)
    declared_type_names: Tuple[str, ...] = ()
    description: Optional[str] = None
    custom_tags: Dict[str, str] = Field(default_factory=dict)

    @field_validator("memberof")
    @classmethod
    def _strip_prototype(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return strip_member_suffix(value)

    @field_validator("custom_tags")
    @classmethod
    def _lowercase_tags(cls, value: Dict[str, str]) -> Dict[str, str]:
        return {key.lower(): text for key, text in value.items()}

    def tag(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.custom_tags.get(name, default)

    @classmethod
    def from_jsdoc(cls, payload: Mapping[str, Any]) -> "DocRecord":
        """Convert a raw jsdoc / jsdoc-parse record into a DocRecord."""
        meta = payload.get("meta") or {}
        type_info = payload.get("type") or {}
        tags: Dict[str, str] = {}
        for entry in payload.get("customTags") or []:
            if isinstance(entry, Mapping) and entry.get("tag"):
                tags[str(entry["tag"])] = str(entry.get("value") or "")
        for entry in payload.get("tags") or []:
            if isinstance(entry, Mapping) and entry.get("title"):
                value = entry.get("value", entry.get("text"))
                tags[str(entry["title"])] = str(value or "")
        return cls.model_validate(
            {
                "kind": payload.get("kind"),
                "name": payload.get("name"),
                "memberof": payload.get("memberof"),
                "declaration_line": meta.get("lineno") if isinstance(meta, Mapping) else None,
                "declared_type_names": tuple(
                    normalise_type_name(name) for name in (type_info.get("names") or [])
                ),
                "description": payload.get("description"),
                "custom_tags": tags,
            }
        )


class DocExtractor(ABC):
    """Contract for components that turn a parsed file into documentation records."""

    @abstractmethod
    def extract(self, parsed: ParsedSource) -> List[DocRecord]:
        """Return the documentation records for the given file, in source order."""


class JsdocJsonExtractor(DocExtractor):
    """Reads records from a ``jsdoc -X`` JSON dump instead of parsing comments."""

    def __init__(self, dump_path: Path) -> None:
        self._dump_path = dump_path
        self._by_file: Dict[str, List[Mapping[str, Any]]] | None = None
        self._lock = threading.Lock()

    def extract(self, parsed: ParsedSource) -> List[DocRecord]:
        entries = self._load().get(parsed.path.name, [])
        records: List[DocRecord] = []
        for entry in entries:
            if entry.get("undocumented") or not entry.get("name"):
                continue
            try:
                records.append(DocRecord.from_jsdoc(entry))
            except ValidationError as exc:
                logger.debug("Skipping malformed jsdoc record %s: %s", entry.get("longname"), exc)
        records.sort(key=lambda record: record.declaration_line)
        return records

    def _load(self) -> Dict[str, List[Mapping[str, Any]]]:
        with self._lock:
            if self._by_file is None:
                self._by_file = self._read_dump()
            return self._by_file

    def _read_dump(self) -> Dict[str, List[Mapping[str, Any]]]:
        payload = json.loads(self._dump_path.read_text(encoding="utf-8"))
        if not isinstance(payload, list):
            raise ValueError(f"{self._dump_path} does not contain a jsdoc record list")
        grouped: Dict[str, List[Mapping[str, Any]]] = {}
        for entry in payload:
            if not isinstance(entry, Mapping):
                continue
            meta = entry.get("meta")
            if not isinstance(meta, Mapping) or not meta.get("filename"):
                continue
            grouped.setdefault(str(meta["filename"]), []).append(entry)
        return grouped


def strip_member_suffix(name: str) -> str:
    name = name.strip()
    for suffix in (".prototype", "#"):
        if name.endswith(suffix):
            name = name[: -len(suffix)]
    return name


def normalise_type_name(name: str) -> str:
    """Normalise ``X[]`` and ``Array<X>`` to the ``Array.<X>`` form jsdoc emits."""
    name = name.strip()
    match = _ARRAY_SUFFIX.match(name)
    if match:
        return f"Array.<{normalise_type_name(match.group(1))}>"
    match = _ANGLE_ARRAY.match(name)
    if match:
        return f"Array.<{match.group(1).strip()}>"
    return name


__all__ = [
    "DocExtractor",
    "DocRecord",
    "JsdocJsonExtractor",
    "normalise_type_name",
    "strip_member_suffix",
]
