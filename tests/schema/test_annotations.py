"""Tests for schemagen.schema.annotations."""

from __future__ import annotations

import pytest

from schemagen.errors import MissingClassDeclaration
from schemagen.parsing import DocRecord
from schemagen.schema.annotations import (
    find_class_record,
    find_class_tag,
    load_own_properties,
    parse_editor_types,
)


def _member(name: str, line: int, *types: str, memberof: str = "CsvCatalogItem", **tags: str) -> DocRecord:
    return DocRecord(
        kind="member",
        name=name,
        memberof=memberof,
        declaration_line=line,
        declared_type_names=types,
        custom_tags=tags,
    )


def test_only_members_above_the_inherit_line_are_own() -> None:
    records = [
        _member("url", 10, "String"),
        _member("opacity", 12, "Number"),
        _member("hasLegend", 30, "Boolean"),
        _member("layers", 20, "String"),
    ]

    annotations = load_own_properties(records, "CsvCatalogItem", inherits_at_line=20)

    assert [annotation.name for annotation in annotations] == ["url", "opacity"]
    assert all(annotation.declaration_line < 20 for annotation in annotations)


def test_members_of_other_classes_and_non_members_are_skipped() -> None:
    records = [
        _member("url", 3, "String", memberof="CatalogItem"),
        DocRecord(kind="function", name="load", memberof="CsvCatalogItem", declaration_line=4),
        _member("title", 5, "String"),
    ]

    annotations = load_own_properties(records, "CsvCatalogItem", inherits_at_line=50)

    assert [annotation.name for annotation in annotations] == ["title"]


def test_unsupported_types_are_dropped_unless_overridden() -> None:
    records = [
        _member("clock", 3, "DataSourceClock"),
        _member("style", 4, "TableStyle", editortype="Object"),
        _member("legendUrl", 5, "LegendUrl"),
        _member("untyped", 6),
    ]

    annotations = load_own_properties(records, "CsvCatalogItem", inherits_at_line=50)

    assert [(annotation.name, annotation.declared_types) for annotation in annotations] == [
        ("style", ("Object",)),
        ("legendUrl", ("LegendUrl",)),
    ]


def test_override_types_are_trusted_even_when_unsupported() -> None:
    records = [_member("clock", 3, "String", editortype="DataSourceClock")]

    annotations = load_own_properties(records, "CsvCatalogItem", inherits_at_line=50)

    assert annotations[0].declared_types == ("DataSourceClock",)


def test_rectangle_is_expanded_to_numeric_or_string_arrays() -> None:
    annotations = load_own_properties(
        [_member("rectangle", 3, "Rectangle")], "CsvCatalogItem", inherits_at_line=50
    )

    assert annotations[0].declared_types == ("Array.<Number>", "Array.<String>")


def test_parse_editor_types_accepts_braced_and_bare_forms() -> None:
    assert parse_editor_types("Number[]") == ["Array.<Number>"]
    assert parse_editor_types("{String|Number} the value") == ["String", "Number"]
    assert parse_editor_types("Boolean") == ["Boolean"]


def test_find_class_record_requires_a_class() -> None:
    records = [_member("url", 3, "String")]

    with pytest.raises(MissingClassDeclaration) as excinfo:
        find_class_record(records, "CsvCatalogItem")

    assert "CsvCatalogItem" in str(excinfo.value)


def test_find_class_tag_searches_every_record_for_the_class() -> None:
    records = [
        DocRecord(kind="class", name="CsvCatalogItem", declaration_line=2, description="CSV data."),
        DocRecord(
            kind="member",
            name="CsvCatalogItem",
            declaration_line=9,
            custom_tags={"editortitle": "CSV"},
        ),
    ]

    assert find_class_tag(records, "CsvCatalogItem", "editortitle") == "CSV"
    assert find_class_tag(records, "CsvCatalogItem", "editordescription") is None
    assert find_class_tag(records, "CsvCatalogItem", "editordescription", "description") == "CSV data."


def test_empty_editortype_drops_the_member() -> None:
    records = [
        _member("blank", 3, "String", editortype=""),
        _member("spaces", 4, "String", editortype="   "),
        _member("kept", 5, "String"),
    ]

    annotations = load_own_properties(records, "CsvCatalogItem", inherits_at_line=50)

    assert [annotation.name for annotation in annotations] == ["kept"]
