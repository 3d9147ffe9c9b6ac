from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from schemagen.parsing import CommentExtractor, ParsedSource, parse_source
from tests._fixtures.catalog_builder import CatalogBuilder


@pytest.fixture
def catalog_builder(tmp_path: Path) -> CatalogBuilder:
    """Provide a reusable source tree builder rooted at the pytest tmp_path."""
    return CatalogBuilder(tmp_path)


@pytest.fixture
def parse_js(tmp_path: Path):
    """Parse JavaScript text as if it were the named model file."""

    def _parse(text: str, name: str = "ExampleCatalogItem.js") -> ParsedSource:
        return parse_source(tmp_path / name, textwrap.dedent(text).lstrip("\n"))

    return _parse


@pytest.fixture
def extract_records(parse_js):
    """Return the documentation records found in JavaScript text."""

    def _extract(text: str, name: str = "ExampleCatalogItem.js"):
        return CommentExtractor().extract(parse_js(text, name))

    return _extract
