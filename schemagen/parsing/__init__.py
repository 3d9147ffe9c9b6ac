"""Parsing of model sources and their documentation comments."""

from .javascript import ParsedSource, find_getter_literal, parse_source
from .jsdoc import CommentExtractor
from .records import DocExtractor, DocRecord, JsdocJsonExtractor

__all__ = [
    "CommentExtractor",
    "DocExtractor",
    "DocRecord",
    "JsdocJsonExtractor",
    "ParsedSource",
    "find_getter_literal",
    "parse_source",
]
