"""Tree-sitter powered JavaScript parsing helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Optional

import tree_sitter_javascript
from tree_sitter import Language, Node, Parser

JS_LANGUAGE = Language(tree_sitter_javascript.language())

FUNCTION_NODE_TYPES = frozenset(
    {
        "function",
        "function_expression",
        "function_declaration",
        "generator_function",
        "generator_function_declaration",
        "arrow_function",
    }
)

_STRING_NODE_TYPES = frozenset({"string", "template_string"})


@dataclass
class ParsedSource:
    """A JavaScript source file together with its syntax tree."""

    path: Path
    text: str
    source: bytes
    root: Node
    lines: List[str] = field(default_factory=list)

    @property
    def class_name(self) -> str:
        return self.path.stem

    def node_text(self, node: Node | None) -> str:
        if node is None:
            return ""
        return self.source[node.start_byte : node.end_byte].decode("utf-8", errors="ignore")


def parse_source(path: Path, text: str | None = None) -> ParsedSource:
    """Parse a JavaScript file (or the provided text) into a ParsedSource."""
    if text is None:
        text = path.read_text(encoding="utf-8")
    source = text.encode("utf-8")
    # Parsers are not shared between threads; construction is cheap.
    parser = Parser(JS_LANGUAGE)
    tree = parser.parse(source)
    return ParsedSource(
        path=path,
        text=text,
        source=source,
        root=tree.root_node,
        lines=text.split("\n"),
    )


def iter_define_properties_calls(parsed: ParsedSource) -> Iterator[Node]:
    """Yield top-level ``defineProperties(...)`` call expressions in source order."""
    for statement in parsed.root.named_children:
        if statement.type != "expression_statement":
            continue
        for expression in statement.named_children:
            if is_define_properties_call(parsed, expression):
                yield expression


def is_define_properties_call(parsed: ParsedSource, node: Node) -> bool:
    if node.type != "call_expression":
        return False
    function = node.child_by_field_name("function")
    return function is not None and parsed.node_text(function) == "defineProperties"


def call_arguments(node: Node) -> List[Node]:
    arguments = node.child_by_field_name("arguments")
    if arguments is None:
        return []
    return [child for child in arguments.named_children if child.type != "comment"]


def property_key(parsed: ParsedSource, pair: Node) -> str:
    """Return the key of an object pair or method, without quotes."""
    key = pair.child_by_field_name("key") or pair.child_by_field_name("name")
    return string_value(parsed, key) if key is not None else ""


def string_value(parsed: ParsedSource, node: Node) -> str:
    text = parsed.node_text(node)
    if node.type in _STRING_NODE_TYPES and len(text) >= 2:
        return text[1:-1]
    return text


def find_pair(parsed: ParsedSource, obj: Node, key: str) -> Optional[Node]:
    if obj.type != "object":
        return None
    for child in obj.named_children:
        if child.type in {"pair", "method_definition"} and property_key(parsed, child) == key:
            return child
    return None


def find_getter_literal(parsed: ParsedSource, prop: str) -> Optional[str]:
    """Return the literal returned by ``prop``'s getter inside ``defineProperties``.

    Recognises the idiom::

        defineProperties(Foo.prototype, {
            type : { get : function() { return 'foo'; } }
        });

    Returns ``None`` when the getter is missing or does not start with a
    ``return '<literal>'`` statement, which is how abstract classes look.
    """
    for call in iter_define_properties_calls(parsed):
        arguments = call_arguments(call)
        if len(arguments) < 2:
            continue
        pair = find_pair(parsed, arguments[1], prop)
        if pair is None:
            continue
        return _getter_literal(parsed, pair)
    return None


def _getter_literal(parsed: ParsedSource, pair: Node) -> Optional[str]:
    descriptor = pair.child_by_field_name("value")
    if descriptor is None or descriptor.type != "object":
        return None
    accessors = [child for child in descriptor.named_children if child.type in {"pair", "method_definition"}]
    if not accessors:
        return None
    accessor = accessors[0]
    if accessor.type == "pair":
        function = accessor.child_by_field_name("value")
        if function is None or function.type not in FUNCTION_NODE_TYPES:
            return None
    else:
        function = accessor
    body = function.child_by_field_name("body")
    if body is None or body.type != "statement_block":
        return None
    statements = [child for child in body.named_children if child.type != "comment"]
    if not statements or statements[0].type != "return_statement":
        return None
    returned = [child for child in statements[0].named_children if child.type != "comment"]
    if not returned or returned[0].type not in _STRING_NODE_TYPES:
        return None
    return string_value(parsed, returned[0])


def enclosing_function(node: Node) -> Optional[Node]:
    current = node.parent
    while current is not None:
        if current.type in FUNCTION_NODE_TYPES:
            return current
        current = current.parent
    return None


def function_name(parsed: ParsedSource, function: Node) -> Optional[str]:
    """Return the name a function is declared or assigned under, if any."""
    name = function.child_by_field_name("name")
    if name is not None:
        return parsed.node_text(name)
    parent = function.parent
    if parent is None:
        return None
    if parent.type == "variable_declarator":
        return parsed.node_text(parent.child_by_field_name("name")) or None
    if parent.type == "assignment_expression":
        left = parent.child_by_field_name("left")
        if left is not None and left.type == "identifier":
            return parsed.node_text(left)
    return None


def line_of(node: Node) -> int:
    """Return the 1-based line on which a node starts."""
    return node.start_point[0] + 1


__all__ = [
    "FUNCTION_NODE_TYPES",
    "JS_LANGUAGE",
    "ParsedSource",
    "call_arguments",
    "enclosing_function",
    "find_getter_literal",
    "find_pair",
    "function_name",
    "is_define_properties_call",
    "iter_define_properties_calls",
    "line_of",
    "parse_source",
    "property_key",
    "string_value",
]
