"""Extraction of JSDoc comment blocks into documentation records."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from tree_sitter import Node

from .javascript import (
    FUNCTION_NODE_TYPES,
    ParsedSource,
    call_arguments,
    enclosing_function,
    function_name,
    is_define_properties_call,
    line_of,
    property_key,
)
from .records import DocExtractor, DocRecord, normalise_type_name, strip_member_suffix

_TAG_LINE = re.compile(r"^@([A-Za-z][\w-]*)\s*(.*)$")
_LEADING_STAR = re.compile(r"^\s*\*? ?")

# Tags understood by JSDoc itself; anything else is reported as a custom tag.
STANDARD_TAGS = frozenset(
    {
        "abstract", "access", "alias", "arg", "argument", "async", "augments", "author",
        "borrows", "callback", "class", "classdesc", "const", "constant", "constructor",
        "constructs", "copyright", "default", "defaultvalue", "deprecated", "desc",
        "description", "emits", "enum", "event", "example", "exception", "exports",
        "extends", "external", "file", "fileoverview", "fires", "func", "function",
        "generator", "global", "hideconstructor", "host", "ignore", "implements",
        "inheritdoc", "inner", "instance", "interface", "kind", "lends", "license",
        "listens", "member", "memberof", "method", "mixes", "mixin", "module", "name",
        "namespace", "override", "overview", "package", "param", "private", "prop",
        "property", "protected", "public", "readonly", "requires", "return", "returns",
        "see", "since", "static", "summary", "this", "throws", "todo", "tutorial", "type",
        "typedef", "var", "variation", "version", "yield", "yields",
    }
)


@dataclass
class CommentBlock:
    """A parsed ``/** ... */`` block: free text plus ordered tags."""

    description: str = ""
    tags: List[Tuple[str, str]] = field(default_factory=list)

    def tag_map(self) -> Dict[str, str]:
        # Later occurrences of a tag replace earlier ones.
        return {name: value for name, value in self.tags}


@dataclass
class _Target:
    name: Optional[str]
    memberof: Optional[str]
    is_function: bool
    line: int


def parse_comment(text: str) -> CommentBlock:
    """Split a JSDoc comment into its description and tags."""
    body = text.strip()
    if body.startswith("/**"):
        body = body[3:]
    if body.endswith("*/"):
        body = body[:-2]

    description_lines: List[str] = []
    tags: List[Tuple[str, List[str]]] = []
    for raw in body.split("\n"):
        line = _LEADING_STAR.sub("", raw, count=1).rstrip()
        match = _TAG_LINE.match(line.strip())
        if match:
            tags.append((match.group(1).lower(), [match.group(2)]))
        elif tags:
            tags[-1][1].append(line.strip())
        else:
            description_lines.append(line.strip())

    return CommentBlock(
        description="\n".join(description_lines).strip(),
        tags=[(name, "\n".join(lines).strip()) for name, lines in tags],
    )


def parse_type_expression(value: str) -> Tuple[str, ...]:
    """Return the type names of a ``{A|B}`` tag value, normalised."""
    value = value.strip()
    if value.startswith("{"):
        depth = 0
        for index, char in enumerate(value):
            if char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
                if depth == 0:
                    value = value[1:index]
                    break
        else:
            value = value[1:]
    else:
        value = value.split()[0] if value.split() else ""
    return tuple(_normalise_union_member(part) for part in _split_union(value) if part.strip())


def _split_union(expression: str) -> List[str]:
    expression = expression.strip().lstrip("?!").rstrip("=").strip()
    if expression.startswith("(") and expression.endswith(")"):
        expression = expression[1:-1]
    parts: List[str] = []
    depth = 0
    current: List[str] = []
    for char in expression:
        if char in "<({[":
            depth += 1
        elif char in ">)}]":
            depth -= 1
        if char == "|" and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        current.append(char)
    parts.append("".join(current))
    return parts


def _normalise_union_member(part: str) -> str:
    part = part.strip().lstrip("?!").rstrip("=").strip()
    if part.startswith("(") and part.endswith(")"):
        part = part[1:-1].strip()
    return normalise_type_name(part)


class CommentExtractor(DocExtractor):
    """Builds documentation records from the JSDoc comments in a syntax tree."""

    def extract(self, parsed: ParsedSource) -> List[DocRecord]:
        records: List[DocRecord] = []
        for comment in _iter_doc_comments(parsed.root, parsed):
            target_node = _documented_node(comment, parsed)
            if target_node is None:
                continue
            record = self._build_record(parsed, parse_comment(parsed.node_text(comment)), target_node)
            if record is not None:
                records.append(record)
        return records

    def _build_record(
        self, parsed: ParsedSource, block: CommentBlock, node: Node
    ) -> Optional[DocRecord]:
        tags = block.tag_map()
        target = _describe(parsed, node)

        name = tags.get("alias") or tags.get("name") or target.name
        if not name:
            return None

        if "constructor" in tags or "class" in tags:
            kind = "class"
        elif "typedef" in tags:
            kind = "typedef"
        elif any(tag in tags for tag in ("function", "func", "method")):
            kind = "function"
        elif "type" in tags:
            kind = "member"
        elif target.is_function:
            kind = "function"
        else:
            kind = "member"

        memberof = tags.get("memberof") or (target.memberof if kind != "class" else None)
        description = block.description or tags.get("description") or tags.get("desc") or None
        custom_tags = {tag: value for tag, value in block.tags if tag not in STANDARD_TAGS}

        return DocRecord(
            kind=kind,
            name=name,
            memberof=strip_member_suffix(memberof) if memberof else None,
            declaration_line=target.line,
            declared_type_names=parse_type_expression(tags["type"]) if "type" in tags else (),
            description=description,
            custom_tags=custom_tags,
        )


def _iter_doc_comments(root: Node, parsed: ParsedSource) -> Iterator[Node]:
    stack = [root]
    found: List[Node] = []
    while stack:
        node = stack.pop()
        if node.type == "comment":
            if parsed.node_text(node).startswith("/**"):
                found.append(node)
            continue
        stack.extend(node.children)
    found.sort(key=lambda node: node.start_byte)
    yield from found


def _documented_node(comment: Node, parsed: ParsedSource) -> Optional[Node]:
    sibling = comment.next_named_sibling
    while sibling is not None and sibling.type == "comment":
        if parsed.node_text(sibling).startswith("/**"):
            # A later doc comment claims the code that follows.
            return None
        sibling = sibling.next_named_sibling
    return sibling


def _describe(parsed: ParsedSource, node: Node) -> _Target:
    line = line_of(node)
    if node.type == "expression_statement":
        inner = next((child for child in node.named_children if child.type != "comment"), None)
        if inner is None:
            return _Target(None, None, False, line)
        target = _describe(parsed, inner)
        target.line = line
        return target

    if node.type in {"variable_declaration", "lexical_declaration"}:
        declarator = next(
            (child for child in node.named_children if child.type == "variable_declarator"), None
        )
        if declarator is None:
            return _Target(None, None, False, line)
        value = declarator.child_by_field_name("value")
        return _Target(
            name=parsed.node_text(declarator.child_by_field_name("name")) or None,
            memberof=None,
            is_function=value is not None and (value.type in FUNCTION_NODE_TYPES or value.type == "class"),
            line=line,
        )

    if node.type in {"function_declaration", "generator_function_declaration", "class_declaration"}:
        return _Target(parsed.node_text(node.child_by_field_name("name")) or None, None, True, line)

    if node.type == "assignment_expression":
        left = node.child_by_field_name("left")
        right = node.child_by_field_name("right")
        is_function = right is not None and right.type in FUNCTION_NODE_TYPES
        if left is None:
            return _Target(None, None, is_function, line)
        if left.type == "identifier":
            return _Target(parsed.node_text(left), None, is_function, line)
        if left.type == "member_expression":
            owner = left.child_by_field_name("object")
            name = parsed.node_text(left.child_by_field_name("property")) or None
            return _Target(name, _member_owner(parsed, node, owner), is_function, line)
        return _Target(None, None, is_function, line)

    if node.type == "pair":
        value = node.child_by_field_name("value")
        return _Target(
            name=property_key(parsed, node) or None,
            memberof=_object_owner(parsed, node.parent),
            is_function=value is not None and value.type in FUNCTION_NODE_TYPES,
            line=line,
        )

    if node.type == "method_definition":
        return _Target(property_key(parsed, node) or None, _object_owner(parsed, node.parent), True, line)

    return _Target(None, None, False, line)


def _member_owner(parsed: ParsedSource, assignment: Node, owner: Node | None) -> Optional[str]:
    if owner is None:
        return None
    if owner.type == "this":
        function = enclosing_function(assignment)
        return function_name(parsed, function) if function is not None else None
    return strip_member_suffix(parsed.node_text(owner)) or None


def _object_owner(parsed: ParsedSource, obj: Node | None) -> Optional[str]:
    """Name the class whose prototype an object literal describes."""
    if obj is None or obj.type != "object":
        return None
    parent = obj.parent
    if parent is not None and parent.type == "arguments":
        call = parent.parent
        if call is not None and is_define_properties_call(parsed, call):
            arguments = call_arguments(call)
            if arguments:
                return strip_member_suffix(parsed.node_text(arguments[0])) or None
    if parent is not None and parent.type == "assignment_expression":
        left = parent.child_by_field_name("left")
        if left is not None:
            return strip_member_suffix(parsed.node_text(left)) or None
    return None


__all__ = [
    "CommentBlock",
    "CommentExtractor",
    "STANDARD_TAGS",
    "parse_comment",
    "parse_type_expression",
]
