"""Base classes for parent resolvers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

_REGEX_PRECEDERS = frozenset("(,=:[!&|?{};+-*%<>~^")


@dataclass(frozen=True)
class HierarchyLink:
    """Where a class sits in the hierarchy and where its own members end."""

    parent_name: Optional[str]
    inherits_at_line: int


class ParentResolver(ABC):
    """Contract for language-specific recovery of a class's parent."""

    @abstractmethod
    def supports(self, path: Path) -> bool:
        """Return True when this resolver understands the given source file."""

    @abstractmethod
    def resolve(self, lines: Sequence[str], class_name: str) -> Optional[HierarchyLink]:
        """Return the hierarchy link found in the normalised lines, if any."""


def normalise_lines(text: str) -> List[str]:
    """Blank out ``//`` and ``/* */`` comments, keeping the line count intact.

    String and regex literals are copied through, so ``//`` inside them survives.
    """
    out: List[str] = []
    index = 0
    length = len(text)
    quote: Optional[str] = None
    while index < length:
        char = text[index]
        pair = text[index : index + 2]
        if quote is not None:
            out.append(char)
            if char == "\\" and index + 1 < length:
                out.append(text[index + 1])
                index += 2
                continue
            if char == quote or (char == "\n" and quote != "`"):
                quote = None
            index += 1
            continue
        if pair == "//":
            end = text.find("\n", index)
            end = length if end == -1 else end
            out.append(" " * (end - index))
            index = end
            continue
        if pair == "/*":
            end = text.find("*/", index + 2)
            end = length if end == -1 else end + 2
            out.append("".join("\n" if c == "\n" else " " for c in text[index:end]))
            index = end
            continue
        if char == "/" and _regex_allowed(out):
            end = _regex_end(text, index)
            out.append(text[index:end])
            index = end
            continue
        if char in {"'", '"', "`"}:
            quote = char
        out.append(char)
        index += 1
    return [line.rstrip() for line in "".join(out).split("\n")]


def _regex_allowed(out: Sequence[str]) -> bool:
    # A slash after an operator or opening bracket starts a regex literal.
    for piece in reversed(out):
        stripped = piece.rstrip()
        if stripped:
            return stripped[-1] in _REGEX_PRECEDERS
    return True


def _regex_end(text: str, start: int) -> int:
    index = start + 1
    in_class = False
    while index < len(text):
        char = text[index]
        if char == "\\":
            index += 2
            continue
        if char == "\n":
            return index
        if char == "[":
            in_class = True
        elif char == "]":
            in_class = False
        elif char == "/" and not in_class:
            return index + 1
        index += 1
    return len(text)


__all__ = ["HierarchyLink", "ParentResolver", "normalise_lines"]
