"""Indentation-driven block parser for config text.

Responsibilities:
- Convert config lines into one `Node` tree by recursive descent.
- Decide per block whether it is a mapping or a sequence from its first entry.
- Report grammar violations as positional `ConfigParseError` failures.

Grammar notes:
- Blank lines and lines starting with `#` are ignored.
- Indentation counts leading spaces only and is relative to the line that
  opened a block, not a fixed step width.
- Quote and inline-comment stripping apply to scalar values, never to keys.
"""

from __future__ import annotations

from dataclasses import dataclass

from .errors import ConfigParseError
from .lines import split_lines
from .node import Node, NodeKind


_ROOT_INDENT = -1
_MIXED_KINDS = "mixed mapping and sequence"
_EXPECTED_KEY_VALUE = "expected key: value"
_NESTING_TOO_DEEP = "nesting too deep"
_QUOTE_CHARS = frozenset({'"', "'"})


@dataclass(slots=True)
class _LineCursor:
    """Read position over the config lines shared by all recursion levels."""

    lines: list[str]
    source: str
    index: int = 0

    def at_end(self) -> bool:
        return self.index >= len(self.lines)

    def current(self) -> str:
        return self.lines[self.index]

    def advance(self) -> None:
        self.index += 1

    def peek_significant(self) -> str | None:
        """Return the next non-blank, non-comment line without consuming it."""

        for position in range(self.index, len(self.lines)):
            line = self.lines[position]
            if not _is_ignorable(line.strip()):
                return line
        return None

    def error(self, reason: str) -> ConfigParseError:
        """Build a parse error pointing at the current line."""

        return ConfigParseError(line=self.index + 1, reason=reason, source=self.source)


def parse(data: bytes | str, source: str = "<bytes>") -> Node:
    """Parse config text into a tree.

    The returned root is a mapping for any document whose first entry is a
    `key:` line (or for an empty document). A document opening with `- `
    yields a sequence root, which dispatch later rejects.

    Args:
        data: UTF-8 bytes or already decoded text.
        source: Label used in error messages, typically the file path.

    Raises:
        ConfigParseError: On the first grammar violation; no partial tree is returned.
    """

    cursor = _LineCursor(lines=split_lines(data, source), source=source)
    try:
        return _parse_block(cursor, _ROOT_INDENT)
    except RecursionError as exc:
        raise cursor.error(_NESTING_TOO_DEEP) from exc


def _parse_block(cursor: _LineCursor, min_indent: int) -> Node:
    """Parse lines indented deeper than `min_indent` into one node."""

    kind: NodeKind | None = None
    children: dict[str, Node] = {}
    items: list[Node] = []

    while not cursor.at_end():
        line = cursor.current()
        stripped = line.strip()
        if _is_ignorable(stripped):
            cursor.advance()
            continue

        indent = _indent_of(line)
        if min_indent != _ROOT_INDENT and indent <= min_indent:
            break

        if stripped == "-" or stripped.startswith("- "):
            if kind is NodeKind.MAPPING:
                raise cursor.error(_MIXED_KINDS)
            kind = NodeKind.SEQUENCE
            remainder = stripped[1:].strip()
            cursor.advance()
            if remainder:
                items.append(Node.scalar(_scalar_text(remainder)))
            else:
                items.append(_parse_block(cursor, indent))
            continue

        key_part, separator, value_part = stripped.partition(":")
        if not separator:
            raise cursor.error(_EXPECTED_KEY_VALUE)
        if kind is NodeKind.SEQUENCE:
            raise cursor.error(_MIXED_KINDS)
        kind = NodeKind.MAPPING

        key = key_part.strip()
        raw_value = value_part.strip()
        cursor.advance()
        if raw_value:
            children[key] = Node.scalar(_scalar_text(raw_value))
            continue

        next_line = cursor.peek_significant()
        if next_line is None or _indent_of(next_line) <= indent:
            children[key] = Node.scalar("")
        else:
            children[key] = _parse_block(cursor, indent)

    if kind is NodeKind.SEQUENCE:
        return Node.sequence(items)
    return Node.mapping(children)


def _is_ignorable(stripped: str) -> bool:
    return not stripped or stripped.startswith("#")


def _indent_of(line: str) -> int:
    return len(line) - len(line.lstrip(" "))


def _scalar_text(raw_value: str) -> str:
    """Strip an inline ` #` comment, then one pair of matching quotes."""

    comment_index = raw_value.find(" #")
    if comment_index != -1:
        raw_value = raw_value[:comment_index].strip()
    return strip_quotes(raw_value)


def strip_quotes(text: str) -> str:
    """Remove one pair of matching surrounding single or double quotes."""

    if len(text) >= 2 and text[0] in _QUOTE_CHARS and text[0] == text[-1]:
        return text[1:-1]
    return text
