"""richmark parser: recursive descent from source text to an AST."""

from __future__ import annotations

import sys

from richmark.ast import (
    Bold,
    Color,
    Document,
    EndOfInput,
    EndTag,
    Italic,
    LineBreak,
    Node,
    Scope,
    Size,
    Text,
)
from richmark.cursor import Cursor
from richmark.errors import (
    MarkupSyntaxError,
    RecursionLimitError,
    UnclosedTagError,
    UnterminatedAttributeError,
)
from richmark.syntax import (
    DEFAULT_COLOR,
    MAX_HEX_DIGITS,
    NAMED_COLORS,
    OPENERS,
    TagKind,
    is_digit,
    is_hex_digit,
    is_line_end,
)

DEFAULT_MAX_DEPTH = 128

# Rendering a Color or Size scope costs four Python frames per level; the
# reserve covers the caller's own stack.
_FRAMES_PER_LEVEL = 4
_STACK_RESERVE = 150

_Parsed = tuple[Node | EndTag | EndOfInput, Cursor]


def max_depth_ceiling() -> int:
    """Largest max_depth that parses and renders within the recursion limit."""
    return max(0, (sys.getrecursionlimit() - _STACK_RESERVE) // _FRAMES_PER_LEVEL)


def check_max_depth(max_depth: int) -> None:
    """Raise ValueError unless 0 <= max_depth <= max_depth_ceiling()."""
    if max_depth < 0:
        raise ValueError(f"max_depth must be non-negative, got {max_depth}")
    ceiling = max_depth_ceiling()
    if max_depth > ceiling:
        raise ValueError(f"max_depth must be at most {ceiling}, got {max_depth}")


class Parser:
    """Recursive descent parser for richmark source.

    A Parser holds configuration only. Position travels through every call as
    a Cursor and comes back with each parsed node, so a single instance can
    serve any number of parses, concurrently or not.
    """

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        check_max_depth(max_depth)
        self.max_depth = max_depth

    # ------------------------------------------------------------------
    # Document level
    # ------------------------------------------------------------------

    def parse(self, source: str) -> Document:
        children: list[Node] = []
        cur = Cursor(source)

        while True:
            node, cur = self._parse_node(cur, 0)
            if isinstance(node, EndOfInput):
                break
            if isinstance(node, EndTag):
                # A closer with nothing open is dropped
                continue
            children.append(node)

        return Document(tuple(children))

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _parse_node(self, cur: Cursor, depth: int) -> _Parsed:
        if cur.at_end:
            return EndOfInput(cur.pos), cur

        ch = cur.char()
        next_ch = cur.char(1)

        if ch == "<":
            for kind in OPENERS:
                if cur.startswith(kind.opener):
                    return self._parse_tag(cur, kind, depth)
            if next_ch == "/":
                return self._parse_end_tag(cur)

        if ch == "\n":
            return LineBreak("\n", cur.pos), cur.advance()

        if ch == "\\" and next_ch == "n":
            return LineBreak("\\n", cur.pos), cur.advance(2)

        return self._parse_text(cur)

    def _parse_text(self, cur: Cursor) -> _Parsed:
        # The first character is always taken: it may be a '<' or '\' that
        # started nothing.
        end = cur.advance()
        while not end.at_end and end.char() not in ("\n", "<", "\\"):
            end = end.advance()
        return Text(cur.slice_to(end), cur.pos), end

    def _parse_end_tag(self, cur: Cursor) -> _Parsed:
        for kind in OPENERS:
            if cur.startswith(kind.closer):
                return EndTag(kind, cur.pos), cur.advance(len(kind.closer))
        return Text("</", cur.pos), cur.advance(2)

    # ------------------------------------------------------------------
    # Tags
    # ------------------------------------------------------------------

    def _parse_tag(self, cur: Cursor, kind: TagKind, depth: int) -> _Parsed:
        start = cur.pos
        if depth >= self.max_depth:
            raise RecursionLimitError(self.max_depth, start, cur.source)

        cur = cur.advance(len(kind.opener))
        value: str | int | None = None

        if kind.takes_value:
            ch = cur.char()
            if ch == "=":
                if kind is TagKind.COLOR:
                    value, cur = self._parse_color_value(cur.advance(), start)
                else:
                    value, cur = self._parse_size_value(cur.advance(), start)
                cur = cur.advance()  # consume '>'
            elif ch == ">":
                cur = cur.advance()
            else:
                raise MarkupSyntaxError(
                    f"expected '=' or '>' after {kind.opener!r}",
                    start,
                    cur.source,
                    len(kind.opener),
                )

        inner: list[Node] = []
        while True:
            node, cur = self._parse_node(cur, depth + 1)
            if isinstance(node, EndOfInput):
                raise UnclosedTagError(kind, start, cur.source)
            if isinstance(node, EndTag):
                if node.kind is kind:
                    break
                # A different closer never closes this scope
                raise UnclosedTagError(kind, start, cur.source)
            inner.append(node)

        return _build_scope(kind, value, tuple(inner), start), cur

    # ------------------------------------------------------------------
    # Attribute values
    # ------------------------------------------------------------------

    def _parse_color_value(self, cur: Cursor, tag_start: int) -> tuple[str, Cursor]:
        """Scan a color value up to '>' and resolve it.

        Returns the cursor positioned on the '>'. A bad value falls back to
        the default color; only a missing '>' is fatal.
        """
        if cur.char() == "#":
            digits: list[str] = []
            valid = True
            cur = cur.advance()
            while cur.char() != ">":
                ch = cur.char()
                if is_line_end(ch):
                    raise _unterminated("color", tag_start, cur.source)
                if not is_hex_digit(ch):
                    valid = False
                digits.append(ch)
                cur = cur.advance()
            if not digits or len(digits) > MAX_HEX_DIGITS:
                valid = False
            return ("#" + "".join(digits) if valid else DEFAULT_COLOR), cur

        start = cur
        while cur.char() != ">":
            if is_line_end(cur.char()):
                raise _unterminated("color", tag_start, cur.source)
            cur = cur.advance()
        name = start.slice_to(cur).lower()
        return (name if name in NAMED_COLORS else DEFAULT_COLOR), cur

    def _parse_size_value(self, cur: Cursor, tag_start: int) -> tuple[int, Cursor]:
        """Scan a decimal size value up to '>'. Returns the cursor on the '>'."""
        start = cur
        while cur.char() != ">":
            ch = cur.char()
            if is_line_end(ch):
                raise _unterminated("size", tag_start, cur.source)
            if not is_digit(ch):
                raise MarkupSyntaxError(
                    f"invalid character {ch!r} in size value", tag_start, cur.source, 5
                )
            cur = cur.advance()
        digits = start.slice_to(cur)
        if not digits:
            raise MarkupSyntaxError("empty size value", tag_start, cur.source, 5)
        return int(digits), cur


# ----------------------------------------------------------------------
# Helpers
# ----------------------------------------------------------------------


def _unterminated(attr: str, tag_start: int, source: str) -> UnterminatedAttributeError:
    return UnterminatedAttributeError(
        f"unterminated {attr} value, expected '>'", tag_start, source, len(attr) + 1
    )


def _build_scope(
    kind: TagKind, value: str | int | None, inner: tuple[Node, ...], location: int
) -> Scope:
    text = "".join(node.text for node in inner)
    match kind:
        case TagKind.BOLD:
            return Bold(inner, text, location)
        case TagKind.ITALIC:
            return Italic(inner, text, location)
        case TagKind.COLOR:
            assert value is None or isinstance(value, str)
            return Color(value, inner, text, location)
        case TagKind.SIZE:
            assert value is None or isinstance(value, int)
            return Size(value, inner, text, location)


_DEFAULT_PARSER = Parser()


def parse(source: str, max_depth: int = DEFAULT_MAX_DEPTH) -> Document:
    """Convenience function: parse source text and return a Document AST."""
    parser = _DEFAULT_PARSER if max_depth == DEFAULT_MAX_DEPTH else Parser(max_depth)
    return parser.parse(source)
