"""Error types with formatted source context."""

from __future__ import annotations

from enum import Enum, auto

from richmark.syntax import Position, TagKind, position_at


class ErrorKind(Enum):
    SYNTAX = auto()
    UNTERMINATED_ATTRIBUTE = auto()
    UNCLOSED_TAG = auto()
    RECURSION_LIMIT = auto()


class MarkupError(Exception):
    """Raised on the first fatal markup error, with offset and source context."""

    kind: ErrorKind = ErrorKind.SYNTAX

    def __init__(self, message: str, offset: int, source: str, length: int = 1) -> None:
        self.message = message
        self.offset = offset
        self.source = source
        self.length = length
        super().__init__(self.format())

    @property
    def position(self) -> Position:
        return position_at(self.source, self.offset)

    def format(self, filename: str = "input.txt") -> str:
        pos = self.position
        lines = self.source.splitlines(keepends=True)
        line_idx = pos.line - 1
        col = pos.column

        if 0 <= line_idx < len(lines):
            source_line = lines[line_idx].rstrip("\n").rstrip("\r")
        else:
            source_line = ""

        # Underline the opener, at least 1 char, but stay within line
        underline_len = max(1, min(self.length, len(source_line) - col + 1))

        pad = " " * (col - 1)
        carets = "^" * underline_len

        line_num = str(pos.line)
        gutter_width = len(line_num) + 1

        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"

        return (
            f"error: {self.message}\n"
            f"{' ' * gutter_width}--> {filename}:{pos.line}:{col}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {source_line}\n"
            f"{blank_gutter} {pad}{carets}"
        )


class MarkupSyntaxError(MarkupError):
    """Malformed tag structure: bad character after a tag name or in a size."""

    kind = ErrorKind.SYNTAX


class UnterminatedAttributeError(MarkupError):
    """End of line or input inside a color/size value."""

    kind = ErrorKind.UNTERMINATED_ATTRIBUTE


class UnclosedTagError(MarkupError):
    """An open tag never met its closer."""

    kind = ErrorKind.UNCLOSED_TAG

    def __init__(self, tag: TagKind, offset: int, source: str) -> None:
        self.tag = tag
        super().__init__(
            f"<{tag.value}> is not properly closed", offset, source, len(tag.opener)
        )


class RecursionLimitError(MarkupError):
    """Tags nested deeper than the parser's max_depth."""

    kind = ErrorKind.RECURSION_LIMIT

    def __init__(self, max_depth: int, offset: int, source: str) -> None:
        self.max_depth = max_depth
        super().__init__(f"tags nested deeper than {max_depth} levels", offset, source)
