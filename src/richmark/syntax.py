"""Tag kinds, source positions, and character classification helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TagKind(Enum):
    BOLD = "b"
    ITALIC = "i"
    COLOR = "color"
    SIZE = "size"

    @property
    def opener(self) -> str:
        """Opening delimiter: the full tag for b/i, the prefix for color/size."""
        if self.takes_value:
            return f"<{self.value}"
        return f"<{self.value}>"

    @property
    def closer(self) -> str:
        return f"</{self.value}>"

    @property
    def takes_value(self) -> bool:
        return self in (TagKind.COLOR, TagKind.SIZE)


# Dispatch order matters: the fixed-length openers are tried first.
OPENERS: tuple[TagKind, ...] = (TagKind.BOLD, TagKind.ITALIC, TagKind.COLOR, TagKind.SIZE)

DEFAULT_COLOR = "white"

NAMED_COLORS: frozenset[str] = frozenset(
    {
        "aqua",
        "black",
        "blue",
        "brown",
        "cyan",
        "darkblue",
        "fuchsia",
        "green",
        "grey",
        "lightblue",
        "lime",
        "magenta",
        "maroon",
        "navy",
        "olive",
        "orange",
        "purple",
        "red",
        "silver",
        "teal",
        "white",
        "yellow",
    }
)

# Hex digits after '#', not counting the '#'
MAX_HEX_DIGITS = 8


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based offset."""

    line: int
    column: int
    offset: int


def position_at(source: str, offset: int) -> Position:
    """Convert a 0-based offset into a line/column Position."""
    offset = max(0, min(offset, len(source)))
    line = source.count("\n", 0, offset) + 1
    line_start = source.rfind("\n", 0, offset) + 1
    return Position(line, offset - line_start + 1, offset)


def is_hex_digit(ch: str) -> bool:
    """Return True if ch is a hexadecimal digit."""
    return ch != "" and ch in "0123456789abcdefABCDEF"


def is_digit(ch: str) -> bool:
    """Return True if ch is an ASCII decimal digit."""
    return ch != "" and ch in "0123456789"


def is_line_end(ch: str) -> bool:
    """Return True at end of input ('') or a newline."""
    return ch == "" or ch == "\n"
