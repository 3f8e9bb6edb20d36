"""Immutable scan position over richmark source text."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Cursor:
    """A source string and an offset into it.

    Cursors never change; ``advance`` returns a new one. Parse routines take
    a cursor and hand back the cursor just past whatever they consumed, so
    no parsing state lives on a shared object.
    """

    source: str
    pos: int = 0

    @property
    def at_end(self) -> bool:
        return self.pos >= len(self.source)

    def char(self, offset: int = 0) -> str:
        """Character at pos + offset, or '' past the end."""
        idx = self.pos + offset
        if 0 <= idx < len(self.source):
            return self.source[idx]
        return ""

    def startswith(self, prefix: str) -> bool:
        """Case-insensitive comparison of the upcoming text with prefix."""
        fragment = self.source[self.pos : self.pos + len(prefix)]
        return fragment.lower() == prefix.lower()

    def advance(self, count: int = 1) -> Cursor:
        return Cursor(self.source, min(self.pos + count, len(self.source)))

    def slice_to(self, other: Cursor) -> str:
        """Source text between this cursor and a later one."""
        return self.source[self.pos : other.pos]
