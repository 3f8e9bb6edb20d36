"""AST node types for parsed richmark source."""

from __future__ import annotations

from dataclasses import dataclass

from richmark.syntax import TagKind


@dataclass(frozen=True, slots=True)
class Text:
    """Literal run of characters."""

    text: str
    location: int


@dataclass(frozen=True, slots=True)
class LineBreak:
    """A newline, or the two-character escape backslash-n."""

    text: str
    location: int


@dataclass(frozen=True, slots=True)
class Bold:
    inner: tuple[Node, ...]
    text: str
    location: int


@dataclass(frozen=True, slots=True)
class Italic:
    inner: tuple[Node, ...]
    text: str
    location: int


@dataclass(frozen=True, slots=True)
class Color:
    """Color span. value is a color token, or None when no '=' was given."""

    value: str | None
    inner: tuple[Node, ...]
    text: str
    location: int


@dataclass(frozen=True, slots=True)
class Size:
    """Font-size span. value is the raw size, or None when no '=' was given."""

    value: int | None
    inner: tuple[Node, ...]
    text: str
    location: int


@dataclass(frozen=True, slots=True)
class EndTag:
    """A closing tag seen by the dispatcher. Never stored in the tree."""

    kind: TagKind
    location: int


@dataclass(frozen=True, slots=True)
class EndOfInput:
    """Dispatcher sentinel for the end of the source."""

    location: int


@dataclass(frozen=True, slots=True)
class Document:
    """Root: the top-level node sequence."""

    children: tuple[Node, ...]

    @property
    def text(self) -> str:
        return "".join(child.text for child in self.children)


Node = Text | LineBreak | Bold | Italic | Color | Size
Scope = Bold | Italic | Color | Size
