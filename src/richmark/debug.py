"""--debug AST dump to stderr."""

from __future__ import annotations

import sys
from typing import TextIO

from richmark.ast import Bold, Color, Document, Italic, LineBreak, Node, Size, Text


def dump_ast(doc: Document, *, file: TextIO = sys.stderr) -> None:
    """Print a human-readable AST tree to *file*."""
    file.write("Document\n")
    for child in doc.children:
        _dump_node(child, 1, file)


def _indent(depth: int) -> str:
    return "  " * depth


def _dump_node(node: Node, depth: int, f: TextIO) -> None:
    at = f"@{node.location}"
    if isinstance(node, Text):
        f.write(f"{_indent(depth)}Text({node.text!r}) {at}\n")
    elif isinstance(node, LineBreak):
        f.write(f"{_indent(depth)}LineBreak({node.text!r}) {at}\n")
    elif isinstance(node, (Bold, Italic)):
        f.write(f"{_indent(depth)}{type(node).__name__} {at}\n")
        _dump_inner(node.inner, depth + 1, f)
    elif isinstance(node, (Color, Size)):
        value = "unset" if node.value is None else repr(node.value)
        f.write(f"{_indent(depth)}{type(node).__name__} value={value} {at}\n")
        _dump_inner(node.inner, depth + 1, f)


def _dump_inner(inner: tuple[Node, ...], depth: int, f: TextIO) -> None:
    for child in inner:
        _dump_node(child, depth, f)
