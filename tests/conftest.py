"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from richmark import compile
from richmark.ast import Document, Node
from richmark.parser import parse


@pytest.fixture
def parse_source():
    """Return a helper that parses source and returns a Document."""

    def _parse(source: str, max_depth: int | None = None) -> Document:
        if max_depth is None:
            return parse(source)
        return parse(source, max_depth)

    return _parse


@pytest.fixture
def to_html():
    """Return a helper that renders source straight to HTML."""

    def _to_html(source: str) -> str:
        return compile(source)

    return _to_html


@pytest.fixture
def only_child(parse_source):
    """Return a helper that parses source and returns its single top-level node."""

    def _only(source: str) -> Node:
        doc = parse_source(source)
        assert len(doc.children) == 1, f"Expected 1 node, got {doc.children}"
        return doc.children[0]

    return _only


def node_types(nodes: tuple[Node, ...]) -> list[str]:
    """Class names of a node sequence, for compact assertions."""
    return [type(n).__name__ for n in nodes]
