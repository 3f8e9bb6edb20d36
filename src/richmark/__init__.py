"""richmark inline rich-text markup renderer."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from richmark.session import RenderResult

__version__ = "0.1.0"


def compile(source: str, max_depth: int | None = None) -> str:
    """Parse and render richmark source to HTML, raising MarkupError on failure."""
    from richmark.parser import DEFAULT_MAX_DEPTH, parse
    from richmark.render import render

    doc = parse(source, DEFAULT_MAX_DEPTH if max_depth is None else max_depth)
    return render(doc)


def preview(source: str, max_depth: int | None = None) -> RenderResult:
    """Parse and render richmark source, returning Rendered or Failed."""
    from richmark.parser import DEFAULT_MAX_DEPTH
    from richmark.session import render_source

    return render_source(source, DEFAULT_MAX_DEPTH if max_depth is None else max_depth)
