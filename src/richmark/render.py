"""HTML renderer: converts a richmark AST to a preview HTML fragment."""

from __future__ import annotations

from richmark.ast import Bold, Color, Document, Italic, LineBreak, Node, Size, Text


def render(doc: Document) -> str:
    """Render a parsed document to an HTML fragment."""
    return _render_nodes(doc.children)


def font_size_px(value: int) -> int:
    """Pixel size for a <size=N> value: floor(N * 0.4)."""
    return value * 4 // 10


# ---------------------------------------------------------------------------
# HTML escaping
# ---------------------------------------------------------------------------


def escape_html(text: str) -> str:
    """Escape text content. '&' goes first so no entity is escaped twice."""
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


# ---------------------------------------------------------------------------
# Node rendering
# ---------------------------------------------------------------------------


def _render_nodes(nodes: tuple[Node, ...]) -> str:
    return "".join(_render_node(node) for node in nodes)


def _render_node(node: Node) -> str:
    match node:
        case Bold():
            return f"<b>{_render_nodes(node.inner)}</b>"
        case Italic():
            return f"<i>{_render_nodes(node.inner)}</i>"
        case Color():
            return _render_color(node)
        case Size():
            return _render_size(node)
        case LineBreak():
            return "<br>"
        case Text():
            return escape_html(node.text)
    raise TypeError(f"cannot render {type(node).__name__}")


def _render_color(node: Color) -> str:
    inner = _render_nodes(node.inner)
    if node.value is None:
        return inner
    return f'<span style="color:{node.value}">{inner}</span>'


def _render_size(node: Size) -> str:
    inner = _render_nodes(node.inner)
    if node.value is None:
        return inner
    return f'<span style="font-size:{font_size_px(node.value)}px">{inner}</span>'
