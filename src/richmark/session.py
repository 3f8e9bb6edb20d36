"""Live-preview support: explicit render results and a stateful preview session."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from richmark.errors import ErrorKind, MarkupError
from richmark.parser import DEFAULT_MAX_DEPTH, parse
from richmark.render import render

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Rendered:
    """Successful render."""

    html: str


@dataclass(frozen=True, slots=True)
class Failed:
    """Failed render: the first fatal error and where it happened."""

    kind: ErrorKind
    offset: int
    message: str

    @classmethod
    def from_error(cls, exc: MarkupError) -> Failed:
        return cls(exc.kind, exc.offset, exc.message)


RenderResult = Rendered | Failed


def render_source(source: str, max_depth: int = DEFAULT_MAX_DEPTH) -> RenderResult:
    """Parse and render source, returning the outcome as a value."""
    try:
        doc = parse(source, max_depth)
    except MarkupError as exc:
        return Failed.from_error(exc)
    return Rendered(render(doc))


class PreviewStyle(Enum):
    """Background variants of the preview pane."""

    NOTICE = "notice"
    MAIL = "mail"
    ALERT = "alert"
    ANNOUNCEMENT = "announcement"


@dataclass(frozen=True, slots=True)
class PreviewState:
    """What the preview pane shows: the last good HTML and the current error."""

    html: str
    error: Failed | None
    style: PreviewStyle

    @property
    def has_error(self) -> bool:
        return self.error is not None


class PreviewSession:
    """Re-renders edited source, keeping the last successful output on failure."""

    def __init__(
        self,
        max_depth: int = DEFAULT_MAX_DEPTH,
        style: PreviewStyle = PreviewStyle.MAIL,
    ) -> None:
        self.max_depth = max_depth
        self._state = PreviewState("", None, style)

    @property
    def state(self) -> PreviewState:
        return self._state

    def update(self, source: str) -> PreviewState:
        result = render_source(source, self.max_depth)
        if isinstance(result, Rendered):
            self._state = PreviewState(result.html, None, self._state.style)
        else:
            logger.debug("preview render failed at %d: %s", result.offset, result.message)
            self._state = PreviewState(self._state.html, result, self._state.style)
        return self._state

    def set_style(self, style: PreviewStyle) -> PreviewState:
        """Switch the pane background; the error flag is kept."""
        self._state = PreviewState(self._state.html, self._state.error, style)
        return self._state

    def page(self) -> str:
        return wrap_page(self._state.html, self._state.style, self._state.has_error)


def wrap_page(html: str, style: PreviewStyle = PreviewStyle.MAIL, error: bool = False) -> str:
    """Wrap a rendered fragment in a standalone preview page."""
    classes = style.value + (" error" if error else "")
    return (
        "<!DOCTYPE html>\n"
        "<html>\n"
        "<head>\n"
        '<meta charset="utf-8">\n'
        "</head>\n"
        "<body>\n"
        f'<div id="preview" class="{classes}">{html}</div>\n'
        "</body>\n"
        "</html>\n"
    )
