"""Tests for the LSP server: diagnostic generation."""

from __future__ import annotations

import pytest
from lsprotocol.types import (
    DiagnosticSeverity,
    PublishDiagnosticsParams,
    TextDocumentItem,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer
from pygls.workspace import Workspace

from richmark.lsp import _validate


@pytest.fixture
def lsp_env():
    """Create a LanguageServer with an initialized workspace and captured diagnostics."""
    ls = LanguageServer("test", "v0", text_document_sync_kind=TextDocumentSyncKind.Full)
    ws = Workspace(None)
    ls.protocol._workspace = ws

    published: list[PublishDiagnosticsParams] = []
    ls.text_document_publish_diagnostics = lambda params: published.append(params)

    def put(source: str, uri: str = "file:///mail.txt") -> None:
        ws.put_text_document(
            TextDocumentItem(uri=uri, language_id="richmark", version=0, text=source)
        )

    return ls, published, put


# ---------------------------------------------------------------------------
# Markup errors → Error severity
# ---------------------------------------------------------------------------


class TestMarkupErrors:
    def test_unclosed_tag(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put("Hello <b>world")
        _validate(ls, "file:///mail.txt")

        assert len(published) == 1
        diags = published[0].diagnostics
        assert len(diags) == 1
        d = diags[0]
        assert d.severity == DiagnosticSeverity.Error
        assert "<b>" in d.message
        assert d.source == "richmark"
        assert d.code == "UNCLOSED_TAG"
        # <b> starts at column 7 (1-based) → character 6 (0-based)
        assert d.range.start.line == 0
        assert d.range.start.character == 6
        assert d.range.end.character == 9

    def test_unterminated_attribute(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put("<color=red")
        _validate(ls, "file:///mail.txt")

        d = published[0].diagnostics[0]
        assert d.code == "UNTERMINATED_ATTRIBUTE"
        assert "color" in d.message
        assert d.range.start.character == 0

    def test_syntax_error(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put("<size=1x>a</size>")
        _validate(ls, "file:///mail.txt")

        assert published[0].diagnostics[0].code == "SYNTAX"


# ---------------------------------------------------------------------------
# Clean document → empty diagnostics
# ---------------------------------------------------------------------------


class TestCleanDocument:
    def test_valid_document(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put("<b>Hello</b>\n<color=nope>World</color>")
        _validate(ls, "file:///mail.txt")

        assert len(published) == 1
        assert published[0].diagnostics == []


# ---------------------------------------------------------------------------
# Position conversion (1-based → 0-based)
# ---------------------------------------------------------------------------


class TestPositionConversion:
    def test_error_on_second_line(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put("Valid first line\n  <i>oops")
        _validate(ls, "file:///mail.txt")

        d = published[0].diagnostics[0]
        # Error is on line 2 (1-based) → LSP line 1 (0-based)
        assert d.range.start.line == 1
        assert d.range.start.character == 2

