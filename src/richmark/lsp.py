"""Minimal LSP server for richmark: diagnostics only."""

from __future__ import annotations

import logging

from lsprotocol.types import (
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    Position,
    PublishDiagnosticsParams,
    Range,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer

from richmark import __version__
from richmark.errors import MarkupError
from richmark.parser import parse
from richmark.syntax import position_at

logger = logging.getLogger(__name__)

server = LanguageServer(
    "richmark-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full
)


def _diagnostic(exc: MarkupError) -> Diagnostic:
    start = position_at(exc.source, exc.offset)
    end = position_at(exc.source, exc.offset + exc.length)
    # MarkupError positions are 1-based, LSP is 0-based
    return Diagnostic(
        range=Range(
            start=Position(line=start.line - 1, character=start.column - 1),
            end=Position(line=end.line - 1, character=end.column - 1),
        ),
        message=exc.message,
        severity=DiagnosticSeverity.Error,
        code=exc.kind.name,
        source="richmark",
    )


def _validate(ls: LanguageServer, uri: str) -> None:
    """Parse the document and publish diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    diagnostics: list[Diagnostic] = []

    try:
        parse(doc.source)
    except MarkupError as exc:
        logger.debug("%s: %s at offset %d", uri, exc.message, exc.offset)
        diagnostics.append(_diagnostic(exc))

    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


def main() -> None:
    server.start_io()
