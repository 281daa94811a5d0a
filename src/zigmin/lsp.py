"""Minimal LSP server for Zig sources, lexical diagnostics only."""

from __future__ import annotations

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

from zigmin import __version__
from zigmin.lexer import Lexer, describe_invalid
from zigmin.tokens import TokenType

server = LanguageServer("zigmin-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full)


def _validate(ls: LanguageServer, uri: str) -> None:
    """Lex the document and publish one diagnostic per invalid token."""
    doc = ls.workspace.get_text_document(uri)
    source = doc.source
    diagnostics: list[Diagnostic] = []

    for tok in Lexer(source):
        if tok.type != TokenType.INVALID:
            continue
        start, end = tok.span.start, tok.span.end
        diagnostics.append(
            Diagnostic(
                range=Range(
                    start=Position(line=start.line - 1, character=start.column - 1),
                    end=Position(line=end.line - 1, character=end.column - 1),
                ),
                message=describe_invalid(tok),
                severity=DiagnosticSeverity.Error,
                source="zigmin",
            )
        )

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
