from __future__ import annotations

"""
A minimal pygls-based Language Server for Lox.

Features:
- Initialize/Shutdown/Exit (handled by pygls)
- Full-text synchronization and document store
- Diagnostics: scanner, parser and resolver errors (the buffer is never run)
- Hover: natives and declared classes, methods, functions and variables
- Completion: keywords, natives, declared names
- Document Symbols: classes (with methods), functions, top-level variables
"""

import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Optional

from lsprotocol.types import (
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    DidOpenTextDocumentParams,
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    CompletionParams,
    DocumentSymbol,
    DocumentSymbolParams,
    Hover,
    HoverParams,
    MarkupContent,
    MarkupKind,
    Position,
    Range,
    SymbolKind,
    TextDocumentSyncKind,
)
from pygls.server import LanguageServer

from lox import __version__
from lox.reporter import Diagnostic as LoxDiagnostic
from lox_lsp.indexer import (
    BUILTIN_SIGNATURES,
    KEYWORD_NAMES,
    DocumentIndex,
    SymbolDef,
    build_index,
    find_symbol,
)

logger = logging.getLogger(__name__)

_WORD_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

_SYMBOL_KINDS = {
    "class": SymbolKind.Class,
    "method": SymbolKind.Method,
    "function": SymbolKind.Function,
    "var": SymbolKind.Variable,
}

_COMPLETION_KINDS = {
    "class": CompletionItemKind.Class,
    "method": CompletionItemKind.Method,
    "function": CompletionItemKind.Function,
    "var": CompletionItemKind.Variable,
}


@dataclass
class DocumentState:
    text: str
    index: DocumentIndex


class LoxLanguageServer(LanguageServer):
    CMD_NAME = "lox-ls"

    def __init__(self):
        super().__init__(self.CMD_NAME, __version__, text_document_sync_kind=TextDocumentSyncKind.Full)
        self.documents: Dict[str, DocumentState] = {}


ls = LoxLanguageServer()


# --- Text sync ---
@ls.feature("textDocument/didOpen")
def did_open(params: DidOpenTextDocumentParams):
    uri = params.text_document.uri
    _update(uri, params.text_document.text or "")


@ls.feature("textDocument/didChange")
def did_change(params: DidChangeTextDocumentParams):
    uri = params.text_document.uri
    # Full-text sync: the last change carries the whole buffer.
    if params.content_changes:
        text = params.content_changes[-1].text
    else:
        state = ls.documents.get(uri)
        text = state.text if state else ""
    _update(uri, text)


@ls.feature("textDocument/didClose")
def did_close(params: DidCloseTextDocumentParams):
    uri = params.text_document.uri
    ls.documents.pop(uri, None)
    ls.publish_diagnostics(uri, [])


def _update(uri: str, text: str) -> None:
    idx = build_index(text)
    ls.documents[uri] = DocumentState(text=text, index=idx)
    logger.debug("%s: %d symbols, %d diagnostics", uri, len(idx.symbols), len(idx.diagnostics))
    ls.publish_diagnostics(uri, to_lsp_diagnostics(text, idx.diagnostics))


# --- Diagnostics ---
def _line_range(text: str, line: int) -> Range:
    """Range covering the (1-based) `line`, clamped to the document."""
    lines = text.splitlines() or [""]
    row = min(max(line - 1, 0), len(lines) - 1)
    return Range(
        start=Position(line=row, character=0),
        end=Position(line=row, character=len(lines[row])),
    )


def to_lsp_diagnostics(text: str, diagnostics: List[LoxDiagnostic]) -> List[Diagnostic]:
    return [
        Diagnostic(
            range=_line_range(text, d.line),
            message=f"Error{d.where}: {d.message}",
            severity=DiagnosticSeverity.Error,
            source=LoxLanguageServer.CMD_NAME,
        )
        for d in diagnostics
    ]


# --- Hover ---
@ls.feature("textDocument/hover")
def on_hover(params: HoverParams) -> Optional[Hover]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None

    word = extract_word_at(state.text, params.position)
    if not word:
        return None

    if word in BUILTIN_SIGNATURES:
        contents = BUILTIN_SIGNATURES[word]
    else:
        sdef = find_symbol(state.index, word)
        if sdef is None:
            return None
        contents = f"{sdef.detail or word} : {sdef.kind} (defined at {sdef.line + 1}:{sdef.col + 1})"

    return Hover(contents=MarkupContent(kind=MarkupKind.PlainText, value=contents))


# --- Completion ---
@ls.feature("textDocument/completion")
def on_completion(params: CompletionParams) -> CompletionList:
    items: List[CompletionItem] = [
        CompletionItem(label=kw, kind=CompletionItemKind.Keyword) for kw in KEYWORD_NAMES
    ]
    for name, sig in BUILTIN_SIGNATURES.items():
        items.append(CompletionItem(label=name, kind=CompletionItemKind.Function, detail=sig))

    state = ls.documents.get(params.text_document.uri)
    if state:
        for name, sdef in state.index.symbols.items():
            items.append(CompletionItem(label=name, kind=_COMPLETION_KINDS[sdef.kind], detail=sdef.detail))
            for child in sdef.children:
                items.append(CompletionItem(label=child.name, kind=_COMPLETION_KINDS[child.kind], detail=child.detail))

    return CompletionList(is_incomplete=False, items=items)


# --- Document Symbols ---
def _document_symbol(sdef: SymbolDef) -> DocumentSymbol:
    rng = Range(
        start=Position(line=sdef.line, character=sdef.col),
        end=Position(line=sdef.line, character=sdef.col + len(sdef.name)),
    )
    return DocumentSymbol(
        name=sdef.name,
        detail=sdef.detail,
        kind=_SYMBOL_KINDS[sdef.kind],
        range=rng,
        selection_range=rng,
        children=[_document_symbol(c) for c in sdef.children] or None,
    )


@ls.feature("textDocument/documentSymbol")
def on_document_symbols(params: DocumentSymbolParams) -> Optional[List[DocumentSymbol]]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None
    return [_document_symbol(sdef) for sdef in state.index.symbols.values()]


# --- Helpers ---
def extract_word_at(text: str, pos: Position) -> Optional[str]:
    lines = text.splitlines()
    if pos.line >= len(lines):
        return None
    line = lines[pos.line]
    for m in _WORD_RE.finditer(line):
        if m.start() <= pos.character <= m.end():
            return m.group()
    return None


def main() -> None:
    logging.basicConfig(level=logging.WARNING)
    # Run the language server over stdio
    ls.start_io()


if __name__ == "__main__":
    main()
