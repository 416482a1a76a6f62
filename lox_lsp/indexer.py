from __future__ import annotations

"""
Static indexer for Lox documents.

The buffer is scanned, parsed and resolved with `lox.session.analyze`; it is
never executed. From the parsed statements we collect enough structure to
power LSP features:
- definitions: classes (with their methods), functions, top-level variables
- diagnostics: every scan, parse and resolve error, with its line

Tokens carry lines but not columns, so columns are recovered from the source
text by locating the declared name on its line.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from lox.ast import stmt
from lox.builtins import NATIVES
from lox.reporter import Diagnostic
from lox.session import analyze
from lox.types.token import KEYWORDS, Token

BUILTIN_SIGNATURES: Dict[str, str] = {
    name: f"{name}({', '.join('arg' + str(i) for i in range(native.arity()))}) -> native"
    for name, native in NATIVES.items()
}

KEYWORD_NAMES: List[str] = sorted(KEYWORDS)


@dataclass
class SymbolDef:
    name: str
    kind: str  # "class" | "method" | "function" | "var"
    line: int  # 0-based
    col: int
    detail: str = ""
    children: List["SymbolDef"] = field(default_factory=list)


@dataclass
class DocumentIndex:
    symbols: Dict[str, SymbolDef] = field(default_factory=dict)
    diagnostics: List[Diagnostic] = field(default_factory=list)


def _column_of(lines: List[str], token: Token) -> int:
    """Best-effort 0-based column of `token` on its (1-based) line."""
    row = token.line - 1
    if row < 0 or row >= len(lines):
        return 0
    m = re.search(rf"\b{re.escape(token.lexeme)}\b", lines[row])
    return m.start() if m else 0


def _symbol(lines: List[str], token: Token, kind: str, detail: str = "") -> SymbolDef:
    return SymbolDef(token.lexeme, kind, token.line - 1, _column_of(lines, token), detail)


def _signature(function: stmt.Function) -> str:
    return f"{function.name.lexeme}({', '.join(p.lexeme for p in function.params)})"


def build_index(text: str) -> DocumentIndex:
    idx = DocumentIndex()
    analysis = analyze(text)
    idx.diagnostics = analysis.diagnostics
    lines = text.splitlines()

    for statement in analysis.statements:
        match statement:
            case stmt.Class(name=name, superclass=superclass, methods=methods):
                detail = f"class {name.lexeme}"
                if superclass is not None:
                    detail += f" < {superclass.name.lexeme}"
                sdef = _symbol(lines, name, "class", detail)
                sdef.children = [
                    _symbol(lines, m.name, "method", _signature(m)) for m in methods
                ]
                idx.symbols[name.lexeme] = sdef
            case stmt.Function(name=name):
                idx.symbols[name.lexeme] = _symbol(lines, name, "function", f"fun {_signature(statement)}")
            case stmt.Var(name=name):
                idx.symbols[name.lexeme] = _symbol(lines, name, "var", f"var {name.lexeme}")
            case _:
                pass

    return idx


def find_symbol(idx: DocumentIndex, word: str) -> Optional[SymbolDef]:
    """Top-level symbol named `word`, else the first method with that name."""
    if word in idx.symbols:
        return idx.symbols[word]
    for sdef in idx.symbols.values():
        for child in sdef.children:
            if child.name == word:
                return child
    return None
