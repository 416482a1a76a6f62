"""
  Lox Scanner

Turns source text into a flat list of Tokens using a single alternation
regex. Lexical errors are reported to the ErrorReporter and scanning carries
on, so one run surfaces every bad character. The list always ends with EOF.

    - numbers     -> NUMBER, literal float
    - "strings"   -> STRING, literal str without quotes (may span lines)
    - identifiers -> IDENTIFIER or the matching keyword type
    - // comments and whitespace are skipped
"""

from __future__ import annotations

import re
from typing import Iterator

from lox.reporter import ErrorReporter
from lox.types.token import KEYWORDS, Token, TokenType


TOKEN_RE = re.compile(
    r"(?P<newline>\n)"
    r"|(?P<space>[ \r\t]+)"
    r"|(?P<comment>//[^\n]*)"
    r'|(?P<string>"[^"]*")'
    r'|(?P<open_string>"[^"]*\Z)'  # no closing quote before end of input
    r"|(?P<number>\d+(?:\.\d+)?)"
    r"|(?P<identifier>[A-Za-z_][A-Za-z0-9_]*)"
    r"|(?P<operator>!=|==|<=|>=|[(){},.\-+;/*!=<>])",
)

OPERATORS: dict[str, TokenType] = {
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
    "-": TokenType.MINUS,
    "+": TokenType.PLUS,
    ";": TokenType.SEMICOLON,
    "/": TokenType.SLASH,
    "*": TokenType.STAR,
    "!": TokenType.BANG,
    "!=": TokenType.BANG_EQUAL,
    "=": TokenType.EQUAL,
    "==": TokenType.EQUAL_EQUAL,
    ">": TokenType.GREATER,
    ">=": TokenType.GREATER_EQUAL,
    "<": TokenType.LESS,
    "<=": TokenType.LESS_EQUAL,
}


class Scanner:
    def __init__(self, source: str, reporter: ErrorReporter):
        self.source = source
        self.reporter = reporter
        self.tokens: list[Token] = []
        self.line = 1

    def scan_tokens(self) -> list[Token]:
        self.tokens = list(self._lex())
        self.tokens.append(Token(TokenType.EOF, "", None, self.line))
        return self.tokens

    def _lex(self) -> Iterator[Token]:
        pos = 0
        n = len(self.source)
        while pos < n:
            m = TOKEN_RE.match(self.source, pos)
            if m is None:
                self.reporter.error(self.line, "Unexpected character.")
                pos += 1
                continue

            pos = m.end()
            kind = m.lastgroup
            text = m.group()

            match kind:
                case "newline":
                    self.line += 1
                case "space" | "comment":
                    pass
                case "string":
                    # The token is attributed to the line the string ends on.
                    self.line += text.count("\n")
                    yield Token(TokenType.STRING, text, text[1:-1], self.line)
                case "open_string":
                    self.line += text.count("\n")
                    self.reporter.error(self.line, "Unterminated string.")
                case "number":
                    yield Token(TokenType.NUMBER, text, float(text), self.line)
                case "identifier":
                    yield Token(KEYWORDS.get(text, TokenType.IDENTIFIER), text, None, self.line)
                case "operator":
                    yield Token(OPERATORS[text], text, None, self.line)


def scan(source: str, reporter: ErrorReporter | None = None) -> list[Token]:
    """Convenience wrapper: scan `source` with a fresh or given reporter."""
    return Scanner(source, reporter if reporter is not None else ErrorReporter()).scan_tokens()
