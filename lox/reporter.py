"""Error sink shared by the scanner, parser, resolver and interpreter.

The reporter prints user-facing messages, records them as Diagnostics for
tooling (the language server and the network REPL), and keeps the two flags
the driver turns into exit codes.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import Literal, Optional, TextIO, Union

from lox.errors import LoxRuntimeError
from lox.types.token import Token, TokenType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Diagnostic:
    kind: Literal["static", "runtime"]
    line: int
    message: str
    where: str = ""
    lexeme: Optional[str] = None

    def __str__(self) -> str:
        if self.kind == "runtime":
            return f"{self.message}\n[line {self.line}]"
        return f"[line {self.line}] Error{self.where}: {self.message}"


class ErrorReporter:
    def __init__(self, stream: Optional[TextIO] = None):
        # Resolve sys.stderr lazily so pytest's capsys sees the writes.
        self._stream = stream
        self.had_error: bool = False
        self.had_runtime_error: bool = False
        self.diagnostics: list[Diagnostic] = []

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stderr

    def error(self, at: Union[Token, int], message: str) -> None:
        """Report a static error at a token, or at a bare line number."""
        if isinstance(at, Token):
            if at.type == TokenType.EOF:
                self.report(at.line, " at end", message, None)
            else:
                self.report(at.line, f" at '{at.lexeme}'", message, at.lexeme)
        else:
            self.report(at, "", message)

    def report(self, line: int, where: str, message: str, lexeme: Optional[str] = None) -> None:
        diagnostic = Diagnostic("static", line, message, where, lexeme)
        self.diagnostics.append(diagnostic)
        print(diagnostic, file=self.stream)
        self.had_error = True

    def runtime_error(self, fault: LoxRuntimeError) -> None:
        diagnostic = Diagnostic("runtime", fault.line, fault.message, "", fault.token.lexeme)
        self.diagnostics.append(diagnostic)
        logger.debug("runtime fault %s at line %d", type(fault).__name__, fault.line)
        print(diagnostic, file=self.stream)
        self.had_runtime_error = True

    def reset(self) -> None:
        """Clear the static-error flag between interactive inputs."""
        self.had_error = False
        self.diagnostics.clear()
