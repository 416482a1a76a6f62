"""Top-level pipeline: scan, parse, resolve, interpret.

A `Lox` session keeps one Interpreter (and so one global environment) alive
across calls to `run`, which is what lets a REPL build a program line by
line. `analyze` runs the static phases only and never executes anything; the
language server uses it.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from io import StringIO
from pathlib import Path
from typing import Callable, Optional, TextIO

from lox.ast.stmt import Stmt
from lox.errors import LoxSyntaxError
from lox.evaluation.interpreter import Interpreter
from lox.evaluation.resolver import Resolver
from lox.reader.parser import Parser
from lox.reader.scanner import Scanner
from lox.reporter import Diagnostic, ErrorReporter

logger = logging.getLogger(__name__)

# sysexits.h
EX_OK = 0
EX_USAGE = 64
EX_DATAERR = 65
EX_NOINPUT = 66
EX_SOFTWARE = 70


@dataclass
class Analysis:
    statements: list[Stmt] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.diagnostics

    def raise_for_errors(self) -> None:
        """Raise LoxSyntaxError for the first static error, if any."""
        if self.diagnostics:
            first = self.diagnostics[0]
            raise LoxSyntaxError(first.line, first.message, first.where)


class Lox:
    """
    A streaming session for Lox source.
    Allows feeding code incrementally, keeps globals between runs.
    """

    def __init__(
        self,
        output: Optional[Callable[[str], None]] = None,
        error_stream: Optional[TextIO] = None,
    ):
        self.reporter = ErrorReporter(error_stream)
        self.interpreter = Interpreter(self.reporter, output)
        self.resolver = Resolver(self.reporter)

    @property
    def had_error(self) -> bool:
        return self.reporter.had_error

    @property
    def had_runtime_error(self) -> bool:
        return self.reporter.had_runtime_error

    def parse(self, source: str) -> list[Stmt]:
        tokens = Scanner(source, self.reporter).scan_tokens()
        return Parser(tokens, self.reporter).parse()

    def run(self, source: str) -> None:
        statements = self.parse(source)
        # Stop if there was a syntax error.
        if self.reporter.had_error:
            logger.debug("not resolving: syntax errors reported")
            return

        table = self.resolver.resolve(statements)
        # Stop if there was a resolution error.
        if self.reporter.had_error:
            logger.debug("not interpreting: resolution errors reported")
            return

        self.interpreter.resolve(table)
        self.interpreter.interpret(statements)

    def run_file(self, path: str | Path) -> int:
        source = Path(path).read_text(encoding="utf-8")
        logger.info("running %s", path)
        self.run(source)
        if self.reporter.had_error:
            return EX_DATAERR
        if self.reporter.had_runtime_error:
            return EX_SOFTWARE
        return EX_OK

    def run_prompt(self, stream: Optional[TextIO] = None, prompt: str = "> ") -> None:
        """Read-eval-print loop. An empty line or end of input ends the session."""
        stream = stream if stream is not None else sys.stdin
        interactive = stream.isatty()
        while True:
            if interactive:
                print(prompt, end="", flush=True)
            line = stream.readline()
            if not line or not line.rstrip("\r\n"):
                break
            self.run(line)
            # A mistake on one line must not poison the rest of the session.
            self.reporter.reset()


def analyze(source: str) -> Analysis:
    """Scan, parse and resolve `source` without running it.

    Returns the parsed statements and every static diagnostic reported.
    Resolution is skipped when parsing failed, matching `Lox.run`.
    """
    reporter = ErrorReporter(StringIO())
    tokens = Scanner(source, reporter).scan_tokens()
    statements = Parser(tokens, reporter).parse()
    if not reporter.had_error:
        Resolver(reporter).resolve(statements)
    return Analysis(statements, list(reporter.diagnostics))
