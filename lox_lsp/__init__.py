"""Lox Language Server and REPL integration package.

This package provides:
- A pygls-based Language Server for Lox.
- A static indexer built on the real scanner, parser and resolver.
- A simple TCP REPL server to evaluate code via a Lox session.

Note: The LSP does not evaluate user buffers; only the REPL server runs code.
"""

__all__ = [
    "server",
    "indexer",
    "repl_server",
]
