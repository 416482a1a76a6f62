"""Runtime and lexical data types for Lox.

Submodules are imported directly (``from lox.types.environment import
Environment``); this package does not re-export them so that the error module
can depend on ``lox.types.token`` without an import cycle.
"""
