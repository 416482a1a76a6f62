"""Syntax tree for Lox.

Nodes are frozen dataclasses compared and hashed by identity (``eq=False``):
two structurally equal expressions at different source positions are distinct
keys in the resolver's side table.
"""

from lox.ast import expr, stmt
from lox.ast.expr import Expr
from lox.ast.stmt import Stmt

__all__ = ["expr", "stmt", "Expr", "Stmt"]
