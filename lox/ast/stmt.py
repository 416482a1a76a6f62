"""Statement nodes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union

from lox.ast.expr import Expr, Variable
from lox.types.token import Token


@dataclass(frozen=True, eq=False)
class Expression:
    expression: Expr


@dataclass(frozen=True, eq=False)
class Print:
    expression: Expr


@dataclass(frozen=True, eq=False)
class Var:
    name: Token
    initializer: Optional[Expr] = None


@dataclass(frozen=True, eq=False)
class Block:
    statements: list[Stmt] = field(default_factory=list)


@dataclass(frozen=True, eq=False)
class If:
    condition: Expr
    then_branch: Stmt
    else_branch: Optional[Stmt] = None


@dataclass(frozen=True, eq=False)
class While:
    condition: Expr
    body: Stmt


@dataclass(frozen=True, eq=False)
class Function:
    name: Token
    params: list[Token]
    body: list[Stmt]


@dataclass(frozen=True, eq=False)
class Return:
    keyword: Token
    value: Optional[Expr] = None


@dataclass(frozen=True, eq=False)
class Class:
    name: Token
    superclass: Optional[Variable]
    methods: list[Function] = field(default_factory=list)


Stmt = Union[
    Expression,
    Print,
    Var,
    Block,
    If,
    While,
    Function,
    Return,
    Class,
]
