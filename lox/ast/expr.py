"""Expression nodes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from lox import LoxValue
from lox.types.token import Token


@dataclass(frozen=True, eq=False)
class Literal:
    value: LoxValue


@dataclass(frozen=True, eq=False)
class Grouping:
    expression: Expr


@dataclass(frozen=True, eq=False)
class Unary:
    operator: Token
    right: Expr


@dataclass(frozen=True, eq=False)
class Binary:
    left: Expr
    operator: Token
    right: Expr


@dataclass(frozen=True, eq=False)
class Logical:
    """Short-circuiting `and` / `or`."""
    left: Expr
    operator: Token
    right: Expr


@dataclass(frozen=True, eq=False)
class Variable:
    name: Token


@dataclass(frozen=True, eq=False)
class Assign:
    name: Token
    value: Expr


@dataclass(frozen=True, eq=False)
class Call:
    callee: Expr
    paren: Token
    arguments: list[Expr] = field(default_factory=list)


@dataclass(frozen=True, eq=False)
class Get:
    object: Expr
    name: Token


@dataclass(frozen=True, eq=False)
class Set:
    object: Expr
    name: Token
    value: Expr


@dataclass(frozen=True, eq=False)
class This:
    keyword: Token


@dataclass(frozen=True, eq=False)
class Super:
    keyword: Token
    method: Token


Expr = Union[
    Literal,
    Grouping,
    Unary,
    Binary,
    Logical,
    Variable,
    Assign,
    Call,
    Get,
    Set,
    This,
    Super,
]
