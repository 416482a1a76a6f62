"""Static resolution pass for Lox.

Walks the tree once, mirroring the structure evaluation will follow, but
tracking declarations instead of values. For every variable access (Variable,
Assign, This, Super) that binds to a local scope, it records how many
environments the interpreter must walk outward to find the binding. Accesses
that match no local scope get no entry and are looked up in the globals at
runtime.

Scoping-rule violations are reported to the ErrorReporter. The pass keeps
going after an error so one run surfaces all of them; the caller must not
execute a program whose resolution reported anything.
"""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import assert_never

from lox.ast import expr, stmt
from lox.ast.expr import Expr
from lox.ast.stmt import Stmt
from lox.reader.parser import NESTING_ERROR
from lox.reporter import ErrorReporter
from lox.types.function import is_initializer_declaration
from lox.types.token import Token

logger = logging.getLogger(__name__)


class FunctionType(Enum):
    NONE = auto()
    FUNCTION = auto()
    INITIALIZER = auto()
    METHOD = auto()


class ClassType(Enum):
    NONE = auto()
    CLASS = auto()
    SUBCLASS = auto()


class Resolver:
    def __init__(self, reporter: ErrorReporter):
        self.reporter = reporter
        self.error_count = 0
        self.locals: dict[Expr, int] = {}
        # Each scope maps a name to whether its initializer has finished.
        self.scopes: list[dict[str, bool]] = []
        self.current_function = FunctionType.NONE
        self.current_class = ClassType.NONE
        # Most recent name seen; locates the report if the walk runs out of stack.
        self.last_name: Token | None = None

    def resolve(self, statements: list[Stmt]) -> dict[Expr, int]:
        """Resolve a whole program and return a fresh resolution table."""
        self.error_count = 0
        self.locals = {}
        self.scopes = []
        self.current_function = FunctionType.NONE
        self.current_class = ClassType.NONE
        self.last_name = None

        try:
            self._resolve_statements(statements)
        except RecursionError:
            self.scopes = []
            self.current_function = FunctionType.NONE
            self.current_class = ClassType.NONE
            self.error_count += 1
            self.reporter.error(self.last_name if self.last_name is not None else 1, NESTING_ERROR)

        logger.debug("resolved %d local accesses, %d errors", len(self.locals), self.error_count)
        return self.locals

    @property
    def had_error(self) -> bool:
        return self.error_count > 0

    # --- Statements ---

    def _resolve_statements(self, statements: list[Stmt]) -> None:
        for statement in statements:
            self._resolve_statement(statement)

    def _resolve_statement(self, statement: Stmt) -> None:
        match statement:
            case stmt.Block(statements=statements):
                self._begin_scope()
                self._resolve_statements(statements)
                self._end_scope()

            case stmt.Var(name=name, initializer=initializer):
                self._declare(name)
                if initializer is not None:
                    self._resolve_expr(initializer)
                self._define(name)

            case stmt.Function(name=name):
                # Defined before the body so the function can call itself.
                self._declare(name)
                self._define(name)
                self._resolve_function(statement, FunctionType.FUNCTION)

            case stmt.Class():
                self._resolve_class(statement)

            case stmt.Expression(expression=expression) | stmt.Print(expression=expression):
                self._resolve_expr(expression)

            case stmt.If(condition=condition, then_branch=then_branch, else_branch=else_branch):
                self._resolve_expr(condition)
                self._resolve_statement(then_branch)
                if else_branch is not None:
                    self._resolve_statement(else_branch)

            case stmt.While(condition=condition, body=body):
                self._resolve_expr(condition)
                self._resolve_statement(body)

            case stmt.Return(keyword=keyword, value=value):
                if self.current_function == FunctionType.NONE:
                    self._error(keyword, "Can't return from top-level code.")
                if value is not None:
                    if self.current_function == FunctionType.INITIALIZER:
                        self._error(keyword, "Can't return a value from an initializer.")
                    self._resolve_expr(value)

            case _:
                assert_never(statement)

    def _resolve_class(self, statement: stmt.Class) -> None:
        enclosing_class = self.current_class
        self.current_class = ClassType.CLASS

        self._declare(statement.name)
        self._define(statement.name)

        superclass = statement.superclass
        if superclass is not None:
            if superclass.name.lexeme == statement.name.lexeme:
                self._error(superclass.name, "A class can't inherit from itself.")
            self.current_class = ClassType.SUBCLASS
            self._resolve_expr(superclass)

            self._begin_scope()
            self.scopes[-1]["super"] = True

        self._begin_scope()
        self.scopes[-1]["this"] = True

        for method in statement.methods:
            declaration = FunctionType.METHOD
            if is_initializer_declaration(method):
                declaration = FunctionType.INITIALIZER
            self._resolve_function(method, declaration)

        self._end_scope()
        if superclass is not None:
            self._end_scope()

        self.current_class = enclosing_class

    def _resolve_function(self, function: stmt.Function, kind: FunctionType) -> None:
        enclosing_function = self.current_function
        self.current_function = kind

        self._begin_scope()
        for param in function.params:
            self._declare(param)
            self._define(param)
        self._resolve_statements(function.body)
        self._end_scope()

        self.current_function = enclosing_function

    # --- Expressions ---

    def _resolve_expr(self, expression: Expr) -> None:
        match expression:
            case expr.Variable(name=name):
                if self.scopes and self.scopes[-1].get(name.lexeme) is False:
                    self._error(name, "Can't read local variable in its own initializer.")
                self._resolve_local(expression, name)

            case expr.Assign(name=name, value=value):
                self._resolve_expr(value)
                self._resolve_local(expression, name)

            case expr.This(keyword=keyword):
                if self.current_class == ClassType.NONE:
                    self._error(keyword, "Can't use 'this' outside of a class.")
                    return
                self._resolve_local(expression, keyword)

            case expr.Super(keyword=keyword):
                if self.current_class == ClassType.NONE:
                    self._error(keyword, "Can't use 'super' outside of a class.")
                elif self.current_class != ClassType.SUBCLASS:
                    self._error(keyword, "Can't use 'super' in a class with no superclass.")
                self._resolve_local(expression, keyword)

            case expr.Binary(left=left, right=right) | expr.Logical(left=left, right=right):
                self._resolve_expr(left)
                self._resolve_expr(right)

            case expr.Call(callee=callee, arguments=arguments):
                self._resolve_expr(callee)
                for argument in arguments:
                    self._resolve_expr(argument)

            case expr.Get(object=obj):
                self._resolve_expr(obj)

            case expr.Set(object=obj, value=value):
                self._resolve_expr(value)
                self._resolve_expr(obj)

            case expr.Grouping(expression=inner):
                self._resolve_expr(inner)

            case expr.Unary(right=right):
                self._resolve_expr(right)

            case expr.Literal():
                pass

            case _:
                assert_never(expression)

    # --- Scope bookkeeping ---

    def _begin_scope(self) -> None:
        self.scopes.append({})

    def _end_scope(self) -> None:
        self.scopes.pop()

    def _declare(self, name: Token) -> None:
        self.last_name = name
        if not self.scopes:
            return
        scope = self.scopes[-1]
        if scope.get(name.lexeme):
            self._error(name, "Already a variable with this name in this scope.")
        scope[name.lexeme] = False

    def _define(self, name: Token) -> None:
        if not self.scopes:
            return
        self.scopes[-1][name.lexeme] = True

    def _resolve_local(self, expression: Expr, name: Token) -> None:
        self.last_name = name
        for index in range(len(self.scopes) - 1, -1, -1):
            if name.lexeme in self.scopes[index]:
                self.locals[expression] = len(self.scopes) - 1 - index
                return
        # Not found: assume it is global.

    def _error(self, token: Token, message: str) -> None:
        self.error_count += 1
        self.reporter.error(token, message)
