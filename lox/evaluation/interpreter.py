"""Tree-walking evaluator for Lox.

Executes statements and evaluates expressions directly over the syntax tree.
Variable accesses use the distances computed by the Resolver; anything the
resolver left unresolved is looked up in the global environment.

The interpreter keeps one live `environment` pointer. Blocks and calls swap
in a fresh Environment and always restore the previous one on the way out,
whether the body finished, raised a runtime fault, or is unwinding a
ReturnSignal.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, assert_never

from lox import LoxValue
from lox.ast import expr, stmt
from lox.ast.expr import Expr
from lox.ast.stmt import Stmt
from lox.builtins import register
from lox.errors import (
    LoxArityError,
    LoxInternalError,
    LoxRuntimeError,
    LoxStackOverflowError,
    LoxTypeError,
    LoxUndefinedProperty,
)
from lox.evaluation import operators
from lox.reporter import ErrorReporter
from lox.types.environment import Environment
from lox.types.function import LoxCallable, LoxFunction, is_initializer_declaration
from lox.types.instance import LoxInstance
from lox.types.lox_class import LoxClass
from lox.types.return_signal import ReturnSignal
from lox.types.token import Token, TokenType, synthetic

logger = logging.getLogger(__name__)

_SUPER = synthetic("super")
_THIS = synthetic("this")


def _print_line(text: str) -> None:
    print(text)


class Interpreter:
    def __init__(
        self,
        reporter: Optional[ErrorReporter] = None,
        output: Optional[Callable[[str], None]] = None,
    ):
        self.reporter = reporter if reporter is not None else ErrorReporter()
        self.output: Callable[[str], None] = output if output is not None else _print_line
        self.globals = Environment()
        self.environment = self.globals
        self.locals: dict[Expr, int] = {}
        register(self.globals)

    # --- Driver interface ---

    def resolve(self, table: dict[Expr, int]) -> None:
        """Merge a resolution table produced by the Resolver."""
        self.locals.update(table)

    def interpret(self, statements: list[Stmt]) -> None:
        """Execute top-level statements; report the first runtime fault and stop."""
        logger.debug("interpreting %d top-level statements", len(statements))
        try:
            for statement in statements:
                self.execute(statement)
        except LoxRuntimeError as fault:
            self.reporter.runtime_error(fault)
        except ReturnSignal as signal:
            raise LoxInternalError("return escaped every call frame") from signal
        finally:
            self.environment = self.globals

    # --- Statements ---

    def execute(self, statement: Stmt) -> None:
        match statement:
            case stmt.Expression(expression=expression):
                self.evaluate(expression)

            case stmt.Print(expression=expression):
                value = self.evaluate(expression)
                self.output(operators.stringify(value))

            case stmt.Var(name=name, initializer=initializer):
                value = None
                if initializer is not None:
                    value = self.evaluate(initializer)
                self.environment.define(name.lexeme, value)

            case stmt.Block(statements=statements):
                self.execute_block(statements, Environment(self.environment))

            case stmt.If(condition=condition, then_branch=then_branch, else_branch=else_branch):
                if operators.is_truthy(self.evaluate(condition)):
                    self.execute(then_branch)
                elif else_branch is not None:
                    self.execute(else_branch)

            case stmt.While(condition=condition, body=body):
                while operators.is_truthy(self.evaluate(condition)):
                    self.execute(body)

            case stmt.Function(name=name):
                function = LoxFunction(statement, self.environment, False)
                self.environment.define(name.lexeme, function)

            case stmt.Return(value=value):
                result = None
                if value is not None:
                    result = self.evaluate(value)
                raise ReturnSignal(result)

            case stmt.Class():
                self._execute_class(statement)

            case _:
                assert_never(statement)

    def execute_block(self, statements: list[Stmt], environment: Environment) -> None:
        previous = self.environment
        try:
            self.environment = environment
            for statement in statements:
                self.execute(statement)
        finally:
            self.environment = previous

    def _execute_class(self, statement: stmt.Class) -> None:
        superclass: Optional[LoxClass] = None
        if statement.superclass is not None:
            value = self.evaluate(statement.superclass)
            if not isinstance(value, LoxClass):
                raise LoxTypeError(statement.superclass.name, "Superclass must be a class.")
            superclass = value

        self.environment.define(statement.name.lexeme, None)

        # Methods close over an extra scope holding `super`; `this` is bound per call.
        method_env = self.environment
        if superclass is not None:
            method_env = Environment(self.environment)
            method_env.define("super", superclass)

        methods: dict[str, LoxFunction] = {}
        for method in statement.methods:
            methods[method.name.lexeme] = LoxFunction(
                method, method_env, is_initializer_declaration(method)
            )

        klass = LoxClass(statement.name.lexeme, superclass, methods)
        self.environment.assign(statement.name, klass)

    # --- Expressions ---

    def evaluate(self, expression: Expr) -> LoxValue:
        match expression:
            case expr.Literal(value=value):
                return value

            case expr.Grouping(expression=inner):
                return self.evaluate(inner)

            case expr.Unary(operator=operator, right=right):
                return operators.unary(operator, self.evaluate(right))

            case expr.Binary(left=left, operator=operator, right=right):
                lhs = self.evaluate(left)
                rhs = self.evaluate(right)
                return operators.binary(operator, lhs, rhs)

            case expr.Logical(left=left, operator=operator, right=right):
                lhs = self.evaluate(left)
                if operator.type == TokenType.OR:
                    if operators.is_truthy(lhs):
                        return lhs
                elif not operators.is_truthy(lhs):
                    return lhs
                return self.evaluate(right)

            case expr.Variable(name=name):
                return self._look_up_variable(name, expression)

            case expr.Assign(name=name, value=value_expr):
                value = self.evaluate(value_expr)
                distance = self.locals.get(expression)
                if distance is not None:
                    self.environment.assign_at(distance, name, value)
                else:
                    self.globals.assign(name, value)
                return value

            case expr.Call():
                return self._call(expression)

            case expr.Get(object=obj_expr, name=name):
                obj = self.evaluate(obj_expr)
                if isinstance(obj, LoxInstance):
                    return obj.get(name)
                raise LoxTypeError(name, "Only instances have properties.")

            case expr.Set(object=obj_expr, name=name, value=value_expr):
                obj = self.evaluate(obj_expr)
                if not isinstance(obj, LoxInstance):
                    raise LoxTypeError(name, "Only instances have fields.")
                value = self.evaluate(value_expr)
                obj.set(name, value)
                return value

            case expr.This(keyword=keyword):
                return self._look_up_variable(keyword, expression)

            case expr.Super(method=method):
                return self._super(expression, method)

            case _:
                assert_never(expression)

    def _look_up_variable(self, name: Token, expression: Expr) -> LoxValue:
        distance = self.locals.get(expression)
        if distance is not None:
            return self.environment.get_at(distance, name)
        return self.globals.get(name)

    def _call(self, expression: expr.Call) -> LoxValue:
        callee = self.evaluate(expression.callee)
        arguments = [self.evaluate(argument) for argument in expression.arguments]

        if not isinstance(callee, LoxCallable):
            raise LoxTypeError(expression.paren, "Can only call functions and classes.")

        if len(arguments) != callee.arity():
            raise LoxArityError(expression.paren, callee.arity(), len(arguments))

        try:
            return callee.call(self, arguments)
        except RecursionError as exc:
            raise LoxStackOverflowError(expression.paren) from exc

    def _super(self, expression: expr.Super, method: Token) -> LoxValue:
        distance = self.locals.get(expression)
        if distance is None:
            raise LoxInternalError(f"'super' at line {method.line} was never resolved")
        superclass = self.environment.get_at(distance, _SUPER)
        # `this` lives in the scope just inside the one holding `super`.
        instance = self.environment.get_at(distance - 1, _THIS)

        function = superclass.find_method(method.lexeme)
        if function is None:
            raise LoxUndefinedProperty(method)
        return function.bind(instance)
