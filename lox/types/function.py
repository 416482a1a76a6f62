"""Callable runtime values: the call contract, host natives and user functions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Protocol, runtime_checkable

from lox import LoxValue, INITIALIZER_NAME
from lox.ast import stmt
from lox.types.environment import Environment
from lox.types.return_signal import ReturnSignal
from lox.types.token import synthetic

if TYPE_CHECKING:
    from lox.evaluation.interpreter import Interpreter
    from lox.types.instance import LoxInstance


_THIS = synthetic("this")


@runtime_checkable
class LoxCallable(Protocol):
    def arity(self) -> int: ...

    def call(self, interpreter: Interpreter, arguments: list[LoxValue]) -> LoxValue: ...


class NativeFunction:
    """A host-provided operation with a fixed arity."""

    __slots__ = ("name", "_arity", "fn")

    def __init__(
        self,
        name: str,
        arity: int,
        fn: Callable[[Interpreter, list[LoxValue]], LoxValue],
    ):
        self.name = name
        self._arity = arity
        self.fn = fn

    def arity(self) -> int:
        return self._arity

    def call(self, interpreter: Interpreter, arguments: list[LoxValue]) -> LoxValue:
        return self.fn(interpreter, arguments)

    def __str__(self) -> str:
        return "<native fn>"

    def __repr__(self) -> str:
        return f"<native fn {self.name}>"


class LoxFunction:
    """A user function: its declaration plus the environment it closed over."""

    __slots__ = ("declaration", "closure", "is_initializer")

    def __init__(
        self,
        declaration: stmt.Function,
        closure: Environment,
        is_initializer: bool = False,
    ):
        self.declaration = declaration
        self.closure = closure
        self.is_initializer = is_initializer

    @property
    def name(self) -> str:
        return self.declaration.name.lexeme

    def bind(self, instance: LoxInstance) -> LoxFunction:
        """Return a copy of this function whose closure binds `this` to `instance`."""
        environment = Environment(self.closure)
        environment.define("this", instance)
        return LoxFunction(self.declaration, environment, self.is_initializer)

    def arity(self) -> int:
        return len(self.declaration.params)

    def call(self, interpreter: Interpreter, arguments: list[LoxValue]) -> LoxValue:
        environment = Environment(self.closure)
        for param, argument in zip(self.declaration.params, arguments):
            environment.define(param.lexeme, argument)

        try:
            interpreter.execute_block(self.declaration.body, environment)
        except ReturnSignal as ret:
            if self.is_initializer:
                return self.closure.get_at(0, _THIS)
            return ret.value

        if self.is_initializer:
            return self.closure.get_at(0, _THIS)
        return None

    def __str__(self) -> str:
        return f"<fn {self.name}>"

    def __repr__(self) -> str:
        return str(self)


def is_initializer_declaration(declaration: stmt.Function) -> bool:
    return declaration.name.lexeme == INITIALIZER_NAME
