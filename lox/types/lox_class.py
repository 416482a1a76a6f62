from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from lox import LoxValue, INITIALIZER_NAME
from lox.types.function import LoxFunction
from lox.types.instance import LoxInstance

if TYPE_CHECKING:
    from lox.evaluation.interpreter import Interpreter


class LoxClass:
    """A class value. Calling it allocates an instance and runs `init`."""

    __slots__ = ("name", "superclass", "methods")

    def __init__(
        self,
        name: str,
        superclass: Optional[LoxClass],
        methods: dict[str, LoxFunction],
    ):
        self.name = name
        self.superclass = superclass
        self.methods = methods

    def find_method(self, name: str) -> Optional[LoxFunction]:
        """Most-derived definition of `name`, walking the superclass chain."""
        klass: Optional[LoxClass] = self
        while klass is not None:
            method = klass.methods.get(name)
            if method is not None:
                return method
            klass = klass.superclass
        return None

    def arity(self) -> int:
        initializer = self.find_method(INITIALIZER_NAME)
        if initializer is None:
            return 0
        return initializer.arity()

    def call(self, interpreter: Interpreter, arguments: list[LoxValue]) -> LoxValue:
        instance = LoxInstance(self)
        initializer = self.find_method(INITIALIZER_NAME)
        if initializer is not None:
            initializer.bind(instance).call(interpreter, arguments)
        return instance

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"<class {self.name}>"
