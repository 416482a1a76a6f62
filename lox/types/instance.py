from __future__ import annotations

from typing import TYPE_CHECKING

from lox import LoxValue
from lox.errors import LoxUndefinedProperty
from lox.types.token import Token

if TYPE_CHECKING:
    from lox.types.lox_class import LoxClass


class LoxInstance:
    __slots__ = ("klass", "fields")

    def __init__(self, klass: LoxClass):
        self.klass = klass
        self.fields: dict[str, LoxValue] = {}

    def get(self, name: Token) -> LoxValue:
        # Fields shadow methods of the same name.
        if name.lexeme in self.fields:
            return self.fields[name.lexeme]

        method = self.klass.find_method(name.lexeme)
        if method is not None:
            return method.bind(self)

        raise LoxUndefinedProperty(name)

    def set(self, name: Token, value: LoxValue) -> None:
        self.fields[name.lexeme] = value

    def __str__(self) -> str:
        return f"{self.klass.name} instance"

    def __repr__(self) -> str:
        return f"<{self.klass.name} instance>"
