"""Runtime environment for Lox.

The Environment stores bindings of names to evaluated Lox values and supports
nested scopes via an `enclosing` link. Closures, bound methods and active call
frames may all hold the same Environment, so the chain forms a shared graph
rather than a tree; lookups only ever walk outward.
"""

from __future__ import annotations

from io import StringIO
from typing import Optional

from lox import LoxValue
from lox.errors import LoxInternalError, LoxUndefinedVariable
from lox.types.token import Token


class Environment:
    """Hierarchical mapping from names to Lox values."""

    __slots__ = ("values", "enclosing")

    def __init__(self, enclosing: Optional[Environment] = None):
        self.values: dict[str, LoxValue] = {}
        self.enclosing: Environment | None = enclosing

    def define(self, name: str, value: LoxValue) -> None:
        """Bind `name` to `value` in this scope, replacing any existing binding."""
        self.values[name] = value

    def get(self, name: Token) -> LoxValue:
        """Look up the value bound to `name`, searching outward.

        Raises LoxUndefinedVariable if no scope in the chain binds it.
        """
        env: Optional[Environment] = self
        while env is not None:
            if name.lexeme in env.values:
                return env.values[name.lexeme]
            env = env.enclosing
        raise LoxUndefinedVariable(name)

    def assign(self, name: Token, value: LoxValue) -> None:
        """Update the nearest existing binding for `name`.

        Assignment never creates a binding; raises LoxUndefinedVariable when
        the name is unbound everywhere in the chain.
        """
        env: Optional[Environment] = self
        while env is not None:
            if name.lexeme in env.values:
                env.values[name.lexeme] = value
                return
            env = env.enclosing
        raise LoxUndefinedVariable(name)

    def ancestor(self, distance: int) -> Environment:
        env: Optional[Environment] = self
        for _ in range(distance):
            if env is None:
                break
            env = env.enclosing
        if env is None:
            raise LoxInternalError(f"No enclosing environment at distance {distance}")
        return env

    def get_at(self, distance: int, name: Token) -> LoxValue:
        """Read `name` from the scope exactly `distance` links out."""
        values = self.ancestor(distance).values
        if name.lexeme not in values:
            raise LoxUndefinedVariable(name)
        return values[name.lexeme]

    def assign_at(self, distance: int, name: Token, value: LoxValue) -> None:
        """Overwrite `name` in the scope exactly `distance` links out."""
        values = self.ancestor(distance).values
        if name.lexeme not in values:
            raise LoxUndefinedVariable(name)
        values[name.lexeme] = value

    def _write_vars(self, buffer: StringIO) -> None:
        buffer.write("{")
        buffer.write(", ".join(f"{k}: {v!r}" for k, v in self.values.items()))
        buffer.write("}")

    def __str__(self) -> str:
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.enclosing is not None:
                buffer.write(" -> ...")
            return buffer.getvalue()

    def __repr__(self) -> str:
        with StringIO() as buffer:
            buffer.write("<Environment chain: ")
            env: Optional[Environment] = self
            chain = []
            while env is not None:
                with StringIO() as frame:
                    env._write_vars(frame)
                    chain.append(frame.getvalue())
                env = env.enclosing
            buffer.write(" -> ".join(chain))
            buffer.write(">")
            return buffer.getvalue()
