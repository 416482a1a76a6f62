from __future__ import annotations

from lox.types.token import Token


class LoxError(Exception):
    """ Base class for all Lox errors"""
    pass


class LoxSyntaxError(LoxError):
    """ Raised by tooling APIs that surface a static (scan, parse or resolve) error"""

    def __init__(self, line: int, message: str, where: str = ""):
        super().__init__(f"[line {line}] Error{where}: {message}")
        self.line = line
        self.where = where
        self.message = message


class LoxInternalError(LoxError):
    """ Raised when an interpreter invariant is violated. Never a language-level error"""


class LoxRuntimeError(LoxError):
    """ Base class for faults raised while evaluating a program"""

    def __init__(self, token: Token, message: str):
        super().__init__(message)
        self.token = token
        self.message = message

    @property
    def line(self) -> int:
        return self.token.line


class LoxTypeError(LoxRuntimeError):
    """ Raised when an operand, callee or receiver has the wrong kind of value"""


class LoxArityError(LoxRuntimeError):
    """ Raised when the number of arguments passed to a callable is incorrect"""

    def __init__(self, token: Token, expected: int, actual: int):
        super().__init__(token, f"Expected {expected} arguments but got {actual}.")
        self.expected = expected
        self.actual = actual


class LoxUndefinedVariable(LoxRuntimeError):
    """ Raised when a name has no reachable binding"""

    def __init__(self, token: Token):
        super().__init__(token, f"Undefined variable '{token.lexeme}'.")


class LoxUndefinedProperty(LoxRuntimeError):
    """ Raised when an instance has neither a field nor a method of that name"""

    def __init__(self, token: Token):
        super().__init__(token, f"Undefined property '{token.lexeme}'.")


class LoxStackOverflowError(LoxRuntimeError):
    """ Raised when the host runs out of stack while calling a function"""

    def __init__(self, token: Token):
        super().__init__(token, "Stack overflow.")
