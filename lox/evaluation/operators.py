"""Value-level rules of the language: truthiness, equality, operators, display.

These helpers are pure functions of their operands (plus the operator token,
for error attribution) so they can be tested without building a tree.
"""

from __future__ import annotations

import math

from lox import LoxValue
from lox.errors import LoxInternalError, LoxTypeError
from lox.types.token import Token, TokenType


def is_number(value: LoxValue) -> bool:
    # bool is an int subclass in Python; Lox booleans are not numbers.
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_truthy(value: LoxValue) -> bool:
    """`nil` and `false` are falsy; everything else, 0 and "" included, is truthy."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return True


def is_equal(a: LoxValue, b: LoxValue) -> bool:
    if a is None:
        return b is None
    if b is None:
        return False
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if is_number(a) and is_number(b):
        return a == b
    if isinstance(a, str) and isinstance(b, str):
        return a == b
    # Callables and instances compare by identity.
    return a is b


def format_number(value: float) -> str:
    """Shortest round-trip digits, laid out the way JavaScript prints numbers.

        3.0 -> 3    2.5 -> 2.5    1e-07 -> 1e-7    1.2345678901234568e+20 -> 123456789012345680000
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    mantissa, _, exponent = repr(abs(float(value))).partition("e")
    whole, _, fraction = mantissa.partition(".")
    if fraction == "0":
        fraction = ""
    raw = whole + fraction
    digits = raw.lstrip("0")
    # The decimal point sits after `point` digits of `digits`.
    point = len(whole) + int(exponent or 0) - (len(raw) - len(digits))
    digits = digits.rstrip("0")
    k = len(digits)

    if k <= point <= 21:
        text = digits + "0" * (point - k)
    elif 0 < point <= 21:
        text = digits[:point] + "." + digits[point:]
    elif -6 < point <= 0:
        text = "0." + "0" * -point + digits
    else:
        e = point - 1
        head = digits[0] + ("." + digits[1:] if k > 1 else "")
        text = f"{head}e{'+' if e >= 0 else '-'}{abs(e)}"
    return "-" + text if value < 0 else text


def stringify(value: LoxValue) -> str:
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if is_number(value):
        return format_number(value)
    return str(value)


def check_number_operand(operator: Token, operand: LoxValue) -> None:
    if is_number(operand):
        return
    raise LoxTypeError(operator, "Operand must be a number.")


def check_number_operands(operator: Token, left: LoxValue, right: LoxValue) -> None:
    if is_number(left) and is_number(right):
        return
    raise LoxTypeError(operator, "Operands must be numbers.")


def add(operator: Token, left: LoxValue, right: LoxValue) -> LoxValue:
    if is_number(left) and is_number(right):
        return left + right
    if isinstance(left, str) and isinstance(right, str):
        return left + right
    # Only a string on the left coerces a number; `1 + "a"` is still an error.
    if isinstance(left, str) and is_number(right):
        return left + format_number(right)
    raise LoxTypeError(operator, "Operands must be two numbers or two strings.")


def divide(operator: Token, left: LoxValue, right: LoxValue) -> LoxValue:
    check_number_operands(operator, left, right)
    if right == 0:
        raise LoxTypeError(operator, "Right operand must not be zero.")
    return left / right


def unary(operator: Token, right: LoxValue) -> LoxValue:
    match operator.type:
        case TokenType.BANG:
            return not is_truthy(right)
        case TokenType.MINUS:
            check_number_operand(operator, right)
            return -right
    raise LoxInternalError(f"Unknown unary operator {operator.lexeme!r}")


def binary(operator: Token, left: LoxValue, right: LoxValue) -> LoxValue:
    match operator.type:
        case TokenType.PLUS:
            return add(operator, left, right)
        case TokenType.MINUS:
            check_number_operands(operator, left, right)
            return left - right
        case TokenType.STAR:
            check_number_operands(operator, left, right)
            return left * right
        case TokenType.SLASH:
            return divide(operator, left, right)
        case TokenType.GREATER:
            check_number_operands(operator, left, right)
            return left > right
        case TokenType.GREATER_EQUAL:
            check_number_operands(operator, left, right)
            return left >= right
        case TokenType.LESS:
            check_number_operands(operator, left, right)
            return left < right
        case TokenType.LESS_EQUAL:
            check_number_operands(operator, left, right)
            return left <= right
        case TokenType.EQUAL_EQUAL:
            return is_equal(left, right)
        case TokenType.BANG_EQUAL:
            return not is_equal(left, right)
    raise LoxInternalError(f"Unknown binary operator {operator.lexeme!r}")
