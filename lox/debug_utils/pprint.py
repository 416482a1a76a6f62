"""Parenthesized prefix rendering of the Lox syntax tree.

    -123 * (45.67)      ->  (* (- 123) (group 45.67))
    var a = 1;          ->  (var a 1)
    fun f(x) { ... }    ->  (fun f (x) ...)

Used by `lox --print-ast` and handy in a debugger. Colors are off unless
requested, so the output is stable for tests.
"""

from typing import assert_never

from lox import LoxValue
from lox.ast import expr, stmt
from lox.ast.expr import Expr
from lox.ast.stmt import Stmt
from lox.evaluation.operators import is_number, format_number

# ----------------- ANSI colors -----------------
RESET = "\033[0m"
COLOR_KEYWORD = "\033[94m"
COLOR_LITERAL = "\033[92m"
COLOR_NAME = "\033[95m"

# ----------------- Defaults -----------------
DEFAULT_OPTIONS = {
    "color": False,
    "indent": 2,
}


def _paint(text: str, color: str, options: dict) -> str:
    if options.get("color", False):
        return f"{color}{text}{RESET}"
    return text


def _literal(value: LoxValue, options: dict) -> str:
    if value is None:
        text = "nil"
    elif isinstance(value, bool):
        text = "true" if value else "false"
    elif is_number(value):
        text = format_number(value)
    elif isinstance(value, str):
        text = f'"{value}"'
    else:
        text = str(value)
    return _paint(text, COLOR_LITERAL, options)


def pprint_expr(node: Expr, options: dict = DEFAULT_OPTIONS) -> str:
    def paren(name: str, *parts: str) -> str:
        return "(" + " ".join([_paint(name, COLOR_KEYWORD, options), *parts]) + ")"

    def walk(e: Expr) -> str:
        match e:
            case expr.Literal(value=value):
                return _literal(value, options)
            case expr.Grouping(expression=inner):
                return paren("group", walk(inner))
            case expr.Unary(operator=op, right=right):
                return paren(op.lexeme, walk(right))
            case expr.Binary(left=left, operator=op, right=right) | expr.Logical(
                left=left, operator=op, right=right
            ):
                return paren(op.lexeme, walk(left), walk(right))
            case expr.Variable(name=name):
                return _paint(name.lexeme, COLOR_NAME, options)
            case expr.Assign(name=name, value=value):
                return paren("=", name.lexeme, walk(value))
            case expr.Call(callee=callee, arguments=arguments):
                return paren("call", walk(callee), *(walk(a) for a in arguments))
            case expr.Get(object=obj, name=name):
                return paren(".", walk(obj), name.lexeme)
            case expr.Set(object=obj, name=name, value=value):
                return paren("=", paren(".", walk(obj), name.lexeme), walk(value))
            case expr.This():
                return _paint("this", COLOR_KEYWORD, options)
            case expr.Super(method=method):
                return paren("super", method.lexeme)
            case _:
                assert_never(e)

    return walk(node)


def pprint_stmt(node: Stmt, options: dict = DEFAULT_OPTIONS, depth: int = 0) -> str:
    pad = " " * (options.get("indent", 2) * depth)

    def paren(name: str, *parts: str) -> str:
        return "(" + " ".join([_paint(name, COLOR_KEYWORD, options), *parts]) + ")"

    def nested(statements: list[Stmt]) -> str:
        return "".join("\n" + pprint_stmt(s, options, depth + 1) for s in statements)

    match node:
        case stmt.Expression(expression=e):
            text = paren(";", pprint_expr(e, options))
        case stmt.Print(expression=e):
            text = paren("print", pprint_expr(e, options))
        case stmt.Var(name=name, initializer=None):
            text = paren("var", name.lexeme)
        case stmt.Var(name=name, initializer=initializer):
            text = paren("var", name.lexeme, pprint_expr(initializer, options))
        case stmt.Block(statements=statements):
            text = paren("block")[:-1] + nested(statements) + ")"
        case stmt.If(condition=cond, then_branch=then_branch, else_branch=else_branch):
            branches = [then_branch] if else_branch is None else [then_branch, else_branch]
            text = paren("if", pprint_expr(cond, options))[:-1] + nested(branches) + ")"
        case stmt.While(condition=cond, body=body):
            text = paren("while", pprint_expr(cond, options))[:-1] + nested([body]) + ")"
        case stmt.Function(name=name, params=params, body=body):
            signature = "(" + " ".join(p.lexeme for p in params) + ")"
            text = paren("fun", name.lexeme, signature)[:-1] + nested(body) + ")"
        case stmt.Return(value=None):
            text = paren("return")
        case stmt.Return(value=value):
            text = paren("return", pprint_expr(value, options))
        case stmt.Class(name=name, superclass=superclass, methods=methods):
            head = [name.lexeme] if superclass is None else [name.lexeme, "<", superclass.name.lexeme]
            text = paren("class", *head)[:-1] + nested(methods) + ")"
        case _:
            assert_never(node)

    return pad + text


def pprint_program(statements: list[Stmt], options: dict = DEFAULT_OPTIONS) -> str:
    return "\n".join(pprint_stmt(s, options) for s in statements)


def pprint(statements: list[Stmt], options: dict = DEFAULT_OPTIONS) -> None:
    print(pprint_program(statements, options))
