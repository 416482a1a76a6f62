import pytest

from lox.ast import expr, stmt
from lox.debug_utils.pprint import pprint_expr, pprint_program
from lox.reader.parser import parse
from lox.reader.scanner import scan


def parse_source(source, reporter=None):
    return parse(scan(source, reporter), reporter)


def parse_expression(source):
    [statement] = parse_source(source + ";")
    assert isinstance(statement, stmt.Expression)
    return statement.expression


@pytest.mark.parametrize(
    "source,expected",
    [
        ("-123 * (45.67)", "(* (- 123) (group 45.67))"),
        ("1 + 2 * 3", "(+ 1 (* 2 3))"),
        ("1 - 2 - 3", "(- (- 1 2) 3)"),
        ("a = b = c", "(= a (= b c))"),
        ("a or b or c", "(or (or a b) c)"),
        ("a and b or c", "(or (and a b) c)"),
        ("!!true == false", "(== (! (! true)) false)"),
        ("1 < 2 != 3 >= 4", "(!= (< 1 2) (>= 3 4))"),
        ("f(1)(2)", "(call (call f 1) 2)"),
        ("a.b.c = 1", "(= (. (. a b) c) 1)"),
        ('"s"', '"s"'),
        ("nil", "nil"),
    ],
)
def test_expression_shape(source, expected):
    assert pprint_expr(parse_expression(source)) == expected


def test_or_chain_is_left_nested():
    e = parse_expression("a or b or c")
    assert isinstance(e, expr.Logical)
    assert isinstance(e.left, expr.Logical)
    assert isinstance(e.right, expr.Variable)


def test_for_desugars_to_block_and_while():
    [loop] = parse_source("for (var i = 0; i < 3; i = i + 1) print i;")
    assert pprint_program([loop]) == (
        "(block\n"
        "  (var i 0)\n"
        "  (while (< i 3)\n"
        "    (block\n"
        "      (print i)\n"
        "      (; (= i (+ i 1))))))"
    )


def test_for_without_clauses_loops_on_true():
    [loop] = parse_source("for (;;) print 1;")
    assert isinstance(loop, stmt.While)
    assert isinstance(loop.condition, expr.Literal)
    assert loop.condition.value is True


def test_class_declaration():
    [decl] = parse_source("class B < A { init(x) { this.x = x; } get() { return super.get(); } }")
    assert isinstance(decl, stmt.Class)
    assert decl.name.lexeme == "B"
    assert decl.superclass.name.lexeme == "A"
    assert [m.name.lexeme for m in decl.methods] == ["init", "get"]
    assert [p.lexeme for p in decl.methods[0].params] == ["x"]


def test_nodes_hash_by_identity():
    a, b = parse_source("x; x;")
    assert a.expression is not b.expression
    assert a.expression != b.expression
    assert len({a.expression, b.expression}) == 2


def test_missing_semicolon_reports_and_recovers(reporter):
    statements = parse_source("print 1 2; print 3;", reporter)
    assert [str(d) for d in reporter.diagnostics] == ["[line 1] Error at '2': Expect ';' after value."]
    # Synchronization skips to the next statement and keeps parsing.
    assert len(statements) == 1


def test_error_at_end(reporter):
    parse_source("print", reporter)
    assert str(reporter.diagnostics[0]) == "[line 1] Error at end: Expect expression."


def test_invalid_assignment_target_is_reported_not_raised(reporter):
    statements = parse_source("1 = 2; print 3;", reporter)
    assert [d.message for d in reporter.diagnostics] == ["Invalid assignment target."]
    assert reporter.diagnostics[0].where == " at '='"
    assert len(statements) == 2


def test_too_many_arguments(reporter):
    args = ", ".join(["1"] * 256)
    parse_source(f"f({args});", reporter)
    assert [d.message for d in reporter.diagnostics] == ["Can't have more than 255 arguments."]


def test_too_many_parameters(reporter):
    params = ", ".join(f"p{i}" for i in range(256))
    parse_source(f"fun f({params}) {{}}", reporter)
    assert [d.message for d in reporter.diagnostics] == ["Can't have more than 255 parameters."]


def test_super_requires_method_name(reporter):
    parse_source("super;", reporter)
    assert reporter.diagnostics[0].message == "Expect '.' after 'super'."
