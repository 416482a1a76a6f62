import pytest

from lox.debug_utils.pprint import COLOR_KEYWORD, RESET, pprint, pprint_program
from lox.reader.parser import parse
from lox.reader.scanner import scan


def render(source, options=None):
    statements = parse(scan(source))
    if options is None:
        return pprint_program(statements)
    return pprint_program(statements, options)


@pytest.mark.parametrize(
    "source,expected",
    [
        ("var a = 1;", "(var a 1)"),
        ("var a;", "(var a)"),
        ("a.b;", "(; (. a b))"),
        ("return;", "(return)"),
        ("return nil;", "(return nil)"),
        ("print this.x;", "(print (. this x))"),
        ('print "s" + 1.5;', '(print (+ "s" 1.5))'),
        ("print super.m;", "(print (super m))"),
    ],
)
def test_single_statements(source, expected):
    assert render(source) == expected


def test_nested_statements_are_indented():
    source = "fun f(a, b) { if (a) print a; else { print b; } }"
    assert render(source) == (
        "(fun f (a b)\n"
        "  (if a\n"
        "    (print a)\n"
        "    (block\n"
        "      (print b))))"
    )


def test_class_with_superclass():
    assert render("class B < A { m() {} }") == "(class B < A\n  (fun m ()))"


def test_indent_option():
    assert render("{ print 1; }", {"indent": 4}) == "(block\n    (print 1))"


def test_color_option_wraps_keywords():
    text = render("print 1;", {"color": True})
    assert text.startswith(f"({COLOR_KEYWORD}print{RESET}")


def test_pprint_writes_to_stdout(capsys):
    pprint(parse(scan("print 1; print 2;")))
    assert capsys.readouterr().out == "(print 1)\n(print 2)\n"
