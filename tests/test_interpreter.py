import pytest

from lox.errors import LoxInternalError
from lox.evaluation.interpreter import Interpreter
from lox.reader.parser import parse
from lox.reader.scanner import scan
from lox.types.environment import Environment
from lox.types.function import LoxFunction
from lox.types.return_signal import ReturnSignal


# -----------------------------------------------------
# Printing and literals
# -----------------------------------------------------

@pytest.mark.parametrize(
    "source,expected",
    [
        ("print 1;", "1"),
        ("print 2.5;", "2.5"),
        ("print -0.5;", "-0.5"),
        ("print 10 / 4;", "2.5"),
        ("print 1 / 3;", "0.3333333333333333"),
        ("print 0.0000001;", "1e-7"),
        ("print 123456789012345678901;", "123456789012345680000"),
        ('print "hi";', "hi"),
        ("print nil;", "nil"),
        ("print true;", "true"),
        ("print !nil;", "true"),
        ('print "a" + "b";', "ab"),
        ('print "a" + 1;', "a1"),
        ('print "n=" + 2.5;', "n=2.5"),
        ("print 1 == 1.0;", "true"),
        ('print "1" == 1;', "false"),
        ("print nil == nil;", "true"),
        ("print nil == false;", "false"),
        ("print true == 1;", "false"),
        ("print 3 > 2 == true;", "true"),
        ("print clock;", "<native fn>"),
    ],
)
def test_print(run, source, expected):
    assert run(source) == [expected]


@pytest.mark.parametrize(
    "source,expected",
    [
        ("if (0) print 1; else print 2;", "1"),
        ('if ("") print 1; else print 2;', "1"),
        ("if (nil) print 1; else print 2;", "2"),
        ("if (false) print 1; else print 2;", "2"),
    ],
)
def test_truthiness(run, source, expected):
    assert run(source) == [expected]


def test_logical_operators_return_operands(run):
    assert run('print nil or "x"; print 1 and 2; print false and boom; print 1 or boom;') == [
        "x", "2", "false", "1",
    ]


# -----------------------------------------------------
# Variables, scopes and control flow
# -----------------------------------------------------

def test_block_scoping(run):
    source = """
    var a = "global";
    {
      var a = "inner";
      print a;
    }
    print a;
    """
    assert run(source) == ["inner", "global"]


def test_uninitialized_var_is_nil(run):
    assert run("var a; print a;") == ["nil"]


def test_assignment_is_an_expression(run):
    assert run("var a; var b; a = b = 3; print a; print b;") == ["3", "3"]


def test_while_and_for(run):
    assert run("var i = 0; while (i < 3) { print i; i = i + 1; }") == ["0", "1", "2"]
    assert run("for (var j = 0; j < 2; j = j + 1) print j;") == ["0", "1", "2", "0", "1"]


def test_closure_binding_is_fixed_at_resolution(run):
    source = """
    var a = "global";
    {
      fun show() { print a; }
      show();
      var a = "block";
      show();
    }
    """
    assert run(source) == ["global", "global"]


# -----------------------------------------------------
# Functions
# -----------------------------------------------------

def test_counter_closure(run):
    source = """
    fun makeCounter() {
      var i = 0;
      fun count() {
        i = i + 1;
        print i;
      }
      return count;
    }
    var counter = makeCounter();
    counter();
    counter();
    """
    assert run(source) == ["1", "2"]


def test_recursion(run):
    source = """
    fun fib(n) {
      if (n < 2) return n;
      return fib(n - 1) + fib(n - 2);
    }
    print fib(10);
    """
    assert run(source) == ["55"]


def test_function_without_return_yields_nil(run):
    assert run("fun f() {} print f();") == ["nil"]


def test_early_return_from_loop(run):
    source = """
    fun first() {
      for (var i = 0; i < 10; i = i + 1) {
        if (i == 3) return i;
      }
    }
    print first();
    """
    assert run(source) == ["3"]


def test_operands_and_arguments_evaluate_left_to_right(run):
    source = """
    fun t(x) { print x; return x; }
    fun pair(a, b) { return a + b; }
    print t(1) + t(2);
    print pair(t("a"), t(3));
    """
    assert run(source) == ["1", "2", "3", "a", "3", "a3"]


def test_return_through_nested_blocks_restores_caller_scope(session):
    source = """
    fun f() { { { return 1; } } }
    {
      var local = "kept";
      print f();
      print local;
    }
    """
    session.run(source)
    assert session.output == ["1", "kept"]
    assert not session.reporter.had_runtime_error
    assert session.lox.interpreter.environment is session.lox.interpreter.globals


def test_function_display(run):
    assert run("fun add(a, b) { return a + b; } print add;") == ["<fn add>"]


def test_clock_returns_a_number(run):
    assert run("print clock() > 0;") == ["true"]


# -----------------------------------------------------
# Classes
# -----------------------------------------------------

def test_class_and_instance_display(run):
    assert run("class Bagel {} print Bagel; print Bagel();") == ["Bagel", "Bagel instance"]


def test_fields_and_methods(run):
    source = """
    class Cake {
      taste() {
        var adjective = "delicious";
        print "The " + this.flavor + " cake is " + adjective + "!";
      }
    }
    var cake = Cake();
    cake.flavor = "German chocolate";
    cake.taste();
    """
    assert run(source) == ["The German chocolate cake is delicious!"]


def test_initializer_and_bound_methods(run):
    source = """
    class Point {
      init(x, y) { this.x = x; this.y = y; }
      sum() { return this.x + this.y; }
    }
    var p = Point(1, 2);
    var m = p.sum;
    print m();
    print p.init(3, 4) == p;
    print p.x;
    """
    assert run(source) == ["3", "true", "3"]


def test_early_return_in_initializer_yields_instance(run):
    source = """
    class A {
      init() { this.v = 1; return; this.v = 2; }
    }
    print A().v;
    """
    assert run(source) == ["1"]


def test_field_shadows_method(run):
    source = """
    class A { m() { return "method"; } }
    var a = A();
    a.m = "field";
    print a.m;
    """
    assert run(source) == ["field"]


def test_inheritance_and_super(run):
    source = """
    class Base {
      describe() { return "base"; }
    }
    class Sub < Base {
      describe() { return super.describe() + "-sub"; }
    }
    print Sub().describe();
    """
    assert run(source) == ["base-sub"]


def test_super_skips_the_receivers_own_class(run):
    source = """
    class A { method() { print "A method"; } }
    class B < A {
      method() { print "B method"; }
      test() { super.method(); }
    }
    class C < B {}
    C().test();
    """
    assert run(source) == ["A method"]


def test_inherited_initializer_arity(run):
    source = """
    class A { init(x) { this.x = x; } }
    class B < A {}
    print B(7).x;
    """
    assert run(source) == ["7"]


# -----------------------------------------------------
# Runtime faults
# -----------------------------------------------------

@pytest.mark.parametrize(
    "source,message",
    [
        ("print -\"a\";", "Operand must be a number."),
        ("print 1 < \"a\";", "Operands must be numbers."),
        ("print 1 / 0;", "Right operand must not be zero."),
        ("print 1 + \"a\";", "Operands must be two numbers or two strings."),
        ("print nil + nil;", "Operands must be two numbers or two strings."),
        ("\"not callable\"();", "Can only call functions and classes."),
        ("fun f(a) {} f();", "Expected 1 arguments but got 0."),
        ("class P { init(a, b) {} } P(1);", "Expected 2 arguments but got 1."),
        ("class P {} P(1);", "Expected 0 arguments but got 1."),
        ("print 4.x;", "Only instances have properties."),
        ("var s = \"str\"; s.x = 1;", "Only instances have fields."),
        ("class A {} print A().missing;", "Undefined property 'missing'."),
        ("print nope;", "Undefined variable 'nope'."),
        ("nope = 1;", "Undefined variable 'nope'."),
        ("var NotAClass = 1; class B < NotAClass {}", "Superclass must be a class."),
        ("class A {} class B < A { m() { return super.gone; } } B().m();", "Undefined property 'gone'."),
    ],
)
def test_runtime_faults(session, source, message):
    session.run(source)
    assert session.reporter.had_runtime_error
    assert not session.reporter.had_error
    assert session.error_lines() == [message, "[line 1]"]


def test_fault_reports_line_and_stops_execution(session):
    session.run('print "before";\n\nprint 1 / 0;\nprint "after";')
    assert session.output == ["before"]
    assert session.error_lines() == ["Right operand must not be zero.", "[line 3]"]


def test_stack_overflow_is_a_runtime_fault(session):
    session.run("fun f() { f(); }\nf();")
    assert session.error_lines() == ["Stack overflow.", "[line 1]"]


def test_environment_restored_after_fault(session):
    session.run("{ var inner = 1; print 1 / 0; }")
    session.run("print clock != nil;")
    assert session.lox.interpreter.environment is session.lox.interpreter.globals
    assert session.output == ["true"]


def test_static_error_prevents_execution(session):
    session.run('print "ran"; { var a = a; }')
    assert session.output == []
    assert session.reporter.had_error
    assert not session.reporter.had_runtime_error


# -----------------------------------------------------
# Driver interface
# -----------------------------------------------------

def test_interpreter_direct_use_defaults_to_globals():
    printed = []
    interpreter = Interpreter(output=printed.append)
    interpreter.interpret(parse(scan("var x = 2; print x * 21;")))
    assert printed == ["42"]
    assert "clock" in interpreter.globals.values


def test_escaped_return_is_internal_error():
    # A Return outside any function can only get here if resolution was skipped.
    interpreter = Interpreter(output=lambda _: None)
    with pytest.raises(LoxInternalError) as exc:
        interpreter.interpret(parse(scan("return 1;")))
    assert isinstance(exc.value.__cause__, ReturnSignal)
    assert interpreter.environment is interpreter.globals


def test_lox_function_call_returns_signal_value():
    [declaration] = parse(scan("fun f() { return 7; }"))
    interpreter = Interpreter(output=lambda _: None)
    function = LoxFunction(declaration, Environment(interpreter.globals))
    assert function.arity() == 0
    assert function.call(interpreter, []) == 7
