import pytest

from lox.errors import LoxInternalError, LoxUndefinedVariable
from lox.types.environment import Environment
from lox.types.token import Token, TokenType, synthetic


def name(lexeme):
    return Token(TokenType.IDENTIFIER, lexeme, None, 3)


@pytest.fixture
def chain():
    outer = Environment()
    outer.define("a", 1.0)
    middle = Environment(outer)
    middle.define("b", 2.0)
    inner = Environment(middle)
    inner.define("c", 3.0)
    return outer, middle, inner


def test_define_and_get():
    env = Environment()
    env.define("x", "hello")
    assert env.get(name("x")) == "hello"


def test_define_overwrites_in_same_scope():
    env = Environment()
    env.define("x", 1.0)
    env.define("x", None)
    assert env.get(name("x")) is None


def test_get_searches_outward(chain):
    _, _, inner = chain
    assert inner.get(name("a")) == 1.0
    assert inner.get(name("b")) == 2.0


def test_get_undefined_raises():
    env = Environment(Environment())
    with pytest.raises(LoxUndefinedVariable) as exc:
        env.get(name("missing"))
    assert exc.value.message == "Undefined variable 'missing'."
    assert exc.value.line == 3


def test_shadowing_is_per_scope(chain):
    outer, _, inner = chain
    inner.define("a", "shadow")
    assert inner.get(name("a")) == "shadow"
    assert outer.get(name("a")) == 1.0


def test_assign_updates_nearest_binding(chain):
    outer, _, inner = chain
    inner.assign(name("a"), 10.0)
    assert outer.values["a"] == 10.0
    assert "a" not in inner.values


def test_assign_undefined_raises():
    with pytest.raises(LoxUndefinedVariable):
        Environment().assign(name("nope"), 1.0)


def test_ancestor(chain):
    outer, middle, inner = chain
    assert inner.ancestor(0) is inner
    assert inner.ancestor(1) is middle
    assert inner.ancestor(2) is outer


def test_ancestor_past_the_chain_is_internal_error(chain):
    _, _, inner = chain
    with pytest.raises(LoxInternalError):
        inner.ancestor(3)


def test_get_at_and_assign_at_skip_the_search(chain):
    outer, _, inner = chain
    inner.define("a", "near")
    assert inner.get_at(2, name("a")) == 1.0
    inner.assign_at(2, name("a"), 5.0)
    assert outer.values["a"] == 5.0
    assert inner.values["a"] == "near"


def test_get_at_missing_name_raises(chain):
    _, _, inner = chain
    with pytest.raises(LoxUndefinedVariable):
        inner.get_at(1, name("a"))


def test_synthetic_token():
    token = synthetic("this")
    assert token.type == TokenType.IDENTIFIER
    assert token.lexeme == "this"


def test_repr_lists_every_scope(chain):
    _, _, inner = chain
    text = repr(inner)
    assert "c: 3.0" in text
    assert "a: 1.0" in text
