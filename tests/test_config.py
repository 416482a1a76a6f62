import logging

import pytest

from lox import config


def test_defaults(monkeypatch):
    for var in ("LOX_LOG_LEVEL", "LOX_RECURSION_LIMIT", "LOX_REPL_HOST", "LOX_REPL_PORT"):
        monkeypatch.delenv(var, raising=False)
    assert config.get_log_level() == logging.WARNING
    assert config.get_recursion_limit() == 10_000
    assert config.get_repl_address() == ("127.0.0.1", 8765)


@pytest.mark.parametrize(
    "raw,expected",
    [("debug", logging.DEBUG), (" INFO ", logging.INFO), ("nonsense", logging.WARNING)],
)
def test_log_level(monkeypatch, raw, expected):
    monkeypatch.setenv("LOX_LOG_LEVEL", raw)
    assert config.get_log_level() == expected


def test_blank_integer_falls_back_to_default(monkeypatch):
    monkeypatch.setenv("LOX_RECURSION_LIMIT", "  ")
    assert config.get_recursion_limit() == 10_000


def test_bad_integer_is_rejected(monkeypatch):
    monkeypatch.setenv("LOX_REPL_PORT", "eighty")
    with pytest.raises(ValueError, match="LOX_REPL_PORT"):
        config.get_repl_address()
