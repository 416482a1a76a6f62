from __future__ import annotations
import logging
import os

# Defaults
_DEFAULT_LOG_LEVEL = "WARNING"
_DEFAULT_RECURSION_LIMIT = 10_000
_DEFAULT_REPL_HOST = "127.0.0.1"
_DEFAULT_REPL_PORT = 8765


def int_from_env(var: str, default: int) -> int:
    raw = os.environ.get(var)
    if not raw or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        raise ValueError(f"{var} must be an integer, got {raw!r}") from None


def get_log_level() -> int:
    name = os.environ.get("LOX_LOG_LEVEL", _DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(name)
    # getLevelName maps unknown names to the string "Level <name>"
    return level if isinstance(level, int) else logging.WARNING


def get_recursion_limit() -> int:
    return int_from_env("LOX_RECURSION_LIMIT", _DEFAULT_RECURSION_LIMIT)


def get_repl_address() -> tuple[str, int]:
    host = os.environ.get("LOX_REPL_HOST", "").strip() or _DEFAULT_REPL_HOST
    return host, int_from_env("LOX_REPL_PORT", _DEFAULT_REPL_PORT)
