from __future__ import annotations

import time
from typing import TYPE_CHECKING

from lox import LoxValue
from lox.types.environment import Environment
from lox.types.function import NativeFunction

if TYPE_CHECKING:
    from lox.evaluation.interpreter import Interpreter


# -------------------------------
# Natives
# -------------------------------
def clock(interpreter: Interpreter, args: list[LoxValue]) -> float:
    """(clock) -> seconds since the epoch, as a float."""
    return time.time()


NATIVES: dict[str, NativeFunction] = {
    "clock": NativeFunction("clock", 0, clock),
}


def register(env: Environment) -> None:
    """Register all native functions into the given environment."""
    for name, native in NATIVES.items():
        env.define(name, native)
