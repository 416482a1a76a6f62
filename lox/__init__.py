# Core type aliases for Lox's data model.
# Runtime values are plain Python objects wherever one fits:
# - nil      -> None
# - booleans -> bool
# - numbers  -> float (natives may hand back int; bool never counts as a number)
# - strings  -> str
# Callables and instances have their own classes under lox.types.

from typing import Any

# Runtime value alias
LoxValue = Any

# Name of the method Class.call invokes on a fresh instance.
INITIALIZER_NAME = "init"

__version__ = "0.3.0"
