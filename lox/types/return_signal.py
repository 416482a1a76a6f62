from lox import LoxValue


class ReturnSignal(Exception):
    """Non-local exit for a `return` statement.

    Raised by the interpreter and caught exactly once, by the LoxFunction.call
    frame that is currently executing. It is not a LoxError: reporters never
    see it.
    """

    def __init__(self, value: LoxValue):
        super().__init__(f"ReturnSignal(value={value!r})")
        self.value: LoxValue = value
