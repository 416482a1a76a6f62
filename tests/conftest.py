import pytest
from io import StringIO

from lox.reporter import ErrorReporter
from lox.session import Lox


# Every test gets a fresh session whose `print` output lands in a list and whose
# error messages land in a StringIO, so nothing leaks between tests.


class Captured:
    def __init__(self):
        self.output: list[str] = []
        self.errors = StringIO()
        self.lox = Lox(output=self.output.append, error_stream=self.errors)

    @property
    def reporter(self) -> ErrorReporter:
        return self.lox.reporter

    def run(self, source: str) -> list[str]:
        self.lox.run(source)
        return self.output

    def error_lines(self) -> list[str]:
        return self.errors.getvalue().splitlines()


@pytest.fixture
def session():
    return Captured()


@pytest.fixture
def run(session):
    """Run Lox source in a fresh session and return the printed lines."""
    return session.run


@pytest.fixture
def reporter():
    return ErrorReporter(StringIO())
