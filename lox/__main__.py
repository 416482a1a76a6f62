from lox.cli import run

run()
