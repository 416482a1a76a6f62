"""
Lox - Command Line Interface

Usage:
    lox                     start a REPL (an empty line exits)
    lox script.lox          run a script
    lox script.lox --print-ast
    python -m lox script.lox
"""

import argparse
import logging
import sys

from lox import __version__
from lox.config import get_log_level, get_recursion_limit
from lox.session import EX_DATAERR, EX_NOINPUT, EX_OK, EX_USAGE, Lox


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="lox",
        description="Tree-walking interpreter for the Lox scripting language",
    )
    parser.add_argument("script", nargs="*", help="Path to a .lox source file")
    parser.add_argument(
        "--print-ast",
        action="store_true",
        dest="print_ast",
        help="Print the parsed program instead of running it",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        default=None,
        help="Python logging level (default: $LOX_LOG_LEVEL or WARNING)",
    )
    parser.add_argument("--version", action="version", version=f"lox {__version__}")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper() if args.log_level else get_log_level(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    sys.setrecursionlimit(max(sys.getrecursionlimit(), get_recursion_limit()))

    if len(args.script) > 1:
        print("Usage: lox [script]")
        return EX_USAGE

    session = Lox()

    if not args.script:
        session.run_prompt()
        return EX_OK

    path = args.script[0]
    try:
        if args.print_ast:
            from lox.debug_utils.pprint import pprint

            with open(path, encoding="utf-8") as f:
                statements = session.parse(f.read())
            if session.had_error:
                return EX_DATAERR
            pprint(statements)
            return EX_OK
        return session.run_file(path)
    except FileNotFoundError:
        print(f"[lox] Error: Input file not found: {path!r}", file=sys.stderr)
        return EX_NOINPUT


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
