"""Interactive read-evaluate-print loop for the Monkey language."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from typing import TextIO

from monkeylang.environment import Environment
from monkeylang.evaluator import evaluate
from monkeylang.lexer import Lexer
from monkeylang.parser import Parser

PROMPT = ">> "

MONKEY_FACE = (
    "            __,__\n"
    '   .--.  .-"     "-.  .--.\n'
    "  / .. \\/  .-. .-.  \\/ .. \\\n"
    " | |  '|  /   Y   \\  |'  | |\n"
    " | \\   \\  \\ 0 | 0 /  /   / |\n"
    "  \\ '- ,\\.-\"\"\"\"\"\"\"-./, -' /\n"
    "   ''-' /_   ^ ^   _\\ '-''\n"
    "       |  \\._   _./  |\n"
    "       \\   \\ '~' /   /\n"
    "        '._ '-=-' _.'\n"
    "           '-----'\n"
)

BANNER = "This is the Monkey programming language!\nFeel free to type in commands\n\n"


def _strip_line_end(line: str) -> str:
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line


def _print_parser_errors(stdout: TextIO, errors: Iterable[str]) -> None:
    stdout.write(MONKEY_FACE)
    stdout.write("Woops! We ran into some monkey business here!\n")
    stdout.write(" parser errors:\n")
    for message in errors:
        stdout.write(f"\t{message}\n")


def start(stdin: TextIO, stdout: TextIO) -> None:
    """Read lines from ``stdin``, evaluate each and write results to ``stdout``.

    Bindings made on one line stay visible on the lines that follow.
    """
    env = Environment()
    while True:
        stdout.write(PROMPT)
        stdout.flush()
        line = stdin.readline()
        if not line:
            return

        parser = Parser(Lexer(_strip_line_end(line)))
        program = parser.parse_program()
        if parser.errors:
            _print_parser_errors(stdout, parser.errors)
            continue

        result = evaluate(program, env)
        if result is not None:
            stdout.write(result.inspect())
            stdout.write("\n")


def main(argv: list[str] | None = None) -> int:
    """Print the greeting and run the loop on standard input and output."""
    sys.stdout.write(BANNER)
    start(sys.stdin, sys.stdout)
    return 0