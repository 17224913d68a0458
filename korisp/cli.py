"""Command-line entry point: `korisp FILE` runs a script, `korisp` starts a REPL."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TextIO

from korisp import __version__
from korisp.config import get_log_level, get_recursion_limit
from korisp.errors import KorispError
from korisp.evaluation.interpreter import Interpreter
from korisp.types.location import Location

logger = logging.getLogger(__name__)

USAGE = "usage: korisp [FILE]"
PROMPT = "> "


def format_error(error: BaseException) -> str:
    """`{location}: {message}` for any error user source can trigger."""
    if isinstance(error, RecursionError):
        return f"{Location.unknown()}: maximum recursion depth exceeded"
    location = getattr(error, "location", None) or Location.unknown()
    return f"{location}: {error}"


def run_source(interpreter: Interpreter, source: str, stderr: TextIO) -> bool:
    """Evaluate `source`; report any error to `stderr` and return False."""
    try:
        interpreter.interpret(source)
    except (KorispError, RecursionError) as error:
        print(format_error(error), file=stderr)
        return False
    return True


def run_file(path: str, stdout: TextIO, stderr: TextIO) -> int:
    try:
        source = Path(path).read_text(encoding="utf-8")
    except OSError as error:
        print(f"Error: unable to read {path}: {error.strerror or error}", file=stderr)
        return 1
    except UnicodeDecodeError as error:
        print(f"Error: unable to read {path}: {error}", file=stderr)
        return 1
    logger.debug("running %s", path)
    interpreter = Interpreter(output=stdout)
    return 0 if run_source(interpreter, source, stderr) else 1


def repl(stdin: TextIO, stdout: TextIO, stderr: TextIO) -> int:
    print(f"Korisp {__version__}", file=stdout)
    print("Type 'exit' or press Ctrl+D to quit.", file=stdout)
    interpreter = Interpreter(output=stdout, input=stdin)
    while True:
        stdout.write(PROMPT)
        stdout.flush()
        raw = stdin.readline()
        if raw == "":
            print("\nExiting.", file=stdout)
            return 0
        line = raw.strip()
        if not line:
            continue
        if line == "exit":
            return 0
        try:
            result = interpreter.interpret(line)
        except (KorispError, RecursionError) as error:
            print(format_error(error), file=stderr)
            continue
        print(result, file=stdout)


def main(
    argv: list[str] | None = None,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> int:
    args = sys.argv[1:] if argv is None else argv
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    logging.basicConfig(level=get_log_level())
    sys.setrecursionlimit(max(sys.getrecursionlimit(), get_recursion_limit()))

    if len(args) > 1:
        print(USAGE, file=stderr)
        return 2
    if args:
        return run_file(args[0], stdout, stderr)
    try:
        return repl(stdin, stdout, stderr)
    except KeyboardInterrupt:
        print("\nExiting.", file=stdout)
        return 0


if __name__ == "__main__":
    sys.exit(main())
