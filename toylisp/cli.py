"""Command line front end: an interactive loop or a one-shot script runner.

    toylisp --repl
    toylisp path/to/script.cjs
"""

from __future__ import annotations

import logging
import sys
from argparse import ArgumentParser
from pathlib import Path
from typing import Callable, Optional, Sequence, TextIO

from toylisp import __version__, config
from toylisp.errors import ToyLispError
from toylisp.interpreter import Interpreter
from toylisp.types.term import render

logger = logging.getLogger(__name__)

BANNER = "toy lisp"
STACK_EXHAUSTED = "fatal: call stack exhausted (unbounded recursion?)"


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="toylisp",
        description="Evaluate a toylisp program, or start an interactive loop.",
    )
    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument("--repl", action="store_true", help="start the interactive loop")
    mode.add_argument("script", nargs="?", type=Path, help="file holding one program")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def eval_to_text(interp: Interpreter, source: str) -> tuple[bool, str]:
    """Evaluate and return (ok, text to print)."""
    try:
        return True, render(interp.eval(source))
    except ToyLispError as err:
        return False, err.message


def repl(
    read_line: Callable[[str], str] = input,
    out: Optional[TextIO] = None,
) -> int:
    if out is None:
        out = sys.stdout
    print(BANNER, file=out)
    interp = Interpreter()
    prompt = config.get_prompt()
    while True:
        try:
            line = read_line(prompt)
        except EOFError:
            print(file=out)
            return 0
        except KeyboardInterrupt:
            print(file=out)
            continue
        _, text = eval_to_text(interp, line)
        print(text, file=out)


def run_file(path: Path, out: Optional[TextIO] = None) -> int:
    if out is None:
        out = sys.stdout
    logger.info("eval script file: %s", path)
    try:
        source = path.read_text(encoding="utf-8")
    except OSError as err:
        print(f"cannot read {path}: {err.strerror or err}", file=out)
        return 1
    ok, text = eval_to_text(Interpreter(), source)
    print(text, file=out)
    return 0 if ok else 1


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=config.get_log_level(),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    limit = config.get_recursion_limit()
    if limit is not None:
        sys.setrecursionlimit(limit)

    try:
        if args.repl:
            return repl()
        return run_file(args.script)
    except RecursionError:
        logger.critical("evaluation exhausted the call stack")
        print(STACK_EXHAUSTED, file=sys.stderr)
        return 1
