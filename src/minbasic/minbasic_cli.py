"""
MINBASIC CLI Entrypoint.

This module provides the command-line interface for running MINBASIC programs.

Features:
    - Read a program from a `.bas` file or an inline string.
    - Print the indented syntax tree of every line, or the whole program as JSON.
    - Evaluate a single expression.
    - Bound a run with a step limit (``--max-steps`` or ``MINBASIC_MAX_STEPS``).
    - Launch the interactive REPL.

Example usage:
    minbasic countdown.bas
    minbasic -s "10 PRINT 1 + 2 * 3"
    minbasic countdown.bas --tree
    minbasic -e "2 ** 3 ** 2"
    minbasic --repl --verbose

Exit status is 1 when the program fails with a syntax or runtime error; the
message goes to stderr.
"""

import argparse
import json
import logging
import os
import sys

from minbasic.minbasic_ast import program_to_dict
from minbasic.minbasic_context import EvaluationContext, InputProvider
from minbasic.minbasic_errors import BasicError
from minbasic.minbasic_eval import evaluate, format_value
from minbasic.minbasic_parser import parse_expression
from minbasic.minbasic_program import load_file, load_source
from minbasic.minbasic_runner import Runner, parse_program
from minbasic.minbasic_tree import render_program

MAX_STEPS_ENV = "MINBASIC_MAX_STEPS"


def run_basic(
    source: str,
    is_string: bool = False,
    tree: bool = False,
    as_json: bool = False,
    max_steps: int | None = None,
    input_provider: InputProvider | None = None,
) -> None:
    """
    Load, parse, and run a MINBASIC program.

    Args:
        source (str): Path to a `.bas` file, or program text when ``is_string``.
        is_string (bool): Treat ``source`` as program text. Defaults to False.
        tree (bool): Print the syntax tree of every line before running.
        as_json (bool): Print the parsed program as JSON and do not run it.
        max_steps (int | None): Abort the run after this many statements.
        input_provider (InputProvider | None): Source of INPUT values; defaults to
            reading standard input.

    Raises:
        ValueError: If ``is_string`` is False and the source does not end with '.bas'.
        BasicError: If the program fails to parse or to run.
    """
    if not is_string and not source.endswith(".bas"):
        raise ValueError("Only .bas files are supported.")
    store = load_source(source) if is_string else load_file(source)

    program = parse_program(store)

    if as_json:
        print(json.dumps(program_to_dict(program), indent=2))
        return
    if tree:
        print(render_program(program), end="")

    context = EvaluationContext(input_provider=input_provider)
    Runner(context, max_steps=max_steps).execute(program)


def eval_expression(text: str) -> int:
    return evaluate(parse_expression(text), EvaluationContext())


def env_max_steps() -> int | None:
    raw = os.getenv(MAX_STEPS_ENV)
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError:
        print(f"Ignoring non-integer {MAX_STEPS_ENV}={raw!r}", file=sys.stderr)
        return None
    if value < 1:
        print(f"Ignoring non-positive {MAX_STEPS_ENV}={raw!r}", file=sys.stderr)
        return None
    return value


def positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {text!r}") from None
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1: {text!r}")
    return value


def main() -> None:
    """
    Entry point for the MINBASIC CLI.

    - Launches the REPL if no arguments are passed or `--repl` is specified.
    - Evaluates one expression with `-e`.
    - Otherwise loads and runs the program.
    """
    if len(sys.argv) == 1:
        from minbasic.minbasic_repl import start_repl

        start_repl(max_steps=env_max_steps())
        return
    parser = argparse.ArgumentParser(prog="minbasic")
    parser.add_argument(
        "source", nargs="?", help="Program file (.bas) or program text (with -s)"
    )
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as program text"
    )
    parser.add_argument(
        "-t", "--tree", action="store_true", help="Print the syntax tree before running"
    )
    parser.add_argument(
        "-j",
        "--json",
        dest="as_json",
        action="store_true",
        help="Print the parsed program as JSON instead of running it",
    )
    parser.add_argument(
        "-e", "--expr", metavar="EXPRESSION", help="Evaluate a single expression"
    )
    parser.add_argument(
        "--max-steps",
        type=positive_int,
        default=env_max_steps(),
        metavar="N",
        help=f"Abort after N statements (default: ${MAX_STEPS_ENV} or unbounded)",
    )
    parser.add_argument(
        "--repl", action="store_true", help="Launch the interactive REPL"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log jumps and print trees on RUN (REPL)",
    )

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        if args.expr is not None:
            print(format_value(eval_expression(args.expr)))
        elif args.repl or args.source is None:
            from minbasic.minbasic_repl import start_repl

            start_repl(verbose=args.verbose, max_steps=args.max_steps)
        else:
            run_basic(
                source=args.source,
                is_string=args.string,
                tree=args.tree,
                as_json=args.as_json,
                max_steps=args.max_steps,
            )
    except BasicError as e:
        print(e.describe(), file=sys.stderr)
        sys.exit(1)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Failed to load {args.source}: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__" and not any("pytest" in arg for arg in sys.argv):
    main()
