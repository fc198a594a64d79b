"""
Interactive MINBASIC session.

Each line typed at the ``>>>`` prompt is one of:

    10 PRINT A      store (or replace) line 10 of the program
    10              delete line 10
    RUN             parse the stored program and run it
    LIST            show the stored program
    LOAD <path>     replace the stored program with a file's contents
    CLEAR           wipe the stored program and every variable
    HELP            show this summary
    QUIT / EXIT     leave the session
    verbose-mode    toggle printing the syntax tree before each RUN

Anything else is parsed as a statement and run immediately. Only LET, PRINT and
INPUT may run without a line number. Variables persist between runs and immediate
statements until CLEAR.
"""

import io
import traceback

from minbasic.minbasic_constants import IMMEDIATE_KEYWORDS
from minbasic.minbasic_context import EvaluationContext, InputProvider, OutputSink
from minbasic.minbasic_errors import BasicError
from minbasic.minbasic_eval import execute
from minbasic.minbasic_parser import Parser
from minbasic.minbasic_program import ProgramStore, load_file, split_numbered_line
from minbasic.minbasic_runner import Runner, parse_program
from minbasic.minbasic_tree import render_program

HELP_TEXT = (
    "Help:\n"
    "- Type 'LineNumber Code' to edit, or 'LineNumber' alone to delete.\n"
    "- Type 'RUN/LIST/LOAD <file>/CLEAR/QUIT' to control.\n"
    "- Type 'PRINT/LET/INPUT ...' to execute immediately."
)


class Session:
    """State shared by every command of one REPL session.

    Attributes:
        store (ProgramStore): The program being edited.
        context (EvaluationContext): Variables, kept across runs.
        runner (Runner): Executes the stored program against ``context``.
        verbose (bool): Print the rendered syntax tree before each run.
    """

    def __init__(
        self,
        output: OutputSink | None = None,
        input_provider: InputProvider | None = None,
        verbose: bool = False,
        max_steps: int | None = None,
    ) -> None:
        self.store = ProgramStore()
        self.context = EvaluationContext(output, input_provider)
        self.runner = Runner(self.context, max_steps=max_steps)
        self.verbose = verbose


def print_traceback() -> None:
    buf = io.StringIO()
    traceback.print_exc(file=buf)
    print("[error] >>>")
    print(buf.getvalue())


def print_error(e: BasicError) -> None:
    print(f"[error] >>> {e.describe()}")


def handle_line_edit(src: str, session: Session) -> bool:
    parsed = split_numbered_line(src)
    if parsed is None:
        return False
    number, text = parsed
    if text:
        session.store.set_line(number, text)
    elif not session.store.delete_line(number):
        print(f"[edit] >>> No line {number} to delete.")
    return True


def run_program(session: Session) -> None:
    if not session.store:
        return
    try:
        program = parse_program(session.store)
        if session.verbose:
            print(render_program(program), end="")
        session.runner.execute(program)
    except BasicError as e:
        print_error(e)


def handle_command(src: str, session: Session) -> bool:
    """Runs a session command such as RUN or LIST; returns False if ``src`` is not one."""
    word, _, arg = src.partition(" ")
    command = word.upper()
    arg = arg.strip()

    if command == "RUN" and not arg:
        run_program(session)
    elif command == "LIST" and not arg:
        for line in session.store.listing():
            print(line)
    elif command == "LOAD":
        if not arg:
            print("[error] >>> Usage: LOAD <file>")
            return True
        try:
            session.store = load_file(arg)
        except (OSError, UnicodeDecodeError) as e:
            print(f"[error] >>> Failed to load {arg}: {e}")
            return True
        print(f"[ok] >>> Loaded: {arg}")
    elif command == "CLEAR" and not arg:
        session.store.clear()
        session.context.clear()
        print("[ok] >>> Program and variables cleared.")
    elif command == "HELP" and not arg:
        print(HELP_TEXT)
    else:
        return False
    return True


def run_immediate(src: str, session: Session) -> None:
    try:
        parser = Parser.from_source(src)
        stmt = parser.parse()
    except BasicError:
        print("[error] >>> Unknown command or syntax error.")
        return

    if parser.tokens[0] not in IMMEDIATE_KEYWORDS:
        print("[error] >>> This statement requires a line number.")
        return

    try:
        execute(stmt, session.context)
    except BasicError as e:
        print_error(e)


def handle_input(src: str, session: Session) -> None:
    src = src.strip()
    if not src:
        return
    if src.lower() == "verbose-mode":
        session.verbose = not session.verbose
        print(f"[mode] >>> Verbose mode {'ON' if session.verbose else 'OFF'}")
        return
    if handle_line_edit(src, session):
        return
    if handle_command(src, session):
        return
    run_immediate(src, session)


def start_repl(verbose: bool = False, max_steps: int | None = None) -> None:
    print("MINBASIC REPL. Type 'HELP' for commands, 'QUIT' or 'EXIT' to leave.")
    session = Session(verbose=verbose, max_steps=max_steps)

    while True:
        try:
            line = input(">>> ")
            if line.strip().upper() in ("QUIT", "EXIT"):
                print("Exiting MINBASIC REPL.")
                return
            try:
                handle_input(line, session)
            except Exception:
                print_traceback()
        except (KeyboardInterrupt, EOFError):
            print("\nExiting MINBASIC REPL.")
            break


def main() -> None:
    start_repl()


if __name__ == "__main__":
    main()
