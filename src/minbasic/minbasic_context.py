"""
Evaluation context for MINBASIC programs.

An ``EvaluationContext`` owns the variable table and the two capabilities the host
injects: an output sink that receives one line of text per PRINT, and an input
provider that blocks until it can return one integer per INPUT.

Reading a variable that was never assigned is not an error; it reads as 0 and stays
undefined. The table outlives individual runs and immediate-mode statements and is
only wiped by an explicit ``clear()``.

Example:
    >>> lines = []
    >>> ctx = EvaluationContext(output=lines.append, input_provider=lambda: 7)
    >>> ctx.set_value("A", ctx.read_input("A"))
    >>> ctx.get_value("A"), ctx.get_value("B"), ctx.is_defined("B")
    (7, 0, False)
"""

import builtins
from collections.abc import Callable

from minbasic.minbasic_errors import InputCancelled

OutputSink = Callable[[str], None]
InputProvider = Callable[[], int]

INPUT_PROMPT = " ? "


def console_input(prompt: str = INPUT_PROMPT) -> int:
    """Reads one integer from standard input.

    Text that is not an integer reads as 0. End of input or Ctrl-C cancels the
    request.

    Raises:
        InputCancelled: If the user aborts the prompt.
    """
    try:
        text = builtins.input(prompt)
    except (EOFError, KeyboardInterrupt) as e:
        raise InputCancelled() from e
    try:
        return int(text.strip())
    except ValueError:
        return 0


class EvaluationContext:
    """Variable store plus the host's output sink and input provider.

    Attributes:
        output (OutputSink): Receives the text of each PRINT.
        input_provider (InputProvider): Returns the value for each INPUT, or raises
            ``InputCancelled``.
    """

    def __init__(
        self,
        output: OutputSink | None = None,
        input_provider: InputProvider | None = None,
    ) -> None:
        self.symbol_table: dict[str, int] = {}
        self.output: OutputSink = output if output is not None else print
        self.input_provider: InputProvider = (
            input_provider if input_provider is not None else console_input
        )

    def set_value(self, name: str, value: int) -> None:
        self.symbol_table[name] = value

    def get_value(self, name: str) -> int:
        return self.symbol_table.get(name, 0)

    def is_defined(self, name: str) -> bool:
        return name in self.symbol_table

    def clear(self) -> None:
        self.symbol_table.clear()

    def write_output(self, text: str) -> None:
        self.output(text)

    def read_input(self, name: str) -> int:
        """Asks the host for the value of ``name``.

        Raises:
            InputCancelled: Propagated unchanged from the provider.
        """
        return int(self.input_provider())

    def __repr__(self) -> str:
        return f"EvaluationContext({self.symbol_table!r})"


__all__ = [
    "EvaluationContext",
    "INPUT_PROMPT",
    "InputProvider",
    "OutputSink",
    "console_input",
]
