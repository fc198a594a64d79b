"""
Error hierarchy for the MINBASIC interpreter.

Two disjoint classes reach the host:

    BasicSyntaxError:
        Raised while parsing. Any one of them aborts the whole program before a
        single line runs.

    BasicRuntimeError:
        Raised while executing. Aborts the run at the failing statement; variable
        assignments made by earlier statements stay in effect.

Both carry an optional ``line`` (the program line number, once known) so the host
can print messages such as ``Runtime Error (line 30): line not found: 50``.
Jumps and halts are not errors and never travel through this hierarchy.
"""


class BasicError(Exception):
    """Base class for every failure the interpreter reports to its host.

    Attributes:
        message (str): Human-readable description without the line prefix.
        line (int | None): Program line number, or None for immediate-mode input.
    """

    label = "Error"

    def __init__(self, message: str, line: int | None = None):
        super().__init__(message)
        self.message = message
        self.line = line

    def describe(self) -> str:
        """Returns the message prefixed with the error class label and line."""
        where = f" (line {self.line})" if self.line is not None else ""
        return f"{self.label}{where}: {self.message}"


class BasicSyntaxError(BasicError, SyntaxError):
    """Malformed statement, missing token, unbalanced parenthesis, or empty input."""

    label = "Syntax Error"


class BasicRuntimeError(BasicError, RuntimeError):
    """Failure while executing a parsed program."""

    label = "Runtime Error"


class DivisionByZero(BasicRuntimeError):
    def __init__(self, line: int | None = None):
        super().__init__("division by zero", line)


class ValueTooLarge(BasicRuntimeError):
    """A result has more digits than can be written out as decimal text."""

    def __init__(self, line: int | None = None):
        super().__init__("value too large to print", line)


class LineNotFound(BasicRuntimeError):
    """A GOTO or IF ... THEN named a line the program does not contain."""

    def __init__(self, target: int, line: int | None = None):
        super().__init__(f"line not found: {target}", line)
        self.target = target


class InputCancelled(BasicRuntimeError):
    """The host aborted an INPUT request."""

    def __init__(self, message: str = "input cancelled", line: int | None = None):
        super().__init__(message, line)


class StepLimitExceeded(BasicRuntimeError):
    """A host-imposed step bound ran out before the program halted."""

    def __init__(self, limit: int, line: int | None = None):
        super().__init__(f"step limit of {limit} exceeded", line)
        self.limit = limit


__all__ = [
    "BasicError",
    "BasicRuntimeError",
    "BasicSyntaxError",
    "DivisionByZero",
    "InputCancelled",
    "LineNotFound",
    "StepLimitExceeded",
    "ValueTooLarge",
]
