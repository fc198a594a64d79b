"""
Tree-walking evaluation for MINBASIC.

``evaluate`` reduces an expression tree to an integer against an
``EvaluationContext``. ``execute`` runs one statement and reports what the run loop
should do next as a control result rather than an exception:

    Continue        fall through to the next line
    JumpTo(line)    transfer control to ``line`` (GOTO, or IF whose test held)
    Halt            stop the run without error (END)

Arithmetic:
    - ``/`` truncates toward zero.
    - ``MOD`` is floored: the remainder takes the sign of the divisor.
    - ``**`` is exact for non-negative exponents. A negative exponent yields the
      truncated real result, so only bases 1 and -1 give non-zero values.
    - Both operands are always evaluated; nothing short-circuits.

Raises:
    DivisionByZero: For ``/``, ``MOD`` or ``0 ** -n``.
    ValueTooLarge: When PRINT meets a value too long to write as decimal text.
    InputCancelled: When the host aborts an INPUT.
    TypeError: If handed something that is not a MINBASIC node.
"""

from dataclasses import dataclass

from minbasic.minbasic_ast import (
    BinaryOp,
    Constant,
    End,
    Expression,
    Goto,
    Identifier,
    If,
    Input,
    Let,
    Print,
    Rem,
    Statement,
)
from minbasic.minbasic_constants import DIV, MINUS, MOD, MULT, PLUS, POW
from minbasic.minbasic_context import EvaluationContext
from minbasic.minbasic_errors import DivisionByZero, ValueTooLarge


@dataclass(frozen=True)
class Continue:
    pass


@dataclass(frozen=True)
class JumpTo:
    line: int


@dataclass(frozen=True)
class Halt:
    pass


ControlResult = Continue | JumpTo | Halt

CONTINUE = Continue()
HALT = Halt()


def divide(left: int, right: int) -> int:
    if right == 0:
        raise DivisionByZero()
    quotient = abs(left) // abs(right)
    return -quotient if (left < 0) != (right < 0) else quotient


def modulo(left: int, right: int) -> int:
    if right == 0:
        raise DivisionByZero()
    # Python's % is already floored
    return left % right


def power(base: int, exponent: int) -> int:
    if exponent >= 0:
        return base**exponent
    if base == 0:
        raise DivisionByZero()
    if base == 1:
        return 1
    if base == -1:
        return 1 if exponent % 2 == 0 else -1
    return 0


ARITHMETIC = {
    PLUS: lambda a, b: a + b,
    MINUS: lambda a, b: a - b,
    MULT: lambda a, b: a * b,
    DIV: divide,
    MOD: modulo,
    POW: power,
}

COMPARISONS = {
    "=": lambda a, b: a == b,
    "<": lambda a, b: a < b,
    ">": lambda a, b: a > b,
}


def format_value(value: int) -> str:
    try:
        return str(value)
    except ValueError:
        # int-to-str digit limit
        raise ValueTooLarge() from None


def evaluate(expr: Expression, context: EvaluationContext) -> int:
    if isinstance(expr, Constant):
        return expr.value
    if isinstance(expr, Identifier):
        return context.get_value(expr.name)
    if isinstance(expr, BinaryOp):
        left = evaluate(expr.left, context)
        right = evaluate(expr.right, context)
        try:
            apply = ARITHMETIC[expr.op]
        except KeyError:
            raise ValueError(f"Illegal operator: {expr.op}") from None
        return apply(left, right)
    raise TypeError(f"Not an expression node: {expr!r}")


def check_condition(stmt: If, context: EvaluationContext) -> bool:
    lhs = evaluate(stmt.lhs, context)
    rhs = evaluate(stmt.rhs, context)
    try:
        compare = COMPARISONS[stmt.op]
    except KeyError:
        raise ValueError(f"Illegal comparison: {stmt.op}") from None
    return compare(lhs, rhs)


def execute(stmt: Statement, context: EvaluationContext) -> ControlResult:
    """Runs one statement against ``context`` and returns the control result."""
    if isinstance(stmt, Rem):
        return CONTINUE
    if isinstance(stmt, Let):
        context.set_value(stmt.name, evaluate(stmt.expr, context))
        return CONTINUE
    if isinstance(stmt, Print):
        context.write_output(format_value(evaluate(stmt.expr, context)))
        return CONTINUE
    if isinstance(stmt, Input):
        context.set_value(stmt.name, context.read_input(stmt.name))
        return CONTINUE
    if isinstance(stmt, Goto):
        return JumpTo(stmt.target)
    if isinstance(stmt, If):
        return JumpTo(stmt.target) if check_condition(stmt, context) else CONTINUE
    if isinstance(stmt, End):
        return HALT
    raise TypeError(f"Not a statement node: {stmt!r}")


__all__ = [
    "CONTINUE",
    "Continue",
    "ControlResult",
    "HALT",
    "Halt",
    "JumpTo",
    "check_condition",
    "divide",
    "evaluate",
    "execute",
    "format_value",
    "modulo",
    "power",
]
