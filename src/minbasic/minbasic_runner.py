"""
Run loop for MINBASIC programs.

A run has two phases:

1. Parse. Every line of the source store is parsed into a statement. If any line
   fails, the ``BasicSyntaxError`` is tagged with its line number and raised before
   a single statement executes.
2. Execute. Starting at the lowest line number, each statement runs and returns a
   control result. ``Continue`` moves to the next line in ascending order,
   ``JumpTo`` moves to the named line (which must exist), and ``Halt`` ends the run.
   Running off the last line also ends the run.

The run loop imposes no step limit of its own; ``max_steps`` lets a host bound a
run that would otherwise loop forever. Runtime failures are tagged with the line
that raised them and propagate immediately. Variable assignments made before the
failure stay in the context.
"""

import bisect
import logging
from collections.abc import Mapping

from minbasic.minbasic_ast import Statement
from minbasic.minbasic_context import EvaluationContext
from minbasic.minbasic_errors import (
    BasicRuntimeError,
    BasicSyntaxError,
    LineNotFound,
    StepLimitExceeded,
)
from minbasic.minbasic_eval import Halt, JumpTo, execute
from minbasic.minbasic_parser import parse_statement

log = logging.getLogger(__name__)


def parse_program(source: Mapping[int, str]) -> dict[int, Statement]:
    """Parses every line of ``source``; returns the line map in ascending order.

    Raises:
        BasicSyntaxError: For the first line that fails, with ``line`` set.
    """
    program: dict[int, Statement] = {}
    for number in sorted(source):
        try:
            program[number] = parse_statement(source[number])
        except BasicSyntaxError as e:
            e.line = number
            raise
    return program


class Runner:
    """Executes parsed programs against one evaluation context.

    Attributes:
        context (EvaluationContext): Variable table and I/O shared by every run.
        max_steps (int | None): Host-imposed bound on executed statements, or None
            for no bound.
        steps (int): Statements executed by the most recent run.
    """

    def __init__(
        self, context: EvaluationContext, max_steps: int | None = None
    ) -> None:
        if max_steps is not None and max_steps < 1:
            raise ValueError(f"max_steps must be at least 1, got {max_steps}")
        self.context = context
        self.max_steps = max_steps
        self.steps = 0

    def run(self, source: Mapping[int, str]) -> None:
        self.execute(parse_program(source))

    def execute(self, program: Mapping[int, Statement]) -> None:
        """Executes ``program`` from its lowest line until it halts or falls off the end.

        Raises:
            BasicRuntimeError: On the first failing statement, with ``line`` set.
        """
        order = sorted(program)
        index = 0
        self.steps = 0

        while index < len(order):
            number = order[index]
            if self.max_steps is not None and self.steps >= self.max_steps:
                raise StepLimitExceeded(self.max_steps, number)
            self.steps += 1

            try:
                result = execute(program[number], self.context)
                if isinstance(result, JumpTo):
                    if result.line not in program:
                        raise LineNotFound(result.line)
                    log.debug("line %d: jump to %d", number, result.line)
                    index = bisect.bisect_left(order, result.line)
                elif isinstance(result, Halt):
                    log.debug("line %d: END", number)
                    return
                else:
                    index += 1
            except BasicRuntimeError as e:
                if e.line is None:
                    e.line = number
                raise

        log.debug("ran off the end of the program after %d steps", self.steps)


__all__ = ["Runner", "parse_program"]
