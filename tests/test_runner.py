import logging
from typing import Any

import pytest

from minbasic.minbasic_context import EvaluationContext
from minbasic.minbasic_errors import (
    BasicRuntimeError,
    BasicSyntaxError,
    DivisionByZero,
    InputCancelled,
    LineNotFound,
    StepLimitExceeded,
    ValueTooLarge,
)
from minbasic.minbasic_program import load_source
from minbasic.minbasic_runner import Runner, parse_program


def make_runner(io: Any, max_steps: int | None = None) -> Runner:
    return Runner(EvaluationContext(io.output, io.provide), max_steps=max_steps)


def run(source: str, io: Any, max_steps: int | None = None) -> Runner:
    runner = make_runner(io, max_steps)
    runner.run(load_source(source))
    return runner


def test_if_jump_skips_lines(recording_io: Any) -> None:
    run("10 IF 1 < 2 THEN 30\n20 PRINT 999\n30 PRINT 1", recording_io)
    assert recording_io.lines == ["1"]


def test_if_false_falls_through(recording_io: Any) -> None:
    run("10 IF 2 < 1 THEN 30\n20 PRINT 999\n30 PRINT 1", recording_io)
    assert recording_io.lines == ["999", "1"]


def test_execution_follows_line_order_not_source_order(recording_io: Any) -> None:
    run("30 PRINT 3\n10 PRINT 1\n20 PRINT 2", recording_io)
    assert recording_io.lines == ["1", "2", "3"]


def test_countdown_loop(recording_io: Any) -> None:
    source = """
10 LET N = 3
20 PRINT N
30 LET N = N - 1
40 IF N > 0 THEN 20
50 END
60 PRINT 999
"""
    run(source, recording_io)
    assert recording_io.lines == ["3", "2", "1"]


def test_input_drives_program(recording_io: Any) -> None:
    recording_io.inputs = [6, 7]
    run("10 INPUT A\n20 INPUT B\n30 PRINT A * B", recording_io)
    assert recording_io.lines == ["42"]


def test_goto_forward_and_backward(recording_io: Any) -> None:
    source = "10 GOTO 40\n20 PRINT 2\n30 END\n40 PRINT 4\n50 GOTO 20"
    run(source, recording_io)
    assert recording_io.lines == ["4", "2"]


def test_missing_jump_target(recording_io: Any) -> None:
    with pytest.raises(LineNotFound, match="line not found: 50") as e:
        run("10 PRINT 1\n20 GOTO 50", recording_io)
    assert e.value.line == 20
    assert e.value.target == 50
    assert recording_io.lines == ["1"]


def test_missing_if_target_only_fails_when_taken(recording_io: Any) -> None:
    run("10 IF 1 > 2 THEN 99\n20 PRINT 5", recording_io)
    assert recording_io.lines == ["5"]


def test_syntax_error_prevents_all_execution(recording_io: Any) -> None:
    with pytest.raises(BasicSyntaxError) as e:
        run("5 PRINT 1\n10 LET A\n20 PRINT 2", recording_io)
    assert e.value.line == 10
    assert recording_io.lines == []


def test_runtime_error_keeps_earlier_assignments(recording_io: Any) -> None:
    runner = make_runner(recording_io)
    with pytest.raises(DivisionByZero) as e:
        runner.run(load_source("10 LET A = 1\n20 LET B = A / 0\n30 LET C = 3"))
    assert e.value.line == 20
    assert runner.context.get_value("A") == 1
    assert not runner.context.is_defined("B")
    assert not runner.context.is_defined("C")


def test_input_cancelled_aborts_run(recording_io: Any) -> None:
    runner = make_runner(recording_io)
    with pytest.raises(InputCancelled) as e:
        runner.run(load_source("10 LET A = 1\n20 INPUT B\n30 PRINT A"))
    assert isinstance(e.value, BasicRuntimeError)
    assert e.value.line == 20
    assert runner.context.get_value("A") == 1
    assert recording_io.lines == []


def test_variables_persist_across_runs(recording_io: Any) -> None:
    runner = make_runner(recording_io)
    runner.run(load_source("10 LET A = A + 1"))
    runner.run(load_source("10 LET A = A + 1\n20 PRINT A"))
    assert recording_io.lines == ["2"]


def test_infinite_loop_needs_host_bound(recording_io: Any) -> None:
    with pytest.raises(StepLimitExceeded) as e:
        run("10 LET A = 5\n20 PRINT A\n30 GOTO 10", recording_io, max_steps=300)
    assert e.value.line == 10
    assert len(recording_io.lines) == 100
    assert set(recording_io.lines) == {"5"}


def test_jump_to_self_loops(recording_io: Any) -> None:
    runner = make_runner(recording_io, max_steps=50)
    with pytest.raises(StepLimitExceeded):
        runner.run(load_source("10 GOTO 10"))
    assert runner.steps == 50


def test_end_stops_and_counts_steps(recording_io: Any) -> None:
    runner = run("10 END\n20 PRINT 1", recording_io)
    assert runner.steps == 1
    assert recording_io.lines == []


def test_empty_program_does_nothing(recording_io: Any) -> None:
    runner = run("", recording_io)
    assert runner.steps == 0


def test_parse_program_builds_ordered_map() -> None:
    program = parse_program({20: "END", 10: "REM start"})
    assert list(program) == [10, 20]
    assert program[20].kind == "end"


def test_jumps_are_logged(recording_io: Any, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="minbasic.minbasic_runner"):
        run("10 GOTO 30\n20 PRINT 1\n30 END", recording_io)
    assert "line 10: jump to 30" in caplog.text
    assert "line 30: END" in caplog.text


def test_print_of_huge_value_is_a_runtime_error(recording_io: Any) -> None:
    runner = make_runner(recording_io)
    with pytest.raises(ValueTooLarge, match="value too large to print") as e:
        runner.run(load_source("10 LET A = 10 ** 5000\n20 PRINT A"))
    assert e.value.line == 20
    assert runner.context.is_defined("A")
    assert recording_io.lines == []


def test_huge_literal_is_a_syntax_error_on_its_line(recording_io: Any) -> None:
    with pytest.raises(BasicSyntaxError, match="number too large") as e:
        run("5 PRINT 1\n10 PRINT " + "9" * 5000, recording_io)
    assert e.value.line == 10
    assert recording_io.lines == []


@pytest.mark.parametrize("max_steps", [0, -3])
def test_step_bound_must_be_positive(max_steps: int) -> None:
    with pytest.raises(ValueError, match="max_steps must be at least 1"):
        Runner(EvaluationContext(), max_steps=max_steps)
