import pytest
from hypothesis import given
from hypothesis import strategies as st

from minbasic.minbasic_ast import BinaryOp, Constant, Expression, Identifier
from minbasic.minbasic_context import EvaluationContext
from minbasic.minbasic_errors import DivisionByZero
from minbasic.minbasic_eval import evaluate
from minbasic.minbasic_parser import parse_expression, parse_statement
from minbasic.minbasic_tree import TreeRenderer, render_program, render_tree


@pytest.mark.parametrize(
    "source,expected",
    [
        ("REM hello world", "REM\n    hello world\n"),
        ("LET A = 1 + B", "LET =\n    A\n    +\n        1\n        B\n"),
        ("PRINT 2 ** 3 ** 2", "PRINT\n    **\n        2\n        **\n            3\n            2\n"),
        ("INPUT N", "INPUT\n    N\n"),
        ("GOTO 100", "GOTO\n    100\n"),
        (
            "IF A MOD 2 = 0 THEN 40",
            "IF THEN\n    MOD\n        A\n        2\n    =\n    0\n    40\n",
        ),
        ("END", "END\n"),
    ],
)
def test_statement_rendering(source: str, expected: str) -> None:
    assert render_tree(parse_statement(source)) == expected


def test_expression_rendering_with_indent() -> None:
    expr = parse_expression("(1 - X) * 3")
    assert render_tree(expr, 2) == "  *\n      -\n          1\n          X\n      3\n"


def test_render_program_prefixes_line_numbers() -> None:
    program = {20: parse_statement("END"), 10: parse_statement("PRINT A")}
    assert render_program(program) == "10 PRINT\n    A\n20 END\n"


def test_unknown_node_is_rejected() -> None:
    with pytest.raises(NotImplementedError):
        TreeRenderer().render(object())


def rebuild(rendered: str) -> str:
    """Turns a rendered expression tree back into fully parenthesized source."""
    lines = rendered.splitlines()
    pos = 0

    def walk() -> str:
        nonlocal pos
        label = lines[pos].strip()
        pos += 1
        if label in ("+", "-", "*", "/", "MOD", "**"):
            left = walk()
            right = walk()
            return f"({left} {label} {right})"
        return label

    return walk()


leaves = st.one_of(
    st.integers(min_value=0, max_value=99).map(Constant),
    st.sampled_from(["A", "B", "Zed"]).map(Identifier),
)


def extend(children: st.SearchStrategy[Expression]) -> st.SearchStrategy[Expression]:
    return st.one_of(
        st.builds(
            BinaryOp,
            st.sampled_from(["+", "-", "*", "/", "MOD"]),
            children,
            children,
        ),
        st.builds(
            BinaryOp,
            st.just("**"),
            children,
            st.integers(min_value=0, max_value=3).map(Constant),
        ),
    )


trees = st.recursive(leaves, extend, max_leaves=12)


def outcome(expr: Expression, ctx: EvaluationContext) -> object:
    try:
        return evaluate(expr, ctx)
    except DivisionByZero:
        return DivisionByZero


@given(trees)  # type: ignore[misc]
def test_rendering_reparses_to_same_value(expr: Expression) -> None:
    ctx = EvaluationContext()
    ctx.set_value("A", 7)
    ctx.set_value("B", -3)
    reparsed = parse_expression(rebuild(render_tree(expr)))
    assert reparsed == expr
    assert outcome(reparsed, ctx) == outcome(expr, ctx)
