"""
Indented syntax-tree rendering for MINBASIC nodes.

Every node becomes one line: ``indent`` spaces, a label, and a newline. Children are
rendered four spaces deeper, in order.

    Constant    its decimal value
    Identifier  its name
    BinaryOp    the operator, then the left and right subtrees
    REM         then the comment text
    LET =       then the variable name, then the expression
    PRINT       then the expression
    INPUT       then the variable name
    GOTO        then the target line
    IF THEN     then lhs, the comparison operator, rhs, and the target line
    END         alone

The output is stable byte for byte, so hosts and tests may compare it directly.
"""

from minbasic.minbasic_ast import (
    BinaryOp,
    Constant,
    End,
    Goto,
    Identifier,
    If,
    Input,
    Let,
    Print,
    Rem,
    Statement,
)
from minbasic.minbasic_constants import INDENT_WIDTH


class TreeRenderer:
    """Accumulates rendered lines for one or more nodes.

    Attributes:
        lines (list[str]): Rendered lines without their trailing newline.
    """

    def __init__(self) -> None:
        self.lines: list[str] = []

    def get_output(self) -> str:
        return "".join(f"{line}\n" for line in self.lines)

    def leaf(self, label: str, indent: int) -> None:
        self.lines.append(" " * indent + label)

    def render(self, node: object, indent: int = 0) -> None:
        method_name = f"emit_{getattr(node, 'kind', None)}"
        if not hasattr(self, method_name):
            raise NotImplementedError(f"No render method for node {node!r}")
        getattr(self, method_name)(node, indent)

    def emit_constant(self, node: Constant, indent: int) -> None:
        self.leaf(str(node.value), indent)

    def emit_identifier(self, node: Identifier, indent: int) -> None:
        self.leaf(node.name, indent)

    def emit_binary(self, node: BinaryOp, indent: int) -> None:
        self.leaf(node.op, indent)
        self.render(node.left, indent + INDENT_WIDTH)
        self.render(node.right, indent + INDENT_WIDTH)

    def emit_rem(self, node: Rem, indent: int) -> None:
        self.leaf("REM", indent)
        self.leaf(node.comment, indent + INDENT_WIDTH)

    def emit_let(self, node: Let, indent: int) -> None:
        self.leaf("LET =", indent)
        self.leaf(node.name, indent + INDENT_WIDTH)
        self.render(node.expr, indent + INDENT_WIDTH)

    def emit_print(self, node: Print, indent: int) -> None:
        self.leaf("PRINT", indent)
        self.render(node.expr, indent + INDENT_WIDTH)

    def emit_input(self, node: Input, indent: int) -> None:
        self.leaf("INPUT", indent)
        self.leaf(node.name, indent + INDENT_WIDTH)

    def emit_goto(self, node: Goto, indent: int) -> None:
        self.leaf("GOTO", indent)
        self.leaf(str(node.target), indent + INDENT_WIDTH)

    def emit_if(self, node: If, indent: int) -> None:
        self.leaf("IF THEN", indent)
        self.render(node.lhs, indent + INDENT_WIDTH)
        self.leaf(node.op, indent + INDENT_WIDTH)
        self.render(node.rhs, indent + INDENT_WIDTH)
        self.leaf(str(node.target), indent + INDENT_WIDTH)

    def emit_end(self, node: End, indent: int) -> None:
        self.leaf("END", indent)


def render_tree(node: object, indent: int = 0) -> str:
    """Renders one expression or statement tree."""
    renderer = TreeRenderer()
    renderer.render(node, indent)
    return renderer.get_output()


def render_program(program: dict[int, Statement]) -> str:
    """Renders every statement, the first line of each prefixed with its number."""
    return "".join(
        f"{line} {render_tree(stmt)}" for line, stmt in sorted(program.items())
    )


__all__ = ["TreeRenderer", "render_program", "render_tree"]
