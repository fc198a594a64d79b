"""
Defines the abstract syntax tree (AST) node families for the MINBASIC interpreter.

Two closed families exist, and every consumer (evaluator, tree renderer, JSON dump)
dispatches over exactly these classes:

Expression:
    Constant    integer literal
    Identifier  variable reference
    BinaryOp    one of ``+ - * / MOD **`` with a left and right operand

Statement:
    Rem, Let, Print, Input, Goto, If, End

Nodes are frozen dataclasses: once the parser builds a tree nothing mutates it, and
each child belongs to exactly one parent. Every node carries a ``kind`` tag used for
dispatch and for its dictionary form.

Example:
    node = Let("A", BinaryOp("+", Constant(1), Identifier("B")))
    node.to_dict()["expr"]["kind"]  # "binary"
"""

from dataclasses import dataclass
from typing import ClassVar, TypedDict, Union


class ASTDict(TypedDict, total=False):
    """
    Dictionary form of a node, suitable for JSON output or debugging.

    Only ``kind`` is always present; the remaining keys depend on the node.
    """

    kind: str
    value: int
    name: str
    op: str
    left: "ASTDict"
    right: "ASTDict"
    comment: str
    expr: "ASTDict"
    lhs: "ASTDict"
    rhs: "ASTDict"
    target: int


@dataclass(frozen=True)
class Constant:
    kind: ClassVar[str] = "constant"

    value: int

    def to_dict(self) -> ASTDict:
        return {"kind": self.kind, "value": self.value}


@dataclass(frozen=True)
class Identifier:
    kind: ClassVar[str] = "identifier"

    name: str

    def to_dict(self) -> ASTDict:
        return {"kind": self.kind, "name": self.name}


@dataclass(frozen=True)
class BinaryOp:
    """An arithmetic operator applied to two owned operand trees."""

    kind: ClassVar[str] = "binary"

    op: str
    left: "Expression"
    right: "Expression"

    def to_dict(self) -> ASTDict:
        return {
            "kind": self.kind,
            "op": self.op,
            "left": self.left.to_dict(),
            "right": self.right.to_dict(),
        }


Expression = Union[Constant, Identifier, BinaryOp]
"""Closed union of every expression node type."""


@dataclass(frozen=True)
class Rem:
    kind: ClassVar[str] = "rem"

    comment: str

    def to_dict(self) -> ASTDict:
        return {"kind": self.kind, "comment": self.comment}


@dataclass(frozen=True)
class Let:
    kind: ClassVar[str] = "let"

    name: str
    expr: Expression

    def to_dict(self) -> ASTDict:
        return {"kind": self.kind, "name": self.name, "expr": self.expr.to_dict()}


@dataclass(frozen=True)
class Print:
    kind: ClassVar[str] = "print"

    expr: Expression

    def to_dict(self) -> ASTDict:
        return {"kind": self.kind, "expr": self.expr.to_dict()}


@dataclass(frozen=True)
class Input:
    kind: ClassVar[str] = "input"

    name: str

    def to_dict(self) -> ASTDict:
        return {"kind": self.kind, "name": self.name}


@dataclass(frozen=True)
class Goto:
    kind: ClassVar[str] = "goto"

    target: int

    def to_dict(self) -> ASTDict:
        return {"kind": self.kind, "target": self.target}


@dataclass(frozen=True)
class If:
    """``IF lhs op rhs THEN target``; ``op`` is one of ``=``, ``<``, ``>``."""

    kind: ClassVar[str] = "if"

    lhs: Expression
    op: str
    rhs: Expression
    target: int

    def to_dict(self) -> ASTDict:
        return {
            "kind": self.kind,
            "lhs": self.lhs.to_dict(),
            "op": self.op,
            "rhs": self.rhs.to_dict(),
            "target": self.target,
        }


@dataclass(frozen=True)
class End:
    kind: ClassVar[str] = "end"

    def to_dict(self) -> ASTDict:
        return {"kind": self.kind}


Statement = Union[Rem, Let, Print, Input, Goto, If, End]
"""Closed union of every statement node type."""


def program_to_dict(program: dict[int, Statement]) -> dict[str, ASTDict]:
    """Serializes a parsed program, keyed by line number as a string for JSON."""
    return {str(line): stmt.to_dict() for line, stmt in sorted(program.items())}


__all__ = [
    "ASTDict",
    "BinaryOp",
    "Constant",
    "End",
    "Expression",
    "Goto",
    "Identifier",
    "If",
    "Input",
    "Let",
    "Print",
    "Rem",
    "Statement",
    "program_to_dict",
]
