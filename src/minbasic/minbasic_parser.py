"""
MINBASIC Parser

Parses the tokens of one source line into an expression or statement tree.

Expression grammar, lowest precedence first
-------------------------------------------
    Expression := Term (('+' | '-') Term)*          left-associative
    Term       := Factor (('*' | '/' | 'MOD') Factor)*  left-associative
    Factor     := Primary ('**' Factor)?             right-associative
    Primary    := NUMBER | '(' Expression ')' | WORD

Any token reaching ``Primary`` that is neither a number nor ``(`` becomes an
``Identifier``. That fallback is part of the language, not an oversight.

Statements
----------
    REM <anything>
    LET <name> = <Expression>
    PRINT <Expression>
    INPUT <name>
    GOTO <line>
    IF <Expression> (= | < | >) <Expression> THEN <line>
    END

Keywords match exactly and case-sensitively. ``<=`` and ``>=`` come out of the
lexer but IF does not accept them.

Entry Points
------------
- `parse()`: Parse a whole line as one statement.
- `parse_expr_entrypoint()`: Parse a whole line as one expression.
- `parse_statement()` / `parse_expression()`: Grammar rules, leaving any trailing
  tokens unconsumed.

Raises
------
BasicSyntaxError
    Unknown statement keyword, missing or unexpected token, unbalanced
    parenthesis, an empty line, or a numeric literal too long to convert.
"""

from __future__ import annotations

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
from minbasic.minbasic_constants import (
    ASSIGN,
    END,
    GOTO,
    IF,
    INPUT,
    LET,
    LPAREN,
    POW,
    PRINT,
    REM,
    RPAREN,
    THEN,
    additive_ops,
    comparison_ops,
    multiplicative_ops,
)
from minbasic.minbasic_errors import BasicSyntaxError
from minbasic.minbasic_lexer import DIGITS, LETTERS, Lexer


def is_number(token: str) -> bool:
    return token != "" and all(ch in DIGITS for ch in token)


def is_signed_number(token: str) -> bool:
    # The lexer always splits "-" off, but callers may hand the parser raw tokens
    return len(token) > 1 and token[0] == "-" and is_number(token[1:])


def is_name(token: str) -> bool:
    return token != "" and token[0] in LETTERS


def to_int(token: str) -> int:
    try:
        return int(token)
    except ValueError:
        # int-from-str digit limit
        raise BasicSyntaxError(f"number too large: {len(token)} digits") from None


class Parser:
    """
    MINBASIC Parser Class

    Pulls tokens from a ``Lexer`` and builds AST nodes by recursive descent. One
    parser instance handles one line.

    Attributes
    ----------
    lexer : Lexer
        Token cursor for the line.
    """

    def __init__(self, lexer: Lexer) -> None:
        self.lexer: Lexer = lexer

    @classmethod
    def from_source(cls, source: str) -> Parser:
        return cls(Lexer(source))

    @classmethod
    def from_tokens(cls, tokens: list[str]) -> Parser:
        return cls(Lexer.from_tokens(tokens))

    @property
    def tokens(self) -> list[str]:
        return self.lexer.tokens

    def current(self) -> str:
        return self.lexer.peek()

    def advance(self) -> str:
        return self.lexer.next_token()

    def at_end(self) -> bool:
        return not self.lexer.has_more_tokens()

    def match(self, expected: str, description: str | None = None) -> str:
        tok = self.current()
        if tok == expected:
            return self.advance()
        raise BasicSyntaxError(
            f"expected {description or repr(expected)}, got {describe_token(tok)}"
        )

    def expect_end(self) -> None:
        if not self.at_end():
            raise BasicSyntaxError(f"unexpected token {self.current()!r}")

    # Entry points

    def parse(self) -> Statement:
        """Parse the whole line as exactly one statement."""
        stmt = self.parse_statement()
        self.expect_end()
        return stmt

    def parse_expr_entrypoint(self) -> Expression:
        """Parse the whole line as exactly one expression."""
        expr = self.parse_expression()
        self.expect_end()
        return expr

    # Expressions

    def parse_expression(self) -> Expression:
        lhs = self.parse_term()
        while self.current() in additive_ops:
            op = self.advance()
            lhs = BinaryOp(op, lhs, self.parse_term())
        return lhs

    def parse_term(self) -> Expression:
        lhs = self.parse_factor()
        while self.current() in multiplicative_ops:
            op = self.advance()
            lhs = BinaryOp(op, lhs, self.parse_factor())
        return lhs

    def parse_factor(self) -> Expression:
        lhs = self.parse_primary()
        if self.current() == POW:
            op = self.advance()
            # Recurse into Factor, not Primary, so 2 ** 3 ** 2 groups to the right
            return BinaryOp(op, lhs, self.parse_factor())
        return lhs

    def parse_primary(self) -> Expression:
        if self.at_end():
            raise BasicSyntaxError("unexpected end of input")
        tok = self.advance()

        if is_number(tok) or is_signed_number(tok):
            return Constant(to_int(tok))

        if tok == LPAREN:
            expr = self.parse_expression()
            if self.current() != RPAREN:
                raise BasicSyntaxError("missing closing parenthesis")
            self.advance()
            return expr

        return Identifier(tok)

    # Statements

    def parse_statement(self) -> Statement:
        if self.at_end():
            raise BasicSyntaxError("empty statement")
        keyword = self.current()
        handler = {
            REM: self.parse_rem,
            LET: self.parse_let,
            PRINT: self.parse_print,
            INPUT: self.parse_input,
            GOTO: self.parse_goto,
            IF: self.parse_if,
            END: self.parse_end,
        }.get(keyword)
        if handler is None:
            raise BasicSyntaxError(f"unknown statement: {keyword}")
        self.advance()
        return handler()

    def parse_rem(self) -> Rem:
        rest: list[str] = []
        while not self.at_end():
            rest.append(self.advance())
        return Rem(" ".join(rest))

    def parse_let(self) -> Let:
        name = self.parse_name()
        self.match(ASSIGN)
        return Let(name, self.parse_expression())

    def parse_print(self) -> Print:
        return Print(self.parse_expression())

    def parse_input(self) -> Input:
        return Input(self.parse_name())

    def parse_goto(self) -> Goto:
        return Goto(self.parse_line_number())

    def parse_if(self) -> If:
        lhs = self.parse_expression()
        op = self.current()
        if op not in comparison_ops:
            raise BasicSyntaxError(
                f"expected comparison operator, got {describe_token(op)}"
            )
        self.advance()
        rhs = self.parse_expression()
        self.match(THEN)
        return If(lhs, op, rhs, self.parse_line_number())

    def parse_end(self) -> End:
        return End()

    def parse_name(self) -> str:
        tok = self.current()
        if not is_name(tok):
            raise BasicSyntaxError(f"expected variable name, got {describe_token(tok)}")
        return self.advance()

    def parse_line_number(self) -> int:
        tok = self.current()
        if not is_number(tok):
            raise BasicSyntaxError(f"expected line number, got {describe_token(tok)}")
        self.advance()
        return to_int(tok)


def describe_token(tok: str) -> str:
    return repr(tok) if tok else "end of line"


def parse_statement(source: str) -> Statement:
    """Parse one line of source text into a statement."""
    return Parser.from_source(source).parse()


def parse_expression(source: str) -> Expression:
    """Parse one line of source text into an expression."""
    return Parser.from_source(source).parse_expr_entrypoint()


__all__ = ["Parser", "describe_token", "parse_expression", "parse_statement"]
