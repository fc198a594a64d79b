"""
Shared lexical tables for the MINBASIC interpreter.

Keywords and operators are plain strings: the lexer never tags tokens, so the
parser, evaluator, and tree renderer all compare against these tables by exact,
case-sensitive match.
"""

REM = "REM"
LET = "LET"
PRINT = "PRINT"
INPUT = "INPUT"
GOTO = "GOTO"
IF = "IF"
THEN = "THEN"
END = "END"

# Statements that may run without a line number in the REPL
IMMEDIATE_KEYWORDS: frozenset[str] = frozenset({LET, PRINT, INPUT})

PLUS = "+"
MINUS = "-"
MULT = "*"
DIV = "/"
MOD = "MOD"
POW = "**"

additive_ops: tuple[str, ...] = (PLUS, MINUS)
multiplicative_ops: tuple[str, ...] = (MULT, DIV, MOD)

ASSIGN = "="
LPAREN = "("
RPAREN = ")"

# IF only understands these; the lexer also yields "<=" and ">=" which stay unused
comparison_ops: frozenset[str] = frozenset({"=", "<", ">"})

# Two-character operators merged by the lexer, keyed by their first character
compound_operators: dict[str, str] = {"*": "*", "<": "=", ">": "="}

INDENT_WIDTH = 4
