"""
Lexical analyzer for the MINBASIC interpreter.

This module turns one line of BASIC source into an ordered list of lexeme strings:

Classes:
    CharacterStream: Stream abstraction for reading characters from one line.
    Lexer: Tokenizes a whole line up front and hands tokens out one at a time.

Rules:
    - Whitespace separates tokens and is discarded.
    - A maximal run of digits is one number token.
    - A letter followed by letters or digits is one word token. Keywords and
      identifiers are lexically identical; the parser tells them apart.
    - Any other character is a one-character operator token, except that
      ``**``, ``<=`` and ``>=`` are merged into two-character tokens.

The lexer never fails. Characters it does not understand come out as single
character operators and the parser decides whether to reject them.

Example:
    >>> lexer = Lexer("LET A = 2 ** 3")
    >>> lexer.tokens
    ['LET', 'A', '=', '2', '**', '3']

Exports:
    - CharacterStream
    - Lexer
    - tokenize
"""

import string

from minbasic.minbasic_constants import compound_operators

DIGITS = frozenset(string.digits)
LETTERS = frozenset(string.ascii_letters)
WORD_CHARS = DIGITS | LETTERS


class CharacterStream:
    """
    A utility for reading characters from a single source line.

    Attributes:
        source (str): The input source string.
        position (int): Current index in the source.
    """

    def __init__(self, source: str, position: int = 0):
        self.source = source
        self.position = position

    def next(self) -> str:
        """
        Consumes and returns the next character in the stream.

        Raises:
            IndexError: If reading past the end of the source.
        """
        if self.position >= len(self.source):
            raise IndexError(
                f"CharacterStreamError: Attempted to read past end of source at position=<{self.position}>"
            )
        char = self.source[self.position]
        self.position += 1
        return char

    def peek(self, offset: int = 0) -> str:
        """
        Returns the character at the given offset without advancing.

        Returns:
            str: The character at the offset, or an empty string if out of bounds.
        """
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return ""
        return self.source[index]

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


class Lexer:
    """Eager tokenizer for one MINBASIC line.

    The whole line is split when the lexer is built; afterwards the lexer acts
    as a cursor over ``tokens``. Exhaustion is signalled by the empty string,
    never by an exception.

    Attributes:
        tokens (list[str]): Every lexeme of the line, in order.
        position (int): Index of the next token to hand out.
    """

    def __init__(self, source: str) -> None:
        self.tokens: list[str] = []
        self.position: int = 0
        self._tokenize(CharacterStream(source))

    @classmethod
    def from_tokens(cls, tokens: list[str]) -> "Lexer":
        """Builds a cursor over tokens that were split elsewhere."""
        lexer = cls("")
        lexer.tokens = list(tokens)
        return lexer

    def has_more_tokens(self) -> bool:
        return self.position < len(self.tokens)

    def peek(self) -> str:
        """Returns the next token without consuming it, or ``""`` at the end."""
        if not self.has_more_tokens():
            return ""
        return self.tokens[self.position]

    def next_token(self) -> str:
        """Consumes and returns the next token, or ``""`` at the end."""
        if not self.has_more_tokens():
            return ""
        token = self.tokens[self.position]
        self.position += 1
        return token

    def _tokenize(self, stream: CharacterStream) -> None:
        while not stream.end_of_file():
            ch = stream.peek()

            if ch.isspace():
                stream.next()
                continue

            # 1. Number
            if ch in DIGITS:
                number = ""
                while stream.peek() in DIGITS:
                    number += stream.next()
                self.tokens.append(number)
                continue

            # 2. Keyword or identifier
            if ch in LETTERS:
                word = ""
                while stream.peek() in WORD_CHARS:
                    word += stream.next()
                self.tokens.append(word)
                continue

            # 3. Operator, possibly two characters wide
            op = stream.next()
            follower = compound_operators.get(op)
            if follower is not None and stream.peek() == follower:
                op += stream.next()
            self.tokens.append(op)


def tokenize(source: str) -> list[str]:
    """Returns the full token list for ``source``."""
    return Lexer(source).tokens


__all__ = ["CharacterStream", "Lexer", "tokenize"]
