"""
basiceval Token Cursor

A position index over the materialized token list. Every consumption goes
through next() or expect(), which check availability first, so a truncated
program fails with EndOfProgramError instead of indexing past the end.
"""

from __future__ import annotations

from typing import List, Optional

from basiceval.errors import BasicSyntaxError, EndOfProgramError
from basiceval.tokenizer import Token, TokenKind


class TokenCursor:
    """Peekable cursor over a token list."""

    def __init__(self, tokens: List[Token], position: int = 0):
        self.tokens = tokens
        self.position = position

    def at_end(self) -> bool:
        return self.position >= len(self.tokens)

    def peek(self) -> Optional[Token]:
        """The current token, or None when the stream is exhausted."""
        if self.at_end():
            return None
        return self.tokens[self.position]

    def peek_kind(self) -> Optional[TokenKind]:
        token = self.peek()
        return token.kind if token is not None else None

    def check(self, *kinds: TokenKind) -> bool:
        """True when the current token is one of ``kinds``."""
        return self.peek_kind() in kinds

    def at_line_end(self) -> bool:
        """True at a NEWLINE or when the stream is exhausted."""
        return self.at_end() or self.check(TokenKind.NEWLINE)

    def next(self, expected: str = "a token") -> Token:
        """Consume and return the current token."""
        if self.at_end():
            raise EndOfProgramError(expected)
        token = self.tokens[self.position]
        self.position += 1
        return token

    def expect(self, kind: TokenKind, expected: Optional[str] = None) -> Token:
        """Consume a token that must be of ``kind``."""
        expected = expected or kind.value
        token = self.next(expected)
        if token.kind is not kind:
            raise BasicSyntaxError(f"expected {expected}, got {describe(token)}")
        return token

    def skip_line(self) -> None:
        """Advance to the NEWLINE ending the current line (or the end)."""
        while not self.at_line_end():
            self.position += 1


def describe(token: Token) -> str:
    if token.kind is TokenKind.NEWLINE:
        return "end of line"
    return f"{token.kind.name} {token.value!r}"
