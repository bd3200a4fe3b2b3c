"""
basiceval Error Taxonomy

Every failure the interpreter can report is a BasicError. The runtime raises
them internally and Interpreter.run() returns the first one as part of its
result, so a host never sees an abort.

Key classes:
- LoadError / LexError: rejected at construction
- BasicSyntaxError: unexpected or missing tokens
- BasicTypeError: operand types an operator cannot handle
- ControlError: jumps, frames, DATA cursor and variable lookups
"""

from __future__ import annotations

from typing import Optional


class BasicError(Exception):
    """Base class for all interpreter errors."""

    def __init__(self, message: str, line: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.line = line

    def __str__(self) -> str:
        if self.line is not None:
            return f"line {self.line}: {self.message}"
        return self.message


class LoadError(BasicError):
    """A DATA statement held something other than a literal."""


class LexError(BasicError):
    """The program text contained a character the tokenizer does not know."""


class BasicSyntaxError(BasicError):
    """A token was not what the statement or expression expected."""


class EndOfProgramError(BasicSyntaxError):
    """The token stream ran out where a token was required."""

    def __init__(self, expected: str = "a token", line: Optional[int] = None):
        super().__init__(f"unexpected end of program, expected {expected}", line)


class UnclosedBracketError(BasicSyntaxError):
    """A parenthesised expression had no matching close token."""


class BasicTypeError(BasicError):
    """An operator was applied to operands it does not support."""


class ControlError(BasicError):
    """Program flow or data access could not proceed."""
