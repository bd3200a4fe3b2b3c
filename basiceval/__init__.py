"""
basiceval - evaluator for line-numbered BASIC programs

Exports:
- Interpreter: load a program from text or tokens and run it
- RunConfig / RunResult: run configuration and outcome
- Value / ValueType: the tagged value model
- Tokenizer: program text -> tokens
"""

from basiceval.errors import (
    BasicError,
    LoadError,
    LexError,
    BasicSyntaxError,
    EndOfProgramError,
    UnclosedBracketError,
    BasicTypeError,
    ControlError,
)
from basiceval.runtime import (
    Interpreter,
    RunConfig,
    RunResult,
    HaltState,
    Value,
    ValueType,
)
from basiceval.tokenizer import Token, TokenKind, Tokenizer, tokenize

__version__ = "1.0.0"

__all__ = [
    "Interpreter",
    "RunConfig",
    "RunResult",
    "HaltState",
    "Value",
    "ValueType",
    "Token",
    "TokenKind",
    "Tokenizer",
    "tokenize",
    "BasicError",
    "LoadError",
    "LexError",
    "BasicSyntaxError",
    "EndOfProgramError",
    "UnclosedBracketError",
    "BasicTypeError",
    "ControlError",
]
