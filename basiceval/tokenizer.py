"""
basiceval Tokenizer

Turns program text into a lazy stream of Token objects. The terminals are
declared as a lark grammar and lexed with lark's basic lexer; this module then
promotes keywords, marks line numbers and decodes string literals.

Key classes:
- TokenKind: every kind of token the runtime understands
- Token: (kind, value, line) triple
- Tokenizer: text -> Iterator[Token]
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator, Optional

from lark import Lark
from lark.exceptions import UnexpectedCharacters

from basiceval.errors import LexError


class TokenKind(Enum):
    LINENO = "LINENO"
    NUMBER = "NUMBER"
    STRING = "STRING"
    IDENT = "IDENT"
    NEWLINE = "NEWLINE"
    REM = "REM"

    PLUS = "+"
    MINUS = "-"
    ASTERISK = "*"
    SLASH = "/"
    PERCENT = "%"
    CARET = "^"

    EQ = "="
    NE = "<>"
    LT = "<"
    LE = "<="
    GT = ">"
    GE = ">="

    LPAREN = "("
    RPAREN = ")"
    COMMA = ","
    SEMICOLON = ";"

    LET = "LET"
    PRINT = "PRINT"
    INPUT = "INPUT"
    IF = "IF"
    THEN = "THEN"
    ELSE = "ELSE"
    FOR = "FOR"
    TO = "TO"
    STEP = "STEP"
    NEXT = "NEXT"
    GOTO = "GOTO"
    GOSUB = "GOSUB"
    RETURN = "RETURN"
    END = "END"
    DATA = "DATA"
    READ = "READ"
    SWAP = "SWAP"


KEYWORDS = {
    kind.value: kind
    for kind in (
        TokenKind.LET, TokenKind.PRINT, TokenKind.INPUT, TokenKind.IF,
        TokenKind.THEN, TokenKind.ELSE, TokenKind.FOR, TokenKind.TO,
        TokenKind.STEP, TokenKind.NEXT, TokenKind.GOTO, TokenKind.GOSUB,
        TokenKind.RETURN, TokenKind.END, TokenKind.DATA, TokenKind.READ,
        TokenKind.SWAP,
    )
}

# lark terminal name -> TokenKind
_TERMINALS = {
    "NUMBER": TokenKind.NUMBER,
    "STRING": TokenKind.STRING,
    "NAME": TokenKind.IDENT,
    "NEWLINE": TokenKind.NEWLINE,
    "REM": TokenKind.REM,
    "PLUS": TokenKind.PLUS,
    "MINUS": TokenKind.MINUS,
    "STAR": TokenKind.ASTERISK,
    "SLASH": TokenKind.SLASH,
    "PERCENT": TokenKind.PERCENT,
    "CARET": TokenKind.CARET,
    "EQ": TokenKind.EQ,
    "NE": TokenKind.NE,
    "LE": TokenKind.LE,
    "GE": TokenKind.GE,
    "LT": TokenKind.LT,
    "GT": TokenKind.GT,
    "LPAR": TokenKind.LPAREN,
    "RPAR": TokenKind.RPAREN,
    "COMMA": TokenKind.COMMA,
    "SEMICOLON": TokenKind.SEMICOLON,
}

GRAMMAR = r"""
start: _item*

_item: NUMBER | STRING | REM | NAME | NEWLINE
     | PLUS | MINUS | STAR | SLASH | PERCENT | CARET
     | LE | GE | NE | EQ | LT | GT
     | LPAR | RPAR | COMMA | SEMICOLON

NUMBER: /\d+(\.\d*)?|\.\d+/
STRING: /"(\\.|[^"\\\n])*"/
REM.2: /REM(?![A-Za-z0-9_$])[^\n]*/i
NAME: /[A-Za-z_][A-Za-z0-9_]*\$?/
NEWLINE: /\n/

PLUS: "+"
MINUS: "-"
STAR: "*"
SLASH: "/"
PERCENT: "%"
CARET: "^"
LE: "<="
GE: ">="
NE: "<>"
EQ: "="
LT: "<"
GT: ">"
LPAR: "("
RPAR: ")"
COMMA: ","
SEMICOLON: ";"

%ignore /[ \t\r]+/
"""

_ESCAPES = {"n": "\n", "t": "\t", '"': '"', "\\": "\\"}


@dataclass(frozen=True)
class Token:
    """A single lexeme with its kind and the physical line it came from."""
    kind: TokenKind
    value: Any
    line: int = 0

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.value!r})"


def decode_string(literal: str) -> str:
    """Strip the quotes from a string literal and decode its escapes."""
    body = literal[1:-1]
    out = []
    i = 0
    while i < len(body):
        ch = body[i]
        if ch == "\\" and i + 1 < len(body):
            nxt = body[i + 1]
            out.append(_ESCAPES.get(nxt, "\\" + nxt))
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)


class Tokenizer:
    """
    Lazily tokenizes BASIC program text.

    A NUMBER that opens a physical line becomes a LINENO token. Keywords are
    matched case-insensitively; identifiers keep their case.
    """

    _lark: Optional[Lark] = None

    def __init__(self, text: str):
        self.text = text

    @classmethod
    def _lexer(cls) -> Lark:
        if cls._lark is None:
            cls._lark = Lark(GRAMMAR, parser="lalr", lexer="basic")
        return cls._lark

    def __iter__(self) -> Iterator[Token]:
        return self.tokens()

    def tokens(self) -> Iterator[Token]:
        at_line_start = True
        try:
            for raw in self._lexer().lex(self.text):
                token = self._convert(raw, at_line_start)
                at_line_start = token.kind is TokenKind.NEWLINE
                yield token
        except UnexpectedCharacters as e:
            raise LexError(f"unexpected character {e.char!r}", e.line) from e

    def _convert(self, raw, at_line_start: bool) -> Token:
        kind = _TERMINALS[raw.type]
        value: Any = str(raw)

        if kind is TokenKind.NUMBER:
            value = float(value)
            if at_line_start:
                kind = TokenKind.LINENO
                value = int(value)
        elif kind is TokenKind.STRING:
            value = decode_string(value)
        elif kind is TokenKind.IDENT:
            keyword = KEYWORDS.get(value.upper())
            if keyword is not None:
                kind = keyword
        elif kind is TokenKind.REM:
            value = value[3:].strip()
        elif kind is TokenKind.NEWLINE:
            value = "\n"

        return Token(kind, value, raw.line)


def tokenize(text: str) -> Iterator[Token]:
    """Convenience wrapper: tokens of ``text``."""
    return Tokenizer(text).tokens()
