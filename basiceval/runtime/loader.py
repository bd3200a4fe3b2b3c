"""
basiceval Program Loader

Materializes the token stream once and indexes it.

Key classes:
- Line: one entry of the line table (declared number + token range)
- Program: token list, line table, line-number index, literal pool
- ProgramLoader: builds a Program, rejecting non-literal DATA items
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from basiceval.errors import ControlError, LoadError
from basiceval.runtime.environment import DataPool
from basiceval.runtime.values import Value
from basiceval.tokenizer import Token, TokenKind

logger = logging.getLogger(__name__)


@dataclass
class Line:
    """
    Line table entry.

    Statement tokens are tokens[start:end]; end is the index of the closing
    NEWLINE, or the token count for the last line. number is None for a
    statement written without a line number.
    """
    number: Optional[int]
    start: int
    end: int
    source_line: int = 0

    @property
    def label(self) -> str:
        return str(self.number) if self.number is not None else f"#{self.source_line}"


@dataclass
class Program:
    tokens: List[Token] = field(default_factory=list)
    lines: List[Line] = field(default_factory=list)
    line_index: Dict[int, int] = field(default_factory=dict)
    data: DataPool = field(default_factory=DataPool)

    def resolve(self, number: int) -> int:
        """Line-table index of a declared line number."""
        index = self.line_index.get(number)
        if index is None:
            raise ControlError(f"line {number} does not exist")
        return index

    def statement_kind(self, index: int) -> Optional[TokenKind]:
        line = self.lines[index]
        if line.start >= line.end:
            return None
        return self.tokens[line.start].kind


class ProgramLoader:
    """Single pass over a token source producing a Program."""

    def load(self, tokens: Iterable[Token]) -> Program:
        program = Program()
        current: Optional[Line] = None
        self._last_number: Optional[int] = None

        for token in tokens:
            position = len(program.tokens)
            program.tokens.append(token)

            if token.kind is TokenKind.NEWLINE:
                if current is not None:
                    current.end = position
                    current = None
                continue

            if current is None:
                current = self._open_line(program, token, position)

        if current is not None:
            current.end = len(program.tokens)

        for index, line in enumerate(program.lines):
            if program.statement_kind(index) is TokenKind.DATA:
                self._collect_data(program, line)

        logger.debug(
            "loaded %d lines, %d tokens, %d DATA items",
            len(program.lines), len(program.tokens), len(program.data),
        )
        return program

    def _open_line(self, program: Program, token: Token, position: int) -> Line:
        if token.kind is TokenKind.LINENO:
            line = Line(token.value, position + 1, position + 1, token.line)
            if token.value in program.line_index:
                logger.warning("duplicate line number %d, later line wins", token.value)
            elif self._last_number is not None and token.value < self._last_number:
                logger.warning(
                    "line %d follows line %d, lines run in source order",
                    token.value, self._last_number,
                )
            program.line_index[token.value] = len(program.lines)
            self._last_number = token.value
        else:
            line = Line(None, position, position, token.line)
        program.lines.append(line)
        return line

    def _collect_data(self, program: Program, line: Line) -> None:
        tokens = program.tokens
        i = line.start + 1
        while i < line.end:
            token = tokens[i]
            if token.kind is TokenKind.COMMA:
                i += 1
                continue
            if token.kind is TokenKind.NUMBER:
                program.data.append(Value.number(token.value))
            elif token.kind is TokenKind.STRING:
                program.data.append(Value.string(token.value))
            elif (token.kind is TokenKind.MINUS and i + 1 < line.end
                    and tokens[i + 1].kind is TokenKind.NUMBER):
                i += 1
                program.data.append(Value.number(-tokens[i].value))
            else:
                raise LoadError(
                    f"DATA items must be literals, got {token.kind.name} {token.value!r}",
                    line.number,
                )
            i += 1
