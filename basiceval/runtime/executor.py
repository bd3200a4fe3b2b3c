"""
basiceval Statement Executor

Program-counter loop over the line table. Each step dispatches the statement
on the current line and computes the next counter; the first BasicError
halts the run.

Key classes:
- Executor: the state machine (RUNNING -> OK | ERROR)
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional

from basiceval.errors import (
    BasicError,
    BasicSyntaxError,
    BasicTypeError,
    ControlError,
    EndOfProgramError,
)
from basiceval.runtime.cursor import TokenCursor, describe
from basiceval.runtime.environment import VariableStore
from basiceval.runtime.evaluator import ExpressionEvaluator, TYPE_MISMATCH
from basiceval.runtime.loader import Program
from basiceval.runtime.state import ControlStacks, HaltState, LoopFrame
from basiceval.runtime.values import Value
from basiceval.tokenizer import TokenKind

logger = logging.getLogger(__name__)

# Returned by a statement handler to stop the run cleanly.
HALT = -1


class Executor:
    """
    Runs a loaded Program.

    Statement handlers take the cursor positioned just after the statement
    keyword and return the next program counter, None to fall through to the
    next line, or HALT.
    """

    def __init__(self, program: Program, variables: VariableStore, io):
        self.program = program
        self.variables = variables
        self.io = io
        self.stacks = ControlStacks()
        self.evaluator = ExpressionEvaluator(variables)
        self.trace = False
        self.max_steps: Optional[int] = None
        self.state = HaltState.RUNNING
        self.pc = 0
        self.steps = 0

        self._handlers: Dict[TokenKind, Callable[[TokenCursor], Optional[int]]] = {
            TokenKind.LET: self._exec_let,
            TokenKind.PRINT: self._exec_print,
            TokenKind.INPUT: self._exec_input,
            TokenKind.IF: self._exec_if,
            TokenKind.FOR: self._exec_for,
            TokenKind.NEXT: self._exec_next,
            TokenKind.GOTO: self._exec_goto,
            TokenKind.GOSUB: self._exec_gosub,
            TokenKind.RETURN: self._exec_return,
            TokenKind.END: self._exec_end,
            TokenKind.REM: self._exec_skip,
            TokenKind.DATA: self._exec_skip,
            TokenKind.READ: self._exec_read,
            TokenKind.SWAP: self._exec_swap,
        }

    @property
    def current_line(self) -> Optional[int]:
        if 0 <= self.pc < len(self.program.lines):
            return self.program.lines[self.pc].number
        return None

    def run(self) -> None:
        """Execute from the first line; raises the first BasicError."""
        self.state = HaltState.RUNNING
        self.pc = 0
        self.steps = 0
        self.stacks.reset()
        lines = self.program.lines

        while self.pc < len(lines):
            line = lines[self.pc]
            try:
                next_pc = self._step(line)
            except BasicError as e:
                if e.line is None:
                    e.line = line.number
                self.state = HaltState.ERROR
                logger.debug("halted with error at line %s: %s", line.label, e.message)
                raise
            if next_pc == HALT:
                break
            self.pc = next_pc if next_pc is not None else self.pc + 1

        self.state = HaltState.OK
        logger.debug("halted ok after %d steps", self.steps)

    def _step(self, line) -> Optional[int]:
        self.steps += 1
        if self.max_steps is not None and self.steps > self.max_steps:
            raise ControlError(f"step limit exceeded ({self.max_steps})")

        if line.start >= line.end:
            return None

        if self.trace:
            logger.info("line %s: %s", line.label, self.program.statement_kind(self.pc).name)

        cursor = TokenCursor(self.program.tokens, line.start)
        next_pc = self.dispatch(cursor)
        if not cursor.at_line_end():
            raise BasicSyntaxError(f"unexpected {describe(cursor.peek())} after statement")
        return next_pc

    def dispatch(self, cursor: TokenCursor) -> Optional[int]:
        """Execute the single statement at the cursor."""
        token = cursor.next("a statement")
        handler = self._handlers.get(token.kind)
        if handler is not None:
            return handler(cursor)
        if token.kind is TokenKind.IDENT:
            return self._assign(token.value, cursor)
        raise BasicSyntaxError(f"unexpected {describe(token)} at start of statement")

    def _at_statement_end(self, cursor: TokenCursor) -> bool:
        return cursor.at_line_end() or cursor.check(TokenKind.ELSE)

    def _exec_let(self, cursor: TokenCursor) -> Optional[int]:
        name = cursor.expect(TokenKind.IDENT, "identifier").value
        return self._assign(name, cursor)

    def _assign(self, name: str, cursor: TokenCursor) -> Optional[int]:
        cursor.expect(TokenKind.EQ, "'='")
        self.variables.set(name, self.evaluator.evaluate(cursor))
        return None

    def _exec_print(self, cursor: TokenCursor) -> Optional[int]:
        if self._at_statement_end(cursor):
            self.io.write("\n")
            return None
        while not self._at_statement_end(cursor):
            if cursor.check(TokenKind.COMMA):
                cursor.next()
                self.io.write(" ")
            elif cursor.check(TokenKind.SEMICOLON):
                cursor.next()
            else:
                self.io.write(self.evaluator.evaluate(cursor).to_text())
        return None

    def _exec_input(self, cursor: TokenCursor) -> Optional[int]:
        prompt = ""
        if cursor.check(TokenKind.STRING):
            prompt = cursor.next().value
            cursor.expect(TokenKind.COMMA, "','")
        name = cursor.expect(TokenKind.IDENT, "identifier").value

        text = self.io.input(prompt)
        if name.endswith("$"):
            self.variables.set(name, Value.string(text))
            return None
        try:
            number = float(text.strip())
        except ValueError:
            raise BasicTypeError(f"{TYPE_MISMATCH}: {text!r} is not a number")
        self.variables.set(name, Value.number(number))
        return None

    def _exec_if(self, cursor: TokenCursor) -> Optional[int]:
        condition = self.evaluator.evaluate(cursor)
        cursor.expect(TokenKind.THEN, "THEN")

        if condition.is_truthy():
            next_pc = self._branch(cursor)
            cursor.skip_line()
            return next_pc

        self._skip_to_else(cursor)
        if cursor.check(TokenKind.ELSE):
            cursor.next()
            return self._branch(cursor)
        return None

    def _branch(self, cursor: TokenCursor) -> Optional[int]:
        # THEN 100 / ELSE 100 jump directly
        if cursor.check(TokenKind.NUMBER):
            return self._resolve(cursor.next().value)
        return self.dispatch(cursor)

    def _resolve(self, value: float) -> int:
        # a fractional target never names a line
        if not float(value).is_integer():
            raise ControlError(f"line {value} does not exist")
        return self.program.resolve(int(value))

    def _skip_to_else(self, cursor: TokenCursor) -> None:
        """Skip the THEN branch, stopping at the ELSE that belongs to us."""
        depth = 0
        while not cursor.at_line_end():
            kind = cursor.peek_kind()
            if kind is TokenKind.IF:
                depth += 1
            elif kind is TokenKind.ELSE:
                if depth == 0:
                    return
                depth -= 1
            cursor.next()

    def _exec_for(self, cursor: TokenCursor) -> Optional[int]:
        name = cursor.expect(TokenKind.IDENT, "loop variable").value
        cursor.expect(TokenKind.EQ, "'='")
        start = self.evaluator.evaluate(cursor)
        cursor.expect(TokenKind.TO, "TO")
        limit = self.evaluator.evaluate(cursor)
        step = Value.number(1)
        if cursor.check(TokenKind.STEP):
            cursor.next()
            step = self.evaluator.evaluate(cursor)

        for part, value in (("start", start), ("limit", limit), ("step", step)):
            if not value.is_number():
                raise BasicTypeError(
                    f"{TYPE_MISMATCH}: FOR {part} must be a number, got {value.type_name}"
                )

        self.stacks.open_loop(LoopFrame(name, start.value, limit.value, step.value, self.pc + 1))
        self.variables.set(name, start)
        return None

    def _exec_next(self, cursor: TokenCursor) -> Optional[int]:
        if cursor.at_end():
            raise EndOfProgramError("a loop variable or end of line")
        name = None
        if cursor.check(TokenKind.IDENT):
            name = cursor.next().value

        frame = self.stacks.find_loop(name)
        current = self.variables.get(frame.variable)
        if current is not None and current.is_number():
            frame.current = current.value

        again = frame.advance()
        self.variables.set(frame.variable, Value.number(frame.current))
        if again:
            return frame.resume
        self.stacks.close_loop(frame)
        return None

    def _target(self, cursor: TokenCursor) -> int:
        token = cursor.expect(TokenKind.NUMBER, "line number")
        return self._resolve(token.value)

    def _exec_goto(self, cursor: TokenCursor) -> Optional[int]:
        return self._target(cursor)

    def _exec_gosub(self, cursor: TokenCursor) -> Optional[int]:
        target = self._target(cursor)
        self.stacks.push_return(self.pc)
        return target

    def _exec_return(self, cursor: TokenCursor) -> Optional[int]:
        return self.stacks.pop_return() + 1

    def _exec_end(self, cursor: TokenCursor) -> Optional[int]:
        return HALT

    def _exec_skip(self, cursor: TokenCursor) -> Optional[int]:
        cursor.skip_line()
        return None

    def _exec_read(self, cursor: TokenCursor) -> Optional[int]:
        if cursor.at_end():
            raise EndOfProgramError("identifier")
        while not self._at_statement_end(cursor):
            token = cursor.next()
            if token.kind is TokenKind.COMMA:
                continue
            if token.kind is not TokenKind.IDENT:
                raise ControlError(f"expected identifier, got {describe(token)}")
            self.variables.set(token.value, self.program.data.read())
            if not (self._at_statement_end(cursor) or cursor.check(TokenKind.COMMA)):
                raise BasicSyntaxError(f"expected ',', got {describe(cursor.peek())}")
        return None

    def _exec_swap(self, cursor: TokenCursor) -> Optional[int]:
        first = cursor.expect(TokenKind.IDENT, "identifier").value
        cursor.expect(TokenKind.COMMA, "','")
        second = cursor.expect(TokenKind.IDENT, "identifier").value
        a = self.variables.require(first)
        b = self.variables.require(second)
        self.variables.set(first, b)
        self.variables.set(second, a)
        return None
