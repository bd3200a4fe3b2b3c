"""
basiceval Expression Evaluator

Recursive precedence evaluation over a TokenCursor. Levels, lowest first:

    comparison      =  <>  <  <=  >  >=
    additive        +  -
    multiplicative  *  /  %
    power           ^
    unary           -  +
    primary         number | string | variable | ( comparison )

Every binary level evaluates its higher neighbour, then loops while the
current token is one of its own operators, so all levels associate left.

Type checks happen at two levels with two different messages: the additive
level rejects a Number/String mix as a type mismatch, the multiplicative and
power levels reject any String operand as numeric-only.
"""

from __future__ import annotations

from typing import Callable, Dict
import math
import operator

from basiceval.errors import BasicSyntaxError, BasicTypeError, ControlError, UnclosedBracketError
from basiceval.runtime.cursor import TokenCursor, describe
from basiceval.runtime.environment import VariableStore
from basiceval.runtime.values import Value
from basiceval.tokenizer import TokenKind

TYPE_MISMATCH = "type mismatch"
STRINGS_UNSUPPORTED = "operator not supported for strings"
NUMERIC_ONLY = "operator only handles numeric operands"

COMPARISONS: Dict[TokenKind, Callable] = {
    TokenKind.EQ: operator.eq,
    TokenKind.NE: operator.ne,
    TokenKind.LT: operator.lt,
    TokenKind.LE: operator.le,
    TokenKind.GT: operator.gt,
    TokenKind.GE: operator.ge,
}

ADDITIVE = (TokenKind.PLUS, TokenKind.MINUS)
MULTIPLICATIVE = (TokenKind.ASTERISK, TokenKind.SLASH, TokenKind.PERCENT)


def divide(a: float, b: float) -> float:
    """IEEE division: x/0 is a signed infinity, 0/0 is NaN."""
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def modulo(a: float, b: float) -> float:
    if b == 0.0 or math.isinf(a):
        return math.nan
    return math.fmod(a, b)


def power(a: float, b: float) -> float:
    if a == 0.0 and b < 0.0:
        return math.inf
    try:
        return math.pow(a, b)
    except OverflowError:
        return math.inf
    except ValueError:
        # negative base with a fractional exponent
        return math.nan


ARITHMETIC: Dict[TokenKind, Callable[[float, float], float]] = {
    TokenKind.PLUS: operator.add,
    TokenKind.MINUS: operator.sub,
    TokenKind.ASTERISK: operator.mul,
    TokenKind.SLASH: divide,
    TokenKind.PERCENT: modulo,
    TokenKind.CARET: power,
}


class ExpressionEvaluator:
    """Evaluates one expression from the cursor's position to a Value."""

    def __init__(self, variables: VariableStore):
        self.variables = variables

    def evaluate(self, cursor: TokenCursor) -> Value:
        try:
            return self._comparison(cursor)
        except RecursionError:
            raise BasicSyntaxError("expression nested too deeply") from None

    def _comparison(self, cursor: TokenCursor) -> Value:
        left = self._additive(cursor)
        while cursor.peek_kind() in COMPARISONS:
            op = cursor.next().kind
            right = self._additive(cursor)
            left = self.compare(op, left, right)
        return left

    def _additive(self, cursor: TokenCursor) -> Value:
        left = self._multiplicative(cursor)
        while cursor.check(*ADDITIVE):
            op = cursor.next().kind
            right = self._multiplicative(cursor)
            if left.value_type != right.value_type:
                raise BasicTypeError(
                    f"{TYPE_MISMATCH}: cannot apply '{op.value}' to "
                    f"{left.type_name} and {right.type_name}"
                )
            if left.is_string():
                if op is not TokenKind.PLUS:
                    raise BasicTypeError(f"'{op.value}' {STRINGS_UNSUPPORTED}")
                left = Value.string(left.value + right.value)
            else:
                left = Value.number(ARITHMETIC[op](left.value, right.value))
        return left

    def _multiplicative(self, cursor: TokenCursor) -> Value:
        left = self._power(cursor)
        while cursor.check(*MULTIPLICATIVE):
            op = cursor.next().kind
            right = self._power(cursor)
            left = self._numeric(op, left, right)
        return left

    def _power(self, cursor: TokenCursor) -> Value:
        left = self._unary(cursor)
        while cursor.check(TokenKind.CARET):
            op = cursor.next().kind
            right = self._unary(cursor)
            left = self._numeric(op, left, right)
        return left

    def _unary(self, cursor: TokenCursor) -> Value:
        if cursor.check(TokenKind.MINUS, TokenKind.PLUS):
            op = cursor.next().kind
            operand = self._unary(cursor)
            if not operand.is_number():
                raise BasicTypeError(f"unary '{op.value}' {NUMERIC_ONLY}")
            if op is TokenKind.MINUS:
                return Value.number(-operand.value)
            return operand
        return self._primary(cursor)

    def _primary(self, cursor: TokenCursor) -> Value:
        token = cursor.next("an operand")

        if token.kind is TokenKind.NUMBER:
            return Value.number(token.value)
        if token.kind is TokenKind.STRING:
            return Value.string(token.value)
        if token.kind is TokenKind.IDENT:
            return self._variable(token.value)
        if token.kind is TokenKind.LPAREN:
            value = self._comparison(cursor)
            if cursor.at_end():
                raise UnclosedBracketError("unclosed bracket: unexpected end of program")
            close = cursor.next()
            if close.kind is not TokenKind.RPAREN:
                raise UnclosedBracketError(f"unclosed bracket, got {describe(close)}")
            return value

        raise BasicSyntaxError(f"unexpected {describe(token)} in expression")

    def _variable(self, name: str) -> Value:
        value = self.variables.get(name)
        if value is None:
            raise ControlError(f"variable not found: {name}")
        if value.is_error():
            raise BasicTypeError(f"variable {name} holds an error: {value.value}")
        return value

    def _numeric(self, op: TokenKind, left: Value, right: Value) -> Value:
        if not (left.is_number() and right.is_number()):
            raise BasicTypeError(f"'{op.value}' {NUMERIC_ONLY}")
        return Value.number(ARITHMETIC[op](left.value, right.value))

    @staticmethod
    def compare(op: TokenKind, left: Value, right: Value) -> Value:
        """Numeric or lexicographic ordering; 1 for true, 0 for false."""
        if left.value_type != right.value_type:
            raise BasicTypeError(
                f"{TYPE_MISMATCH}: cannot compare {left.type_name} with {right.type_name}"
            )
        return Value.boolean(COMPARISONS[op](left.value, right.value))
