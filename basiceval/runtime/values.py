"""
basiceval Value Model

Every expression evaluates to exactly one Value. A Value is tagged with its
ValueType; operator legality is decided from the pair of tags.

Key classes:
- ValueType: NUMBER, STRING, ERROR
- Value: tagged value with truthiness and text formatting
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Union
import math


class ValueType(Enum):
    NUMBER = "NUMBER"
    STRING = "STRING"
    ERROR = "ERROR"


@dataclass(frozen=True)
class Value:
    """
    Tagged value.

    NUMBER holds a float, STRING a str and ERROR a diagnostic message. ERROR
    values can be stored by a host; using one inside an expression is fatal.
    """
    value_type: ValueType
    value: Any

    @classmethod
    def number(cls, value: Union[int, float]) -> "Value":
        return cls(ValueType.NUMBER, float(value))

    @classmethod
    def string(cls, value: str) -> "Value":
        return cls(ValueType.STRING, value)

    @classmethod
    def error(cls, message: str) -> "Value":
        return cls(ValueType.ERROR, message)

    @classmethod
    def boolean(cls, flag: bool) -> "Value":
        return cls.number(1.0 if flag else 0.0)

    def is_number(self) -> bool:
        return self.value_type == ValueType.NUMBER

    def is_string(self) -> bool:
        return self.value_type == ValueType.STRING

    def is_error(self) -> bool:
        return self.value_type == ValueType.ERROR

    @property
    def type_name(self) -> str:
        """Human readable name of the variant."""
        return self.value_type.value.lower()

    def is_truthy(self) -> bool:
        """A Number is truthy when nonzero, a String when non-empty."""
        if self.is_number():
            return self.value != 0.0
        if self.is_string():
            return self.value != ""
        return False

    def to_text(self) -> str:
        """Text form used by PRINT."""
        if self.is_number():
            return format_number(self.value)
        return str(self.value)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.value_type.value,
            "value": self.value,
        }

    def __str__(self) -> str:
        return self.to_text()


def format_number(value: float) -> str:
    """Integral values print without a decimal point."""
    if math.isfinite(value) and value.is_integer():
        return str(int(value))
    return repr(value)
