"""
basiceval Runtime Environment

Holds the mutable data a running program sees.

Key classes:
- VariableStore: name -> Value, created lazily on first assignment
- DataPool: literal constants gathered from DATA statements, with a
  monotonic read cursor
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Any, Iterator, List, Optional

from basiceval.errors import ControlError
from basiceval.runtime.values import Value


class VariableStore:
    """
    Case-sensitive mapping of variable names to Values.

    Lookups of a missing name return None; callers decide whether that is an
    error.
    """

    def __init__(self):
        self._vars: Dict[str, Value] = {}

    def get(self, name: str) -> Optional[Value]:
        """Get a variable by name."""
        return self._vars.get(name)

    def set(self, name: str, value: Value) -> None:
        """Bind or rebind a variable."""
        self._vars[name] = value

    def require(self, name: str) -> Value:
        """Get a variable, raising ControlError when it was never assigned."""
        value = self._vars.get(name)
        if value is None:
            raise ControlError(f"variable not found: {name}")
        return value

    def __contains__(self, name: str) -> bool:
        return name in self._vars

    def __len__(self) -> int:
        return len(self._vars)

    def __iter__(self) -> Iterator[str]:
        return iter(self._vars)

    def snapshot(self) -> Dict[str, Any]:
        """Create a snapshot of every binding."""
        return {name: value.to_dict() for name, value in self._vars.items()}


@dataclass
class DataPool:
    """
    Append-only literal pool with a read cursor.

    Invariant: 0 <= cursor <= len(items). The cursor only ever advances.
    """
    items: List[Value] = field(default_factory=list)
    cursor: int = 0

    def append(self, value: Value) -> None:
        self.items.append(value)

    def read(self) -> Value:
        """Consume the next literal."""
        if self.cursor >= len(self.items):
            raise ControlError("read past end of DATA storage")
        value = self.items[self.cursor]
        self.cursor += 1
        return value

    def remaining(self) -> int:
        return len(self.items) - self.cursor

    def __len__(self) -> int:
        return len(self.items)
