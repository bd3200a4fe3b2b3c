"""
basiceval Runtime State Management

Tracks where the program counter is going and which loops and subroutine
calls are open.

Key classes:
- HaltState: RUNNING, OK, ERROR
- LoopFrame: one open FOR loop
- ControlStacks: GOSUB return stack and FOR frame stack
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Any, List, Optional
from enum import Enum

from basiceval.errors import ControlError


class HaltState(Enum):
    RUNNING = "RUNNING"
    OK = "OK"
    ERROR = "ERROR"


@dataclass
class LoopFrame:
    """
    Saved state of one open counted loop.

    resume is the line-table index execution jumps back to on each
    iteration: the line after the FOR.
    """
    variable: str
    current: float
    limit: float
    step: float
    resume: int

    def advance(self) -> bool:
        """Step the loop; True while the loop should run again."""
        self.current += self.step
        if self.step >= 0:
            return self.current <= self.limit
        return self.current >= self.limit

    def to_dict(self) -> Dict[str, Any]:
        return {
            "variable": self.variable,
            "current": self.current,
            "limit": self.limit,
            "step": self.step,
            "resume": self.resume,
        }


@dataclass
class ControlStacks:
    """
    Subroutine return addresses and open loop frames.

    Depth of `loops` equals the current FOR nesting.
    """
    returns: List[int] = field(default_factory=list)
    loops: List[LoopFrame] = field(default_factory=list)

    def push_return(self, pc: int) -> None:
        self.returns.append(pc)

    def pop_return(self) -> int:
        if not self.returns:
            raise ControlError("RETURN without GOSUB")
        return self.returns.pop()

    def open_loop(self, frame: LoopFrame) -> None:
        """
        Push a frame. Re-entering a FOR on a variable that already has an
        open frame discards that frame and everything opened inside it.
        """
        index = self._find(frame.variable)
        if index is not None:
            del self.loops[index:]
        self.loops.append(frame)

    def find_loop(self, variable: Optional[str] = None) -> LoopFrame:
        """
        Locate the frame a NEXT refers to: the innermost one, or the named
        one, discarding any frames opened inside it.
        """
        if variable is None:
            if not self.loops:
                raise ControlError("NEXT without FOR")
            return self.loops[-1]

        index = self._find(variable)
        if index is None:
            raise ControlError(f"NEXT without FOR: {variable}")
        del self.loops[index + 1:]
        return self.loops[index]

    def close_loop(self, frame: LoopFrame) -> None:
        if self.loops and self.loops[-1] is frame:
            self.loops.pop()

    def _find(self, variable: str) -> Optional[int]:
        for index in range(len(self.loops) - 1, -1, -1):
            if self.loops[index].variable == variable:
                return index
        return None

    def reset(self) -> None:
        self.returns.clear()
        self.loops.clear()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "returns": list(self.returns),
            "loops": [frame.to_dict() for frame in self.loops],
        }
