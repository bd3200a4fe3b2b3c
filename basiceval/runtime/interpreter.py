"""
basiceval Interpreter

Public entry point: load a program from tokens or text, run it, and inspect
or inject variables.

Key classes:
- RunConfig: configuration for a run
- RunResult: outcome of a run
- Interpreter: the facade hosts use
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional

from basiceval.errors import BasicError
from basiceval.io import ConsoleIO
from basiceval.runtime.environment import VariableStore
from basiceval.runtime.executor import Executor
from basiceval.runtime.loader import ProgramLoader
from basiceval.runtime.state import HaltState
from basiceval.runtime.values import Value
from basiceval.tokenizer import Token, Tokenizer


@dataclass
class RunConfig:
    """Configuration for program execution."""
    trace: bool = False
    max_steps: Optional[int] = None


@dataclass
class RunResult:
    """Result of running a program."""
    state: HaltState
    error: Optional[BasicError] = None
    steps: int = 0
    line: Optional[int] = None

    @property
    def success(self) -> bool:
        return self.state == HaltState.OK

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "state": self.state.value,
            "error": str(self.error) if self.error else None,
            "error_type": type(self.error).__name__ if self.error else None,
            "steps": self.steps,
            "line": self.line,
        }


class Interpreter:
    """
    Interpreter for line-numbered BASIC programs.

    Construction loads the program in one pass and raises LoadError when a
    DATA item is not a literal. Each instance owns its variables, literal
    pool, control stacks and trace flag.
    """

    def __init__(self,
                 tokens: Iterable[Token],
                 io=None,
                 config: RunConfig = None):
        self.config = config or RunConfig()
        self.io = io or ConsoleIO()
        self.variables = VariableStore()
        self.program = ProgramLoader().load(tokens)
        self.executor = Executor(self.program, self.variables, self.io)
        self.executor.trace = self.config.trace
        self.executor.max_steps = self.config.max_steps

    @classmethod
    def from_string(cls, text: str, io=None, config: RunConfig = None) -> "Interpreter":
        """Tokenize ``text`` and load it."""
        return cls(Tokenizer(text), io=io, config=config)

    def run(self) -> RunResult:
        """
        Execute the program until it ends, hits END, or fails.

        Returns:
            RunResult whose error is the first fatal BasicError, or None
        """
        try:
            self.executor.run()
        except BasicError as e:
            return RunResult(
                state=HaltState.ERROR,
                error=e,
                steps=self.executor.steps,
                line=e.line,
            )
        return RunResult(state=HaltState.OK, steps=self.executor.steps)

    def get_variable(self, name: str) -> Optional[Value]:
        """Value bound to ``name``, or None when it was never set."""
        return self.variables.get(name)

    def set_variable(self, name: str, value: Value) -> None:
        self.variables.set(name, value)

    @property
    def trace(self) -> bool:
        return self.executor.trace

    @trace.setter
    def trace(self, enabled: bool) -> None:
        self.executor.trace = bool(enabled)

    def get_trace(self) -> bool:
        return self.trace

    def set_trace(self, enabled: bool) -> None:
        self.trace = enabled

    @property
    def state(self) -> HaltState:
        return self.executor.state
