"""Host IO handlers used by PRINT and INPUT."""

from __future__ import annotations

from collections import deque
from typing import Iterable, List, Optional


class ConsoleIO:
    """Writes to stdout and reads lines with the builtin input()."""

    def write(self, text: str) -> None:
        print(text, end="", flush=True)

    def input(self, prompt: str = "") -> str:
        return input(prompt)


class BufferedIO:
    """
    Collects output in memory and serves queued input lines.

    Reading with an empty queue returns an empty string, as reading from a
    closed stdin would.
    """

    def __init__(self, inputs: Optional[Iterable[str]] = None):
        self.output: List[str] = []
        self.prompts: List[str] = []
        self.inputs = deque(inputs or [])

    def write(self, text: str) -> None:
        self.output.append(text)

    def input(self, prompt: str = "") -> str:
        self.prompts.append(prompt)
        if prompt:
            self.write(prompt)
        return self.inputs.popleft() if self.inputs else ""

    def getvalue(self) -> str:
        return "".join(self.output)
