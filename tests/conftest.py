"""Test fixtures for the basiceval test suite."""
import pytest
import sys
from pathlib import Path
from typing import Iterable, Optional

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from basiceval.io import BufferedIO
from basiceval.runtime.interpreter import Interpreter, RunConfig


@pytest.fixture
def io() -> BufferedIO:
    """In-memory IO handler."""
    return BufferedIO()


@pytest.fixture
def run_program(io):
    """Load and run a program; returns (interpreter, result)."""
    def _run(source: str,
             inputs: Optional[Iterable[str]] = None,
             config: Optional[RunConfig] = None):
        if inputs:
            io.inputs.extend(inputs)
        interpreter = Interpreter.from_string(source, io=io, config=config)
        return interpreter, interpreter.run()
    return _run


@pytest.fixture
def loop_program() -> str:
    """Sums 1..5 with a FOR loop."""
    return (
        "10 LET s = 0\n"
        "20 FOR i = 1 TO 5\n"
        "30 LET s = s + i\n"
        "40 NEXT i\n"
    )


@pytest.fixture
def subroutine_program() -> str:
    """Calls a subroutine once, then stops with END."""
    return (
        "10 LET a = 1\n"
        "20 GOSUB 100\n"
        "30 LET a = a * 10\n"
        "40 END\n"
        "100 LET a = a + 1\n"
        "110 RETURN\n"
    )
