"""
basiceval Runtime Engine

This module provides the core runtime for executing BASIC programs:
- Interpreter: Public entry point (load, run, variables, trace)
- Executor: Program-counter loop dispatching statements
- ExpressionEvaluator: Precedence evaluation of expressions
- ProgramLoader: Line table and DATA literal pool
- Value: Tagged Number / String / Error values
- VariableStore, DataPool: Runtime environment
"""

from basiceval.runtime.interpreter import Interpreter, RunConfig, RunResult
from basiceval.runtime.executor import Executor
from basiceval.runtime.evaluator import ExpressionEvaluator
from basiceval.runtime.loader import ProgramLoader, Program, Line
from basiceval.runtime.state import HaltState, LoopFrame, ControlStacks
from basiceval.runtime.values import Value, ValueType
from basiceval.runtime.environment import VariableStore, DataPool

__all__ = [
    "Interpreter",
    "RunConfig",
    "RunResult",
    "Executor",
    "ExpressionEvaluator",
    "ProgramLoader",
    "Program",
    "Line",
    "HaltState",
    "LoopFrame",
    "ControlStacks",
    "Value",
    "ValueType",
    "VariableStore",
    "DataPool",
]
