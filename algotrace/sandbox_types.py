"""Sandbox data types (pure data, no business logic)."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from . import constants
from .step_types import OperationStep


class SandboxErrorKind(str, Enum):
    NO_FUNCTION_FOUND = "NoFunctionFound"
    SYNTAX_ERROR = "SyntaxError"
    INFINITE_LOOP = "InfiniteLoopDetected"
    TIMEOUT = "Timeout"
    ASSERTION_FAILED = "AssertionFailed"
    RUNTIME_EXCEPTION = "RuntimeException"
    SANDBOX_CRASHED = "SandboxCrashed"

    @property
    def never_finished(self) -> bool:
        """True when the learner's code did not run to completion in time."""
        return self in (SandboxErrorKind.INFINITE_LOOP, SandboxErrorKind.TIMEOUT)


@dataclass(frozen=True)
class ExecutionOptions:
    """Groups sandbox execution configuration.

    ``isolated`` runs learner code in a worker process that is killed when
    the deadline passes; without it the code runs in the caller's process
    and only the loop guard bounds its running time.
    """

    timeout_ms: int = constants.DEFAULT_TIMEOUT_MS
    max_loop_iterations: int = constants.DEFAULT_MAX_LOOP_ITERATIONS
    capture_steps: bool = True
    capture_console_logs: bool = True
    isolated: bool = True
    run_assertions: bool = True
    recursion_limit: int = constants.DEFAULT_RECURSION_LIMIT

    def __post_init__(self):
        if not constants.MIN_TIMEOUT_MS <= self.timeout_ms <= constants.MAX_TIMEOUT_MS:
            raise ValueError(
                f"timeout_ms must be between {constants.MIN_TIMEOUT_MS} and "
                f"{constants.MAX_TIMEOUT_MS}, got {self.timeout_ms}"
            )
        if not (
            constants.MIN_LOOP_ITERATIONS
            <= self.max_loop_iterations
            <= constants.MAX_LOOP_ITERATIONS
        ):
            raise ValueError(
                f"max_loop_iterations must be between {constants.MIN_LOOP_ITERATIONS} "
                f"and {constants.MAX_LOOP_ITERATIONS}, got {self.max_loop_iterations}"
            )


@dataclass(frozen=True)
class ConsoleRecord:
    level: str
    args: tuple = ()
    timestamp: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {"level": self.level, "args": list(self.args), "timestamp": self.timestamp}


@dataclass(frozen=True)
class SandboxResult:
    """Outcome of one sandbox invocation. Produced once, never mutated."""

    success: bool
    steps: list[OperationStep] = field(default_factory=list)
    console_records: list[ConsoleRecord] = field(default_factory=list)
    error: str | None = None
    error_kind: SandboxErrorKind | None = None
    execution_time_ms: float = 0.0
    return_value: Any = None
