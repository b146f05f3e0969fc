"""Scenario and test-result types shared by the orchestrator and catalog."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel

from .sandbox_types import ConsoleRecord, SandboxErrorKind
from .step_types import OperationStep, StructureKind


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class Scenario(BaseModel):
    """Input, expected value and assertion statements for one run.

    ``assertions`` is Python source executed after the entry function
    returns, with ``result``, ``expected``, ``steps``, ``input`` and
    ``expect`` in scope.
    """

    structure: StructureKind
    initial_data: Any = None
    additional_args: list[Any] = []
    expected_output: Any = None
    assertions: str = ""


class TestCase(Scenario):
    __test__ = False

    id: str
    name: str
    difficulty: Difficulty
    description: str = ""
    reference_solution: str = ""
    skeleton_code: str = ""
    hints: list[str] = []
    acceptance_criteria: list[str] = []


@dataclass(frozen=True)
class CodeValidation:
    valid: bool
    error: str | None = None
    error_kind: SandboxErrorKind | None = None


@dataclass(frozen=True)
class TestResult:
    """One (learner code, test case) outcome."""

    __test__ = False

    test_id: str
    passed: bool
    error: str | None = None
    error_kind: SandboxErrorKind | None = None
    execution_time_ms: float = 0.0
    steps: list[OperationStep] = field(default_factory=list)
    console_records: list[ConsoleRecord] = field(default_factory=list)
