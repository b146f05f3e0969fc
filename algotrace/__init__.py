"""Instrumented execution and step capture for data-structure exercises."""

from .step_types import OperationStep, StepRecorder, StructureKind  # noqa: F401
from .structures import (  # noqa: F401
    TrackedBinaryTree,
    TrackedGraph,
    TrackedHashMap,
    TrackedLinkedList,
    TrackedQueue,
    TrackedStack,
    create_structure,
)
from .sandbox import execute_sandboxed  # noqa: F401
from .sandbox_types import ExecutionOptions, SandboxErrorKind, SandboxResult  # noqa: F401
from .orchestrator import (  # noqa: F401
    run_test,
    run_tests,
    run_tests_by_difficulty,
    validate_code,
)
from .playback import PlaybackController, PlaybackMode, StepSource  # noqa: F401
from .reference import run_reference_solution  # noqa: F401
