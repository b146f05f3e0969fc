"""Reference-solution runner; produces expected-output and reference timelines."""

from __future__ import annotations

import dataclasses
import logging

from . import constants
from .orchestrator import validate_code
from .playback import PlaybackController, StepSource
from .sandbox import execute_sandboxed
from .sandbox_types import ExecutionOptions, SandboxErrorKind, SandboxResult
from .testing_types import CodeValidation, TestCase

logger = logging.getLogger(__name__)


def validate_reference_solution(test_case: TestCase) -> CodeValidation:
    if not test_case.reference_solution.strip():
        return CodeValidation(
            False, constants.MSG_REFERENCE_MISSING, SandboxErrorKind.NO_FUNCTION_FOUND
        )
    return validate_code(test_case.reference_solution)


def run_reference_solution(
    test_case: TestCase, options: ExecutionOptions | None = None
) -> SandboxResult:
    """Run the test case's reference solution with assertions switched off.

    A failed run comes back with an empty step list.
    """
    if not test_case.reference_solution.strip():
        return SandboxResult(
            success=False,
            error=constants.MSG_REFERENCE_MISSING,
            error_kind=SandboxErrorKind.NO_FUNCTION_FOUND,
        )
    options = dataclasses.replace(options or ExecutionOptions(), run_assertions=False)
    result = execute_sandboxed(test_case.reference_solution, test_case, options)
    if not result.success:
        logger.warning(
            "Reference solution for %s failed: %s", test_case.id, result.error
        )
        return dataclasses.replace(result, steps=[])
    return result


def populate_playback(
    controller: PlaybackController,
    source: StepSource | str,
    test_case: TestCase,
    options: ExecutionOptions | None = None,
) -> bool:
    """Fill one of the controller's timelines from the reference solution."""
    result = run_reference_solution(test_case, options)
    if result.success:
        controller.set_steps(source, result.steps)
        return True
    controller.cancel_population(source)
    return False


class ReferencePopulator:
    """``on_needs_population`` callback bound to one controller and test case."""

    def __init__(
        self,
        controller: PlaybackController,
        test_case: TestCase,
        options: ExecutionOptions | None = None,
    ):
        self.controller = controller
        self.test_case = test_case
        self.options = options

    def __call__(self, source: StepSource) -> None:
        populate_playback(self.controller, source, self.test_case, self.options)
