"""Tests for the reference-solution runner and the built-in catalog solutions."""

import pytest

from algotrace.catalog import ALL_TEST_CASES, get_test_case
from algotrace.orchestrator import run_test, validate_code
from algotrace.playback import PlaybackController, PlaybackMode, StepSource
from algotrace.reference import (
    ReferencePopulator,
    populate_playback,
    run_reference_solution,
    validate_reference_solution,
)
from algotrace.sandbox_types import SandboxErrorKind
from algotrace.step_types import StructureKind
from algotrace.testing_types import Difficulty, TestCase


def _make_case(reference_solution, assertions="assert False"):
    return TestCase(
        id="custom",
        name="custom",
        difficulty=Difficulty.EASY,
        structure=StructureKind.STACK,
        initial_data=[1, 2],
        assertions=assertions,
        reference_solution=reference_solution,
    )


PUSH_THEN_FAIL = """\
def f(values):
    stack = create_tracked_stack()
    stack.push(1)
    raise ValueError("broken reference")
"""


class TestCatalogSolutions:
    @pytest.mark.parametrize("case", ALL_TEST_CASES, ids=lambda c: c.id)
    def test_reference_passes_its_own_assertions(self, case, inline_options):
        result = run_test(case.reference_solution, case, inline_options)

        assert result.passed, result.error

    @pytest.mark.parametrize("case", ALL_TEST_CASES, ids=lambda c: c.id)
    def test_skeleton_passes_validation(self, case):
        assert validate_code(case.skeleton_code).valid


class TestRunReferenceSolution:
    def test_produces_steps(self, inline_options):
        result = run_reference_solution(
            get_test_case("stack-balanced-parentheses-easy"), inline_options
        )

        assert result.success is True
        assert result.return_value is True
        assert {s.type for s in result.steps} == {"push", "pop"}

    def test_assertions_are_not_run(self, inline_options):
        case = _make_case("def f(values):\n    return 1\n")

        assert run_reference_solution(case, inline_options).success is True

    def test_failure_discards_steps(self, inline_options):
        result = run_reference_solution(_make_case(PUSH_THEN_FAIL), inline_options)

        assert result.success is False
        assert result.steps == []
        assert "broken reference" in result.error

    def test_missing_reference(self, inline_options):
        result = run_reference_solution(_make_case("  "), inline_options)

        assert result.error_kind == SandboxErrorKind.NO_FUNCTION_FOUND
        assert validate_reference_solution(_make_case("")).valid is False

    def test_validate_reference_solution(self):
        case = get_test_case("graph-path-hard")

        assert validate_reference_solution(case).valid is True


class TestPopulatePlayback:
    def test_success_fills_the_timeline(self, inline_options):
        controller = PlaybackController()
        case = get_test_case("linkedlist-reverse-medium")

        assert populate_playback(controller, StepSource.REFERENCE, case, inline_options)
        assert len(controller.steps(StepSource.REFERENCE)) == 6

    def test_failure_clears_the_in_flight_marker(self, inline_options):
        controller = PlaybackController()
        controller.set_mode(PlaybackMode.REFERENCE)

        populated = populate_playback(
            controller, StepSource.REFERENCE, _make_case(PUSH_THEN_FAIL), inline_options
        )

        assert populated is False
        assert not controller.is_population_pending(StepSource.REFERENCE)
        assert controller.active_steps == []

    def test_populator_as_controller_callback(self, inline_options):
        controller = PlaybackController()
        case = get_test_case("binarytree-traversal-easy")
        controller.on_needs_population = ReferencePopulator(controller, case, inline_options)

        controller.set_mode(PlaybackMode.EXPECTED_OUTPUT)

        steps = controller.active_steps
        assert [s.type for s in steps] == ["inorderTraversal"]
        assert steps[0].metadata_dict()["visitOrder"] == [20, 30, 40, 50, 60, 70, 80]
