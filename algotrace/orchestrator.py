"""Test orchestrator: static code gate plus single and batch scenario runs."""

from __future__ import annotations

import logging
from typing import Iterable, Iterator

import tree_sitter_language_pack

from . import constants
from .sandbox import execute_sandboxed
from .sandbox_types import ExecutionOptions, SandboxErrorKind
from .testing_types import CodeValidation, Difficulty, TestCase, TestResult

logger = logging.getLogger(__name__)

_SKIPPED_NODE_TYPES = frozenset({"string", "comment"})
_BRACKET_PAIRS = (
    ("{", "}", constants.MSG_UNBALANCED_BRACES),
    ("[", "]", constants.MSG_UNBALANCED_BRACKETS),
    ("(", ")", constants.MSG_UNBALANCED_PARENS),
)


def _walk(node) -> Iterator:
    """Pre-order walk that does not descend into strings or comments."""
    yield node
    if node.type in _SKIPPED_NODE_TYPES:
        return
    for child in node.children:
        yield from _walk(child)


def _is_lambda_binding(node) -> bool:
    if node.type != "assignment":
        return False
    right = node.child_by_field_name("right")
    return right is not None and right.type == "lambda"


def _has_function(nodes: list) -> bool:
    # a bare "def" token still counts when the definition itself failed to parse
    return any(
        node.type == "function_definition"
        or (node.type == "def" and not node.children)
        or _is_lambda_binding(node)
        for node in nodes
    )


def _unbalanced_message(nodes: list) -> str | None:
    tokens = [
        node.type
        for node in nodes
        if not node.children
        and not node.is_missing
        and node.type not in _SKIPPED_NODE_TYPES
    ]
    for opener, closer, message in _BRACKET_PAIRS:
        depth = 0
        for token in tokens:
            if token == opener:
                depth += 1
            elif token == closer:
                depth -= 1
                if depth < 0:
                    return message
        if depth != 0:
            return message
    return None


class CodeValidator:
    """Cheap pre-flight gate run before any learner code is executed.

    Parses with an error-tolerant tree-sitter grammar, so a syntax error
    still yields a tree whose leaves can be inspected.
    """

    def __init__(self, language: str = constants.LEARNER_LANGUAGE, parser=None):
        self._parser = parser or tree_sitter_language_pack.get_parser(language)

    def validate(self, source: str) -> CodeValidation:
        if not source or not source.strip():
            return CodeValidation(
                False, constants.MSG_CODE_EMPTY, SandboxErrorKind.SYNTAX_ERROR
            )
        tree = self._parser.parse(source.encode("utf-8"))
        nodes = list(_walk(tree.root_node))
        if not _has_function(nodes):
            return CodeValidation(
                False, constants.MSG_NO_FUNCTION, SandboxErrorKind.NO_FUNCTION_FOUND
            )
        message = _unbalanced_message(nodes)
        if message is not None:
            return CodeValidation(False, message, SandboxErrorKind.SYNTAX_ERROR)
        return CodeValidation(True)


def validate_code(source: str, validator: CodeValidator | None = None) -> CodeValidation:
    return (validator or CodeValidator()).validate(source)


def run_test(
    source: str,
    test_case: TestCase,
    options: ExecutionOptions | None = None,
    validator: CodeValidator | None = None,
) -> TestResult:
    """Validate ``source`` and, if it passes, run it against ``test_case``.

    Args:
        source: Learner source text.
        test_case: The scenario to run, including its assertions.
        options: Sandbox options; defaults to ``ExecutionOptions()``.
        validator: Pre-flight gate; defaults to a Python grammar validator.

    Returns:
        A TestResult. Validation and execution failures are reported in it,
        never raised.
    """
    try:
        validation = validate_code(source, validator)
    except Exception as exc:
        logger.exception("Validation failed for %s", test_case.id)
        return TestResult(
            test_id=test_case.id,
            passed=False,
            error=f"{type(exc).__name__}: {exc}",
            error_kind=SandboxErrorKind.SANDBOX_CRASHED,
        )
    if not validation.valid:
        logger.info("Test %s rejected by validation: %s", test_case.id, validation.error)
        return TestResult(
            test_id=test_case.id,
            passed=False,
            error=validation.error,
            error_kind=validation.error_kind,
        )

    result = execute_sandboxed(source, test_case, options)
    return TestResult(
        test_id=test_case.id,
        passed=result.success,
        error=result.error,
        error_kind=result.error_kind,
        execution_time_ms=result.execution_time_ms,
        steps=result.steps,
        console_records=result.console_records,
    )


def run_tests(
    source: str,
    test_cases: Iterable[TestCase],
    options: ExecutionOptions | None = None,
    validator: CodeValidator | None = None,
) -> list[TestResult]:
    """Run every test case in order; a failing case never stops the batch."""
    test_cases = list(test_cases)
    validator = validator or CodeValidator()
    logger.info("Running %d test cases", len(test_cases))
    results = [run_test(source, case, options, validator) for case in test_cases]
    logger.info(
        "Batch finished: %d/%d passed", sum(r.passed for r in results), len(results)
    )
    return results


def run_tests_by_difficulty(
    source: str,
    test_cases: Iterable[TestCase],
    difficulty: Difficulty | str,
    options: ExecutionOptions | None = None,
    validator: CodeValidator | None = None,
) -> list[TestResult]:
    difficulty = Difficulty(difficulty)
    selected = [case for case in test_cases if case.difficulty == difficulty]
    return run_tests(source, selected, options, validator)
