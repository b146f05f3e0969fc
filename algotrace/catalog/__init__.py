"""Built-in scenario catalog, keyed by structure kind and difficulty."""

from __future__ import annotations

from ..step_types import StructureKind
from ..testing_types import Difficulty, TestCase
from .binary_tree import BINARY_TREE_TESTS
from .graph import GRAPH_TESTS
from .hash_map import HASH_MAP_TESTS
from .linked_list import LINKED_LIST_TESTS
from .stack_queue import STACK_QUEUE_TESTS

ALL_TEST_CASES: tuple[TestCase, ...] = (
    *STACK_QUEUE_TESTS,
    *LINKED_LIST_TESTS,
    *BINARY_TREE_TESTS,
    *GRAPH_TESTS,
    *HASH_MAP_TESTS,
)


def get_test_cases(
    kind: StructureKind | str | None = None,
    difficulty: Difficulty | str | None = None,
) -> list[TestCase]:
    """Test cases matching ``kind`` and ``difficulty``; empty when none match."""
    kind = StructureKind(kind) if kind is not None else None
    difficulty = Difficulty(difficulty) if difficulty is not None else None
    return [
        case
        for case in ALL_TEST_CASES
        if (kind is None or case.structure == kind)
        and (difficulty is None or case.difficulty == difficulty)
    ]


def get_test_case(test_id: str) -> TestCase:
    for case in ALL_TEST_CASES:
        if case.id == test_id:
            return case
    raise KeyError(f"Unknown test case: {test_id}")
