"""Linked-list scenarios; every case starts from the same five-node list."""

from __future__ import annotations

from ..step_types import StructureKind
from ..testing_types import Difficulty, TestCase

LINKED_LIST_INPUT = [10, 20, 30, 40, 50]

LINKED_LIST_TESTS = [
    TestCase(
        id="linkedlist-find-easy",
        name="Find Element in List",
        difficulty=Difficulty.EASY,
        structure=StructureKind.LINKED_LIST,
        description="Search the list for a target value and return it when present.",
        initial_data=LINKED_LIST_INPUT,
        additional_args=[30],
        expected_output=30,
        assertions=(
            "expect(result).to_be(30)\n"
            "expect(len([s for s in steps if s.type == 'find'])).to_be_greater_than(0)\n"
        ),
        reference_solution='''\
def find_element(linked_list, target):
    index = linked_list.find(target)
    if index == -1:
        return None
    return target
''',
        skeleton_code='''\
def find_element(linked_list, target):
    # Use linked_list.find(target); it returns the index or -1.
    return None
''',
        hints=[
            "linked_list.find(value) walks the list node by node",
            "Return the target itself when it is found",
        ],
        acceptance_criteria=["Returns 30 for the sample list"],
    ),
    TestCase(
        id="linkedlist-reverse-medium",
        name="Reverse Linked List",
        difficulty=Difficulty.MEDIUM,
        structure=StructureKind.LINKED_LIST,
        description="Reverse the list in place and return its values.",
        initial_data=LINKED_LIST_INPUT,
        expected_output=[50, 40, 30, 20, 10],
        assertions="expect(result).to_equal([50, 40, 30, 20, 10])",
        reference_solution='''\
def reverse_list(linked_list):
    linked_list.reverse()
    return linked_list.to_list()
''',
        skeleton_code='''\
def reverse_list(linked_list):
    # Reverse the list, then return linked_list.to_list().
    return linked_list.to_list()
''',
        hints=[
            "Reversal re-points each node's next at its predecessor",
            "linked_list.reverse() records one step per node",
        ],
        acceptance_criteria=["The values come back in reverse order"],
    ),
    TestCase(
        id="linkedlist-cycle-hard",
        name="Detect and Handle Cycle",
        difficulty=Difficulty.HARD,
        structure=StructureKind.LINKED_LIST,
        description="Detect whether the list contains a cycle.",
        initial_data=LINKED_LIST_INPUT,
        expected_output=False,
        assertions=(
            "expect(result).to_be(False)\n"
            "expect(len([s for s in steps if s.type == 'hasCycle'])).to_be_greater_than(0)\n"
        ),
        reference_solution='''\
def detect_cycle(linked_list):
    return linked_list.has_cycle()
''',
        skeleton_code='''\
def detect_cycle(linked_list):
    # Floyd's algorithm: move one pointer by one node, another by two.
    return False
''',
        hints=[
            "A fast and a slow pointer meet only if there is a cycle",
            "linked_list.has_cycle() implements Floyd's algorithm",
        ],
        acceptance_criteria=["Returns False for an acyclic list"],
    ),
]
