"""Stack and queue scenarios."""

from __future__ import annotations

from ..step_types import StructureKind
from ..testing_types import Difficulty, TestCase

BALANCED_REFERENCE = '''\
def is_balanced(text):
    stack = create_tracked_stack()
    for char in text:
        if char == "(":
            stack.push(char)
        elif char == ")":
            if stack.is_empty():
                return False
            stack.pop()
    return stack.is_empty()
'''

BALANCED_SKELETON = '''\
def is_balanced(text):
    stack = create_tracked_stack()
    # Push each "(" and pop on each ")", checking for an empty stack first.
    # The text is balanced when the stack ends up empty.
    return False
'''

QUEUE_BASIC_REFERENCE = '''\
def process_queue(values):
    queue = create_tracked_queue()
    for value in values:
        queue.enqueue(value)
    result = []
    while not queue.is_empty():
        result.append(queue.dequeue())
    return result
'''

QUEUE_BASIC_SKELETON = '''\
def process_queue(values):
    queue = create_tracked_queue()
    result = []
    # Enqueue every value, then dequeue them all into result.
    return result
'''

REVERSE_K_REFERENCE = '''\
def reverse_first_k(values, k):
    queue = create_tracked_queue()
    stack = create_tracked_stack()
    for value in values:
        queue.enqueue(value)
    for _ in range(k):
        stack.push(queue.dequeue())
    while not stack.is_empty():
        queue.enqueue(stack.pop())
    for _ in range(queue.size() - k):
        queue.enqueue(queue.dequeue())
    return queue.to_list()
'''

REVERSE_K_SKELETON = '''\
def reverse_first_k(values, k):
    queue = create_tracked_queue()
    stack = create_tracked_stack()
    # 1. Enqueue all values.
    # 2. Move the first k values onto the stack.
    # 3. Pop them back into the queue.
    # 4. Rotate the remaining values to the back.
    return queue.to_list()
'''

INTERLEAVE_REFERENCE = '''\
def interleave_halves(values):
    queue = create_tracked_queue()
    first_half = create_tracked_queue()
    for value in values:
        queue.enqueue(value)
    half = queue.size() // 2
    for _ in range(half):
        first_half.enqueue(queue.dequeue())
    while not first_half.is_empty():
        queue.enqueue(first_half.dequeue())
        queue.enqueue(queue.dequeue())
    return queue.to_list()
'''

INTERLEAVE_SKELETON = '''\
def interleave_halves(values):
    queue = create_tracked_queue()
    # Split the queue into two halves, then alternate between them.
    return queue.to_list()
'''

MIN_STACK_REFERENCE = '''\
def min_stack(values):
    stack = create_tracked_stack()
    minimums = create_tracked_stack()
    for value in values:
        stack.push(value)
        if minimums.is_empty() or value <= minimums.peek():
            minimums.push(value)
    return minimums.peek()
'''

MIN_STACK_SKELETON = '''\
def min_stack(values):
    stack = create_tracked_stack()
    minimums = create_tracked_stack()
    # Keep a second stack whose top is always the current minimum.
    return None
'''

STACK_QUEUE_TESTS = [
    TestCase(
        id="stack-balanced-parentheses-easy",
        name="Balanced Parentheses Checker",
        difficulty=Difficulty.EASY,
        structure=StructureKind.STACK,
        description="Check whether a string of parentheses is balanced using a stack.",
        initial_data="(()())",
        expected_output=True,
        assertions="expect(result).to_be(True)",
        reference_solution=BALANCED_REFERENCE,
        skeleton_code=BALANCED_SKELETON,
        hints=[
            "Use a stack to keep track of opening parentheses",
            "Push '(' onto the stack, pop when you see ')'",
            "The string is balanced if the stack is empty at the end",
        ],
        acceptance_criteria=[
            "Returns True for balanced strings like '(()())'",
            "Returns False for unbalanced strings",
            "Stack operations are captured for visualization",
        ],
    ),
    TestCase(
        id="queue-basic-operations-easy",
        name="Basic Queue Operations",
        difficulty=Difficulty.EASY,
        structure=StructureKind.QUEUE,
        description="Enqueue every value and dequeue them all in FIFO order.",
        initial_data=[1, 2, 3, 4, 5],
        expected_output=[1, 2, 3, 4, 5],
        assertions=(
            "expect(result).to_equal(expected)\n"
            "expect(len([s for s in steps if s.type == 'enqueue'])).to_be(5)\n"
        ),
        reference_solution=QUEUE_BASIC_REFERENCE,
        skeleton_code=QUEUE_BASIC_SKELETON,
        hints=[
            "A queue is first-in, first-out",
            "Use queue.enqueue(value) and queue.dequeue()",
        ],
        acceptance_criteria=["Values come out in the order they went in"],
    ),
    TestCase(
        id="queue-reverse-first-k-medium",
        name="Reverse First K Elements",
        difficulty=Difficulty.MEDIUM,
        structure=StructureKind.QUEUE,
        description=(
            "Reverse the first K elements of a queue while keeping the order "
            "of the remaining elements."
        ),
        initial_data=[1, 2, 3, 4, 5],
        additional_args=[3],
        expected_output=[3, 2, 1, 4, 5],
        assertions=(
            "expect(result).to_equal([3, 2, 1, 4, 5])\n"
            "expect(len([s for s in steps if s.type == 'enqueue'])).to_be_greater_than(0)\n"
            "expect(len([s for s in steps if s.type == 'dequeue'])).to_be_greater_than(0)\n"
        ),
        reference_solution=REVERSE_K_REFERENCE,
        skeleton_code=REVERSE_K_SKELETON,
        hints=[
            "A stack reverses order",
            "After reversing, move the remaining size - k elements to the back",
        ],
        acceptance_criteria=["The first k values are reversed", "The rest keep their order"],
    ),
    TestCase(
        id="queue-interleave-halves-hard",
        name="Interleave Two Halves of Queue",
        difficulty=Difficulty.HARD,
        structure=StructureKind.QUEUE,
        description="Interleave the first half of the queue with the second half.",
        initial_data=[1, 2, 3, 4, 5, 6],
        expected_output=[1, 4, 2, 5, 3, 6],
        assertions="expect(result).to_equal([1, 4, 2, 5, 3, 6])",
        reference_solution=INTERLEAVE_REFERENCE,
        skeleton_code=INTERLEAVE_SKELETON,
        hints=[
            "Move the first half into a second queue",
            "Alternate: one from the first half, one from the second",
        ],
        acceptance_criteria=["Values alternate between the two halves"],
    ),
    TestCase(
        id="min-stack-hard",
        name="Min Stack with O(1) getMin",
        difficulty=Difficulty.HARD,
        structure=StructureKind.STACK,
        description="Track the minimum of a stack in constant time using an auxiliary stack.",
        initial_data=[5, 2, 8, 1, 9],
        expected_output=1,
        assertions=(
            "expect(result).to_be(1)\n"
            "expect(len([s for s in steps if s.type == 'push'])).to_be_greater_than_or_equal(5)\n"
        ),
        reference_solution=MIN_STACK_REFERENCE,
        skeleton_code=MIN_STACK_SKELETON,
        hints=[
            "Keep a second stack of minimums",
            "Push onto the minimum stack when the value is <= its top",
        ],
        acceptance_criteria=["Returns the smallest value pushed"],
    ),
]
