"""Binary-search-tree scenarios."""

from __future__ import annotations

from ..step_types import StructureKind
from ..testing_types import Difficulty, TestCase

TREE_INPUT = [50, 30, 70, 20, 40, 60, 80]

BALANCE_REFERENCE = '''\
def balance_bst(tree):
    values = tree.inorder_traversal()
    balanced = create_tracked_binary_tree()

    def build(low, high):
        if low > high:
            return
        middle = (low + high) // 2
        balanced.insert(values[middle])
        build(low, middle - 1)
        build(middle + 1, high)

    build(0, len(values) - 1)
    balanced.height()
    return balanced.to_list()
'''

BINARY_TREE_TESTS = [
    TestCase(
        id="binarytree-traversal-easy",
        name="In-Order Traversal",
        difficulty=Difficulty.EASY,
        structure=StructureKind.BINARY_TREE,
        description="Return the tree's values in sorted order with an in-order traversal.",
        initial_data=TREE_INPUT,
        expected_output=[20, 30, 40, 50, 60, 70, 80],
        assertions="expect(result).to_equal(expected)",
        reference_solution='''\
def inorder(tree):
    return tree.inorder_traversal()
''',
        skeleton_code='''\
def inorder(tree):
    # Visit left subtree, node, then right subtree.
    return []
''',
        hints=[
            "In-order traversal of a BST yields sorted values",
            "tree.inorder_traversal() records the visit order",
        ],
        acceptance_criteria=["Returns the values in ascending order"],
    ),
    TestCase(
        id="binarytree-validate-medium",
        name="Validate BST Property",
        difficulty=Difficulty.MEDIUM,
        structure=StructureKind.BINARY_TREE,
        description="Check that every node respects the binary-search-tree ordering.",
        initial_data=TREE_INPUT,
        expected_output=True,
        assertions="expect(result).to_be(True)",
        reference_solution='''\
def is_valid_bst(tree):
    return tree.validate()
''',
        skeleton_code='''\
def is_valid_bst(tree):
    # Every left descendant must be smaller, every right descendant larger.
    return False
''',
        hints=[
            "Carry a (low, high) window down the recursion",
            "tree.validate() performs the full check",
        ],
        acceptance_criteria=["Returns True for a well-formed tree"],
    ),
    TestCase(
        id="binarytree-balance-hard",
        name="Balance an Unbalanced BST",
        difficulty=Difficulty.HARD,
        structure=StructureKind.BINARY_TREE,
        description="Given a right-skewed BST, build a balanced BST with the same values.",
        initial_data=[1, 2, 3, 4, 5, 6, 7],
        expected_output=[1, 2, 3, 4, 5, 6, 7],
        assertions=(
            "expect(sorted(result)).to_equal(expected)\n"
            "expect(result).to_have_length(7)\n"
        ),
        reference_solution=BALANCE_REFERENCE,
        skeleton_code='''\
def balance_bst(tree):
    values = tree.inorder_traversal()
    balanced = create_tracked_binary_tree()
    # Insert the middle value first, then recurse on each half.
    return balanced.to_list()
''',
        hints=[
            "An in-order traversal gives the values sorted",
            "Inserting the median first keeps both halves even",
        ],
        acceptance_criteria=[
            "The new tree holds the same seven values",
            "Its height is 2 instead of 6",
        ],
    ),
]
