"""Binary search tree whose steps always carry the whole tree shape.

Every walk over the nodes uses an explicit stack, so a degenerate tree
built from sorted input is bounded by memory rather than by the
interpreter's recursion limit.
"""

from __future__ import annotations

import copy
from collections import deque
from typing import Any, Iterable, Iterator

from ..step_types import StepSink, StructureKind
from ._base import TrackedStructure

_CHILD_SIDES = ("left", "right")


class TreeNode:
    __slots__ = ("value", "left", "right")

    def __init__(self, value: Any):
        self.value = value
        self.left: TreeNode | None = None
        self.right: TreeNode | None = None

    def __repr__(self) -> str:
        return f"TreeNode({self.value!r})"


def _hierarchy(root: TreeNode | None) -> dict[str, Any] | None:
    """Nested ``{value, left, right}`` dicts holding copies of the node values."""
    if root is None:
        return None

    def shape(node: TreeNode) -> dict[str, Any]:
        value = node.value
        if not isinstance(value, (str, int, float, type(None))):
            value = copy.deepcopy(value)
        return {"value": value, "left": None, "right": None}

    top = shape(root)
    pending = [(root, top)]
    while pending:
        node, out = pending.pop()
        for side in _CHILD_SIDES:
            child = getattr(node, side)
            if child is not None:
                out[side] = shape(child)
                pending.append((child, out[side]))
    return top


def _inorder(root: TreeNode | None) -> Iterator[TreeNode]:
    stack: list[TreeNode] = []
    node = root
    while stack or node is not None:
        while node is not None:
            stack.append(node)
            node = node.left
        node = stack.pop()
        yield node
        node = node.right


def _preorder(root: TreeNode | None) -> Iterator[TreeNode]:
    stack = [root] if root is not None else []
    while stack:
        node = stack.pop()
        yield node
        if node.right is not None:
            stack.append(node.right)
        if node.left is not None:
            stack.append(node.left)


def _postorder(root: TreeNode | None) -> list[TreeNode]:
    # node-right-left preorder, reversed
    out: list[TreeNode] = []
    stack = [root] if root is not None else []
    while stack:
        node = stack.pop()
        out.append(node)
        if node.left is not None:
            stack.append(node.left)
        if node.right is not None:
            stack.append(node.right)
    out.reverse()
    return out


class TrackedBinaryTree(TrackedStructure):
    """Binary search tree rejecting duplicate keys.

    Every step repeats the hierarchical snapshot in ``treeStructure`` so a
    tree renderer never needs the generic ``result`` field.
    """

    kind = StructureKind.BINARY_TREE

    def __init__(self, sink: StepSink | None = None):
        super().__init__(sink)
        self.root: TreeNode | None = None
        self._count = 0

    @classmethod
    def from_values(cls, values: Iterable[Any], sink: StepSink | None = None):
        tree = cls()
        for value in values:
            tree.insert(value)
        tree.attach(sink)
        return tree

    def _snapshot_copy(self) -> dict[str, Any] | None:
        # _hierarchy already copies every value
        return _hierarchy(self.root)

    def _emit(self, step_type: str, args: tuple, **fields: Any) -> None:
        if self.sink is None:
            return
        fields = copy.deepcopy(fields)
        fields["tree_structure"] = _hierarchy(self.root)
        self._record(step_type, args, fields, self._snapshot_copy())

    def insert(self, value: Any) -> bool:
        if self.root is None:
            self.root = TreeNode(value)
            self._count += 1
            self._emit("insert", (value,), value=value, inserted=True, is_root=True)
            return True
        path = []
        node = self.root
        while True:
            path.append(node.value)
            if value == node.value:
                self._emit(
                    "insert", (value,), value=value, inserted=False, duplicate=True
                )
                return False
            direction = "left" if value < node.value else "right"
            child = getattr(node, direction)
            if child is None:
                setattr(node, direction, TreeNode(value))
                self._count += 1
                self._emit(
                    "insert",
                    (value,),
                    value=value,
                    inserted=True,
                    parent=node.value,
                    direction=direction,
                    path=path,
                )
                return True
            node = child

    def search(self, value: Any) -> bool:
        path = []
        node = self.root
        while node is not None:
            path.append(node.value)
            if value == node.value:
                self._emit("search", (value,), value=value, found=True, path=path)
                return True
            node = node.left if value < node.value else node.right
        self._emit("search", (value,), value=value, found=False, path=path)
        return False

    def delete(self, value: Any) -> bool:
        """Remove ``value`` and emit one step naming the case that fired.

        The two-children case copies the in-order successor (minimum of the
        right subtree) into the node and then unlinks the successor node.
        """
        parent = None
        node = self.root
        while node is not None and node.value != value:
            parent = node
            node = node.left if value < node.value else node.right
        if node is None:
            self._emit("delete", (value,), value=value, deleted=False)
            return False

        if node.left is not None and node.right is not None:
            successor_parent = node
            successor = node.right
            while successor.left is not None:
                successor_parent = successor
                successor = successor.left
            node.value = successor.value
            # successor has no left child; splice its right subtree up
            if successor_parent is node:
                successor_parent.right = successor.right
            else:
                successor_parent.left = successor.right
            self._count -= 1
            self._emit(
                "delete",
                (value,),
                value=value,
                deleted=True,
                case="two-children",
                successor=successor.value,
            )
            return True

        if node.left is None and node.right is None:
            replacement = None
            fields = {"case": "leaf"}
        elif node.left is not None:
            replacement = node.left
            fields = {"case": "one-child", "child": "left"}
        else:
            replacement = node.right
            fields = {"case": "one-child", "child": "right"}

        if parent is None:
            self.root = replacement
        elif parent.left is node:
            parent.left = replacement
        else:
            parent.right = replacement
        self._count -= 1
        self._emit("delete", (value,), value=value, deleted=True, **fields)
        return True

    def inorder_traversal(self) -> list[Any]:
        out = [node.value for node in _inorder(self.root)]
        self._emit(
            "inorderTraversal", (), traversal_type="inorder", visit_order=list(out)
        )
        return out

    def preorder_traversal(self) -> list[Any]:
        out = [node.value for node in _preorder(self.root)]
        self._emit(
            "preorderTraversal", (), traversal_type="preorder", visit_order=list(out)
        )
        return out

    def postorder_traversal(self) -> list[Any]:
        out = [node.value for node in _postorder(self.root)]
        self._emit(
            "postorderTraversal", (), traversal_type="postorder", visit_order=list(out)
        )
        return out

    def _is_bst(self) -> bool:
        pending: list[tuple[TreeNode | None, Any, Any]] = [(self.root, None, None)]
        while pending:
            node, low, high = pending.pop()
            if node is None:
                continue
            if low is not None and node.value <= low:
                return False
            if high is not None and node.value >= high:
                return False
            pending.append((node.left, low, node.value))
            pending.append((node.right, node.value, high))
        return True

    def validate(self) -> bool:
        is_valid = self._is_bst()
        self._emit("validate", (), is_valid=is_valid)
        return is_valid

    def _height(self) -> int:
        height = -1
        level = deque([self.root] if self.root is not None else [])
        while level:
            height += 1
            for _ in range(len(level)):
                node = level.popleft()
                level.extend(c for c in (node.left, node.right) if c is not None)
        return height

    def height(self) -> int:
        """Edge count of the longest root-to-leaf path; -1 for an empty tree."""
        result = self._height()
        self._emit("height", (), height=result)
        return result

    def clear(self) -> None:
        self.root = None
        self._count = 0
        self._emit("clear", (), cleared=True)

    def size(self) -> int:
        return self._count

    def snapshot(self) -> dict[str, Any] | None:
        return _hierarchy(self.root)

    def to_list(self) -> list[Any]:
        """In-order values without emitting a traversal step."""
        return [node.value for node in _inorder(self.root)]
