"""Instrumented structure variants and the kind-to-class factory."""

from __future__ import annotations

import copy
from typing import Any

from ..step_types import StepSink, StructureKind
from ._base import TrackedStructure
from .binary_tree import TrackedBinaryTree, TreeNode
from .graph import TrackedGraph
from .hash_map import TrackedHashMap, string_hash
from .linked_list import ListNode, TrackedLinkedList
from .queue import TrackedQueue
from .stack import TrackedStack

STRUCTURE_CLASSES: dict[StructureKind, type[TrackedStructure]] = {
    StructureKind.STACK: TrackedStack,
    StructureKind.QUEUE: TrackedQueue,
    StructureKind.LINKED_LIST: TrackedLinkedList,
    StructureKind.BINARY_TREE: TrackedBinaryTree,
    StructureKind.GRAPH: TrackedGraph,
    StructureKind.HASH_MAP: TrackedHashMap,
}


def create_structure(
    kind: StructureKind | str, sink: StepSink | None = None, **kwargs: Any
) -> TrackedStructure:
    """Instantiate an empty instrumented structure of the given kind.

    Raises:
        ValueError: if ``kind`` does not name one of the six structures.
    """
    return STRUCTURE_CLASSES[StructureKind(kind)](sink=sink, **kwargs)


def build_input(kind: StructureKind | str, initial_data: Any, sink: StepSink | None) -> Any:
    """Build the value handed to a learner's entry function.

    Stack, queue and hash-map scenarios receive a copy of the raw initial
    data; linked lists and trees receive a tracked instance loaded from a
    list; graphs receive a tracked graph loaded from
    ``{"vertices", "edges", "directed"}``. Loading never emits steps.
    """
    kind = StructureKind(kind)
    if kind == StructureKind.LINKED_LIST:
        return TrackedLinkedList.from_values(initial_data or [], sink=sink)
    if kind == StructureKind.BINARY_TREE:
        return TrackedBinaryTree.from_values(initial_data or [], sink=sink)
    if kind == StructureKind.GRAPH:
        data = initial_data or {}
        return TrackedGraph.from_graph(
            data.get("vertices", []),
            data.get("edges", []),
            directed=data.get("directed", False),
            sink=sink,
        )
    return copy.deepcopy(initial_data)


__all__ = [
    "ListNode",
    "STRUCTURE_CLASSES",
    "TrackedBinaryTree",
    "TrackedGraph",
    "TrackedHashMap",
    "TrackedLinkedList",
    "TrackedQueue",
    "TrackedStack",
    "TrackedStructure",
    "TreeNode",
    "build_input",
    "create_structure",
    "string_hash",
]
