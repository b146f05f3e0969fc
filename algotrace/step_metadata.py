"""Per-operation step metadata shapes.

Every step carries exactly one of these models, chosen by the step's
``(target, type)`` pair through ``STEP_METADATA``. Fields left as ``None``
mean "not applicable" and are dropped from the serialized form.
"""

from __future__ import annotations

from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .step_types import StructureKind


class _Meta(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


# Stack / queue / linked list


class ElementMeta(_Meta):
    index: int | None = None
    value: Any = None
    empty: bool | None = None
    out_of_bounds: bool | None = None


class ClearMeta(_Meta):
    previous_size: int | None = None
    cleared: bool | None = None
    capacity: int | None = None


class ListSearchMeta(_Meta):
    index: int | None = None
    value: Any = None
    comparing: bool | None = None
    found: bool | None = None
    deleted: bool | None = None
    completed: bool | None = None


class ListReverseMeta(_Meta):
    index: int | None = None
    value: Any = None
    reversing: bool
    completed: bool | None = None


class ListCycleMeta(_Meta):
    slow: Any = None
    fast: Any = None
    checking: bool | None = None
    has_cycle: bool | None = None


# Binary search tree


class TreeMeta(_Meta):
    tree_structure: dict[str, Any] | None = None


class TreeInsertMeta(TreeMeta):
    value: Any = None
    inserted: bool
    duplicate: bool | None = None
    is_root: bool | None = None
    parent: Any = None
    direction: Literal["left", "right"] | None = None
    path: list[Any] | None = None


class TreeSearchMeta(TreeMeta):
    value: Any = None
    found: bool
    path: list[Any] = []


class TreeDeleteMeta(TreeMeta):
    value: Any = None
    deleted: bool
    case: Literal["leaf", "one-child", "two-children"] | None = None
    child: Literal["left", "right"] | None = None
    successor: Any = None


class TreeTraversalMeta(TreeMeta):
    traversal_type: Literal["inorder", "preorder", "postorder"]
    visit_order: list[Any] = []


class TreeQueryMeta(TreeMeta):
    is_valid: bool | None = None
    height: int | None = None


class TreeClearMeta(TreeMeta):
    cleared: bool = True


# Graph


class VertexMeta(_Meta):
    vertex: Any = None
    added: bool | None = None
    removed: bool | None = None
    message: str | None = None


class EdgeMeta(_Meta):
    from_: Any = Field(default=None, alias="from")
    to: Any = None
    weight: float | None = None
    directed: bool | None = None
    removed: bool | None = None
    message: str | None = None


class TraversalMeta(_Meta):
    start: Any = None
    end: Any = None
    current: Any = None
    visited: list[Any] | None = None
    queue: list[Any] | None = None
    visit_order: list[Any] | None = None
    current_path: list[Any] | None = None
    path: list[Any] | None = None
    found: bool | None = None
    completed: bool | None = None
    message: str | None = None


class CycleMeta(_Meta):
    has_cycle: bool
    cycle_vertex: Any = None


# Hash table


class HashEntryMeta(_Meta):
    key: Any = None
    value: Any = None
    index: int | None = None
    hash_value: int | None = None
    collision: bool | None = None
    updated: bool | None = None
    old_value: Any = None
    found: bool | None = None
    position: int | None = None
    deleted: bool | None = None
    deleted_value: Any = None


class ResizeMeta(_Meta):
    old_capacity: int
    new_capacity: int
    resized: bool = True


StepMetadata = Union[
    ElementMeta,
    ClearMeta,
    ListSearchMeta,
    ListReverseMeta,
    ListCycleMeta,
    TreeInsertMeta,
    TreeSearchMeta,
    TreeDeleteMeta,
    TreeTraversalMeta,
    TreeQueryMeta,
    TreeClearMeta,
    VertexMeta,
    EdgeMeta,
    TraversalMeta,
    CycleMeta,
    HashEntryMeta,
    ResizeMeta,
]


STEP_METADATA: dict[tuple[StructureKind, str], type[_Meta]] = {
    (StructureKind.STACK, "push"): ElementMeta,
    (StructureKind.STACK, "pop"): ElementMeta,
    (StructureKind.STACK, "peek"): ElementMeta,
    (StructureKind.STACK, "clear"): ClearMeta,
    (StructureKind.QUEUE, "enqueue"): ElementMeta,
    (StructureKind.QUEUE, "dequeue"): ElementMeta,
    (StructureKind.QUEUE, "peek"): ElementMeta,
    (StructureKind.QUEUE, "clear"): ClearMeta,
    (StructureKind.LINKED_LIST, "append"): ElementMeta,
    (StructureKind.LINKED_LIST, "prepend"): ElementMeta,
    (StructureKind.LINKED_LIST, "insertAt"): ElementMeta,
    (StructureKind.LINKED_LIST, "deleteAt"): ElementMeta,
    (StructureKind.LINKED_LIST, "delete"): ListSearchMeta,
    (StructureKind.LINKED_LIST, "find"): ListSearchMeta,
    (StructureKind.LINKED_LIST, "reverse"): ListReverseMeta,
    (StructureKind.LINKED_LIST, "hasCycle"): ListCycleMeta,
    (StructureKind.LINKED_LIST, "clear"): ClearMeta,
    (StructureKind.BINARY_TREE, "insert"): TreeInsertMeta,
    (StructureKind.BINARY_TREE, "search"): TreeSearchMeta,
    (StructureKind.BINARY_TREE, "delete"): TreeDeleteMeta,
    (StructureKind.BINARY_TREE, "inorderTraversal"): TreeTraversalMeta,
    (StructureKind.BINARY_TREE, "preorderTraversal"): TreeTraversalMeta,
    (StructureKind.BINARY_TREE, "postorderTraversal"): TreeTraversalMeta,
    (StructureKind.BINARY_TREE, "validate"): TreeQueryMeta,
    (StructureKind.BINARY_TREE, "height"): TreeQueryMeta,
    (StructureKind.BINARY_TREE, "clear"): TreeClearMeta,
    (StructureKind.GRAPH, "addVertex"): VertexMeta,
    (StructureKind.GRAPH, "removeVertex"): VertexMeta,
    (StructureKind.GRAPH, "addEdge"): EdgeMeta,
    (StructureKind.GRAPH, "removeEdge"): EdgeMeta,
    (StructureKind.GRAPH, "bfs"): TraversalMeta,
    (StructureKind.GRAPH, "dfs"): TraversalMeta,
    (StructureKind.GRAPH, "shortestPath"): TraversalMeta,
    (StructureKind.GRAPH, "hasCycle"): CycleMeta,
    (StructureKind.GRAPH, "clear"): ClearMeta,
    (StructureKind.HASH_MAP, "set"): HashEntryMeta,
    (StructureKind.HASH_MAP, "get"): HashEntryMeta,
    (StructureKind.HASH_MAP, "delete"): HashEntryMeta,
    (StructureKind.HASH_MAP, "resize"): ResizeMeta,
    (StructureKind.HASH_MAP, "clear"): ClearMeta,
}


def metadata_type_for(target: StructureKind, step_type: str) -> type[_Meta]:
    """Return the metadata model for a step, raising KeyError for unknown pairs."""
    try:
        return STEP_METADATA[(target, step_type)]
    except KeyError:
        raise KeyError(f"No metadata shape for {target.value}.{step_type}") from None
