"""Singly-linked list with per-node steps for searching, reversal and cycle checks."""

from __future__ import annotations

from typing import Any, Iterable, Iterator

from ..step_types import StepSink, StructureKind
from ._base import TrackedStructure


class ListNode:
    __slots__ = ("value", "next")

    def __init__(self, value: Any, next: ListNode | None = None):
        self.value = value
        self.next = next

    def __repr__(self) -> str:
        return f"ListNode({self.value!r})"


class TrackedLinkedList(TrackedStructure):
    """Linked list whose snapshot is the list of node values from the head.

    Nodes are reachable through ``head`` so callers can build cycles; the
    snapshot walk stops at the first revisited node.
    """

    kind = StructureKind.LINKED_LIST

    def __init__(self, sink: StepSink | None = None):
        super().__init__(sink)
        self.head: ListNode | None = None

    @classmethod
    def from_values(cls, values: Iterable[Any], sink: StepSink | None = None):
        linked = cls()
        tail = None
        for value in values:
            node = ListNode(value)
            if tail is None:
                linked.head = node
            else:
                tail.next = node
            tail = node
        linked.attach(sink)
        return linked

    def _nodes(self) -> Iterator[ListNode]:
        seen: set[int] = set()
        node = self.head
        while node is not None and id(node) not in seen:
            seen.add(id(node))
            yield node
            node = node.next

    def __iter__(self) -> Iterator[Any]:
        return (node.value for node in self._nodes())

    def node_at(self, index: int) -> ListNode | None:
        for i, node in enumerate(self._nodes()):
            if i == index:
                return node
        return None

    def append(self, value: Any) -> None:
        node = ListNode(value)
        index = 0
        if self.head is None:
            self.head = node
        else:
            last = None
            for index, last in enumerate(self._nodes(), start=1):
                pass
            last.next = node
        self._emit("append", (value,), index=index, value=value)

    def prepend(self, value: Any) -> None:
        self.head = ListNode(value, self.head)
        self._emit("prepend", (value,), index=0, value=value)

    def insert_at(self, index: int, value: Any) -> bool:
        if index < 0 or index > self.size():
            self._emit(
                "insertAt", (index, value), index=index, value=value, out_of_bounds=True
            )
            return False
        if index == 0:
            self.head = ListNode(value, self.head)
        else:
            prev = self.node_at(index - 1)
            prev.next = ListNode(value, prev.next)
        self._emit("insertAt", (index, value), index=index, value=value)
        return True

    def delete(self, value: Any) -> bool:
        prev = None
        for index, node in enumerate(self._nodes()):
            if node.value == value:
                if prev is None:
                    self.head = node.next
                else:
                    prev.next = node.next
                self._emit("delete", (value,), index=index, value=value, deleted=True)
                return True
            prev = node
        self._emit("delete", (value,), value=value, deleted=False)
        return False

    def delete_at(self, index: int) -> Any:
        if index < 0 or index >= self.size():
            self._emit("deleteAt", (index,), index=index, out_of_bounds=True)
            return None
        if index == 0:
            node = self.head
            self.head = node.next
        else:
            prev = self.node_at(index - 1)
            node = prev.next
            prev.next = node.next
        self._emit("deleteAt", (index,), index=index, value=node.value)
        return node.value

    def find(self, value: Any) -> int:
        """Return the index of the first node holding ``value``, or -1.

        Emits one comparison step per visited node and a terminal step.
        """
        for index, node in enumerate(self._nodes()):
            found = node.value == value
            self._emit(
                "find", (value,), index=index, value=node.value, comparing=True, found=found
            )
            if found:
                self._emit(
                    "find", (value,), index=index, value=value, found=True, completed=True
                )
                return index
        self._emit("find", (value,), value=value, found=False, completed=True)
        return -1

    def reverse(self) -> None:
        prev = None
        for index, current in enumerate(list(self._nodes())):
            current.next = prev
            prev = current
            # head tracks the reversed prefix so each snapshot shows progress
            self.head = prev
            self._emit("reverse", (), index=index, value=current.value, reversing=True)
        self._emit("reverse", (), reversing=False, completed=True)

    def has_cycle(self) -> bool:
        """Floyd's tortoise and hare; one step per pointer advance."""
        slow = fast = self.head
        while fast is not None and fast.next is not None:
            slow = slow.next
            fast = fast.next.next
            self._emit(
                "hasCycle",
                (),
                slow=slow.value,
                fast=fast.value if fast is not None else None,
                checking=True,
            )
            if slow is fast:
                self._emit("hasCycle", (), has_cycle=True)
                return True
        self._emit("hasCycle", (), has_cycle=False)
        return False

    def clear(self) -> None:
        previous = self.size()
        self.head = None
        self._emit("clear", (), previous_size=previous, cleared=True)

    def size(self) -> int:
        return sum(1 for _ in self._nodes())

    def snapshot(self) -> list[Any]:
        return list(self)

    def to_list(self) -> list[Any]:
        return self.snapshot()
