"""FIFO queue; the front of the queue is index 0 of the snapshot."""

from __future__ import annotations

from collections import deque
from typing import Any, Iterable

from ..step_types import StepSink, StructureKind
from ._base import TrackedStructure


class TrackedQueue(TrackedStructure):
    kind = StructureKind.QUEUE

    def __init__(self, sink: StepSink | None = None):
        super().__init__(sink)
        self._items: deque[Any] = deque()

    @classmethod
    def from_values(cls, values: Iterable[Any], sink: StepSink | None = None):
        queue = cls()
        queue._items = deque(values)
        queue.attach(sink)
        return queue

    def enqueue(self, value: Any) -> None:
        self._items.append(value)
        self._emit("enqueue", (value,), index=len(self._items) - 1, value=value)

    def dequeue(self) -> Any:
        if not self._items:
            self._emit("dequeue", (), empty=True)
            return None
        value = self._items.popleft()
        self._emit("dequeue", (), index=0, value=value)
        return value

    def peek(self) -> Any:
        if not self._items:
            self._emit("peek", (), empty=True)
            return None
        value = self._items[0]
        self._emit("peek", (), index=0, value=value)
        return value

    def clear(self) -> None:
        previous = len(self._items)
        self._items.clear()
        self._emit("clear", (), previous_size=previous)

    def size(self) -> int:
        return len(self._items)

    def snapshot(self) -> list[Any]:
        return list(self._items)

    def to_list(self) -> list[Any]:
        return self.snapshot()
