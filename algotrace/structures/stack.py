"""Array-backed stack; top of stack is the end of the list."""

from __future__ import annotations

from typing import Any, Iterable

from ..step_types import StepSink, StructureKind
from ._base import TrackedStructure


class TrackedStack(TrackedStructure):
    kind = StructureKind.STACK

    def __init__(self, sink: StepSink | None = None):
        super().__init__(sink)
        self._items: list[Any] = []

    @classmethod
    def from_values(cls, values: Iterable[Any], sink: StepSink | None = None):
        """Build a stack without emitting steps, then attach ``sink``."""
        stack = cls()
        stack._items = list(values)
        stack.attach(sink)
        return stack

    def push(self, value: Any) -> None:
        self._items.append(value)
        self._emit("push", (value,), index=len(self._items) - 1, value=value)

    def pop(self) -> Any:
        if not self._items:
            self._emit("pop", (), empty=True)
            return None
        value = self._items.pop()
        self._emit("pop", (), index=len(self._items), value=value)
        return value

    def peek(self) -> Any:
        if not self._items:
            self._emit("peek", (), empty=True)
            return None
        value = self._items[-1]
        self._emit("peek", (), index=len(self._items) - 1, value=value)
        return value

    def clear(self) -> None:
        previous = len(self._items)
        self._items = []
        self._emit("clear", (), previous_size=previous)

    def size(self) -> int:
        return len(self._items)

    def snapshot(self) -> list[Any]:
        return list(self._items)

    def to_list(self) -> list[Any]:
        return self.snapshot()
