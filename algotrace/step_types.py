"""Operation step record: the unit of every captured timeline."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable

from pydantic import BaseModel


class StructureKind(str, Enum):
    STACK = "stack"
    QUEUE = "queue"
    LINKED_LIST = "linkedList"
    BINARY_TREE = "binaryTree"
    GRAPH = "graph"
    HASH_MAP = "hashMap"


_SCALARS = (str, int, float, bool, type(None))


def to_portable(value: Any) -> Any:
    """Reduce a value to plain JSON-safe data (lists, dicts, scalars).

    Tuples and sets become lists, dict keys that are not scalars are
    stringified, and any other object is replaced by its repr. The walk
    keeps its own stack, so nesting depth is not bounded by the recursion
    limit; a container reached twice converts to one shared container.
    """
    holder = [None]
    converted: dict[int, tuple[Any, Any]] = {}
    pending = [(value, holder, 0)]
    while pending:
        item, parent, slot = pending.pop()
        if isinstance(item, _SCALARS):
            parent[slot] = item
        elif isinstance(item, Enum):
            parent[slot] = item.value
        elif isinstance(item, BaseModel):
            pending.append((item.model_dump(), parent, slot))
        elif isinstance(item, (dict, list, tuple, set, frozenset)):
            if id(item) in converted:
                parent[slot] = converted[id(item)][1]
                continue
            if isinstance(item, dict):
                out: Any = {}
                for k, v in item.items():
                    key = k if isinstance(k, _SCALARS) else repr(k)
                    out[key] = None
                    pending.append((v, out, key))
            else:
                members = list(item)
                out = [None] * len(members)
                pending.extend((v, out, i) for i, v in enumerate(members))
            converted[id(item)] = (item, out)
            parent[slot] = out
        else:
            parent[slot] = repr(item)
    return holder[0]


@dataclass(frozen=True)
class OperationStep:
    """A single semantic operation performed on an instrumented structure.

    ``result`` always holds the full snapshot of the structure after the
    operation, never a diff. ``timestamp`` is wall-clock milliseconds and is
    only meant for correlating with console records; ordering is the
    position in the step list.
    """

    type: str
    target: StructureKind
    args: tuple = ()
    result: Any = None
    timestamp: float = 0.0
    metadata: Any = None  # StepMetadata

    def metadata_dict(self) -> dict[str, Any]:
        if self.metadata is None:
            return {}
        return self.metadata.model_dump(by_alias=True, exclude_none=True)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "target": self.target.value,
            "args": list(self.args),
            "result": self.result,
            "timestamp": self.timestamp,
            "metadata": self.metadata_dict(),
        }

    def portable(self) -> OperationStep:
        """Copy of this step safe to pickle across a process boundary."""
        metadata = self.metadata
        if metadata is not None:
            fields = {
                name: to_portable(getattr(metadata, name))
                for name in type(metadata).model_fields
                if getattr(metadata, name) is not None
            }
            metadata = type(metadata)(**fields)
        return replace(
            self,
            args=tuple(to_portable(a) for a in self.args),
            result=to_portable(self.result),
            metadata=metadata,
        )


StepSink = Callable[[OperationStep], None]


@dataclass
class StepRecorder:
    """Append-only step buffer used as a structure's step sink.

    Keeps timestamps non-decreasing within one capture session.
    """

    steps: list[OperationStep] = field(default_factory=list)

    def __call__(self, step: OperationStep) -> None:
        if self.steps and step.timestamp < self.steps[-1].timestamp:
            step = replace(step, timestamp=self.steps[-1].timestamp)
        self.steps.append(step)

    def __len__(self) -> int:
        return len(self.steps)

    def clear(self) -> None:
        self.steps.clear()
