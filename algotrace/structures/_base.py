"""Shared step-emission contract for instrumented structures."""

from __future__ import annotations

import copy
import logging
import time
from abc import ABC, abstractmethod
from typing import Any

from ..step_metadata import metadata_type_for
from ..step_types import OperationStep, StepSink, StructureKind

logger = logging.getLogger(__name__)


class TrackedStructure(ABC):
    """A plain in-memory structure that reports every public operation.

    Subclasses call ``_emit`` once an operation has completed; the emitted
    step carries a deep copy of ``snapshot()`` as its result and of every
    metadata field, so later mutation of learner objects cannot reach a
    recorded step. Instances are owned by a single run and are not
    thread-safe.
    """

    kind: StructureKind

    def __init__(self, sink: StepSink | None = None):
        self._sink = sink

    def attach(self, sink: StepSink | None) -> None:
        self._sink = sink

    @property
    def sink(self) -> StepSink | None:
        return self._sink

    @abstractmethod
    def snapshot(self) -> Any:
        """Plain serializable view of the current state."""

    @abstractmethod
    def size(self) -> int: ...

    def is_empty(self) -> bool:
        return self.size() == 0

    def __len__(self) -> int:
        return self.size()

    def _snapshot_copy(self) -> Any:
        return copy.deepcopy(self.snapshot())

    def _emit(self, step_type: str, args: tuple, **fields: Any) -> None:
        if self._sink is None:
            return
        self._record(step_type, args, copy.deepcopy(fields), self._snapshot_copy())

    def _record(
        self, step_type: str, args: tuple, fields: dict[str, Any], result: Any
    ) -> None:
        """Build and hand off a step from already-detached ``fields`` and ``result``."""
        metadata = metadata_type_for(self.kind, step_type)(**fields)
        step = OperationStep(
            type=step_type,
            target=self.kind,
            args=copy.deepcopy(args),
            result=result,
            timestamp=time.time() * 1000,
            metadata=metadata,
        )
        logger.debug("%s.%s %s", self.kind.value, step_type, args)
        self._sink(step)
