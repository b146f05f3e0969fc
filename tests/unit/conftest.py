"""Shared fixtures for the algotrace unit suite."""

import pytest

from algotrace.sandbox_types import ExecutionOptions
from algotrace.step_types import StepRecorder


@pytest.fixture
def recorder() -> StepRecorder:
    return StepRecorder()


@pytest.fixture
def inline_options() -> ExecutionOptions:
    """In-process sandbox runs; the loop guard is the only time bound."""
    return ExecutionOptions(isolated=False)


class FakeHandle:
    def __init__(self, delay, callback):
        self.delay = delay
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class FakeScheduler:
    """Records ``call_later`` requests; ``fire`` runs the newest live one."""

    def __init__(self):
        self.handles: list[FakeHandle] = []

    def call_later(self, delay, callback):
        handle = FakeHandle(delay, callback)
        self.handles.append(handle)
        return handle

    @property
    def live(self) -> list[FakeHandle]:
        return [h for h in self.handles if not h.cancelled]

    def fire(self) -> bool:
        live = self.live
        if not live:
            return False
        handle = live[-1]
        handle.cancelled = True
        handle.callback()
        return True


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()
