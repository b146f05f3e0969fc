"""Exception types raised inside the sandbox and by the code transform."""

from __future__ import annotations

from . import constants


class SandboxInterrupt(BaseException):
    """Aborts learner code. Not an Exception subclass, so `except Exception` cannot catch it."""


class InfiniteLoopError(SandboxInterrupt):
    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(constants.MSG_INFINITE_LOOP.format(kind=kind))


class ExecutionTimeout(SandboxInterrupt):
    def __init__(self):
        super().__init__(constants.MSG_TIMEOUT)


class CodeTransformError(Exception):
    """Learner source could not be turned into an executable unit."""

    def __init__(self, message: str, lineno: int | None = None):
        self.lineno = lineno
        super().__init__(message)
