"""Execution sandbox: runs one learner function against one scenario.

Learner code is transformed (loop guards injected), executed in a fresh
namespace with a curated set of builtins, and called with the scenario's
input. By default the whole run happens in a spawned worker process that
the caller kills once the time budget is spent. Every failure is folded
into the returned ``SandboxResult``.
"""

from __future__ import annotations

import builtins
import contextlib
import copy
import logging
import multiprocessing
import sys
import time
from collections import defaultdict
from functools import partial
from typing import Any, Iterator

from . import constants
from .errors import CodeTransformError, ExecutionTimeout, InfiniteLoopError
from .expect import expect
from .recorder import ConsoleRecorder, capture_console
from .sandbox_types import ExecutionOptions, SandboxErrorKind, SandboxResult
from .step_types import StepRecorder, to_portable
from .structures import (
    ListNode,
    TrackedBinaryTree,
    TrackedGraph,
    TrackedHashMap,
    TrackedLinkedList,
    TrackedQueue,
    TrackedStack,
    TreeNode,
    build_input,
)
from .testing_types import Scenario
from .transform import CodeTransformer, LoopGuardTransformer

logger = logging.getLogger(__name__)

_DEADLINE_CHECK_INTERVAL = 1024
_RECURSION_HEADROOM = 50


class LoopGuard:
    """Callable injected as the first statement of every guarded loop body.

    Counts iterations per loop across the whole run and aborts once a loop
    exceeds ``max_iterations`` or the run deadline has passed.
    """

    def __init__(self, max_iterations: int, deadline: float):
        self.max_iterations = max_iterations
        self.deadline = deadline
        self._counts: dict[int, int] = defaultdict(int)
        self._total = 0

    def __call__(self, loop_id: int, kind: str) -> None:
        self._counts[loop_id] += 1
        self._total += 1
        if self._counts[loop_id] > self.max_iterations:
            raise InfiniteLoopError(kind)
        if (
            self._total % _DEADLINE_CHECK_INTERVAL == 0
            and time.monotonic() > self.deadline
        ):
            raise ExecutionTimeout()


def _restricted_import(name, globals=None, locals=None, fromlist=(), level=0):
    if level != 0 or name.partition(".")[0] not in constants.ALLOWED_IMPORTS:
        raise ImportError(f"Import of '{name}' is not allowed")
    return builtins.__import__(name, globals, locals, fromlist, level)


def _safe_builtins(console: ConsoleRecorder) -> dict[str, Any]:
    allowed = {
        name: value
        for name, value in vars(builtins).items()
        if name not in constants.BLOCKED_BUILTINS
    }
    allowed["__import__"] = _restricted_import
    allowed["print"] = console.print
    return allowed


def _learner_namespace(guard: LoopGuard, sink, console: ConsoleRecorder) -> dict[str, Any]:
    return {
        "__builtins__": _safe_builtins(console),
        "__name__": "__learner__",
        constants.LOOP_GUARD_NAME: guard,
        "console": console,
        "expect": expect,
        "ListNode": ListNode,
        "TreeNode": TreeNode,
        "create_tracked_stack": partial(TrackedStack, sink=sink),
        "create_tracked_queue": partial(TrackedQueue, sink=sink),
        "create_tracked_linked_list": partial(TrackedLinkedList, sink=sink),
        "create_tracked_binary_tree": partial(TrackedBinaryTree, sink=sink),
        "create_tracked_graph": partial(TrackedGraph, sink=sink),
        "create_tracked_hash_map": partial(TrackedHashMap, sink=sink),
    }


def _stack_depth() -> int:
    depth = 0
    frame = sys._getframe()
    while frame is not None:
        depth += 1
        frame = frame.f_back
    return depth


@contextlib.contextmanager
def _recursion_limit(limit: int) -> Iterator[None]:
    """Bound learner recursion to ``limit`` frames above the current depth."""
    previous = sys.getrecursionlimit()
    sys.setrecursionlimit(_stack_depth() + limit + _RECURSION_HEADROOM)
    try:
        yield
    finally:
        sys.setrecursionlimit(previous)


def _run_assertions(
    assertions: str, scope: dict[str, Any], console: ConsoleRecorder
) -> None:
    code = compile(assertions, "<assertions>", "exec")
    exec(code, {"__builtins__": _safe_builtins(console), **scope})


def _run_inline(
    source: str,
    scenario: Scenario,
    options: ExecutionOptions,
    transformer: CodeTransformer,
) -> SandboxResult:
    started = time.perf_counter()
    deadline = time.monotonic() + options.timeout_ms / 1000
    recorder = StepRecorder()
    console = ConsoleRecorder(enabled=options.capture_console_logs)
    sink = recorder if options.capture_steps else None

    def finish(success, error=None, kind=None, return_value=None) -> SandboxResult:
        return SandboxResult(
            success=success,
            steps=list(recorder.steps),
            console_records=list(console.records),
            error=error,
            error_kind=kind,
            execution_time_ms=(time.perf_counter() - started) * 1000,
            return_value=return_value,
        )

    try:
        transformed = transformer.transform(source)
    except CodeTransformError as exc:
        return finish(False, str(exc), SandboxErrorKind.SYNTAX_ERROR)
    if transformed.entry_name is None:
        return finish(
            False, constants.MSG_FUNCTION_NOT_FOUND, SandboxErrorKind.NO_FUNCTION_FOUND
        )

    guard = LoopGuard(options.max_loop_iterations, deadline)
    namespace = _learner_namespace(guard, sink, console)
    input_value = build_input(scenario.structure, scenario.initial_data, sink)

    try:
        with capture_console(console), _recursion_limit(options.recursion_limit):
            exec(transformed.code, namespace)
            entry = namespace.get(transformed.entry_name)
            if not callable(entry):
                return finish(
                    False,
                    constants.MSG_FUNCTION_NOT_FOUND,
                    SandboxErrorKind.NO_FUNCTION_FOUND,
                )
            result = entry(input_value, *copy.deepcopy(scenario.additional_args))
            if options.run_assertions and scenario.assertions.strip():
                _run_assertions(
                    scenario.assertions,
                    {
                        constants.ASSERTION_SCOPE_RESULT: result,
                        constants.ASSERTION_SCOPE_EXPECTED: copy.deepcopy(
                            scenario.expected_output
                        ),
                        constants.ASSERTION_SCOPE_STEPS: list(recorder.steps),
                        constants.ENTRY_INPUT_NAME: input_value,
                        "expect": expect,
                    },
                    console,
                )
    except InfiniteLoopError as exc:
        return finish(False, str(exc), SandboxErrorKind.INFINITE_LOOP)
    except ExecutionTimeout as exc:
        return finish(False, str(exc), SandboxErrorKind.TIMEOUT)
    except AssertionError as exc:
        return finish(
            False, str(exc) or "Assertion failed", SandboxErrorKind.ASSERTION_FAILED
        )
    except RecursionError:
        return finish(False, constants.MSG_RECURSION, SandboxErrorKind.RUNTIME_EXCEPTION)
    except Exception as exc:
        return finish(
            False,
            f"{type(exc).__name__}: {exc}",
            SandboxErrorKind.RUNTIME_EXCEPTION,
        )
    return finish(True, return_value=to_portable(result))


def _portable(result: SandboxResult) -> SandboxResult:
    return SandboxResult(
        success=result.success,
        steps=[step.portable() for step in result.steps],
        console_records=result.console_records,
        error=result.error,
        error_kind=result.error_kind,
        execution_time_ms=result.execution_time_ms,
        return_value=result.return_value,
    )


def _worker_main(conn, source, scenario, options, transformer) -> None:
    conn.send(("started", None))
    try:
        result = _run_inline(source, scenario, options, transformer)
        conn.send(("result", _portable(result)))
    except Exception as exc:
        conn.send(("crashed", f"{type(exc).__name__}: {exc}"))
    finally:
        conn.close()


def _run_isolated(
    source: str,
    scenario: Scenario,
    options: ExecutionOptions,
    transformer: CodeTransformer,
) -> SandboxResult:
    ctx = multiprocessing.get_context("spawn")
    receiver, sender = ctx.Pipe(duplex=False)
    process = ctx.Process(
        target=_worker_main,
        args=(sender, source, scenario, options, transformer),
        daemon=True,
    )
    started = time.perf_counter()

    def failure(message: str, kind: SandboxErrorKind) -> SandboxResult:
        return SandboxResult(
            success=False,
            error=message,
            error_kind=kind,
            execution_time_ms=(time.perf_counter() - started) * 1000,
        )

    process.start()
    sender.close()
    try:
        if not receiver.poll(constants.WORKER_START_TIMEOUT_S):
            return failure("Worker process did not start", SandboxErrorKind.SANDBOX_CRASHED)
        receiver.recv()
        started = time.perf_counter()
        budget = options.timeout_ms / 1000 + constants.WORKER_KILL_MARGIN_S
        if not receiver.poll(budget):
            logger.info("Worker exceeded %dms budget; killing", options.timeout_ms)
            return failure(constants.MSG_TIMEOUT, SandboxErrorKind.TIMEOUT)
        tag, payload = receiver.recv()
        if tag == "crashed":
            return failure(payload, SandboxErrorKind.SANDBOX_CRASHED)
        return payload
    except (EOFError, OSError) as exc:
        return failure(
            f"Worker process exited unexpectedly: {exc!r}",
            SandboxErrorKind.SANDBOX_CRASHED,
        )
    finally:
        if process.is_alive():
            process.kill()
        process.join()
        receiver.close()


def execute_sandboxed(
    source: str,
    scenario: Scenario,
    options: ExecutionOptions | None = None,
    transformer: CodeTransformer | None = None,
) -> SandboxResult:
    """Run learner ``source`` against ``scenario`` and capture what happened.

    Args:
        source: Learner source text defining at least one function.
        scenario: Structure kind, input, expected value and assertions.
        options: Time budget, loop ceiling and capture switches.
        transformer: Source transform; defaults to ``LoopGuardTransformer``.

    Returns:
        A SandboxResult. No learner or harness failure is raised to the caller.
    """
    options = options or ExecutionOptions()
    transformer = transformer or LoopGuardTransformer()
    logger.info(
        "Sandbox run (%s, isolated=%s, timeout=%dms)",
        scenario.structure.value,
        options.isolated,
        options.timeout_ms,
    )
    t0 = time.perf_counter()
    try:
        if options.isolated:
            result = _run_isolated(source, scenario, options, transformer)
        else:
            result = _run_inline(source, scenario, options, transformer)
    except Exception as exc:
        logger.exception("Sandbox harness failure")
        result = SandboxResult(
            success=False,
            error=f"{type(exc).__name__}: {exc}",
            error_kind=SandboxErrorKind.SANDBOX_CRASHED,
            execution_time_ms=(time.perf_counter() - t0) * 1000,
        )
    logger.info(
        "Sandbox run finished: success=%s, %d steps in %.1fms",
        result.success,
        len(result.steps),
        result.execution_time_ms,
    )
    return result
