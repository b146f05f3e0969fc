"""Playback controller: three step timelines behind one shared cursor."""

from __future__ import annotations

import functools
import logging
import threading
from enum import Enum
from typing import Any, Callable, Protocol, Sequence

from . import constants
from .step_types import OperationStep

logger = logging.getLogger(__name__)


class PlaybackMode(str, Enum):
    USER_CODE = "user-code"
    EXPECTED_OUTPUT = "expected-output"
    REFERENCE = "reference"
    COMPARISON = "comparison"
    SKELETON = "skeleton"


class StepSource(str, Enum):
    USER_CODE = "userCode"
    EXPECTED_OUTPUT = "expectedOutput"
    REFERENCE = "reference"


# Comparison shows user code (left) against expected output (right).
_MODE_SOURCES: dict[PlaybackMode, tuple[StepSource, ...]] = {
    PlaybackMode.USER_CODE: (StepSource.USER_CODE,),
    PlaybackMode.EXPECTED_OUTPUT: (StepSource.EXPECTED_OUTPUT,),
    PlaybackMode.REFERENCE: (StepSource.REFERENCE,),
    PlaybackMode.COMPARISON: (StepSource.USER_CODE, StepSource.EXPECTED_OUTPUT),
    PlaybackMode.SKELETON: (),
}

# Sources the controller asks its owner to fill; user-code steps come from test runs.
_POPULATED_ON_DEMAND = frozenset({StepSource.EXPECTED_OUTPUT, StepSource.REFERENCE})


class TimerHandle(Protocol):
    def cancel(self) -> Any: ...


class Scheduler(Protocol):
    """Anything with ``call_later``; an asyncio event loop qualifies."""

    def call_later(self, delay: float, callback: Callable[[], Any]) -> TimerHandle: ...


class ThreadingScheduler:
    """Default scheduler: each tick fires on a daemon ``threading.Timer``."""

    def call_later(self, delay: float, callback: Callable[[], Any]) -> threading.Timer:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
        return timer


def _synchronized(method):
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            return method(self, *args, **kwargs)

    return wrapper


class PlaybackController:
    """State machine over ``{mode, cursor, is_playing}`` and three step arrays.

    The cursor always satisfies ``0 <= cursor < max(1, limit)`` where
    ``limit`` is the active array's length, or the shorter of the two arrays
    in comparison mode. The auto-advance timer is an owned handle cancelled
    on every transition that stops playback. The default scheduler fires ticks
    on timer threads, so every transition holds the controller lock.
    """

    def __init__(
        self,
        on_needs_population: Callable[[StepSource], None] | None = None,
        scheduler: Scheduler | None = None,
        tick_ms: int = constants.PLAYBACK_TICK_MS,
    ):
        self.on_needs_population = on_needs_population
        self._scheduler = scheduler or ThreadingScheduler()
        self._lock = threading.RLock()
        self._generation = 0
        self._tick_s = tick_ms / 1000
        self._steps: dict[StepSource, list[OperationStep]] = {s: [] for s in StepSource}
        self._in_flight: set[StepSource] = set()
        self._timer: TimerHandle | None = None
        self._code_runnable = False
        self.mode = PlaybackMode.SKELETON
        self.cursor = 0
        self.is_playing = False

    # Queries

    def steps(self, source: StepSource | str) -> list[OperationStep]:
        return list(self._steps[StepSource(source)])

    @property
    def active_steps(self) -> list[OperationStep]:
        sources = _MODE_SOURCES[self.mode]
        return list(self._steps[sources[0]]) if sources else []

    @property
    def comparison_steps(self) -> tuple[list[OperationStep], list[OperationStep]]:
        return (
            list(self._steps[StepSource.USER_CODE]),
            list(self._steps[StepSource.EXPECTED_OUTPUT]),
        )

    @property
    def limit(self) -> int:
        sources = _MODE_SOURCES[self.mode]
        if not sources:
            return 0
        return min(len(self._steps[s]) for s in sources)

    @property
    def current_step(self) -> OperationStep | None:
        steps = self.active_steps
        if 0 <= self.cursor < len(steps):
            return steps[self.cursor]
        return None

    @property
    def code_runnable(self) -> bool:
        return self._code_runnable

    def is_population_pending(self, source: StepSource | str) -> bool:
        return StepSource(source) in self._in_flight

    # Transitions

    @_synchronized
    def set_mode(self, mode: PlaybackMode | str) -> None:
        self._stop()
        self.mode = PlaybackMode(mode)
        self.cursor = 0
        self._request_population()
        self._enforce_fallback()

    @_synchronized
    def set_steps(self, source: StepSource | str, steps: Sequence[OperationStep]) -> None:
        source = StepSource(source)
        self._steps[source] = list(steps)
        self._in_flight.discard(source)
        self.cursor = 0
        if self.limit == 0:
            self._stop()
        self._enforce_fallback()

    @_synchronized
    def cancel_population(self, source: StepSource | str) -> None:
        """Drop the in-flight marker after a failed population attempt."""
        self._in_flight.discard(StepSource(source))

    @_synchronized
    def set_code_runnable(self, runnable: bool) -> None:
        self._code_runnable = runnable
        self._enforce_fallback()

    @_synchronized
    def next(self) -> None:
        limit = self.limit
        self.cursor = min(self.cursor + 1, limit - 1) if limit else 0

    @_synchronized
    def previous(self) -> None:
        self.cursor = max(self.cursor - 1, 0)

    @_synchronized
    def jump_to(self, index: int) -> None:
        self.cursor = min(max(index, 0), max(self.limit - 1, 0))

    @_synchronized
    def play(self) -> None:
        limit = self.limit
        if limit == 0:
            return
        if self.cursor >= limit - 1:
            self.cursor = 0
        self.is_playing = True
        self._schedule()

    @_synchronized
    def pause(self) -> None:
        self._stop()

    @_synchronized
    def toggle(self) -> None:
        if self.is_playing:
            self.pause()
        else:
            self.play()

    @_synchronized
    def tick(self) -> None:
        """Advance one step; pauses once the end of the active array is reached."""
        limit = self.limit
        if not self.is_playing or limit == 0 or self.cursor >= limit - 1:
            self._stop()
            return
        self.cursor += 1
        if self.cursor >= limit - 1:
            self._stop()
        else:
            self._schedule()

    @_synchronized
    def reset(self) -> None:
        """Forget every timeline, e.g. when a new scenario is selected."""
        self._stop()
        self._steps = {s: [] for s in StepSource}
        self._in_flight.clear()
        self._code_runnable = False
        self.mode = PlaybackMode.SKELETON
        self.cursor = 0

    # Internals

    def _request_population(self) -> None:
        for source in _MODE_SOURCES[self.mode]:
            if (
                source in _POPULATED_ON_DEMAND
                and not self._steps[source]
                and source not in self._in_flight
            ):
                self._in_flight.add(source)
                logger.info("Requesting population of %s steps", source.value)
                if self.on_needs_population is not None:
                    self.on_needs_population(source)

    def _enforce_fallback(self) -> None:
        if self.mode == PlaybackMode.USER_CODE and (
            not self._code_runnable or not self._steps[StepSource.USER_CODE]
        ):
            logger.debug("No runnable user-code timeline; falling back to skeleton")
            self._stop()
            self.mode = PlaybackMode.SKELETON
            self.cursor = 0

    def _schedule(self) -> None:
        self._cancel_timer()
        generation = self._generation
        self._timer = self._scheduler.call_later(
            self._tick_s, lambda: self._on_timer(generation)
        )

    @_synchronized
    def _on_timer(self, generation: int) -> None:
        # a timer cancelled after it already fired must not advance the cursor
        if generation != self._generation:
            return
        self._timer = None
        self.tick()

    def _cancel_timer(self) -> None:
        self._generation += 1
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _stop(self) -> None:
        self.is_playing = False
        self._cancel_timer()
