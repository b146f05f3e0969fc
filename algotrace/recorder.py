"""Console capture for learner code."""

from __future__ import annotations

import builtins
import contextlib
import io
import json
import sys
import time
from typing import Any, Iterator

from . import constants
from .sandbox_types import ConsoleRecord


def _record_arg(value: Any) -> Any:
    """JSON round-trip an argument, falling back to its string form."""
    try:
        return json.loads(json.dumps(value))
    except (TypeError, ValueError):
        return str(value)


class ConsoleRecorder:
    """Collects console records; exposes ``log``/``info``/``warn``/``error``.

    When disabled the calls are accepted and dropped.
    """

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.records: list[ConsoleRecord] = []

    def _add(self, level: str, args: tuple) -> None:
        if not self.enabled:
            return
        timestamp = time.time() * 1000
        if self.records and timestamp < self.records[-1].timestamp:
            timestamp = self.records[-1].timestamp
        self.records.append(
            ConsoleRecord(
                level=level,
                args=tuple(_record_arg(a) for a in args),
                timestamp=timestamp,
            )
        )

    def log(self, *args: Any) -> None:
        self._add(constants.CONSOLE_LOG, args)

    def info(self, *args: Any) -> None:
        self._add(constants.CONSOLE_INFO, args)

    def warn(self, *args: Any) -> None:
        self._add(constants.CONSOLE_WARN, args)

    def error(self, *args: Any) -> None:
        self._add(constants.CONSOLE_ERROR, args)

    def print(
        self,
        *args: Any,
        sep: str | None = " ",
        end: str | None = "\n",
        file=None,
        flush: bool = False,
    ) -> None:
        """Stand-in for the builtin ``print``.

        Prints to ``sys.stderr`` are recorded at ``error`` level and other
        explicit files are written to as usual. A non-default ``sep`` or
        ``end`` joins the arguments into one recorded string.
        """
        if file is not None and file is not sys.stdout and file is not sys.stderr:
            builtins.print(*args, sep=sep, end=end, file=file, flush=flush)
            return
        level = constants.CONSOLE_ERROR if file is sys.stderr else constants.CONSOLE_LOG
        if sep in (" ", None) and end in ("\n", None):
            self._add(level, args)
            return
        text = (" " if sep is None else sep).join(str(a) for a in args)
        text += "\n" if end is None else end
        self._add(level, (text.rstrip("\n"),))


class _StreamToConsole(io.TextIOBase):
    def __init__(self, recorder: ConsoleRecorder, level: str):
        self._recorder = recorder
        self._level = level

    def writable(self) -> bool:
        return True

    def write(self, text: str) -> int:
        stripped = text.rstrip("\n")
        if stripped:
            self._recorder._add(self._level, (stripped,))
        return len(text)


@contextlib.contextmanager
def capture_console(recorder: ConsoleRecorder) -> Iterator[ConsoleRecorder]:
    """Redirect stdout/stderr into ``recorder`` for the duration of the block.

    The original streams are restored on exit whether or not the block raised.
    """
    with contextlib.redirect_stdout(
        _StreamToConsole(recorder, constants.CONSOLE_LOG)
    ), contextlib.redirect_stderr(_StreamToConsole(recorder, constants.CONSOLE_ERROR)):
        yield recorder
