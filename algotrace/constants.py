"""Named constants used across the codebase."""

from __future__ import annotations

# Sandbox limits
DEFAULT_TIMEOUT_MS = 5000
MIN_TIMEOUT_MS = 100
MAX_TIMEOUT_MS = 60000
DEFAULT_MAX_LOOP_ITERATIONS = 100_000
MIN_LOOP_ITERATIONS = 1
MAX_LOOP_ITERATIONS = 10_000_000
DEFAULT_RECURSION_LIMIT = 1000
# Grace period granted to the worker process beyond the run deadline (seconds)
WORKER_KILL_MARGIN_S = 0.5
WORKER_START_TIMEOUT_S = 30.0
WORKER_POLL_INTERVAL_S = 0.01

LEARNER_LANGUAGE = "python"

# Names injected into the learner namespace
LOOP_GUARD_NAME = "__loop_guard__"
ENTRY_INPUT_NAME = "input"
ASSERTION_SCOPE_RESULT = "result"
ASSERTION_SCOPE_EXPECTED = "expected"
ASSERTION_SCOPE_STEPS = "steps"

# Loop kinds reported by the loop guard
LOOP_KIND_WHILE = "while loop"
LOOP_KIND_FOR = "for loop"

ALLOWED_IMPORTS: tuple[str, ...] = (
    "math",
    "collections",
    "heapq",
    "itertools",
    "functools",
    "bisect",
    "string",
    "re",
)

BLOCKED_BUILTINS: tuple[str, ...] = (
    "open",
    "input",
    "exit",
    "quit",
    "breakpoint",
    "help",
    "compile",
    "eval",
    "exec",
    "globals",
    "vars",
    "memoryview",
    "__import__",
)

# Hash table
DEFAULT_HASH_CAPACITY = 16
DEFAULT_LOAD_FACTOR = 0.75

# Playback
PLAYBACK_TICK_MS = 800

# Console levels
CONSOLE_LOG = "log"
CONSOLE_INFO = "info"
CONSOLE_WARN = "warn"
CONSOLE_ERROR = "error"

# Learner-facing messages
MSG_CODE_EMPTY = "Code is empty. Please write some code to test."
MSG_NO_FUNCTION = "No function found. Please define a function to test."
MSG_UNBALANCED_BRACES = "Syntax error: Unbalanced braces { }"
MSG_UNBALANCED_BRACKETS = "Syntax error: Unbalanced brackets [ ]"
MSG_UNBALANCED_PARENS = "Syntax error: Unbalanced parentheses ( )"
MSG_FUNCTION_NOT_FOUND = (
    "Could not find a function to test. Please define a function in your code."
)
MSG_INFINITE_LOOP = "Infinite loop detected ({kind})"
MSG_TIMEOUT = "Execution timeout - possible infinite loop"
MSG_RECURSION = "Maximum recursion depth exceeded"
MSG_REFERENCE_MISSING = "Reference solution is empty."
MSG_VERTEX_EXISTS = "Vertex already exists"
MSG_VERTEX_NOT_FOUND = "Vertex not found"
MSG_SOURCE_NOT_FOUND = "Source vertex not found"
MSG_START_NOT_FOUND = "Start vertex not found"
MSG_ENDPOINT_NOT_FOUND = "Start or end vertex not found"
MSG_NO_PATH = "No path found"
