"""Tests for the loop-guard source transform."""

import ast

import pytest

from algotrace.errors import CodeTransformError
from algotrace.transform import LoopGuardTransformer, find_entry_function


def _guard_kinds(source):
    calls = []

    def guard(loop_id, kind):
        calls.append((loop_id, kind))

    transformed = LoopGuardTransformer().transform(source)
    namespace = {"__loop_guard__": guard}
    exec(transformed.code, namespace)
    return transformed, calls, namespace


class TestLoopGuardInjection:
    def test_while_loop_is_guarded(self):
        transformed, calls, _ = _guard_kinds("i = 0\nwhile i < 3:\n    i += 1\n")

        assert transformed.guarded_loops == 1
        assert calls == [(0, "while loop")] * 3

    def test_for_over_variable_is_guarded(self):
        _, calls, _ = _guard_kinds("items = [1, 2]\nfor x in items:\n    pass\n")

        assert calls == [(0, "for loop"), (0, "for loop")]

    def test_literal_range_is_left_alone(self):
        transformed, calls, _ = _guard_kinds("for i in range(0, 10, 2):\n    pass\n")

        assert transformed.guarded_loops == 0
        assert calls == []

    def test_computed_range_is_guarded(self):
        transformed, _, _ = _guard_kinds("n = 3\nfor i in range(n):\n    pass\n")

        assert transformed.guarded_loops == 1

    def test_nested_loops_get_distinct_ids(self):
        source = "for a in [1]:\n    while False:\n        pass\n"

        transformed, calls, _ = _guard_kinds(source)

        assert transformed.guarded_loops == 2
        assert len({loop_id for loop_id, _ in calls}) == 1

    def test_loops_inside_functions_are_guarded(self):
        source = "def f(n):\n    total = 0\n    while n:\n        total += n\n        n -= 1\n    return total\n"

        _, calls, namespace = _guard_kinds(source)

        assert namespace["f"](2) == 3
        assert calls == [(0, "while loop"), (0, "while loop")]

    def test_syntax_error_raises_transform_error(self):
        with pytest.raises(CodeTransformError, match="Syntax error") as info:
            LoopGuardTransformer().transform("def f(:\n    pass\n")

        assert info.value.lineno == 1


class TestEntryFunction:
    def test_first_def(self):
        tree = ast.parse("x = 1\ndef first():\n    pass\ndef second():\n    pass\n")

        assert find_entry_function(tree) == "first"

    def test_lambda_binding(self):
        tree = ast.parse("double = lambda n: n * 2\n")

        assert find_entry_function(tree) == "double"

    def test_nested_defs_are_not_entries(self):
        tree = ast.parse("class Box:\n    def open(self):\n        pass\n")

        assert find_entry_function(tree) is None

    def test_transform_reports_entry_name(self):
        assert LoopGuardTransformer().transform("def solve(x):\n    return x\n").entry_name == "solve"
