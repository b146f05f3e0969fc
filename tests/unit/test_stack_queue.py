"""Tests for TrackedStack and TrackedQueue step emission."""

import pytest

from algotrace.structures import TrackedQueue, TrackedStack, create_structure
from algotrace.step_types import StructureKind


class TestTrackedStack:
    def test_push_push_pop_literal(self, recorder):
        stack = TrackedStack(sink=recorder)

        stack.push(1)
        stack.push(2)
        popped = stack.pop()

        assert popped == 2
        assert [s.type for s in recorder.steps] == ["push", "push", "pop"]
        assert [s.result for s in recorder.steps] == [[1], [1, 2], [1]]
        assert recorder.steps[-1].metadata_dict()["value"] == 2

    def test_every_step_targets_stack(self, recorder):
        stack = TrackedStack(sink=recorder)
        stack.push("a")
        stack.peek()

        assert {s.target for s in recorder.steps} == {StructureKind.STACK}

    def test_pop_on_empty_still_emits(self, recorder):
        stack = TrackedStack(sink=recorder)

        assert stack.pop() is None
        assert len(recorder.steps) == 1
        assert recorder.steps[0].result == []
        assert recorder.steps[0].metadata_dict() == {"empty": True}

    def test_peek_on_empty_still_emits(self, recorder):
        stack = TrackedStack(sink=recorder)

        assert stack.peek() is None
        assert recorder.steps[0].metadata_dict() == {"empty": True}

    def test_peek_reports_top_index(self, recorder):
        stack = TrackedStack.from_values([4, 5, 6], sink=recorder)

        assert stack.peek() == 6
        assert recorder.steps[0].metadata_dict() == {"index": 2, "value": 6}

    def test_from_values_is_silent(self, recorder):
        stack = TrackedStack.from_values([1, 2, 3], sink=recorder)

        assert recorder.steps == []
        assert stack.snapshot() == [1, 2, 3]

    def test_clear_reports_previous_size(self, recorder):
        stack = TrackedStack.from_values([1, 2], sink=recorder)

        stack.clear()

        assert recorder.steps[-1].result == []
        assert recorder.steps[-1].metadata_dict() == {"previousSize": 2}

    def test_results_are_independent_snapshots(self, recorder):
        stack = TrackedStack(sink=recorder)
        stack.push([1])
        stack.push(2)

        recorder.steps[0].result.append("INJECTED")

        assert stack.snapshot() == [[1], 2]

    def test_metadata_is_detached_from_pushed_objects(self, recorder):
        row = [1]
        stack = TrackedStack(sink=recorder)
        stack.push(row)

        row.append(99)

        step = recorder.steps[0]
        assert step.args == ([1],)
        assert step.result == [[1]]
        assert step.metadata.value == [1]

    def test_size_queries_do_not_emit(self, recorder):
        stack = TrackedStack.from_values([1], sink=recorder)

        assert stack.size() == 1
        assert not stack.is_empty()
        assert len(stack) == 1
        assert recorder.steps == []

    def test_no_sink_means_no_steps(self):
        stack = TrackedStack()
        stack.push(1)

        assert stack.pop() == 1


class TestTrackedQueue:
    def test_fifo_order_and_snapshots(self, recorder):
        queue = TrackedQueue(sink=recorder)

        queue.enqueue(1)
        queue.enqueue(2)
        first = queue.dequeue()

        assert first == 1
        assert [s.result for s in recorder.steps] == [[1], [1, 2], [2]]
        assert recorder.steps[-1].metadata_dict() == {"index": 0, "value": 1}

    def test_enqueue_reports_back_index(self, recorder):
        queue = TrackedQueue.from_values([7, 8], sink=recorder)

        queue.enqueue(9)

        assert recorder.steps[0].metadata_dict() == {"index": 2, "value": 9}

    def test_dequeue_on_empty_still_emits(self, recorder):
        queue = TrackedQueue(sink=recorder)

        assert queue.dequeue() is None
        assert recorder.steps[0].type == "dequeue"
        assert recorder.steps[0].metadata_dict() == {"empty": True}

    def test_peek_shows_front(self, recorder):
        queue = TrackedQueue.from_values(["x", "y"], sink=recorder)

        assert queue.peek() == "x"
        assert recorder.steps[0].result == ["x", "y"]

    def test_step_count_matches_operation_count(self, recorder):
        queue = TrackedQueue(sink=recorder)
        for value in range(4):
            queue.enqueue(value)
        for _ in range(6):
            queue.dequeue()
        queue.clear()

        assert len(recorder.steps) == 11
        assert recorder.steps[-1].result == []

    def test_snapshot_matches_live_state_after_each_operation(self, recorder):
        queue = TrackedQueue(sink=recorder)
        operations = [
            lambda: queue.enqueue(1),
            lambda: queue.enqueue(2),
            lambda: queue.peek(),
            lambda: queue.dequeue(),
            lambda: queue.enqueue(3),
        ]
        for operation in operations:
            operation()
            assert recorder.steps[-1].result == queue.snapshot()


class TestCreateStructure:
    def test_factory_resolves_each_kind(self):
        for kind in StructureKind:
            assert create_structure(kind).kind == kind

    def test_factory_accepts_tag_strings(self):
        assert isinstance(create_structure("stack"), TrackedStack)

    def test_factory_rejects_unknown_kind(self):
        with pytest.raises(ValueError):
            create_structure("heap")
