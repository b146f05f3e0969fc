"""Tests for TrackedBinaryTree, including the three delete cases."""

from algotrace.step_types import StepRecorder
from algotrace.structures import TrackedBinaryTree


def _make_tree(recorder, values=(10, 5, 15, 3, 7, 12, 20)):
    return TrackedBinaryTree.from_values(values, sink=recorder)


def _subtree(snapshot, *directions):
    node = snapshot
    for direction in directions:
        node = node[direction]
    return node


class TestInsert:
    def test_root_insert(self, recorder):
        tree = TrackedBinaryTree(sink=recorder)

        assert tree.insert(10) is True
        meta = recorder.steps[0].metadata_dict()
        assert meta["isRoot"] is True
        assert meta["inserted"] is True
        assert recorder.steps[0].result == {"value": 10, "left": None, "right": None}

    def test_child_insert_records_parent_direction_and_path(self, recorder):
        tree = _make_tree(recorder, [10, 5])

        tree.insert(7)

        meta = recorder.steps[0].metadata_dict()
        assert meta["parent"] == 5
        assert meta["direction"] == "right"
        assert meta["path"] == [10, 5]

    def test_duplicate_is_rejected(self, recorder):
        tree = _make_tree(recorder, [10, 5])

        assert tree.insert(5) is False
        meta = recorder.steps[0].metadata_dict()
        assert meta["inserted"] is False
        assert meta["duplicate"] is True
        assert tree.size() == 2

    def test_every_step_carries_tree_structure(self, recorder):
        tree = _make_tree(recorder, [10])

        tree.insert(5)
        tree.search(5)
        tree.height()

        for step in recorder.steps:
            assert step.metadata.tree_structure == step.result
            assert "treeStructure" in step.metadata_dict()


class TestSearch:
    def test_found_path(self, recorder):
        tree = _make_tree(recorder)

        assert tree.search(12) is True
        meta = recorder.steps[0].metadata_dict()
        assert meta["found"] is True
        assert meta["path"] == [10, 15, 12]

    def test_missing_value(self, recorder):
        tree = _make_tree(recorder)

        assert tree.search(13) is False
        assert recorder.steps[0].metadata_dict()["path"] == [10, 15, 12]


class TestDelete:
    def test_leaf_leaves_siblings_untouched(self, recorder):
        tree = _make_tree(recorder)
        before = tree.snapshot()

        assert tree.delete(3) is True

        after = recorder.steps[0].result
        assert recorder.steps[0].metadata_dict()["case"] == "leaf"
        assert _subtree(after, "left", "left") is None
        assert _subtree(after, "left", "right") == _subtree(before, "left", "right")
        assert _subtree(after, "right") == _subtree(before, "right")

    def test_one_child_is_spliced(self, recorder):
        tree = _make_tree(recorder, [10, 5, 3])
        child = _subtree(tree.snapshot(), "left", "left")

        tree.delete(5)

        meta = recorder.steps[0].metadata_dict()
        assert meta["case"] == "one-child"
        assert meta["child"] == "left"
        assert _subtree(recorder.steps[0].result, "left") == child

    def test_two_children_uses_successor(self, recorder):
        tree = _make_tree(recorder)

        tree.delete(15)

        assert len(recorder.steps) == 1
        meta = recorder.steps[0].metadata_dict()
        assert meta["case"] == "two-children"
        assert meta["successor"] == 20
        assert tree.inorder_traversal() == [3, 5, 7, 10, 12, 20]

    def test_two_children_preserves_inorder(self, recorder):
        tree = _make_tree(recorder, [50, 30, 70, 20, 40, 60, 80, 65])
        before = tree.to_list()

        tree.delete(50)

        assert recorder.steps[0].metadata_dict()["successor"] == 60
        assert tree.to_list() == [v for v in before if v != 50]
        assert tree.validate() is True

    def test_deleting_root_leaf_empties_tree(self, recorder):
        tree = _make_tree(recorder, [1])

        tree.delete(1)

        assert recorder.steps[0].result is None
        assert tree.is_empty()

    def test_missing_value(self, recorder):
        tree = _make_tree(recorder)

        assert tree.delete(99) is False
        meta = recorder.steps[0].metadata_dict()
        assert meta["deleted"] is False
        assert "case" not in meta


class TestTraversalsAndQueries:
    def test_traversal_orders(self, recorder):
        tree = _make_tree(recorder)

        assert tree.inorder_traversal() == [3, 5, 7, 10, 12, 15, 20]
        assert tree.preorder_traversal() == [10, 5, 3, 7, 15, 12, 20]
        assert tree.postorder_traversal() == [3, 7, 5, 12, 20, 15, 10]
        assert [s.metadata_dict()["traversalType"] for s in recorder.steps] == [
            "inorder",
            "preorder",
            "postorder",
        ]
        assert recorder.steps[0].metadata_dict()["visitOrder"] == [3, 5, 7, 10, 12, 15, 20]

    def test_height(self, recorder):
        assert _make_tree(recorder).height() == 2
        assert TrackedBinaryTree(sink=recorder).height() == -1
        assert recorder.steps[-1].metadata_dict()["height"] == -1

    def test_validate_detects_broken_order(self, recorder):
        tree = _make_tree(recorder)
        tree.root.left.right.value = 11

        assert tree.validate() is False
        assert recorder.steps[0].metadata_dict()["isValid"] is False

    def test_clear(self, recorder):
        tree = _make_tree(recorder)

        tree.clear()

        assert recorder.steps[0].result is None
        assert tree.size() == 0


class TestDegenerateTree:
    def test_sorted_inserts_build_a_deep_chain(self):
        # every step holds a full copy of the chain, so keep only the newest
        latest = StepRecorder()

        def keep_latest(step):
            latest.clear()
            latest(step)

        tree = TrackedBinaryTree(sink=keep_latest)
        for value in range(2000):
            assert tree.insert(value) is True

        step = latest.steps[0]
        assert step.args == (1999,)
        node, depth = step.result, 0
        while node["right"] is not None:
            assert node["left"] is None
            node = node["right"]
            depth += 1
        assert depth == 1999
        assert node["value"] == 1999
        assert step.metadata.tree_structure["value"] == 0
        assert len(step.metadata.path) == 1999

    def test_queries_on_a_deep_chain(self, recorder):
        tree = TrackedBinaryTree.from_values(range(1500), sink=recorder)

        assert tree.inorder_traversal() == list(range(1500))
        assert tree.preorder_traversal() == list(range(1500))
        assert tree.postorder_traversal() == list(range(1499, -1, -1))
        assert tree.validate() is True
        assert tree.height() == 1499
        assert tree.search(1499) is True
        assert tree.delete(0) is True
        assert tree.to_list() == list(range(1, 1500))


class TestSnapshotReplay:
    def test_every_step_matches_the_live_tree(self, recorder):
        tree = TrackedBinaryTree(sink=recorder)
        operations = [
            lambda: tree.insert(10),
            lambda: tree.insert(5),
            lambda: tree.insert(15),
            lambda: tree.insert(12),
            lambda: tree.search(12),
            lambda: tree.delete(10),
            lambda: tree.inorder_traversal(),
            lambda: tree.delete(99),
            lambda: tree.height(),
            lambda: tree.clear(),
        ]
        for operation in operations:
            operation()
            assert recorder.steps[-1].result == tree.snapshot()
            assert recorder.steps[-1].metadata.tree_structure == tree.snapshot()

    def test_node_values_are_copied(self, recorder):
        key = [1]
        tree = TrackedBinaryTree(sink=recorder)
        tree.insert(key)

        key.append(2)

        assert recorder.steps[0].result["value"] == [1]
        assert recorder.steps[0].metadata.tree_structure["value"] == [1]
