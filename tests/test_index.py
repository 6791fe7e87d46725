"""Unit tests for HierarchyIndex."""

from unittest.mock import patch

from taskforest.models import Task
from taskforest.index import HierarchyIndex
from taskforest.tree import build_forest


class TestAdjacency:
    """Test the parent and child maps."""

    def test_sibling_scenario(self, sibling_tasks):
        index = HierarchyIndex(sibling_tasks)

        assert index.get_children("P") == ["C2", "C1"]
        assert index.get_parent("C1") == "P"
        assert index.get_depth("C1") == 1
        assert index.get_descendant_count("P") == 2

    def test_maps_only_hold_linked_tasks(self, sibling_tasks):
        index = HierarchyIndex(sibling_tasks)

        assert index.parent_of == {"C1": "P", "C2": "P"}
        assert set(index.children_of) == {"P"}

    def test_dangling_parent_is_root(self):
        index = HierarchyIndex([Task(id="X", parent_id="ghost")])

        assert index.is_root("X")
        assert index.get_parent("X") is None
        assert index.get_ancestors("X") == []
        assert "ghost" not in index.children_of

    def test_root_and_leaf_predicates(self, chain_tasks):
        index = HierarchyIndex(chain_tasks)

        assert index.is_root("A") and not index.is_leaf("A")
        assert not index.is_root("B") and not index.is_leaf("B")
        assert not index.is_root("C") and index.is_leaf("C")
        assert index.has_children("B")
        assert not index.has_children("C")

    def test_root_and_leaf_views(self, project_tasks):
        index = HierarchyIndex(project_tasks)

        assert [t.id for t in index.root_tasks] == ["design", "release", "stray"]
        assert [t.id for t in index.leaf_tasks] == ["api", "tables", "indexes", "notes", "stray"]

    def test_get_children_returns_copy(self, sibling_tasks):
        index = HierarchyIndex(sibling_tasks)
        index.get_children("P").append("intruder")
        assert index.get_children("P") == ["C2", "C1"]

    def test_lookup(self, chain_tasks):
        index = HierarchyIndex(chain_tasks)

        assert len(index) == 4
        assert "A" in index
        assert index.contains("D")
        assert index.get_task("B").parent_id == "A"
        assert index.get_task("missing") is None


class TestQueries:
    """Test ancestor and descendant queries."""

    def test_ancestors_nearest_first(self, chain_tasks):
        index = HierarchyIndex(chain_tasks)

        assert index.get_ancestors("C") == ["B", "A"]
        assert index.get_depth("C") == 2
        assert index.get_root_parent("C") == "A"
        assert index.get_root_parent("A") == "A"

    def test_descendants_preorder(self, project_tasks):
        index = HierarchyIndex(project_tasks)

        assert index.get_descendant_ids("design") == ["schema", "tables", "indexes", "api"]
        assert index.get_descendant_count("design") == 4
        assert index.get_descendant_count("api") == 0

    def test_subtree_height(self, project_tasks):
        index = HierarchyIndex(project_tasks)

        assert index.get_subtree_height("design") == 2
        assert index.get_subtree_height("release") == 1
        assert index.get_subtree_height("notes") == 0

    def test_depth_equals_ancestor_count_and_builder_depth(self, project_tasks):
        index = HierarchyIndex(project_tasks)
        for root in build_forest(project_tasks):
            for node in root.walk():
                assert index.get_depth(node.id) == len(index.get_ancestors(node.id)) == node.depth

    def test_unknown_ids_are_total(self, chain_tasks):
        """Queries on unknown ids answer instead of raising."""
        index = HierarchyIndex(chain_tasks)

        assert index.get_parent("nope") is None
        assert index.get_children("nope") == []
        assert not index.has_children("nope")
        assert index.is_root("nope")
        assert index.is_leaf("nope")
        assert index.get_ancestors("nope") == []
        assert index.get_depth("nope") == 0
        assert index.get_descendant_ids("nope") == []
        assert index.get_descendant_count("nope") == 0
        assert index.get_subtree_height("nope") == 0
        assert index.get_root_parent("nope") is None

    def test_empty_collection(self):
        index = HierarchyIndex([])

        assert len(index) == 0
        assert index.root_tasks == []
        assert index.leaf_tasks == []

    def test_deep_chain(self):
        """Walks use explicit stacks, so depth is not bounded by recursion limits."""
        count = 5000
        tasks = [Task(id="n0")] + [Task(id=f"n{i}", parent_id=f"n{i - 1}") for i in range(1, count)]
        index = HierarchyIndex(tasks)

        assert index.get_descendant_count("n0") == count - 1
        assert index.get_depth(f"n{count - 1}") == count - 1
        assert index.get_subtree_height("n0") == count - 1


class TestCycleGuard:
    """Corrupt cyclic data ends walks instead of looping."""

    def cyclic_index(self):
        return HierarchyIndex([
            Task(id="A", parent_id="C"),
            Task(id="B", parent_id="A"),
            Task(id="C", parent_id="B"),
        ])

    def test_ancestors_stop_at_repeat(self):
        index = self.cyclic_index()
        with patch('taskforest.index.log') as mock_log:
            assert index.get_ancestors("A") == ["C", "B"]
        mock_log.error.assert_called_once()

    def test_descendants_stop_at_repeat(self):
        index = self.cyclic_index()
        with patch('taskforest.index.log') as mock_log:
            assert index.get_descendant_ids("A") == ["B", "C"]
            assert index.get_subtree_height("A") == 2
        assert mock_log.error.call_count == 2

    def test_self_parent(self):
        index = HierarchyIndex([Task(id="S", parent_id="S")])
        with patch('taskforest.index.log'):
            assert index.get_ancestors("S") == []
            assert index.get_descendant_count("S") == 0
