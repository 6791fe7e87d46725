"""Unit tests for snapshot loading."""

import json

import pytest

from taskforest.io import load_tasks
from taskforest.recovery import CorruptionError, FileOperationError


class TestLoadTasks:
    """Test load_tasks."""

    def test_yaml_list(self, tmp_path):
        path = tmp_path / "tasks.yml"
        path.write_text(
            "- id: P\n"
            "  title: Plan\n"
            "- id: C1\n"
            "  parent_id: P\n"
            "  order_key: 2\n"
        )

        tasks = load_tasks(path)

        assert [t.id for t in tasks] == ["P", "C1"]
        assert tasks[0].attributes == {"title": "Plan"}
        assert tasks[1].parent_id == "P"

    def test_yaml_mapping(self, tmp_path):
        path = tmp_path / "tasks.yaml"
        path.write_text("tasks:\n  - id: a\n  - id: b\n    parent_task_id: a\n    task_order: 3\n")

        tasks = load_tasks(str(path))

        assert tasks[1].parent_id == "a"
        assert tasks[1].order_key == 3

    def test_json(self, tmp_path):
        path = tmp_path / "tasks.json"
        path.write_text(json.dumps({"tasks": [{"id": "a"}, {"id": "b", "parent_id": "a"}]}))

        assert [t.parent_id for t in load_tasks(path)] == [None, "a"]

    def test_empty_file(self, tmp_path):
        path = tmp_path / "tasks.yml"
        path.write_text("")
        assert load_tasks(path) == []

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileOperationError, match="not found"):
            load_tasks(tmp_path / "absent.yml")

    def test_bad_yaml(self, tmp_path):
        path = tmp_path / "tasks.yml"
        path.write_text("tasks: [unclosed\n")
        with pytest.raises(CorruptionError, match="YAML syntax error"):
            load_tasks(path)

    def test_bad_json(self, tmp_path):
        path = tmp_path / "tasks.json"
        path.write_text("{not json")
        with pytest.raises(CorruptionError, match="JSON syntax error"):
            load_tasks(path)

    def test_mapping_without_tasks_key(self, tmp_path):
        """A misspelled top-level key is not an empty collection."""
        path = tmp_path / "tasks.yml"
        path.write_text("task:\n  - id: a\n  - id: b\n    parent_id: a\n")
        with pytest.raises(CorruptionError, match="invalid data structure"):
            load_tasks(path)

    def test_single_task_mapping(self, tmp_path):
        """A bare task mapping must be wrapped in a list or a tasks key."""
        path = tmp_path / "tasks.yml"
        path.write_text("id: a\n")
        with pytest.raises(CorruptionError, match="invalid data structure"):
            load_tasks(path)

    def test_scalar_document(self, tmp_path):
        path = tmp_path / "tasks.yml"
        path.write_text("just a string\n")
        with pytest.raises(CorruptionError, match="invalid data structure"):
            load_tasks(path)

    def test_task_without_id(self, tmp_path):
        path = tmp_path / "tasks.yml"
        path.write_text("- parent_id: a\n")
        with pytest.raises(CorruptionError, match="Invalid task data"):
            load_tasks(path)
