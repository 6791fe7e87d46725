"""Shared task fixtures."""

import pytest

from taskforest.models import Task


def _tasks(*specs):
    """Build tasks from (id, parent_id, order_key) tuples."""
    return [Task(id=task_id, parent_id=parent_id, order_key=order_key)
            for task_id, parent_id, order_key in specs]


@pytest.fixture
def sibling_tasks():
    """One root with two children listed out of order."""
    return [
        Task(id="P"),
        Task(id="C1", parent_id="P", order_key=2),
        Task(id="C2", parent_id="P", order_key=1),
    ]


@pytest.fixture
def chain_tasks():
    """A -> B -> C, plus an unrelated root D."""
    return _tasks(
        ("A", None, 1),
        ("B", "A", 1),
        ("C", "B", 1),
        ("D", None, 2),
    )


@pytest.fixture
def project_tasks():
    """A small project: two roots, nested subtasks and a dangling reference."""
    return _tasks(
        ("design", None, 1),
        ("api", "design", 2),
        ("schema", "design", 1),
        ("tables", "schema", 1),
        ("indexes", "schema", 2),
        ("release", None, 2),
        ("notes", "release", 1),
        ("stray", "deleted-task", 3),
    )
