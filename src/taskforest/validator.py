"""
Relationship validation for re-parenting tasks.

A task may take any parent except itself or one of its own descendants, since
either would close a cycle. The mutation path must ask before it persists a
parent change; nothing here prevents an illegal state from being stored
elsewhere.
"""
from typing import List, Optional, Sequence, Union
from taskforest.index import HierarchyIndex
from taskforest.models import Task
from taskforest.recovery import InvalidParentError, NestingLimitError
from taskforest.logs import get_logger

log = get_logger("validator")

class RelationshipValidator:
    """Answers whether a proposed parent assignment is legal."""

    def __init__(self, source: Union[HierarchyIndex, Sequence[Task]]):
        if isinstance(source, HierarchyIndex):
            self.index = source
        else:
            self.index = HierarchyIndex(source)

    def can_be_parent(self, task_id: str, candidate_parent_id: str) -> bool:
        """True if ``candidate_parent_id`` may become the parent of ``task_id``."""
        if task_id == candidate_parent_id:
            return False
        return candidate_parent_id not in set(self.index.get_descendant_ids(task_id))

    def get_available_parents(self, task_id: Optional[str] = None) -> List[Task]:
        """
        Tasks that may be chosen as the parent of ``task_id``.

        A task that does not exist yet cannot be anyone's ancestor, so every
        task is available when ``task_id`` is None.
        """
        if task_id is None:
            return self.index.tasks

        excluded = set(self.index.get_descendant_ids(task_id))
        excluded.add(task_id)
        return [task for task in self.index.tasks if task.id not in excluded]

    def can_add_subtask(self, parent_id: str, max_depth: Optional[int] = None) -> bool:
        """True if a new child of ``parent_id`` would sit at or above ``max_depth``."""
        if parent_id not in self.index:
            return False
        if max_depth is None:
            return True
        return self.index.get_depth(parent_id) + 1 <= max_depth

    def check_reparent(self, task_id: str, new_parent_id: Optional[str], max_depth: Optional[int] = None):
        """
        Guard for the mutation path, called before a parent change is persisted.

        Args:
            task_id: The task being moved.
            new_parent_id: Its proposed parent, or None to make it a root.
            max_depth: Deepest level any task may end up at, or None for no limit.

        Raises:
            InvalidParentError: If the parent is the task itself, one of its
                descendants, or not part of the collection.
            NestingLimitError: If the moved subtree would extend past ``max_depth``.
        """
        if new_parent_id is None:
            return

        if task_id == new_parent_id:
            log.warning(f"Rejected re-parent: task '{task_id}' cannot be its own parent")
            raise InvalidParentError(f"Task '{task_id}' cannot be its own parent")

        if new_parent_id not in self.index:
            log.warning(f"Rejected re-parent of '{task_id}': unknown parent '{new_parent_id}'")
            raise InvalidParentError(f"Parent task '{new_parent_id}' does not exist")

        if not self.can_be_parent(task_id, new_parent_id):
            log.warning(f"Rejected re-parent: '{new_parent_id}' is a descendant of '{task_id}'")
            raise InvalidParentError(
                f"Task '{new_parent_id}' is a descendant of '{task_id}' and cannot become its parent"
            )

        if max_depth is not None:
            deepest = self.index.get_depth(new_parent_id) + 1 + self.index.get_subtree_height(task_id)
            if deepest > max_depth:
                log.warning(f"Rejected re-parent of '{task_id}' under '{new_parent_id}': "
                            f"depth {deepest} exceeds max depth {max_depth}")
                raise NestingLimitError(
                    f"Moving '{task_id}' under '{new_parent_id}' would nest tasks to depth {deepest}, "
                    f"exceeding max depth {max_depth}."
                )

def get_descendant_ids(task_id: str, tasks: Sequence[Task]) -> List[str]:
    """Descendant closure of ``task_id`` within a flat task collection."""
    return HierarchyIndex(tasks).get_descendant_ids(task_id)

def can_be_parent(task_id: str, candidate_parent_id: str, tasks: Sequence[Task]) -> bool:
    """Check a single parent assignment against a flat task collection."""
    return RelationshipValidator(tasks).can_be_parent(task_id, candidate_parent_id)

def get_available_parents(task_id: Optional[str], tasks: Sequence[Task]) -> List[Task]:
    """Legal parent candidates for ``task_id``, in collection order."""
    if task_id is None:
        return list(tasks)
    excluded = set(get_descendant_ids(task_id, tasks))
    excluded.add(task_id)
    return [task for task in tasks if task.id not in excluded]
