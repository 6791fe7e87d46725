"""
HierarchyIndex - adjacency maps and relationship queries over a flat task collection.

The index is rebuilt wholesale from the collection every time it changes and
never patched. All queries are total: unknown ids produce ``None``, an empty
list, ``0`` or the predicate's natural answer instead of raising.
"""
from typing import Dict, Iterable, List, Optional, Set
from taskforest.models import Task
from taskforest.logs import get_logger

log = get_logger("index")

class HierarchyIndex:
    """Parent and child maps for a task collection, plus the queries derived from them."""

    def __init__(self, tasks: Iterable[Task]):
        self._tasks: Dict[str, Task] = {}
        for task in tasks:
            self._tasks[task.id] = task

        # Only resolvable parent references make it into the maps
        self.parent_of: Dict[str, str] = {}
        self.children_of: Dict[str, List[str]] = {}
        for task in sorted(self._tasks.values(), key=lambda t: t.order_key):
            if task.parent_id and task.parent_id in self._tasks:
                self.parent_of[task.id] = task.parent_id
                self.children_of.setdefault(task.parent_id, []).append(task.id)

        log.debug(f"Indexed {len(self._tasks)} tasks: {len(self.parent_of)} parent links, "
                  f"{len(self.children_of)} parents")

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, task_id) -> bool:
        return task_id in self._tasks

    def contains(self, task_id: str) -> bool:
        return task_id in self._tasks

    @property
    def tasks(self) -> List[Task]:
        return list(self._tasks.values())

    def get_task(self, task_id: str) -> Optional[Task]:
        return self._tasks.get(task_id)

    def get_parent(self, task_id: str) -> Optional[str]:
        return self.parent_of.get(task_id)

    def get_children(self, task_id: str) -> List[str]:
        """Direct children, ascending by order_key."""
        return list(self.children_of.get(task_id, ()))

    def has_children(self, task_id: str) -> bool:
        return task_id in self.children_of

    def is_root(self, task_id: str) -> bool:
        return task_id not in self.parent_of

    def is_leaf(self, task_id: str) -> bool:
        return task_id not in self.children_of

    def get_ancestors(self, task_id: str) -> List[str]:
        """
        Ancestor ids, nearest first.

        Stops at the first repeated id if the parent links form a cycle.
        """
        ancestors: List[str] = []
        visited: Set[str] = {task_id}
        current = self.parent_of.get(task_id)
        while current is not None:
            if current in visited:
                log.error(f"Data-integrity fault: parent cycle reached from task '{task_id}' at '{current}'")
                break
            ancestors.append(current)
            visited.add(current)
            current = self.parent_of.get(current)
        return ancestors

    def get_depth(self, task_id: str) -> int:
        return len(self.get_ancestors(task_id))

    def get_root_parent(self, task_id: str) -> Optional[str]:
        """Topmost ancestor of a task, the task itself for a root, None if unknown."""
        if task_id not in self._tasks:
            return None
        ancestors = self.get_ancestors(task_id)
        return ancestors[-1] if ancestors else task_id

    def get_descendant_ids(self, task_id: str) -> List[str]:
        """
        The descendant closure of a task in pre-order, excluding the task itself.

        Uses an explicit stack so deep trees cannot exhaust the call stack, and a
        visited set so a corrupt cycle ends the walk instead of looping.
        """
        descendants: List[str] = []
        visited: Set[str] = {task_id}
        stack = list(reversed(self.children_of.get(task_id, ())))
        while stack:
            child = stack.pop()
            if child in visited:
                log.error(f"Data-integrity fault: task '{child}' revisited while walking descendants of '{task_id}'")
                continue
            visited.add(child)
            descendants.append(child)
            stack.extend(reversed(self.children_of.get(child, ())))
        return descendants

    def get_descendant_count(self, task_id: str) -> int:
        return len(self.get_descendant_ids(task_id))

    def get_subtree_height(self, task_id: str) -> int:
        """Number of levels below a task; 0 for a leaf or an unknown id."""
        height = 0
        visited: Set[str] = {task_id}
        stack = [(child, 1) for child in self.children_of.get(task_id, ())]
        while stack:
            child, level = stack.pop()
            if child in visited:
                log.error(f"Data-integrity fault: task '{child}' revisited while measuring subtree of '{task_id}'")
                continue
            visited.add(child)
            height = max(height, level)
            stack.extend((grandchild, level + 1) for grandchild in self.children_of.get(child, ()))
        return height

    @property
    def root_tasks(self) -> List[Task]:
        return [task for task in self._tasks.values() if self.is_root(task.id)]

    @property
    def leaf_tasks(self) -> List[Task]:
        return [task for task in self._tasks.values() if self.is_leaf(task.id)]
