"""
Forest construction and display projection for flat task collections.

A task collection only stores back-references (``parent_id``). ``build_forest``
turns it into ordered root nodes with nested children, and ``flatten_forest``
walks that forest in pre-order to produce the linear sequence a tree view
renders, honouring which nodes are expanded.
"""
from typing import Container, Dict, Iterable, List, Optional, Set
from taskforest.models import Task, HierarchyNode
from taskforest.logs import get_logger

log = get_logger("tree")

def _order(node: HierarchyNode) -> float:
    return node.order_key

def _reachable_ids(roots: Iterable[HierarchyNode]) -> Set[str]:
    seen: Set[str] = set()
    stack = list(roots)
    while stack:
        node = stack.pop()
        if node.id in seen:
            continue
        seen.add(node.id)
        stack.extend(node.children)
    return seen

def _cycle_member(node: HierarchyNode, nodes: Dict[str, HierarchyNode]) -> HierarchyNode:
    """Walk parent links from an unreachable node until one repeats."""
    visited: Set[str] = set()
    while node.id not in visited:
        visited.add(node.id)
        node = nodes[node.parent_id]
    return node

def _break_cycles(nodes: Dict[str, HierarchyNode], roots: List[HierarchyNode]) -> None:
    """Promote one member of every parent cycle to the root list so no task is lost."""
    reached = _reachable_ids(roots)
    if len(reached) == len(nodes):
        return

    for node in nodes.values():
        if node.id in reached:
            continue
        head = _cycle_member(node, nodes)
        parent = nodes[head.parent_id]
        # identity comparison: model equality would recurse around the cycle
        parent.children = [child for child in parent.children if child is not head]
        roots.append(head)
        log.error(f"Data-integrity fault: parent cycle through task '{head.id}' (parent '{head.parent_id}'); "
                  f"placing it at the root")
        reached |= _reachable_ids([head])

def build_forest(tasks: Iterable[Task]) -> List[HierarchyNode]:
    """
    Build an ordered forest from a flat task collection.

    Tasks whose parent is missing from the collection are placed at the root
    rather than dropped. Siblings are sorted ascending by ``order_key``; ties
    keep their input order.

    Args:
        tasks: The flat task collection, in any order.

    Returns:
        The root nodes, each with its fully populated subtree.
    """
    # First pass: one node per task, duplicates resolve last-write-wins
    nodes: Dict[str, HierarchyNode] = {}
    for task in tasks:
        nodes[task.id] = HierarchyNode(task=task)

    # Second pass: attach every node to its parent or to the root list
    roots: List[HierarchyNode] = []
    for node in nodes.values():
        parent = nodes.get(node.parent_id) if node.parent_id else None
        if parent is None:
            if node.parent_id:
                log.debug(f"Task '{node.id}' references unknown parent '{node.parent_id}', treating as root")
            roots.append(node)
        else:
            parent.children.append(node)

    _break_cycles(nodes, roots)

    # Third pass: sort siblings and assign depth top-down
    roots.sort(key=_order)
    stack = [(node, 0) for node in roots]
    while stack:
        node, depth = stack.pop()
        node.depth = depth
        node.children.sort(key=_order)
        stack.extend((child, depth + 1) for child in node.children)

    log.debug(f"Built forest: {len(roots)} roots from {len(nodes)} tasks")
    return roots

def flatten_forest(forest: List[HierarchyNode],
                   expanded_ids: Optional[Container[str]] = None) -> List[HierarchyNode]:
    """
    Flatten a forest into display order.

    Each node is emitted before its visible descendants. A collapsed node hides
    its whole subtree regardless of the expand state below it.

    Args:
        forest: Root nodes as returned by ``build_forest``.
        expanded_ids: Ids of expanded nodes. When omitted, each node's own
            ``expanded`` hint decides instead.

    Returns:
        Shallow copies of the visible nodes with ``depth`` set to their
        position in the traversal.
    """
    result: List[HierarchyNode] = []
    stack = [(node, 0) for node in reversed(forest)]
    while stack:
        node, depth = stack.pop()
        result.append(node.model_copy(update={'depth': depth}))

        if expanded_ids is None:
            is_open = node.expanded
        else:
            is_open = node.id in expanded_ids
        if is_open:
            stack.extend((child, depth + 1) for child in reversed(node.children))
    return result

def display_sequence(tasks: Iterable[Task],
                     expanded_ids: Optional[Container[str]] = None) -> List[HierarchyNode]:
    """Build and flatten in one step, as a view does on every change."""
    return flatten_forest(build_forest(tasks), expanded_ids)

class ExpandState:
    """The set of expanded task ids a tree view keeps between recomputations."""

    def __init__(self, expanded: Iterable[str] = ()):
        self._ids: Set[str] = set(expanded)

    def __contains__(self, task_id) -> bool:
        return task_id in self._ids

    def __iter__(self):
        return iter(self._ids)

    def __len__(self) -> int:
        return len(self._ids)

    @property
    def ids(self) -> frozenset:
        return frozenset(self._ids)

    def is_expanded(self, task_id: str) -> bool:
        return task_id in self._ids

    def expand(self, task_id: str):
        self._ids.add(task_id)

    def collapse(self, task_id: str):
        self._ids.discard(task_id)

    def toggle(self, task_id: str) -> bool:
        """Flip one task's state and return whether it is now expanded."""
        if task_id in self._ids:
            self._ids.remove(task_id)
            return False
        self._ids.add(task_id)
        return True

    def expand_all(self, forest: List[HierarchyNode]):
        """Expand every node in the forest that has children."""
        for root in forest:
            self._ids.update(node.id for node in root.walk() if node.children)

    def collapse_all(self):
        self._ids.clear()
