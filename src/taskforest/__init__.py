"""
taskforest - hierarchy reconstruction for flat task collections.

Tasks are stored flat with an optional parent reference. This package rebuilds
the implied forest, projects it into display order, answers ancestor and
descendant queries, and validates parent changes before they are stored.
"""

from .version import VERSION
from .models import Task, HierarchyNode, TaskCollection
from .tree import build_forest, flatten_forest, display_sequence, ExpandState
from .index import HierarchyIndex
from .validator import (
    RelationshipValidator,
    can_be_parent,
    get_available_parents,
    get_descendant_ids,
)
from .settings import HierarchySettings
from .recovery import (
    HierarchyError,
    RecoverableError,
    FatalError,
    CorruptionError,
    FileOperationError,
    InvalidParentError,
    NestingLimitError,
)

__version__ = VERSION

__all__ = [
    "VERSION",
    "Task",
    "HierarchyNode",
    "TaskCollection",
    "build_forest",
    "flatten_forest",
    "display_sequence",
    "ExpandState",
    "HierarchyIndex",
    "RelationshipValidator",
    "can_be_parent",
    "get_available_parents",
    "get_descendant_ids",
    "HierarchySettings",
    "HierarchyError",
    "RecoverableError",
    "FatalError",
    "CorruptionError",
    "FileOperationError",
    "InvalidParentError",
    "NestingLimitError",
]
