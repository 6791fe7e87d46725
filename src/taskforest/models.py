from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from typing import Optional, List, Dict, Any
import yaml

class BaseYAMLModel(BaseModel):
    """Pydantic model that can round-trip through a YAML document."""

    def to_yaml(self) -> str:
        return yaml.safe_dump(
            self.model_dump(mode='json'),
            default_flow_style=False,
            sort_keys=False,
            indent=2,
            allow_unicode=True
        )

    @classmethod
    def from_yaml(cls, text: str):
        return cls.model_validate(yaml.safe_load(text) or {})

class Task(BaseModel):
    """A flat work item. Owned by the storage layer; the engine only reads it."""

    model_config = ConfigDict(extra="allow", frozen=True)

    id: str = Field(min_length=1, description="Unique, stable identifier of the task")
    parent_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices('parent_id', 'parent_task_id'),
        description="Identifier of the parent task; absent for a root"
    )
    order_key: float = Field(
        default=0,
        validation_alias=AliasChoices('order_key', 'task_order'),
        description="Sort key among siblings, ascending"
    )

    @field_validator('parent_id', mode='before')
    @classmethod
    def blank_parent_is_root(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def attributes(self) -> Dict[str, Any]:
        """The opaque attributes carried alongside the hierarchy fields."""
        return dict(self.model_extra or {})

class HierarchyNode(BaseModel):
    """One task placed in a forest, with its ordered children."""

    task: Task = Field(description="The wrapped task")
    children: List['HierarchyNode'] = Field(
        default_factory=list,
        description="Child nodes, ascending by order_key"
    )
    depth: int = Field(default=0, ge=0, description="Distance from the root list")
    expanded: bool = Field(default=True, description="Display hint used when no expand state is supplied")

    @property
    def id(self) -> str:
        return self.task.id

    @property
    def parent_id(self) -> Optional[str]:
        return self.task.parent_id

    @property
    def order_key(self) -> float:
        return self.task.order_key

    def walk(self):
        """Yield this node and every node below it in pre-order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

HierarchyNode.model_rebuild()

class TaskCollection(BaseYAMLModel):
    """A snapshot of the flat task collection, as stored in a YAML or JSON file."""

    tasks: List[Task] = Field(
        default_factory=list,
        description="Flat list of tasks in any order"
    )
