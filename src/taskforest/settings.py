import os
from pydantic import BaseModel, Field, field_validator
from typing import Optional

class HierarchySettings(BaseModel):
    """Presentation policy passed to the mutation path and the CLI."""

    max_depth: Optional[int] = Field(
        default=3,
        ge=0,
        description="Deepest level a subtask may be created at; None disables the limit"
    )
    expand_all_by_default: bool = Field(
        default=True,
        description="Whether a fresh expand state starts with every parent expanded"
    )

    @field_validator('max_depth', mode='before')
    @classmethod
    def parse_disabled(cls, v):
        if isinstance(v, str) and v.strip().lower() in ('', 'none', 'off'):
            return None
        return v

    @classmethod
    def from_env(cls) -> 'HierarchySettings':
        """Load settings from TASKFOREST_* environment variables, falling back to defaults."""
        values = {}
        if 'TASKFOREST_MAX_DEPTH' in os.environ:
            values['max_depth'] = os.environ['TASKFOREST_MAX_DEPTH']
        if 'TASKFOREST_EXPAND_ALL' in os.environ:
            values['expand_all_by_default'] = os.environ['TASKFOREST_EXPAND_ALL']
        return cls.model_validate(values)
