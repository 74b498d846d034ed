from datetime import datetime
from typing import Literal

from pydantic import Field, field_validator

from backend.schemas.common import (
    CamelModel,
    EntityModel,
    as_utc,
    normalize_optional_text,
    require_text,
)

KanbanItemType = Literal['epic', 'story', 'feature', 'task', 'bug', 'setup', 'design']
KanbanStatus = Literal['backlog', 'todo', 'in_progress', 'done']
KanbanPriority = Literal['low', 'medium', 'high', 'urgent']

DEFAULT_KANBAN_STATUS = 'backlog'
DEFAULT_KANBAN_PRIORITY = 'medium'


class KanbanItem(EntityModel):
    title: str
    description: str | None = None
    type: KanbanItemType
    status: KanbanStatus = DEFAULT_KANBAN_STATUS
    points: int = Field(default=0, ge=0)
    assignee: str | None = None
    priority: KanbanPriority = DEFAULT_KANBAN_PRIORITY
    progress: int = Field(default=0, ge=0, le=100)
    created_at: datetime

    @field_validator('created_at')
    @classmethod
    def validate_created_at(cls, value: datetime) -> datetime:
        return as_utc(value)


class KanbanItemCreate(CamelModel):
    title: str
    description: str | None = None
    type: KanbanItemType
    status: KanbanStatus | None = None
    points: int | None = Field(default=None, ge=0)
    assignee: str | None = None
    priority: KanbanPriority | None = None
    progress: int | None = Field(default=None, ge=0, le=100)

    @field_validator('title')
    @classmethod
    def validate_title(cls, value: str) -> str:
        return require_text(value, 'Title')

    @field_validator('description', 'assignee')
    @classmethod
    def validate_optional_text(cls, value: str | None) -> str | None:
        return normalize_optional_text(value)


class KanbanItemUpdate(CamelModel):
    title: str | None = None
    description: str | None = None
    type: KanbanItemType | None = None
    status: KanbanStatus | None = None
    points: int | None = Field(default=None, ge=0)
    assignee: str | None = None
    priority: KanbanPriority | None = None
    progress: int | None = Field(default=None, ge=0, le=100)

    @field_validator('title', 'type', 'status', 'points', 'priority', 'progress')
    @classmethod
    def validate_not_null(cls, value):
        if value is None:
            raise ValueError('Field cannot be null.')
        return value

    @field_validator('title')
    @classmethod
    def validate_title(cls, value: str) -> str:
        return require_text(value, 'Title')

    @field_validator('description', 'assignee')
    @classmethod
    def validate_optional_text(cls, value: str | None) -> str | None:
        return normalize_optional_text(value)
