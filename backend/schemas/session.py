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

SessionStatus = Literal['pending', 'confirmed', 'completed', 'cancelled']

CANCELLED_STATUS = 'cancelled'
COMPLETED_STATUS = 'completed'
DEFAULT_SESSION_STATUS = 'pending'


class Session(EntityModel):
    student_id: str
    mentor_id: str
    topic: str
    description: str | None = None
    scheduled_at: datetime
    duration: int = Field(gt=0)  # minutes
    status: SessionStatus = DEFAULT_SESSION_STATUS
    created_at: datetime

    @field_validator('scheduled_at', 'created_at')
    @classmethod
    def validate_timestamps(cls, value: datetime) -> datetime:
        return as_utc(value)

    def involves(self, user_id: str) -> bool:
        return self.student_id == user_id or self.mentor_id == user_id


class SessionCreate(CamelModel):
    student_id: str
    mentor_id: str
    topic: str
    description: str | None = None
    scheduled_at: datetime
    duration: int = Field(gt=0)
    status: SessionStatus | None = None

    @field_validator('student_id', 'mentor_id')
    @classmethod
    def validate_participant(cls, value: str) -> str:
        return require_text(value, 'Participant id')

    @field_validator('topic')
    @classmethod
    def validate_topic(cls, value: str) -> str:
        return require_text(value, 'Topic')

    @field_validator('description')
    @classmethod
    def validate_description(cls, value: str | None) -> str | None:
        return normalize_optional_text(value)

    @field_validator('scheduled_at')
    @classmethod
    def validate_scheduled_at(cls, value: datetime) -> datetime:
        return as_utc(value)


class SessionStatusUpdate(CamelModel):
    status: SessionStatus
