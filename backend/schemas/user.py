from datetime import datetime
from typing import Literal

from pydantic import Field, ValidationInfo, field_validator

from backend.schemas.common import (
    CamelModel,
    EntityModel,
    as_utc,
    normalize_optional_text,
    require_text,
)

UserType = Literal['student', 'mentor']

MIN_PASSWORD_LENGTH = 6
MAX_RATING = 50


def normalize_email(value: str) -> str:
    normalized = value.strip().lower()
    local_part, _, domain = normalized.partition('@')
    if not local_part or '.' not in domain or ' ' in normalized:
        raise ValueError('Invalid email.')
    return normalized


def normalize_skills(value: list[str] | None) -> list[str] | None:
    if value is None:
        return None
    return [skill.strip() for skill in value if skill.strip()]


class UserProfile(EntityModel):
    """Public view of a user. Never carries credentials."""

    email: str
    first_name: str
    last_name: str
    user_type: UserType
    area: str
    bio: str | None = None
    skills: list[str] = Field(default_factory=list)
    hourly_rate: int | None = Field(default=None, ge=0)
    rating: int = Field(default=0, ge=0, le=MAX_RATING)
    review_count: int = Field(default=0, ge=0)
    avatar_url: str | None = None
    created_at: datetime

    @field_validator('created_at')
    @classmethod
    def validate_created_at(cls, value: datetime) -> datetime:
        return as_utc(value)


class User(UserProfile):
    password_hash: str = Field(exclude=True, repr=False)


class UserCreate(CamelModel):
    email: str
    password: str = Field(min_length=MIN_PASSWORD_LENGTH, repr=False)
    first_name: str
    last_name: str
    user_type: UserType
    area: str
    bio: str | None = None
    skills: list[str] | None = None
    hourly_rate: int | None = Field(default=None, ge=0)
    avatar_url: str | None = None

    @field_validator('email')
    @classmethod
    def validate_email(cls, value: str) -> str:
        return normalize_email(value)

    @field_validator('first_name', 'last_name', 'area')
    @classmethod
    def validate_required_text(cls, value: str, info: ValidationInfo) -> str:
        return require_text(value, info.field_name)

    @field_validator('bio', 'avatar_url')
    @classmethod
    def validate_optional_text(cls, value: str | None) -> str | None:
        return normalize_optional_text(value)

    @field_validator('skills')
    @classmethod
    def validate_skills(cls, value: list[str] | None) -> list[str] | None:
        return normalize_skills(value)


class UserUpdate(CamelModel):
    first_name: str | None = None
    last_name: str | None = None
    area: str | None = None
    bio: str | None = None
    skills: list[str] | None = None
    hourly_rate: int | None = Field(default=None, ge=0)
    avatar_url: str | None = None

    @field_validator('first_name', 'last_name', 'area')
    @classmethod
    def validate_required_text(cls, value: str | None, info: ValidationInfo) -> str | None:
        if value is None:
            raise ValueError(f'{info.field_name} cannot be null.')
        return require_text(value, info.field_name)

    @field_validator('bio', 'avatar_url')
    @classmethod
    def validate_optional_text(cls, value: str | None) -> str | None:
        return normalize_optional_text(value)

    @field_validator('skills')
    @classmethod
    def validate_skills(cls, value: list[str] | None) -> list[str]:
        return normalize_skills(value) or []


class LoginRequest(CamelModel):
    email: str
    password: str = Field(min_length=MIN_PASSWORD_LENGTH, repr=False)

    @field_validator('email')
    @classmethod
    def validate_email(cls, value: str) -> str:
        return normalize_email(value)


class AuthResponse(CamelModel):
    user: UserProfile
    token: str
