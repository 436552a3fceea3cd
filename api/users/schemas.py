"""
User payload rules and response models.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from core.validation import CreatePayload, RuleSet, UpdatePayload


class UserCreate(CreatePayload):
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    name: str = Field(..., min_length=1, max_length=200)

    @field_validator("email")
    @classmethod
    def lower_email(cls, value: str) -> str:
        return value.lower()


class UserUpdate(UpdatePayload):
    email: EmailStr | None = None
    password: str | None = Field(default=None, min_length=6, max_length=128)
    name: str | None = Field(default=None, min_length=1, max_length=200)

    @field_validator("email")
    @classmethod
    def lower_email(cls, value: str | None) -> str | None:
        return value.lower() if value is not None else value


USER_RULES = RuleSet(kind="user", create=UserCreate, update=UserUpdate)


class UserResponse(BaseModel):
    id: str
    email: str | None
    name: str | None = None
    provider: str | None = None
    photo: str | None = None
    createdAt: datetime | None = None
