"""
Category payload rules.
"""

from __future__ import annotations

from pydantic import Field

from core.validation import CreatePayload, RuleSet, UpdatePayload


class CategoryCreate(CreatePayload):
    name: str = Field(..., min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=1000)
    color: str | None = Field(default=None, max_length=50)


class CategoryUpdate(UpdatePayload):
    name: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=1000)
    color: str | None = Field(default=None, max_length=50)


CATEGORY_RULES = RuleSet(kind="category", create=CategoryCreate, update=CategoryUpdate)
