"""
Budget payload rules.

Numbers are strict: JSON booleans are not coerced to 1 or 0.
"""

from __future__ import annotations

from pydantic import Field, field_validator

from core.validation import CreatePayload, RuleSet, UpdatePayload, object_id_string

MIN_BUDGET_YEAR = 2020


class BudgetCreate(CreatePayload):
    categoryId: str
    amount: float = Field(..., gt=0, strict=True)
    month: int = Field(..., ge=1, le=12, strict=True)
    year: int = Field(..., ge=MIN_BUDGET_YEAR, strict=True)

    @field_validator("categoryId")
    @classmethod
    def check_category_id(cls, value: str) -> str:
        return object_id_string(value)


class BudgetUpdate(UpdatePayload):
    categoryId: str | None = None
    amount: float | None = Field(default=None, gt=0, strict=True)
    month: int | None = Field(default=None, ge=1, le=12, strict=True)
    year: int | None = Field(default=None, ge=MIN_BUDGET_YEAR, strict=True)

    @field_validator("categoryId")
    @classmethod
    def check_category_id(cls, value: str | None) -> str | None:
        return object_id_string(value) if value is not None else value


BUDGET_RULES = RuleSet(kind="budget", create=BudgetCreate, update=BudgetUpdate)
