"""
Transaction payload rules.

amount is always positive; the sign of a transaction is carried by `type`.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import Field, field_validator

from core.validation import CreatePayload, RuleSet, UpdatePayload, object_id_string

TransactionType = Literal["income", "expense"]


class TransactionCreate(CreatePayload):
    amount: float = Field(..., gt=0, strict=True)
    description: str = Field(..., min_length=1, max_length=500)
    date: datetime
    type: TransactionType
    categoryId: str | None = None
    tags: list[str] | None = None
    notes: str | None = Field(default=None, max_length=2000)

    @field_validator("categoryId")
    @classmethod
    def check_category_id(cls, value: str | None) -> str | None:
        return object_id_string(value) if value is not None else value


class TransactionUpdate(UpdatePayload):
    amount: float | None = Field(default=None, gt=0, strict=True)
    description: str | None = Field(default=None, min_length=1, max_length=500)
    date: datetime | None = None
    type: TransactionType | None = None
    categoryId: str | None = None
    tags: list[str] | None = None
    notes: str | None = Field(default=None, max_length=2000)

    @field_validator("categoryId")
    @classmethod
    def check_category_id(cls, value: str | None) -> str | None:
        return object_id_string(value) if value is not None else value


TRANSACTION_RULES = RuleSet(kind="transaction", create=TransactionCreate, update=TransactionUpdate)
