"""
Declarative payload validation.

Each resource kind publishes a `RuleSet`: one pydantic model for creates and
one for partial updates. `validate()` is the only evaluator; it never does
I/O and reports the first violated field.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import pydantic
from bson import ObjectId
from pydantic import BaseModel, ConfigDict, model_validator

from .errors import ValidationError, format_field_error


class CreatePayload(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)


class UpdatePayload(BaseModel):
    """
    Same field rules as the create variant, every field optional.

    An empty payload is rejected, and so is an explicit null: clearing a
    field is not an update this API supports.
    """

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    @model_validator(mode="before")
    @classmethod
    def require_fields(cls, data: Any) -> Any:
        if isinstance(data, dict):
            if not data:
                raise ValueError("At least one field must be provided.")
            for key, value in data.items():
                if value is None:
                    raise ValueError(f"{key} must not be null.")
        return data


@dataclass(frozen=True)
class RuleSet:
    kind: str
    create: type[CreatePayload]
    update: type[UpdatePayload]


def object_id_string(value: str) -> str:
    """
    Field validator for references that must be valid ObjectId strings.
    """
    value = (value or "").strip()
    if not ObjectId.is_valid(value):
        raise ValueError("must be a valid id")
    return value


def _first_error(exc: pydantic.ValidationError) -> tuple[str | None, str]:
    errors = exc.errors()
    if not errors:
        return None, "Invalid payload."
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ())) or None
    message = str(first.get("msg") or "Invalid value.")
    # pydantic prefixes errors raised from validators.
    message = message.removeprefix("Value error, ")
    return field, message


def validate(rules: RuleSet, payload: Any, *, partial: bool = False) -> dict[str, Any]:
    """
    Check `payload` against the create (or update) rules of a resource kind.

    Returns only the fields the caller supplied, with defaults and coercions
    applied. Raises `ValidationError` naming the first violated field.
    """
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object.")

    model = rules.update if partial else rules.create
    try:
        parsed = model.model_validate(payload)
    except pydantic.ValidationError as exc:
        field, message = _first_error(exc)
        raise ValidationError(format_field_error(field, message), field=field) from exc

    return parsed.model_dump(exclude_unset=True)
