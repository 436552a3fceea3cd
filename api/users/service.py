"""
User business logic.

Users are self-scoped: a caller can list, read, change and delete only
their own record. Any other id answers "User not found." exactly as a
missing one would.
"""

from __future__ import annotations

import logging
from typing import Any

from bson import ObjectId
from pymongo.errors import DuplicateKeyError

from auth import security
from core.db import Database
from core.documents import parse_object_id
from core.errors import Conflict, NotFound
from core.validation import validate

from . import repository, schemas

logger = logging.getLogger(__name__)

EMAIL_TAKEN = "Email already registered."


def _not_found() -> NotFound:
    return NotFound("User not found.")


def to_user_response(user_row: dict[str, Any]) -> schemas.UserResponse:
    return schemas.UserResponse(
        id=str(user_row["_id"]),
        email=user_row.get("email"),
        name=user_row.get("name"),
        provider=user_row.get("provider"),
        photo=user_row.get("photo"),
        createdAt=user_row.get("createdAt"),
    )


def _own_id(user_id: str, owner_id: ObjectId) -> ObjectId:
    oid = parse_object_id(user_id)
    if oid != owner_id:
        raise _not_found()
    return oid


async def register_user(database: Database, payload: Any) -> dict[str, Any]:
    """
    Validate, check the email is free, hash the password and insert.
    Returns the stored row (password hash included, callers must not leak it).
    """
    values = validate(schemas.USER_RULES, payload)

    existing = await repository.get_user_by_email(database, values["email"])
    if existing is not None:
        raise Conflict(EMAIL_TAKEN)

    try:
        user_row = await repository.create_user(
            database,
            email=values["email"],
            name=values["name"],
            password_hash=security.hash_password(values["password"]),
        )
    except DuplicateKeyError as exc:
        # Lost a race with a concurrent registration.
        raise Conflict(EMAIL_TAKEN) from exc

    logger.info("user_registered id=%s", user_row["_id"])
    return user_row


async def list_users(database: Database, *, owner_id: ObjectId) -> list[schemas.UserResponse]:
    user_row = await repository.get_user_by_id(database, owner_id)
    return [to_user_response(user_row)] if user_row is not None else []


async def get_user(database: Database, user_id: str, *, owner_id: ObjectId) -> schemas.UserResponse:
    oid = _own_id(user_id, owner_id)
    user_row = await repository.get_user_by_id(database, oid)
    if user_row is None:
        raise _not_found()
    return to_user_response(user_row)


async def update_user(
    database: Database,
    user_id: str,
    payload: Any,
    *,
    owner_id: ObjectId,
) -> dict[str, str]:
    changes = validate(schemas.USER_RULES, payload, partial=True)
    oid = _own_id(user_id, owner_id)

    if "email" in changes:
        holder = await repository.get_user_by_email(database, changes["email"])
        if holder is not None and holder["_id"] != oid:
            raise Conflict(EMAIL_TAKEN)

    if "password" in changes:
        changes["password"] = security.hash_password(changes["password"])

    try:
        updated = await repository.update_user(database, oid, changes)
    except DuplicateKeyError as exc:
        raise Conflict(EMAIL_TAKEN) from exc

    if not updated:
        raise _not_found()
    return {"message": "User updated."}


async def delete_user(database: Database, user_id: str, *, owner_id: ObjectId) -> dict[str, str]:
    oid = _own_id(user_id, owner_id)
    if not await repository.delete_user(database, oid):
        raise _not_found()
    logger.info("user_deleted id=%s", oid)
    return {"message": "User deleted."}
