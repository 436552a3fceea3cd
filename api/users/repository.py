"""
User persistence.

A user document owns itself: every lookup by id here is a lookup of the
caller's own record.
"""

from __future__ import annotations

from typing import Any

from bson import ObjectId
from pymongo import ASCENDING

from core.db import Database
from core.documents import utc_now

USER_COLLECTION = "users"


def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


async def ensure_indexes(database: Database) -> None:
    await database.collection(USER_COLLECTION).create_index([("email", ASCENDING)], unique=True)


async def get_user_by_email(database: Database, email: str) -> dict[str, Any] | None:
    return await database.collection(USER_COLLECTION).find_one({"email": normalize_email(email)})


async def get_user_by_id(database: Database, user_id: ObjectId) -> dict[str, Any] | None:
    return await database.collection(USER_COLLECTION).find_one({"_id": user_id})


async def create_user(
    database: Database,
    *,
    email: str,
    name: str | None,
    password_hash: str | None = None,
    extra: dict[str, Any] | None = None,
) -> dict[str, Any]:
    doc: dict[str, Any] = {
        "email": normalize_email(email),
        "name": name,
        "createdAt": utc_now(),
    }
    if password_hash is not None:
        doc["password"] = password_hash
    if extra:
        doc.update(extra)

    result = await database.collection(USER_COLLECTION).insert_one(doc)
    doc["_id"] = result.inserted_id
    return doc


async def update_user(database: Database, user_id: ObjectId, changes: dict[str, Any]) -> bool:
    result = await database.collection(USER_COLLECTION).update_one(
        {"_id": user_id},
        {"$set": {**changes, "updatedAt": utc_now()}},
    )
    return result.matched_count > 0


async def delete_user(database: Database, user_id: ObjectId) -> bool:
    result = await database.collection(USER_COLLECTION).delete_one({"_id": user_id})
    return result.deleted_count > 0
