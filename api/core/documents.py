"""
Owner-scoped document access.

Every filter built here includes the caller's id, so a user can never read,
change or delete another user's documents. A document owned by someone else
looks exactly like a missing one.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Iterable

from bson import ObjectId
from pymongo.asynchronous.collection import AsyncCollection

from .errors import NotFound, ValidationError


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_object_id(raw: str | None, *, label: str = "id") -> ObjectId:
    value = (raw or "").strip()
    if not ObjectId.is_valid(value):
        raise ValidationError(f"Invalid {label}.", field=label)
    return ObjectId(value)


def to_object_ids(values: dict[str, Any], fields: Iterable[str]) -> dict[str, Any]:
    """
    Convert validated id strings (e.g. categoryId) into ObjectIds for storage.
    """
    converted = dict(values)
    for name in fields:
        if name in converted and isinstance(converted[name], str):
            converted[name] = parse_object_id(converted[name], label=name)
    return converted


def _plain(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, list):
        return [_plain(v) for v in value]
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    return value


def serialize_document(doc: dict[str, Any], *, exclude: Iterable[str] = ()) -> dict[str, Any]:
    """
    Shape a stored document for a response: `_id` becomes `id` and every
    ObjectId becomes its hex string.
    """
    hidden = set(exclude)
    out: dict[str, Any] = {}
    if "_id" in doc:
        out["id"] = str(doc["_id"])
    for key, value in doc.items():
        if key == "_id" or key in hidden:
            continue
        out[key] = _plain(value)
    return out


class OwnedCollection:
    """
    CRUD on one collection, confined to documents whose `owner_field`
    equals the caller's id.
    """

    def __init__(
        self,
        collection: AsyncCollection,
        *,
        owner_field: str = "userId",
        label: str = "Document",
    ) -> None:
        self._collection = collection
        self._owner_field = owner_field
        self._label = label

    @property
    def label(self) -> str:
        return self._label

    def _not_found(self) -> NotFound:
        return NotFound(f"{self._label} not found.")

    def scope(self, owner_id: ObjectId, doc_id: ObjectId | None = None) -> dict[str, Any]:
        query: dict[str, Any] = {self._owner_field: owner_id}
        if doc_id is not None:
            query["_id"] = doc_id
        return query

    async def list(self, owner_id: ObjectId) -> list[dict[str, Any]]:
        cursor = self._collection.find(self.scope(owner_id))
        return await cursor.to_list(length=None)

    async def get_by_id(self, owner_id: ObjectId, doc_id: str) -> dict[str, Any]:
        oid = parse_object_id(doc_id)
        doc = await self._collection.find_one(self.scope(owner_id, oid))
        if doc is None:
            raise self._not_found()
        return doc

    async def create(self, owner_id: ObjectId, payload: dict[str, Any]) -> dict[str, Any]:
        now = utc_now()
        doc = {
            **payload,
            self._owner_field: owner_id,
            "createdAt": now,
            "updatedAt": now,
        }
        result = await self._collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        return doc

    async def update(self, owner_id: ObjectId, doc_id: str, partial: dict[str, Any]) -> None:
        oid = parse_object_id(doc_id)
        changes = {k: v for k, v in partial.items() if k not in ("_id", self._owner_field)}
        changes["updatedAt"] = utc_now()
        result = await self._collection.update_one(self.scope(owner_id, oid), {"$set": changes})
        if result.matched_count == 0:
            raise self._not_found()

    async def delete(self, owner_id: ObjectId, doc_id: str) -> None:
        oid = parse_object_id(doc_id)
        result = await self._collection.delete_one(self.scope(owner_id, oid))
        if result.deleted_count == 0:
            raise self._not_found()
