"""
Owner-scoped resource service shared by categories, transactions and budgets.

Per request: validate the body (writes only), run one accessor call scoped
to the caller, shape the result. Authentication happens before this, in the
route's `get_current_user` dependency.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from bson import ObjectId

from .db import Database
from .documents import OwnedCollection, serialize_document, to_object_ids
from .validation import RuleSet, validate

logger = logging.getLogger(__name__)


class OwnedResource:
    def __init__(
        self,
        *,
        collection: str,
        label: str,
        rules: RuleSet,
        reference_fields: Iterable[str] = (),
    ) -> None:
        self.collection = collection
        self.label = label
        self.rules = rules
        self.reference_fields = tuple(reference_fields)

    def accessor(self, database: Database) -> OwnedCollection:
        return OwnedCollection(database.collection(self.collection), label=self.label)

    def _normalize(self, values: dict[str, Any]) -> dict[str, Any]:
        return to_object_ids(values, self.reference_fields)

    async def list(self, database: Database, *, owner_id: ObjectId) -> list[dict[str, Any]]:
        rows = await self.accessor(database).list(owner_id)
        return [serialize_document(row) for row in rows]

    async def get(self, database: Database, doc_id: str, *, owner_id: ObjectId) -> dict[str, Any]:
        row = await self.accessor(database).get_by_id(owner_id, doc_id)
        return serialize_document(row)

    async def create(self, database: Database, payload: Any, *, owner_id: ObjectId) -> dict[str, Any]:
        values = self._normalize(validate(self.rules, payload))
        row = await self.accessor(database).create(owner_id, values)
        logger.info("%s_created id=%s owner=%s", self.rules.kind, row["_id"], owner_id)
        return serialize_document(row)

    async def update(
        self,
        database: Database,
        doc_id: str,
        payload: Any,
        *,
        owner_id: ObjectId,
    ) -> dict[str, str]:
        values = self._normalize(validate(self.rules, payload, partial=True))
        await self.accessor(database).update(owner_id, doc_id, values)
        return {"message": f"{self.label} updated."}

    async def delete(self, database: Database, doc_id: str, *, owner_id: ObjectId) -> dict[str, str]:
        await self.accessor(database).delete(owner_id, doc_id)
        return {"message": f"{self.label} deleted."}
