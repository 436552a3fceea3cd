from __future__ import annotations

from core.resources import OwnedResource

from .schemas import TRANSACTION_RULES

TRANSACTION_COLLECTION = "transactions"

transactions = OwnedResource(
    collection=TRANSACTION_COLLECTION,
    label="Transaction",
    rules=TRANSACTION_RULES,
    reference_fields=("categoryId",),
)
