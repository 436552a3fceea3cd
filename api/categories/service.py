from __future__ import annotations

from core.resources import OwnedResource

from .schemas import CATEGORY_RULES

CATEGORY_COLLECTION = "categories"

categories = OwnedResource(
    collection=CATEGORY_COLLECTION,
    label="Category",
    rules=CATEGORY_RULES,
)
