from __future__ import annotations

from core.resources import OwnedResource

from .schemas import BUDGET_RULES

BUDGET_COLLECTION = "budgets"

budgets = OwnedResource(
    collection=BUDGET_COLLECTION,
    label="Budget",
    rules=BUDGET_RULES,
    reference_fields=("categoryId",),
)
