"""
Budget API endpoints. Every route is scoped to the authenticated caller.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, status

from auth import dependencies as auth_dependencies
from core.db import Database, get_database

from .service import budgets

router = APIRouter(prefix="/budgets")


@router.get("")
async def list_budgets(
    current_user: dict = Depends(auth_dependencies.get_current_user),
    database: Database = Depends(get_database),
) -> list[dict]:
    return await budgets.list(database, owner_id=current_user["id"])


@router.get("/{budget_id}")
async def get_budget(
    budget_id: str,
    current_user: dict = Depends(auth_dependencies.get_current_user),
    database: Database = Depends(get_database),
) -> dict:
    return await budgets.get(database, budget_id, owner_id=current_user["id"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_budget(
    payload: Any = Body(...),
    current_user: dict = Depends(auth_dependencies.get_current_user),
    database: Database = Depends(get_database),
) -> dict:
    return await budgets.create(database, payload, owner_id=current_user["id"])


@router.put("/{budget_id}")
async def update_budget(
    budget_id: str,
    payload: Any = Body(...),
    current_user: dict = Depends(auth_dependencies.get_current_user),
    database: Database = Depends(get_database),
) -> dict:
    return await budgets.update(database, budget_id, payload, owner_id=current_user["id"])


@router.delete("/{budget_id}")
async def delete_budget(
    budget_id: str,
    current_user: dict = Depends(auth_dependencies.get_current_user),
    database: Database = Depends(get_database),
) -> dict:
    return await budgets.delete(database, budget_id, owner_id=current_user["id"])
