"""
Category API endpoints. Every route is scoped to the authenticated caller.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, status

from auth import dependencies as auth_dependencies
from core.db import Database, get_database

from .service import categories

router = APIRouter(prefix="/categories")


@router.get("")
async def list_categories(
    current_user: dict = Depends(auth_dependencies.get_current_user),
    database: Database = Depends(get_database),
) -> list[dict]:
    return await categories.list(database, owner_id=current_user["id"])


@router.get("/{category_id}")
async def get_category(
    category_id: str,
    current_user: dict = Depends(auth_dependencies.get_current_user),
    database: Database = Depends(get_database),
) -> dict:
    return await categories.get(database, category_id, owner_id=current_user["id"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_category(
    payload: Any = Body(...),
    current_user: dict = Depends(auth_dependencies.get_current_user),
    database: Database = Depends(get_database),
) -> dict:
    return await categories.create(database, payload, owner_id=current_user["id"])


@router.put("/{category_id}")
async def update_category(
    category_id: str,
    payload: Any = Body(...),
    current_user: dict = Depends(auth_dependencies.get_current_user),
    database: Database = Depends(get_database),
) -> dict:
    return await categories.update(database, category_id, payload, owner_id=current_user["id"])


@router.delete("/{category_id}")
async def delete_category(
    category_id: str,
    current_user: dict = Depends(auth_dependencies.get_current_user),
    database: Database = Depends(get_database),
) -> dict:
    return await categories.delete(database, category_id, owner_id=current_user["id"])
