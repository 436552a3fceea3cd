"""
Transaction API endpoints. Every route is scoped to the authenticated caller.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, status

from auth import dependencies as auth_dependencies
from core.db import Database, get_database

from .service import transactions

router = APIRouter(prefix="/transactions")


@router.get("")
async def list_transactions(
    current_user: dict = Depends(auth_dependencies.get_current_user),
    database: Database = Depends(get_database),
) -> list[dict]:
    return await transactions.list(database, owner_id=current_user["id"])


@router.get("/{transaction_id}")
async def get_transaction(
    transaction_id: str,
    current_user: dict = Depends(auth_dependencies.get_current_user),
    database: Database = Depends(get_database),
) -> dict:
    return await transactions.get(database, transaction_id, owner_id=current_user["id"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_transaction(
    payload: Any = Body(...),
    current_user: dict = Depends(auth_dependencies.get_current_user),
    database: Database = Depends(get_database),
) -> dict:
    return await transactions.create(database, payload, owner_id=current_user["id"])


@router.put("/{transaction_id}")
async def update_transaction(
    transaction_id: str,
    payload: Any = Body(...),
    current_user: dict = Depends(auth_dependencies.get_current_user),
    database: Database = Depends(get_database),
) -> dict:
    return await transactions.update(database, transaction_id, payload, owner_id=current_user["id"])


@router.delete("/{transaction_id}")
async def delete_transaction(
    transaction_id: str,
    current_user: dict = Depends(auth_dependencies.get_current_user),
    database: Database = Depends(get_database),
) -> dict:
    return await transactions.delete(database, transaction_id, owner_id=current_user["id"])
