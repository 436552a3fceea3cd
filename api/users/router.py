"""
User API endpoints.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, status

from auth import dependencies as auth_dependencies
from core.db import Database, get_database

from . import schemas, service

router = APIRouter(prefix="/users")


@router.get("")
async def list_users(
    current_user: dict = Depends(auth_dependencies.get_current_user),
    database: Database = Depends(get_database),
) -> list[schemas.UserResponse]:
    return await service.list_users(database, owner_id=current_user["id"])


@router.get("/{user_id}")
async def get_user(
    user_id: str,
    current_user: dict = Depends(auth_dependencies.get_current_user),
    database: Database = Depends(get_database),
) -> schemas.UserResponse:
    return await service.get_user(database, user_id, owner_id=current_user["id"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(
    payload: Any = Body(...),
    database: Database = Depends(get_database),
) -> schemas.UserResponse:
    """
    Open registration: no token required.
    """
    user_row = await service.register_user(database, payload)
    return service.to_user_response(user_row)


@router.put("/{user_id}")
async def update_user(
    user_id: str,
    payload: Any = Body(...),
    current_user: dict = Depends(auth_dependencies.get_current_user),
    database: Database = Depends(get_database),
) -> dict:
    return await service.update_user(database, user_id, payload, owner_id=current_user["id"])


@router.delete("/{user_id}")
async def delete_user(
    user_id: str,
    current_user: dict = Depends(auth_dependencies.get_current_user),
    database: Database = Depends(get_database),
) -> dict:
    return await service.delete_user(database, user_id, owner_id=current_user["id"])
