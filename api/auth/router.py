"""
Auth API endpoints: password accounts under /api/v1/auth, OAuth under /auth.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Cookie, Depends, Query, status
from fastapi.responses import RedirectResponse

from core.db import Database, get_database
from core.errors import NotFound

from . import dependencies, oauth, schemas, security, service

router = APIRouter(prefix="/auth")
oauth_router = APIRouter(prefix="/auth")

OAUTH_STATE_COOKIE = "oauth_state"


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    payload: Any = Body(...),
    database: Database = Depends(get_database),
) -> schemas.AuthResponse:
    return await service.register(database, payload)


@router.post("/login")
async def login(
    payload: schemas.LoginRequest,
    database: Database = Depends(get_database),
) -> schemas.AuthResponse:
    return await service.login(database, payload)


@router.get("/me")
async def me(
    current_user: dict = Depends(dependencies.get_current_user),
    database: Database = Depends(get_database),
) -> schemas.UserResponse:
    return await service.me(database, user_id=current_user["id"])


def _provider(name: str, providers: dict[str, oauth.OAuthProvider]) -> oauth.OAuthProvider:
    provider = providers.get((name or "").strip().lower())
    if provider is None:
        raise NotFound("OAuth provider not available.")
    return provider


@oauth_router.get("/{provider_name}")
async def oauth_start(
    provider_name: str,
    providers: dict = Depends(oauth.get_oauth_providers),
) -> RedirectResponse:
    provider = _provider(provider_name, providers)
    state, nonce = security.build_oauth_state(provider.name)
    response = RedirectResponse(provider.authorize_url(state=state))
    response.set_cookie(
        OAUTH_STATE_COOKIE,
        nonce,
        max_age=security.oauth_state_expire_seconds(),
        httponly=True,
        samesite="lax",
    )
    return response


@oauth_router.get("/{provider_name}/callback")
async def oauth_callback(
    provider_name: str,
    code: str = Query(default="", max_length=2000),
    state: str = Query(default="", max_length=2000),
    state_nonce: str | None = Cookie(default=None, alias=OAUTH_STATE_COOKIE),
    providers: dict = Depends(oauth.get_oauth_providers),
    database: Database = Depends(get_database),
) -> schemas.AuthResponse:
    provider = _provider(provider_name, providers)
    service.check_oauth_state(provider, state, state_nonce)
    return await service.login_with_provider(database, provider, code)
