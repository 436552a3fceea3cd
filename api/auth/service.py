"""
Auth business logic.
"""

from __future__ import annotations

import logging
from typing import Any

from bson import ObjectId
from pymongo.errors import DuplicateKeyError

from core.db import Database
from core.errors import NotFound, Unauthorized
from users import repository as users_repository
from users import service as users_service

from . import oauth, schemas, security

logger = logging.getLogger(__name__)

TOKEN_INVALID = "Token invalid or expired."
OAUTH_FAILED = "OAuth authentication failed."


def _auth_response(user_row: dict[str, Any]) -> schemas.AuthResponse:
    token = security.build_access_token(
        user_id=str(user_row["_id"]),
        email=user_row.get("email"),
    )
    return schemas.AuthResponse(
        user=users_service.to_user_response(user_row),
        access_token=token,
    )


def get_caller_from_access_token(access_token: str) -> dict[str, Any]:
    """
    Verify signature, expiry and token type locally; no storage lookup.
    """
    try:
        payload = security.decode_access_token(access_token)
    except security.AuthSecurityError as exc:
        logger.debug("token_rejected reason=%s", exc)
        raise Unauthorized(TOKEN_INVALID) from exc

    subject = str(payload.get("sub") or "").strip()
    if not ObjectId.is_valid(subject):
        logger.debug("token_rejected reason=bad_subject")
        raise Unauthorized(TOKEN_INVALID)

    return {
        "id": ObjectId(subject),
        "email": payload.get("email"),
        "claims": payload,
    }


async def register(database: Database, payload: Any) -> schemas.AuthResponse:
    user_row = await users_service.register_user(database, payload)
    return _auth_response(user_row)


async def login(database: Database, payload: schemas.LoginRequest) -> schemas.AuthResponse:
    user_row = await users_repository.get_user_by_email(database, payload.email)
    if user_row is None:
        raise Unauthorized("Invalid email or password.")

    # OAuth-only accounts have no password hash and cannot log in this way.
    if not security.verify_password(payload.password, user_row.get("password")):
        raise Unauthorized("Invalid email or password.")

    return _auth_response(user_row)


async def me(database: Database, *, user_id: ObjectId) -> schemas.UserResponse:
    user_row = await users_repository.get_user_by_id(database, user_id)
    if user_row is None:
        raise NotFound("User not found.")
    return users_service.to_user_response(user_row)


async def _upsert_oauth_user(database: Database, profile: oauth.ProviderProfile) -> dict[str, Any]:
    existing = await users_repository.get_user_by_email(database, profile.email or "")
    if existing is not None:
        return existing

    extra = {
        "provider": profile.provider,
        "providerId": profile.provider_user_id,
        "photo": profile.photo,
    }
    try:
        user_row = await users_repository.create_user(
            database,
            email=profile.email or "",
            name=profile.name,
            extra=extra,
        )
    except DuplicateKeyError:
        # A concurrent first login created it.
        user_row = await users_repository.get_user_by_email(database, profile.email or "")
        if user_row is None:
            raise
    else:
        logger.info("oauth_user_created provider=%s id=%s", profile.provider, user_row["_id"])
    return user_row


def check_oauth_state(provider: oauth.OAuthProvider, state: str, nonce: str | None) -> None:
    try:
        security.verify_oauth_state(state, provider=provider.name, nonce=nonce)
    except security.AuthSecurityError as exc:
        logger.warning("oauth_state_rejected provider=%s reason=%s", provider.name, exc)
        raise Unauthorized(OAUTH_FAILED) from exc


async def login_with_provider(
    database: Database,
    provider: oauth.OAuthProvider,
    code: str,
) -> schemas.AuthResponse:
    code = (code or "").strip()
    if not code:
        raise Unauthorized(OAUTH_FAILED)

    try:
        profile = await provider.authenticate(code)
    except oauth.OAuthError as exc:
        logger.warning("oauth_failed provider=%s error=%s", provider.name, exc)
        raise Unauthorized(OAUTH_FAILED) from exc

    if not profile.email:
        raise Unauthorized("OAuth profile has no email.")
    # Accounts are matched by email, so an unverified address could claim someone else's.
    if not profile.email_verified:
        logger.warning("oauth_unverified_email provider=%s", profile.provider)
        raise Unauthorized("OAuth email is not verified.")

    user_row = await _upsert_oauth_user(database, profile)
    logger.info("oauth_login provider=%s id=%s", profile.provider, user_row["_id"])
    return _auth_response(user_row)
