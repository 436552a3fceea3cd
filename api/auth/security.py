"""
Auth security helpers.
"""

from __future__ import annotations

import os
import secrets
import time
from typing import Any

import bcrypt
import jwt


class AuthSecurityError(RuntimeError):
    pass


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def jwt_secret() -> str:
    # Local default keeps development simple.
    # In production, set JWT_SECRET in environment.
    return os.environ.get("JWT_SECRET", "dev-change-this-secret").strip() or "dev-change-this-secret"


def jwt_algorithm() -> str:
    return os.environ.get("JWT_ALG", "HS256").strip() or "HS256"


def access_token_expire_minutes() -> int:
    return _env_int("ACCESS_TOKEN_EXPIRE_MIN", 60)


def oauth_state_expire_seconds() -> int:
    return _env_int("OAUTH_STATE_EXPIRE_S", 600)


def now_epoch_s() -> int:
    return int(time.time())


def hash_password(plain_password: str) -> str:
    password = (plain_password or "").encode("utf-8")
    if not password:
        raise AuthSecurityError("Password is empty.")
    return bcrypt.hashpw(password, bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, password_hash: str | None) -> bool:
    password = (plain_password or "").encode("utf-8")
    hashed = (password_hash or "").encode("utf-8")
    if not password or not hashed:
        return False
    try:
        return bcrypt.checkpw(password, hashed)
    except ValueError:
        return False


def build_access_token(*, user_id: str, email: str | None) -> str:
    issued_at = now_epoch_s()
    expires_at = issued_at + (access_token_expire_minutes() * 60)

    payload = {
        "sub": str(user_id),
        "email": email,
        "type": "access",
        "iat": issued_at,
        "exp": expires_at,
    }
    return jwt.encode(payload, jwt_secret(), algorithm=jwt_algorithm())


def _decode(token: str, *, expected_type: str, required: list[str]) -> dict[str, Any]:
    try:
        payload = jwt.decode(
            token,
            jwt_secret(),
            algorithms=[jwt_algorithm()],
            options={"require": required},
        )
    except jwt.InvalidTokenError as exc:
        raise AuthSecurityError(f"Invalid {expected_type} token.") from exc

    token_type = str(payload.get("type") or "").strip().lower()
    if token_type != expected_type:
        raise AuthSecurityError(f"Token type is not {expected_type}.")
    return payload


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Verify signature and expiry; exp, sub and type must all be present.
    """
    raw = (token or "").strip()
    if not raw:
        raise AuthSecurityError("Access token is empty.")
    return _decode(raw, expected_type="access", required=["exp", "sub", "type"])


def build_oauth_state(provider: str) -> tuple[str, str]:
    """
    Signed, short-lived `state` for an OAuth redirect.

    Returns (state, nonce). The nonce goes into a cookie on the caller's
    browser and must come back with the callback alongside the state.
    """
    nonce = secrets.token_urlsafe(16)
    issued_at = now_epoch_s()
    payload = {
        "type": "oauth_state",
        "provider": provider,
        "nonce": nonce,
        "iat": issued_at,
        "exp": issued_at + oauth_state_expire_seconds(),
    }
    return jwt.encode(payload, jwt_secret(), algorithm=jwt_algorithm()), nonce


def verify_oauth_state(state: str, *, provider: str, nonce: str | None) -> None:
    raw = (state or "").strip()
    if not raw:
        raise AuthSecurityError("OAuth state is missing.")

    payload = _decode(raw, expected_type="oauth_state", required=["exp", "type", "provider", "nonce"])
    if payload.get("provider") != provider:
        raise AuthSecurityError("OAuth state was issued for another provider.")
    if not nonce or not secrets.compare_digest(str(payload.get("nonce")), nonce):
        raise AuthSecurityError("OAuth state does not match this browser.")
