"""
Auth dependencies for protected FastAPI routes.
"""

from __future__ import annotations

from fastapi import Depends, Header, Request

from core.errors import Unauthorized

from . import service

TOKEN_MISSING = "Token missing."


def _extract_bearer_token(authorization: str | None) -> str:
    raw = (authorization or "").strip()
    if not raw:
        raise Unauthorized(TOKEN_MISSING)

    parts = raw.split(" ", 1)
    if len(parts) != 2:
        raise Unauthorized(TOKEN_MISSING)

    scheme, token = parts[0].strip().lower(), parts[1].strip()
    if scheme != "bearer" or not token:
        raise Unauthorized(TOKEN_MISSING)
    return token


async def get_bearer_token(authorization: str | None = Header(default=None)) -> str:
    return _extract_bearer_token(authorization)


async def get_current_user(
    request: Request,
    access_token: str = Depends(get_bearer_token),
) -> dict:
    """
    Caller identity from the token claims: {"id": ObjectId, "email", "claims"}.

    Also kept on `request.state.caller` for anything downstream of the route.
    """
    caller = service.get_caller_from_access_token(access_token)
    request.state.caller = caller
    return caller
