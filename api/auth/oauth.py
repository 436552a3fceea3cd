"""
OAuth login providers.

Used endpoints:
- Google: POST https://oauth2.googleapis.com/token
          GET  https://openidconnect.googleapis.com/v1/userinfo
- GitHub: POST https://github.com/login/oauth/access_token
          GET  https://api.github.com/user and /user/emails (verification flags)

A provider turns an authorization code into a `ProviderProfile`. The
normalize_* functions are pure so profile shapes can be tested offline.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Protocol
from urllib.parse import urlencode

import httpx

DEFAULT_TIMEOUT_S = 10.0


# Provider failures are explicit and separable from other runtime errors.
class OAuthError(RuntimeError):
    pass


@dataclass(frozen=True)
class ProviderProfile:
    provider: str
    provider_user_id: str
    email: str | None
    name: str | None
    photo: str | None = None
    email_verified: bool = False


class OAuthProvider(Protocol):
    name: str

    def authorize_url(self, state: str | None = None) -> str: ...

    async def authenticate(self, code: str) -> ProviderProfile: ...


def _str_or_none(value: Any) -> str | None:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def normalize_google_profile(raw: dict[str, Any]) -> ProviderProfile:
    """
    Map an OpenID Connect userinfo payload to a ProviderProfile.
    """
    subject = _str_or_none(raw.get("sub") or raw.get("id"))
    if subject is None:
        raise OAuthError("Google profile has no subject id.")

    name = _str_or_none(raw.get("name"))
    if name is None:
        parts = [_str_or_none(raw.get("given_name")), _str_or_none(raw.get("family_name"))]
        name = " ".join(p for p in parts if p) or None

    email = _str_or_none(raw.get("email"))
    return ProviderProfile(
        provider="google",
        provider_user_id=subject,
        email=email.lower() if email else None,
        name=name,
        photo=_str_or_none(raw.get("picture")),
        email_verified=str(raw.get("email_verified", "")).strip().lower() == "true",
    )


def normalize_github_profile(
    raw: dict[str, Any],
    emails: list[dict[str, Any]] | None = None,
) -> ProviderProfile:
    """
    Map a GitHub /user payload (plus optional /user/emails) to a ProviderProfile.

    A public profile email wins; otherwise the primary verified address.
    """
    user_id = _str_or_none(raw.get("id"))
    if user_id is None:
        raise OAuthError("GitHub profile has no id.")

    email = _str_or_none(raw.get("email"))
    verified = False
    for item in emails or []:
        if not isinstance(item, dict):
            continue
        address = _str_or_none(item.get("email"))
        if address is None:
            continue
        if email is not None and address.lower() == email.lower():
            verified = bool(item.get("verified", False))
            break
        if email is None and item.get("primary") and item.get("verified"):
            email, verified = address, True
            break

    return ProviderProfile(
        provider="github",
        provider_user_id=user_id,
        email=email.lower() if email else None,
        name=_str_or_none(raw.get("name")) or _str_or_none(raw.get("login")),
        photo=_str_or_none(raw.get("avatar_url")),
        email_verified=verified,
    )


class _BaseProvider:
    name = ""
    authorize_endpoint = ""
    scope = ""

    def __init__(
        self,
        *,
        client_id: str,
        client_secret: str,
        callback_url: str,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.client_id = client_id
        self.client_secret = client_secret
        self.callback_url = callback_url
        self.timeout_s = timeout_s
        self._transport = transport

    def authorize_url(self, state: str | None = None) -> str:
        params = {
            "client_id": self.client_id,
            "redirect_uri": self.callback_url,
            "response_type": "code",
            "scope": self.scope,
        }
        if state:
            params["state"] = state
        return f"{self.authorize_endpoint}?{urlencode(params)}"

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout_s, transport=self._transport)

    @staticmethod
    def _json(resp: httpx.Response, what: str) -> Any:
        if resp.status_code != 200:
            # Avoid dumping huge bodies; include a small snippet.
            raise OAuthError(f"{what} failed: {resp.status_code} {resp.text[:300]}")
        try:
            return resp.json()
        except ValueError as exc:
            raise OAuthError(f"{what} returned invalid JSON.") from exc

    def _access_token(self, data: Any) -> str:
        token = data.get("access_token") if isinstance(data, dict) else None
        if not isinstance(token, str) or not token:
            raise OAuthError(f"{self.name} token response has no access_token.")
        return token


class GoogleProvider(_BaseProvider):
    name = "google"
    authorize_endpoint = "https://accounts.google.com/o/oauth2/v2/auth"
    token_endpoint = "https://oauth2.googleapis.com/token"
    userinfo_endpoint = "https://openidconnect.googleapis.com/v1/userinfo"
    scope = "openid email profile"

    async def authenticate(self, code: str) -> ProviderProfile:
        async with self._client() as client:
            resp = await client.post(
                self.token_endpoint,
                data={
                    "code": code,
                    "client_id": self.client_id,
                    "client_secret": self.client_secret,
                    "redirect_uri": self.callback_url,
                    "grant_type": "authorization_code",
                },
            )
            token = self._access_token(self._json(resp, "Google token exchange"))

            resp = await client.get(
                self.userinfo_endpoint,
                headers={"Authorization": f"Bearer {token}"},
            )
            raw = self._json(resp, "Google userinfo request")

        if not isinstance(raw, dict):
            raise OAuthError("Google userinfo is not an object.")
        return normalize_google_profile(raw)


class GitHubProvider(_BaseProvider):
    name = "github"
    authorize_endpoint = "https://github.com/login/oauth/authorize"
    token_endpoint = "https://github.com/login/oauth/access_token"
    api_base_url = "https://api.github.com"
    scope = "user:email"

    async def authenticate(self, code: str) -> ProviderProfile:
        async with self._client() as client:
            resp = await client.post(
                self.token_endpoint,
                data={
                    "code": code,
                    "client_id": self.client_id,
                    "client_secret": self.client_secret,
                    "redirect_uri": self.callback_url,
                },
                headers={"Accept": "application/json"},
            )
            token = self._access_token(self._json(resp, "GitHub token exchange"))

            headers = {
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
            }
            resp = await client.get(f"{self.api_base_url}/user", headers=headers)
            raw = self._json(resp, "GitHub user request")
            if not isinstance(raw, dict):
                raise OAuthError("GitHub user is not an object.")

            # /user carries no verification flag, so the address list is always needed.
            resp = await client.get(f"{self.api_base_url}/user/emails", headers=headers)
            data = self._json(resp, "GitHub emails request")
            emails: list[dict[str, Any]] = data if isinstance(data, list) else []

        return normalize_github_profile(raw, emails)


def _env(name: str) -> str:
    return os.environ.get(name, "").strip()


def _timeout_s() -> float:
    raw = _env("OAUTH_TIMEOUT_S")
    if not raw:
        return DEFAULT_TIMEOUT_S
    try:
        return float(raw)
    except ValueError:
        return DEFAULT_TIMEOUT_S


def configured_providers() -> dict[str, OAuthProvider]:
    """
    Providers enabled by environment: both client id and secret must be set.
    """
    providers: dict[str, OAuthProvider] = {}
    for cls, prefix in ((GoogleProvider, "GOOGLE"), (GitHubProvider, "GITHUB")):
        client_id = _env(f"{prefix}_CLIENT_ID")
        client_secret = _env(f"{prefix}_CLIENT_SECRET")
        if not client_id or not client_secret:
            continue
        providers[cls.name] = cls(
            client_id=client_id,
            client_secret=client_secret,
            callback_url=_env(f"{prefix}_CALLBACK"),
            timeout_s=_timeout_s(),
        )
    return providers


def get_oauth_providers() -> dict[str, OAuthProvider]:
    return configured_providers()
