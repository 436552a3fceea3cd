"""Shared fixtures.

Routes get their storage handle from the ``get_database`` dependency, so the
HTTP tests swap in an in-memory stub through ``app.dependency_overrides``.
The lifespan (which would connect to a real MongoDB) never runs because the
TestClient is not used as a context manager.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from auth import security
from core.db import get_database
from main import app
from tests.helpers.mongo_stub import StubDatabase


@pytest.fixture(autouse=True)
def _auth_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JWT_SECRET", "test-secret")
    monkeypatch.setenv("JWT_ALG", "HS256")
    monkeypatch.delenv("ACCESS_TOKEN_EXPIRE_MIN", raising=False)


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def database() -> StubDatabase:
    db = StubDatabase()
    db.collection("users").unique_fields.add("email")
    return db


@pytest.fixture
def client(database: StubDatabase) -> Iterator[TestClient]:
    app.dependency_overrides[get_database] = lambda: database
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> Callable[..., dict[str, str]]:
    """Build an ``Authorization`` header for a (new or given) user id."""

    def _make(user_id: ObjectId | None = None, email: str = "user@example.org") -> dict[str, str]:
        token = security.build_access_token(user_id=str(user_id or ObjectId()), email=email)
        return {"Authorization": f"Bearer {token}"}

    return _make
