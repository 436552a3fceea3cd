"""
MongoDB storage handle.

A single `Database` is constructed per process. FastAPI opens it on startup
and closes it on shutdown (see `api/main.py`); routes receive it through the
`get_database` dependency instead of reaching for a module global.

Collections are named per resource: users, categories, transactions, budgets.
"""

from __future__ import annotations

import logging
import os

from fastapi import Request
from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase

DEFAULT_DB_NAME = "finance-tracker"
DEFAULT_TIMEOUT_MS = 5000

logger = logging.getLogger(__name__)


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def mongo_uri() -> str:
    uri = os.environ.get("MONGO_URI", "").strip()
    if not uri:
        raise RuntimeError("MONGO_URI is not set.")
    return uri


def database_name() -> str:
    return os.environ.get("DB_NAME", DEFAULT_DB_NAME).strip() or DEFAULT_DB_NAME


class Database:
    def __init__(self, uri: str, name: str, *, timeout_ms: int = DEFAULT_TIMEOUT_MS) -> None:
        self._uri = uri
        self._name = name
        self._timeout_ms = timeout_ms
        self._client: AsyncMongoClient | None = None
        self._db: AsyncDatabase | None = None

    @classmethod
    def from_env(cls) -> "Database":
        return cls(
            mongo_uri(),
            database_name(),
            timeout_ms=_env_int("MONGO_TIMEOUT_MS", DEFAULT_TIMEOUT_MS),
        )

    @property
    def name(self) -> str:
        return self._name

    async def connect(self) -> None:
        if self._db is not None:
            return None
        client: AsyncMongoClient = AsyncMongoClient(self._uri, serverSelectionTimeoutMS=self._timeout_ms)
        try:
            # Fail at startup rather than on the first request.
            await client.admin.command("ping")
        except Exception:
            await client.close()
            raise
        self._client = client
        self._db = client[self._name]
        logger.info("mongo_connected db=%s", self._name)

    async def close(self) -> None:
        if self._client is None:
            return None
        await self._client.close()
        self._client = None
        self._db = None
        logger.info("mongo_closed db=%s", self._name)

    def collection(self, name: str) -> AsyncCollection:
        if self._db is None:
            raise RuntimeError("Database is not connected. Call connect() on startup.")
        return self._db[name]


def get_database(request: Request) -> Database:
    database = getattr(request.app.state, "database", None)
    if database is None:
        raise RuntimeError("Database is not initialized on app.state.")
    return database
