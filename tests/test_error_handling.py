"""Error shaping at the app boundary."""

from __future__ import annotations

import logging

from bson import ObjectId
from fastapi.testclient import TestClient

from core.db import get_database
from main import app


def test_storage_fault_is_500_without_detail(client, auth_headers, database, caplog):
    database.collection("categories").fail = True

    with caplog.at_level(logging.ERROR, logger="core.errors"):
        resp = client.get("/api/v1/categories", headers=auth_headers())

    assert resp.status_code == 500
    assert resp.json() == {"error": "Server error."}
    assert "stub storage unavailable" not in resp.text
    assert any("storage_error" in record.getMessage() for record in caplog.records)


def test_storage_fault_on_write_is_500(client, auth_headers, database):
    database.collection("transactions").fail = True

    resp = client.post(
        "/api/v1/transactions",
        json={"amount": 5, "description": "x", "date": "2024-01-01", "type": "expense"},
        headers=auth_headers(),
    )

    assert resp.status_code == 500
    assert resp.json() == {"error": "Server error."}


def test_unexpected_exception_is_500(auth_headers):
    def broken_database():
        raise RuntimeError("boom")

    app.dependency_overrides[get_database] = broken_database
    try:
        resp = TestClient(app, raise_server_exceptions=False).get(
            "/api/v1/budgets", headers=auth_headers(ObjectId())
        )
    finally:
        app.dependency_overrides.clear()

    assert resp.status_code == 500
    assert resp.json() == {"error": "Server error."}


def test_unknown_route_uses_error_shape(client):
    resp = client.get("/api/v1/nothing-here")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Not Found"}


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}
