"""HTTP pipeline for /api/v1/budgets."""

from __future__ import annotations

from bson import ObjectId

URL = "/api/v1/budgets"


def _payload(**overrides):
    payload = {"categoryId": str(ObjectId()), "amount": 300, "month": 5, "year": 2024}
    payload.update(overrides)
    return payload


def test_create_budget(client, auth_headers, database):
    user_id = ObjectId()
    payload = _payload()

    resp = client.post(URL, json=payload, headers=auth_headers(user_id))

    assert resp.status_code == 201
    body = resp.json()
    assert body["categoryId"] == payload["categoryId"]
    assert body["month"] == 5
    stored = database.collection("budgets").docs[0]
    assert stored["userId"] == user_id
    assert stored["categoryId"] == ObjectId(payload["categoryId"])


def test_month_thirteen_is_rejected(client, auth_headers):
    resp = client.post(URL, json=_payload(month=13), headers=auth_headers())
    assert resp.status_code == 400
    assert resp.json()["error"].startswith("month: ")


def test_zero_amount_is_rejected(client, auth_headers):
    resp = client.post(URL, json=_payload(amount=0), headers=auth_headers())
    assert resp.status_code == 400
    assert resp.json()["error"].startswith("amount: ")


def test_year_before_2020_is_rejected(client, auth_headers):
    resp = client.post(URL, json=_payload(year=2019), headers=auth_headers())
    assert resp.status_code == 400


def test_category_id_required(client, auth_headers):
    payload = _payload()
    del payload["categoryId"]
    resp = client.post(URL, json=payload, headers=auth_headers())
    assert resp.status_code == 400
    assert resp.json()["error"].startswith("categoryId: ")


def test_update_then_delete(client, auth_headers):
    headers = auth_headers(ObjectId())
    budget_id = client.post(URL, json=_payload(), headers=headers).json()["id"]

    assert client.put(f"{URL}/{budget_id}", json={"amount": 450}, headers=headers).status_code == 200
    assert client.get(f"{URL}/{budget_id}", headers=headers).json()["amount"] == 450
    assert client.put(f"{URL}/{budget_id}", json={"month": 13}, headers=headers).status_code == 400

    assert client.delete(f"{URL}/{budget_id}", headers=headers).status_code == 200
    assert client.get(f"{URL}/{budget_id}", headers=headers).status_code == 404
