"""HTTP pipeline for /api/v1/transactions."""

from __future__ import annotations

from bson import ObjectId

URL = "/api/v1/transactions"

PAYLOAD = {
    "amount": 100,
    "description": "Test",
    "date": "2024-03-01T10:00:00+00:00",
    "type": "income",
}


def test_create_then_fetch_round_trip(client, auth_headers):
    headers = auth_headers(ObjectId())

    created = client.post(URL, json=PAYLOAD, headers=headers)
    assert created.status_code == 201
    transaction_id = created.json()["id"]

    fetched = client.get(f"{URL}/{transaction_id}", headers=headers)
    assert fetched.status_code == 200
    body = fetched.json()
    assert body["description"] == "Test"
    assert body["amount"] == 100
    assert body["type"] == "income"
    assert body["date"].startswith("2024-03-01T10:00:00")


def test_category_reference_is_stored_as_object_id(client, auth_headers, database):
    category_id = ObjectId()
    resp = client.post(
        URL,
        json={**PAYLOAD, "categoryId": str(category_id), "tags": ["salary"]},
        headers=auth_headers(),
    )

    assert resp.status_code == 201
    assert resp.json()["categoryId"] == str(category_id)
    assert database.collection("transactions").docs[0]["categoryId"] == category_id


def test_non_positive_amount_is_rejected(client, auth_headers, database):
    for amount in (0, -20):
        resp = client.post(URL, json={**PAYLOAD, "amount": amount}, headers=auth_headers())
        assert resp.status_code == 400
        assert resp.json()["error"].startswith("amount: ")
    assert database.collection("transactions").docs == []


def test_non_object_body_is_400(client, auth_headers):
    resp = client.post(URL, json=[PAYLOAD], headers=auth_headers())
    assert resp.status_code == 400
    assert "error" in resp.json()


def test_partial_update(client, auth_headers):
    headers = auth_headers(ObjectId())
    transaction_id = client.post(URL, json=PAYLOAD, headers=headers).json()["id"]

    resp = client.put(f"{URL}/{transaction_id}", json={"notes": "march salary"}, headers=headers)
    assert resp.status_code == 200
    assert resp.json() == {"message": "Transaction updated."}

    body = client.get(f"{URL}/{transaction_id}", headers=headers).json()
    assert body["notes"] == "march salary"
    assert body["description"] == "Test"

    bad = client.put(f"{URL}/{transaction_id}", json={"type": "gift"}, headers=headers)
    assert bad.status_code == 400


def test_update_unknown_id_is_404(client, auth_headers):
    resp = client.put(f"{URL}/{ObjectId()}", json={"notes": "x"}, headers=auth_headers())
    assert resp.status_code == 404
    assert resp.json() == {"error": "Transaction not found."}


def test_list_only_returns_callers_transactions(client, auth_headers):
    alice, bob = ObjectId(), ObjectId()
    client.post(URL, json=PAYLOAD, headers=auth_headers(alice))
    client.post(URL, json={**PAYLOAD, "description": "Bob"}, headers=auth_headers(bob))

    rows = client.get(URL, headers=auth_headers(alice)).json()
    assert [r["description"] for r in rows] == ["Test"]
    assert {r["userId"] for r in rows} == {str(alice)}
