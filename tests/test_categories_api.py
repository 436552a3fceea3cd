"""HTTP pipeline for /api/v1/categories."""

from __future__ import annotations

from bson import ObjectId

URL = "/api/v1/categories"


def test_requires_bearer_token(client):
    resp = client.get(URL)
    assert resp.status_code == 401
    assert resp.json() == {"error": "Token missing."}
    assert resp.headers["www-authenticate"] == "Bearer"


def test_invalid_token_is_401(client):
    resp = client.get(URL, headers={"Authorization": "Bearer not.a.jwt"})
    assert resp.status_code == 401
    assert resp.json() == {"error": "Token invalid or expired."}


def test_create_as_a_is_invisible_to_b(client, auth_headers):
    alice, bob = auth_headers(ObjectId()), auth_headers(ObjectId())

    created = client.post(URL, json={"name": "Food"}, headers=alice)
    assert created.status_code == 201
    body = created.json()
    assert body["name"] == "Food"
    assert ObjectId.is_valid(body["id"])

    assert client.get(f"{URL}/{body['id']}", headers=alice).status_code == 200

    as_bob = client.get(f"{URL}/{body['id']}", headers=bob)
    assert as_bob.status_code == 404
    assert as_bob.json() == {"error": "Category not found."}

    assert client.get(URL, headers=bob).json() == []
    assert [c["id"] for c in client.get(URL, headers=alice).json()] == [body["id"]]


def test_create_stamps_caller_as_owner(client, auth_headers, database):
    user_id = ObjectId()
    body = client.post(URL, json={"name": "Rent", "color": "blue"}, headers=auth_headers(user_id)).json()

    assert body["userId"] == str(user_id)
    assert "createdAt" in body and "updatedAt" in body
    assert database.collection("categories").docs[0]["userId"] == user_id


def test_validation_failure_is_400_and_writes_nothing(client, auth_headers, database):
    resp = client.post(URL, json={"description": "no name"}, headers=auth_headers())

    assert resp.status_code == 400
    assert resp.json()["error"].startswith("name: ")
    assert database.collection("categories").docs == []


def test_malformed_id_is_400(client, auth_headers):
    resp = client.get(f"{URL}/not-an-id", headers=auth_headers())
    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid id."}


def test_update_and_delete(client, auth_headers):
    headers = auth_headers(ObjectId())
    category_id = client.post(URL, json={"name": "Food"}, headers=headers).json()["id"]

    resp = client.put(f"{URL}/{category_id}", json={"color": "red"}, headers=headers)
    assert resp.status_code == 200
    assert resp.json() == {"message": "Category updated."}

    fetched = client.get(f"{URL}/{category_id}", headers=headers).json()
    assert fetched["name"] == "Food"
    assert fetched["color"] == "red"

    assert client.put(f"{URL}/{category_id}", json={}, headers=headers).status_code == 400

    assert client.delete(f"{URL}/{category_id}", headers=headers).json() == {"message": "Category deleted."}
    second = client.delete(f"{URL}/{category_id}", headers=headers)
    assert second.status_code == 404


def test_other_user_cannot_update_or_delete(client, auth_headers):
    owner, intruder = auth_headers(ObjectId()), auth_headers(ObjectId())
    category_id = client.post(URL, json={"name": "Food"}, headers=owner).json()["id"]

    assert client.put(f"{URL}/{category_id}", json={"name": "Mine"}, headers=intruder).status_code == 404
    assert client.delete(f"{URL}/{category_id}", headers=intruder).status_code == 404
    assert client.get(f"{URL}/{category_id}", headers=owner).json()["name"] == "Food"
