"""Integration tests for lead submissions."""

import pytest

pytestmark = pytest.mark.integration


@pytest.fixture
def lead():
    return {
        "name": "Jordan Lee",
        "email": "  Jordan.Lee@Example.com ",
        "desiredBedrooms": "2",
        "additionalInfo": "Looking for a place near the BeltLine",
    }


def test_submit_is_public(client, lead):
    response = client.post("/api/lead-submissions", json=lead)

    assert response.status_code == 201
    body = response.json()
    assert body["email"] == "jordan.lee@example.com"
    assert body["contacted"] is False
    assert body["submittedAt"] is not None


@pytest.mark.parametrize("email", ["not-an-email", "a@b", ""])
def test_invalid_email(client, lead, email):
    lead["email"] = email
    assert client.post("/api/lead-submissions", json=lead).status_code == 400


def test_blank_name(client, lead):
    lead["name"] = "   "
    assert client.post("/api/lead-submissions", json=lead).status_code == 400


def test_list_requires_auth(client):
    assert client.get("/api/lead-submissions").status_code == 401


def test_list_newest_first(client, auth_headers, lead):
    first = client.post("/api/lead-submissions", json=lead).json()
    second = client.post("/api/lead-submissions", json={**lead, "name": "Sam"}).json()

    response = client.get("/api/lead-submissions", headers=auth_headers)
    assert [item["id"] for item in response.json()] == [second["id"], first["id"]]


def test_mark_contacted(client, auth_headers, lead):
    created = client.post("/api/lead-submissions", json=lead).json()

    response = client.patch(
        f"/api/lead-submissions/{created['id']}", json={"contacted": True}, headers=auth_headers
    )
    assert response.status_code == 200
    assert response.json()["contacted"] is True

    missing = client.patch(
        "/api/lead-submissions/999", json={"contacted": True}, headers=auth_headers
    )
    assert missing.status_code == 404
