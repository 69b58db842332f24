"""Integration tests for the photo endpoints."""

import pytest

from .conftest import make_image_bytes

pytestmark = pytest.mark.integration


def upload(client, headers, property_id, files, **fields):
    data = {"propertyId": str(property_id), **fields}
    return client.post("/api/photos/upload", data=data, files=files, headers=headers)


def jpeg_file(name="front.jpg", size=(120, 80)):
    return ("photos", (name, make_image_bytes(size=size), "image/jpeg"))


def test_upload_exterior_layout(client, auth_headers, created_property, storage_dir):
    response = upload(
        client, auth_headers, created_property["id"], [jpeg_file()],
        propertyName="The Loft District", type="exterior",
    )

    assert response.status_code == 200, response.text
    body = response.json()
    assert body["errors"] == []
    result = body["files"][0]
    assert result["originalName"] == "front.jpg"
    assert result["filename"].endswith("-front.jpg")
    assert result["url"] == (
        f"/photos/properties/atlanta-the-loft-district/property-exterior/{result['filename']}"
    )
    stored = storage_dir / "atlanta-the-loft-district" / "property-exterior" / result["filename"]
    assert stored.stat().st_size == result["size"]


def test_uploaded_photo_is_served(client, auth_headers, created_property):
    response = upload(client, auth_headers, created_property["id"], [jpeg_file()], type="interior")
    url = response.json()["files"][0]["url"]

    served = client.get(url)
    assert served.status_code == 200
    assert served.headers["content-type"] == "image/jpeg"


def test_upload_ignores_client_property_name(client, auth_headers, created_property):
    response = upload(
        client, auth_headers, created_property["id"], [jpeg_file()],
        propertyName="Something Else Entirely", type="amenities",
    )
    assert "/atlanta-the-loft-district/property-amenities/" in response.json()["files"][0]["url"]


def test_upload_unit_photos(client, auth_headers, created_property, created_unit, storage_dir):
    response = upload(
        client, auth_headers, created_property["id"], [jpeg_file("bath.jpg")],
        unitId=str(created_unit["id"]), unitNumber="3B",
    )

    assert response.status_code == 200, response.text
    assert "/atlanta-the-loft-district/unit-3b/" in response.json()["files"][0]["url"]
    assert (storage_dir / "atlanta-the-loft-district" / "unit-3b").is_dir()


def test_upload_rejects_non_image_without_writing(
    client, auth_headers, created_property, storage_dir
):
    files = [jpeg_file(), ("photos", ("notes.txt", b"hello", "text/plain"))]
    response = upload(client, auth_headers, created_property["id"], files, type="exterior")

    assert response.status_code == 400
    assert "notes.txt" in response.json()["error"]
    assert not (storage_dir / "atlanta-the-loft-district").exists()


def test_upload_too_many_files(client, auth_headers, created_property):
    files = [jpeg_file(f"p{i}.jpg", size=(10, 10)) for i in range(11)]
    response = upload(client, auth_headers, created_property["id"], files, type="exterior")
    assert response.status_code == 400
    assert "Too many files" in response.json()["error"]


def test_upload_invalid_type(client, auth_headers, created_property):
    response = upload(client, auth_headers, created_property["id"], [jpeg_file()], type="roof")
    assert response.status_code == 400


def test_upload_corrupt_image_reported_per_file(client, auth_headers, created_property):
    files = [jpeg_file("good.jpg"), ("photos", ("bad.jpg", b"not really a jpeg", "image/jpeg"))]
    response = upload(client, auth_headers, created_property["id"], files, type="exterior")

    assert response.status_code == 200
    body = response.json()
    assert [f["originalName"] for f in body["files"]] == ["good.jpg"]
    assert body["errors"][0]["originalName"] == "bad.jpg"


def test_upload_unknown_property(client, auth_headers):
    response = upload(client, auth_headers, 999, [jpeg_file()], type="exterior")
    assert response.status_code == 404


def test_upload_unit_from_other_property(client, auth_headers, created_unit, sample_property):
    other = client.post(
        "/api/properties", json={**sample_property, "name": "Other"}, headers=auth_headers
    ).json()
    response = upload(
        client, auth_headers, other["id"], [jpeg_file()], unitId=str(created_unit["id"])
    )
    assert response.status_code == 400


def test_upload_requires_auth(client, created_property):
    response = upload(client, {}, created_property["id"], [jpeg_file()], type="exterior")
    assert response.status_code == 401


def test_taxonomy_empty(client, created_property, created_unit):
    response = client.get(f"/api/photos/property/{created_property['id']}")

    assert response.status_code == 200
    assert response.json() == {
        "exterior": [],
        "interior": [],
        "amenities": [],
        "units": {str(created_unit["id"]): []},
    }


def test_taxonomy_after_uploads(client, auth_headers, created_property, created_unit):
    property_id = created_property["id"]
    exterior = upload(client, auth_headers, property_id, [jpeg_file()], type="exterior").json()
    unit = upload(
        client, auth_headers, property_id, [jpeg_file("bath.jpg")], unitId=str(created_unit["id"])
    ).json()

    taxonomy = client.get(f"/api/photos/property/{property_id}").json()

    assert taxonomy["exterior"] == [exterior["files"][0]["url"]]
    assert taxonomy["units"][str(created_unit["id"])] == [unit["files"][0]["url"]]


def test_taxonomy_unknown_property(client):
    assert client.get("/api/photos/property/999").status_code == 404


def test_taxonomy_for_name_without_ascii_letters(client, auth_headers, sample_property):
    prop = client.post(
        "/api/properties", json={**sample_property, "name": "東京"}, headers=auth_headers
    ).json()
    unit = client.post(
        "/api/units",
        json={"propertyId": prop["id"], "unitNumber": "1A", "bedrooms": 1},
        headers=auth_headers,
    ).json()

    response = client.get(f"/api/photos/property/{prop['id']}")

    assert response.status_code == 200
    assert response.json() == {
        "exterior": [], "interior": [], "amenities": [], "units": {str(unit["id"]): []},
    }


def test_delete_photo_then_404(client, auth_headers, created_property):
    url = upload(
        client, auth_headers, created_property["id"], [jpeg_file()], type="exterior"
    ).json()["files"][0]["url"]

    first = client.request("DELETE", "/api/photos", json={"path": url}, headers=auth_headers)
    second = client.request("DELETE", "/api/photos", json={"path": url}, headers=auth_headers)

    assert first.status_code == 200
    assert first.json() == {"message": "Photo deleted successfully"}
    assert second.status_code == 404
    taxonomy = client.get(f"/api/photos/property/{created_property['id']}").json()
    assert taxonomy["exterior"] == []


def test_delete_traversal_forbidden(client, auth_headers, media_root):
    secret = media_root / "secret.txt"
    secret.write_text("keep me")

    response = client.request(
        "DELETE", "/api/photos", json={"path": "/photos/properties/../../secret.txt"},
        headers=auth_headers,
    )

    assert response.status_code == 403
    assert secret.exists()


def test_delete_path_with_nul_character(client, auth_headers):
    response = client.request(
        "DELETE", "/api/photos", json={"path": "/photos/properties/a\u0000.jpg"},
        headers=auth_headers,
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid photo path"


def test_delete_without_path(client, auth_headers):
    response = client.request("DELETE", "/api/photos", json={}, headers=auth_headers)
    assert response.status_code == 400


def test_delete_requires_auth(client):
    response = client.request("DELETE", "/api/photos", json={"path": "/photos/properties/x.jpg"})
    assert response.status_code == 401
