import io

import pytest
from PIL import Image

from fitzone.services import storage_service


def png_bytes(width=4, height=3) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), "red").save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def fake_storage(monkeypatch):
    stored = []

    def upload_image(contents, content_type):
        key = f"{storage_service.STORE_FOLDER}/img{len(stored)}.png"
        stored.append(key)
        return {"url": f"https://cdn.example.com/{key}", "public_id": key}

    monkeypatch.setattr(storage_service, "upload_image", upload_image)
    return stored


def test_upload_reports_dimensions(client, admin_headers, fake_storage):
    response = client.post(
        "/api/upload", files={"image": ("a.png", png_bytes(), "image/png")}, headers=admin_headers
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert (data["width"], data["height"]) == (4, 3)
    assert data["public_id"] == fake_storage[0]


def test_non_image_rejected(client, admin_headers, fake_storage):
    response = client.post(
        "/api/upload", files={"image": ("notes.txt", b"hello", "text/plain")}, headers=admin_headers
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Only image files are allowed!"
    assert fake_storage == []


def test_missing_file(client, admin_headers):
    response = client.post("/api/upload", headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["message"] == "Please upload an image"


def test_multiple_upload_limit(client, admin_headers, fake_storage):
    files = [("images", (f"{i}.png", png_bytes(), "image/png")) for i in range(6)]
    response = client.post("/api/upload/multiple", files=files, headers=admin_headers)
    assert response.status_code == 400

    files = files[:2]
    response = client.post("/api/upload/multiple", files=files, headers=admin_headers)
    assert len(response.json()["data"]) == 2


def test_storage_failure(client, admin_headers, monkeypatch):
    def broken(contents, content_type):
        raise storage_service.StorageError("bucket missing")

    monkeypatch.setattr(storage_service, "upload_image", broken)
    response = client.post(
        "/api/upload", files={"image": ("a.png", png_bytes(), "image/png")}, headers=admin_headers
    )
    assert response.status_code == 500
    assert response.json()["message"] == "Error uploading image"


def test_object_key_for_bare_id():
    assert storage_service.object_key("abc.png") == f"{storage_service.STORE_FOLDER}/abc.png"
    assert storage_service.object_key(f"{storage_service.STORE_FOLDER}/abc.png") == f"{storage_service.STORE_FOLDER}/abc.png"


def test_members_cannot_upload(client, member_headers):
    response = client.post(
        "/api/upload", files={"image": ("a.png", png_bytes(), "image/png")}, headers=member_headers
    )
    assert response.status_code == 403
