"""
API tests for image uploads
"""
from app.core.exceptions import MediaUploadError

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


def test_upload_image(client, media_client):
    response = client.post(
        "/api/v1/media/upload",
        files={"media": ("bike.png", PNG_BYTES, "image/png")},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"]["url"] == "https://media.example.com/uploads/bike.png"
    assert media_client.uploads == [("bike.png", "image/png", len(PNG_BYTES))]


def test_upload_rejects_non_image(client, media_client):
    response = client.post(
        "/api/v1/media/upload",
        files={"media": ("notes.txt", b"hello", "text/plain")},
    )

    assert response.status_code == 400
    assert "image" in response.json()["message"].lower()
    assert media_client.uploads == []


def test_upload_requires_file(client):
    response = client.post("/api/v1/media/upload")
    assert response.status_code == 400


def test_upload_rejects_empty_file(client):
    response = client.post(
        "/api/v1/media/upload",
        files={"media": ("empty.png", b"", "image/png")},
    )
    assert response.status_code == 400


def test_upload_rejects_large_file(client, media_client):
    too_big = b"\x00" * (2 * 1024 * 1024 + 1)

    response = client.post(
        "/api/v1/media/upload",
        files={"media": ("huge.jpg", too_big, "image/jpeg")},
    )

    assert response.status_code == 413
    assert response.json()["success"] is False
    assert media_client.uploads == []


def test_upload_accepts_file_at_limit(client, media_client):
    exact = b"\x00" * (2 * 1024 * 1024)

    response = client.post(
        "/api/v1/media/upload",
        files={"media": ("exact.jpg", exact, "image/jpeg")},
    )
    assert response.status_code == 200


def test_upload_media_host_failure(client, media_client):
    media_client.fail_with = MediaUploadError(cause="connection refused")

    response = client.post(
        "/api/v1/media/upload",
        files={"media": ("bike.png", PNG_BYTES, "image/png")},
    )

    assert response.status_code == 502
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Failed to upload media"
