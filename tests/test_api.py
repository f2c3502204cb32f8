"""
End-to-end tests for the validation endpoints and the response envelope.
"""

import pytest
from fastapi.testclient import TestClient

from app import router as router_module
from app.main import app

JPEG_MAGIC = bytes([0xFF, 0xD8, 0xFF, 0xE0, 0x00, 0x10]) + b"JFIF"
PNG_MAGIC = bytes([0x89, 0x50, 0x4E, 0x47, 0x0D, 0x0A, 0x1A, 0x0A])


@pytest.fixture
def client():
    return TestClient(app)


# ---------------------------------------------------------------------------
# Service endpoints
# ---------------------------------------------------------------------------

def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert "running" in response.json()["message"]


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"]["status"] == "ok"
    assert "error" not in body


def test_unknown_route_uses_envelope(client):
    response = client.get("/api/nope")
    assert response.status_code == 404
    body = response.json()
    assert body["success"] is False
    assert "data" not in body


# ---------------------------------------------------------------------------
# POST /api/validate/url
# ---------------------------------------------------------------------------

def test_url_accepted_and_trimmed(client):
    response = client.post("/api/validate/url", json={"url": "  https://www.linkedin.com/in/johndoe  "})
    assert response.status_code == 200
    assert response.json() == {"success": True, "data": {"url": "https://www.linkedin.com/in/johndoe"}}


def test_url_empty_is_accepted(client):
    response = client.post("/api/validate/url", json={"url": "   "})
    assert response.status_code == 200
    assert response.json()["data"] == {"url": ""}


@pytest.mark.parametrize(
    "url, fragment",
    [
        ("http://example.com", "HTTPS"),
        ("https://", "host"),
        ("https://example.com/" + "a" * 481, "500 characters"),
        ("https://example com/path", "invalid URL format"),
    ],
)
def test_url_rejected(client, url, fragment):
    response = client.post("/api/validate/url", json={"url": url})
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert fragment in body["error"]


# ---------------------------------------------------------------------------
# POST /api/validate/image
# ---------------------------------------------------------------------------

def test_image_accepted(client):
    response = client.post(
        "/api/validate/image",
        files={"image": ("test.jpg", JPEG_MAGIC, "image/jpeg")},
        data={"title": "  Market share by region  "},
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["filename"] == "test.jpg"
    assert data["size"] == len(JPEG_MAGIC)
    assert data["contentType"] == "image/jpeg"
    assert data["detectedType"] == "image/jpeg"
    assert data["title"] == "Market share by region"


def test_image_without_title_omits_the_field(client):
    response = client.post("/api/validate/image", files={"image": ("test.jpg", JPEG_MAGIC, "image/jpeg")})
    assert response.status_code == 200
    data = response.json()["data"]
    assert "title" not in data
    assert data["detectedType"] == "image/jpeg"


def test_image_inspection_runs_in_threadpool(client, monkeypatch):
    calls = []

    async def recording_threadpool(func, *args):
        calls.append(func.__name__)
        return func(*args)

    monkeypatch.setattr(router_module, "run_in_threadpool", recording_threadpool)
    response = client.post("/api/validate/image", files={"image": ("test.png", PNG_MAGIC, "image/png")})
    assert response.status_code == 200
    assert calls == ["_inspect_image"]


def test_image_declared_detected_mismatch_is_accepted(client):
    response = client.post("/api/validate/image", files={"image": ("test.jpg", PNG_MAGIC, "image/jpeg")})
    assert response.status_code == 200
    assert response.json()["data"]["detectedType"] == "image/png"


def test_image_text_disguised_as_jpeg(client):
    response = client.post(
        "/api/validate/image",
        files={"image": ("test.jpg", b"This is text, not an image", "image/jpeg")},
    )
    assert response.status_code == 400
    assert "valid image" in response.json()["error"]


def test_image_bad_extension(client):
    response = client.post("/api/validate/image", files={"image": ("report.pdf", JPEG_MAGIC, "image/jpeg")})
    assert response.status_code == 400
    assert "invalid file extension: .pdf" in response.json()["error"]


def test_image_bad_declared_type(client):
    response = client.post("/api/validate/image", files={"image": ("test.png", PNG_MAGIC, "application/pdf")})
    assert response.status_code == 400
    assert "invalid file type: application/pdf" in response.json()["error"]


def test_image_empty_file(client):
    response = client.post("/api/validate/image", files={"image": ("test.png", b"", "image/png")})
    assert response.status_code == 400
    assert "empty" in response.json()["error"]


def test_image_missing(client):
    response = client.post("/api/validate/image", data={"title": "Orphan title"})
    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "no file provided"}


def test_image_title_too_short(client):
    response = client.post(
        "/api/validate/image",
        files={"image": ("test.jpg", JPEG_MAGIC, "image/jpeg")},
        data={"title": "x"},
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Title must be between 2 and 255 characters"


# ---------------------------------------------------------------------------
# POST /api/validate/author
# ---------------------------------------------------------------------------

def test_author_with_valid_linkedin_url(client):
    response = client.post(
        "/api/validate/author",
        json={"name": "John Doe", "linkedinUrl": " https://www.linkedin.com/in/johndoe "},
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["name"] == "John Doe"
    assert data["linkedinUrl"] == "https://www.linkedin.com/in/johndoe"


def test_author_without_linkedin_url(client):
    response = client.post("/api/validate/author", json={"name": "John Doe"})
    assert response.status_code == 200
    data = response.json()["data"]
    assert data == {"name": "John Doe"}
    assert "linkedinUrl" not in data
    assert "role" not in data
    assert "bio" not in data


@pytest.mark.parametrize(
    "linkedin_url",
    [
        "http://www.linkedin.com/in/johndoe",
        "not-a-url",
        "www.linkedin.com/in/johndoe",
    ],
)
def test_author_with_invalid_linkedin_url(client, linkedin_url):
    response = client.post("/api/validate/author", json={"name": "John Doe", "linkedinUrl": linkedin_url})
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert "HTTPS" in body["error"]


def test_author_name_too_short(client):
    response = client.post("/api/validate/author", json={"name": "J"})
    assert response.status_code == 400
    assert response.json()["error"] == "Name must be at least 2 characters"


def test_author_name_missing(client):
    response = client.post("/api/validate/author", json={"linkedinUrl": "https://example.com"})
    assert response.status_code == 400
    assert "name" in response.json()["error"]


def test_author_bio_too_long(client):
    response = client.post("/api/validate/author", json={"name": "John Doe", "bio": "b" * 1001})
    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Bio must not exceed 1000 characters"}


def test_author_bio_at_limit(client):
    response = client.post("/api/validate/author", json={"name": "John Doe", "bio": "b" * 1000})
    assert response.status_code == 200
    assert response.json()["data"]["bio"] == "b" * 1000


def test_author_role_too_long(client):
    response = client.post("/api/validate/author", json={"name": "John Doe", "role": "r" * 101})
    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Role must not exceed 100 characters"}


def test_author_role_at_limit(client):
    response = client.post("/api/validate/author", json={"name": "John Doe", "role": "r" * 100})
    assert response.status_code == 200
    assert response.json()["data"]["role"] == "r" * 100


def test_author_image_url_is_validated(client):
    response = client.post(
        "/api/validate/author",
        json={"name": "John Doe", "imageUrl": "  https://imagedelivery.net/abc/portrait/public "},
    )
    assert response.status_code == 200
    assert response.json()["data"]["imageUrl"] == "https://imagedelivery.net/abc/portrait/public"

    response = client.post("/api/validate/author", json={"name": "John Doe", "imageUrl": "http://cdn.example.com/a.png"})
    assert response.status_code == 400
    assert "HTTPS" in response.json()["error"]
