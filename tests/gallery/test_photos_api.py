"""照片接口集成测试：上传 → 列表 → 删除的完整流程。"""

import base64
import io

from fastapi.testclient import TestClient


def _upload(client: TestClient, name: str, content: bytes, mime: str = "image/png"):
    return client.post("/api/v1/photos", files={"file": (name, io.BytesIO(content), mime)})


def test_list_photos_when_directory_missing(client: TestClient, upload_dir):
    assert not upload_dir.exists()

    resp = client.get("/api/v1/photos")

    assert resp.status_code == 200
    payload = resp.json()
    assert payload["code"] == 200
    assert payload["data"] == []


def test_upload_list_delete_round_trip(auth_client: TestClient, upload_dir):
    content = b"0123456789"

    up = _upload(auth_client, "a.png", content)
    assert up.status_code == 200
    result = up.json()["data"]
    assert result["success"] is True
    stored_name = result["fileName"]
    assert stored_name.endswith(".png")

    listing = auth_client.get("/api/v1/photos").json()["data"]
    assert len(listing) == 1
    entry = listing[0]
    assert entry["fileName"] == stored_name
    assert entry["displayName"] == stored_name
    prefix, payload = entry["thumbnailUrl"].split(",", 1)
    assert prefix == "data:image/png;base64"
    assert base64.b64decode(payload) == content

    dl = auth_client.request("DELETE", "/api/v1/photos", json={"fileNames": [stored_name]})
    assert dl.status_code == 200
    assert dl.json()["data"] == {"requested": 1, "deleted": 1}

    assert auth_client.get("/api/v1/photos").json()["data"] == []
    assert list(upload_dir.iterdir()) == []


def test_each_upload_adds_exactly_one_entry(auth_client: TestClient):
    for index in range(3):
        _upload(auth_client, f"p{index}.jpg", f"photo-{index}".encode(), "image/jpeg")
        assert len(auth_client.get("/api/v1/photos").json()["data"]) == index + 1


def test_upload_over_cap_returns_413_and_leaves_nothing(auth_client: TestClient, upload_dir, photo_config):
    resp = _upload(auth_client, "huge.png", b"x" * (photo_config.max_upload_bytes + 1))

    assert resp.status_code == 413
    assert resp.json()["code"] == 413
    assert not upload_dir.exists() or list(upload_dir.iterdir()) == []


def test_upload_requires_authentication(client: TestClient, upload_dir):
    resp = _upload(client, "a.png", b"data")

    assert resp.status_code == 401
    assert not upload_dir.exists()


def test_delete_requires_authentication(client: TestClient):
    resp = client.request("DELETE", "/api/v1/photos", json={"fileNames": ["a.png"]})
    assert resp.status_code == 401


def test_delete_missing_names_is_not_an_error(auth_client: TestClient, upload_dir):
    _upload(auth_client, "keep.gif", b"gif", "image/gif")

    resp = auth_client.request("DELETE", "/api/v1/photos", json={"fileNames": ["nope.png"]})

    assert resp.status_code == 200
    assert resp.json()["data"] == {"requested": 1, "deleted": 0}
    assert len(list(upload_dir.iterdir())) == 1


def test_delete_rejects_traversal_names(auth_client: TestClient, tmp_path):
    outside = tmp_path / "outside.txt"
    outside.write_text("keep me")

    resp = auth_client.request("DELETE", "/api/v1/photos", json={"fileNames": ["../outside.txt"]})

    assert resp.status_code == 400
    assert resp.json()["msg"] == "非法文件名"
    assert outside.exists()


def test_bearer_token_also_authenticates(client: TestClient):
    token = client.post(
        "/api/v1/auth/login", json={"username": "admin", "password": "admin123"}
    ).json()["data"]["access_token"]
    client.cookies.clear()

    resp = client.post(
        "/api/v1/photos",
        files={"file": ("b.webp", io.BytesIO(b"webp"), "image/webp")},
        headers={"Authorization": f"Bearer {token}"},
    )

    assert resp.status_code == 200


def test_simple_listfiles_endpoint(auth_client: TestClient, upload_dir):
    assert auth_client.get("/api/listfiles").json() == []

    names = {_upload(auth_client, name, b"data").json()["data"]["fileName"] for name in ("a.png", "b.png")}

    resp = auth_client.get("/api/listfiles")
    assert resp.status_code == 200
    assert set(resp.json()) == names


def test_health_endpoints_and_request_id(client: TestClient):
    resp = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert resp.status_code == 200
    assert resp.json()["data"] == {"status": "healthy"}
    assert resp.headers["x-request-id"] == "req-123"

    assert client.get("/alive").status_code == 200
