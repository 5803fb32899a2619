"""服务端渲染页面的集成测试：登录、上传、管理与删除。"""

import io
import uuid

from fastapi.testclient import TestClient


def _form_login(client: TestClient, next_path: str = "/photos/manage"):
    return client.post(
        "/account/login",
        data={"username": "admin", "password": "admin123", "next": next_path},
        follow_redirects=False,
    )


def test_home_page_renders_for_anonymous_user(client: TestClient):
    resp = client.get("/")

    assert resp.status_code == 200
    assert "text/html" in resp.headers["content-type"]
    assert "登录" in resp.text


def test_photo_pages_redirect_to_login(client: TestClient):
    for path in ("/photos/upload", "/photos/manage"):
        resp = client.get(path, follow_redirects=False)
        assert resp.status_code == 303
        assert resp.headers["location"].startswith("/account/login?next=")


def test_form_login_sets_cookie_and_redirects(client: TestClient):
    resp = _form_login(client, "/photos/upload")

    assert resp.status_code == 303
    assert resp.headers["location"] == "/photos/upload"
    assert client.get("/photos/upload").status_code == 200


def test_form_login_rejects_open_redirect(client: TestClient):
    resp = _form_login(client, "//evil.example.com")
    assert resp.headers["location"] == "/photos/manage"


def test_form_login_with_bad_password_rerenders(client: TestClient):
    resp = client.post("/account/login", data={"username": "admin", "password": "nope"})

    assert resp.status_code == 401
    assert "用户名或密码错误" in resp.text


def test_register_then_login_via_forms(client: TestClient):
    username = f"web_{uuid.uuid4().hex[:8]}"

    reg = client.post(
        "/account/register",
        data={"username": username, "password": "secret123", "email": ""},
        follow_redirects=False,
    )
    assert reg.status_code == 303
    assert reg.headers["location"] == "/account/login?registered=true"

    login = client.post(
        "/account/login",
        data={"username": username, "password": "secret123", "next": "/"},
        follow_redirects=False,
    )
    assert login.status_code == 303


def test_register_short_password_shows_error(client: TestClient):
    resp = client.post("/account/register", data={"username": "shorty", "password": "123"})

    assert resp.status_code == 400
    assert "密码长度不能少于" in resp.text


def test_upload_manage_and_delete_through_pages(client: TestClient, upload_dir):
    _form_login(client)

    up = client.post(
        "/photos/upload",
        files={"photo": ("beach.png", io.BytesIO(b"\x89PNG-data"), "image/png")},
    )
    assert up.status_code == 200
    assert "上传成功" in up.text

    stored = [p.name for p in upload_dir.iterdir()]
    assert len(stored) == 1

    manage = client.get("/photos/manage")
    assert manage.status_code == 200
    assert stored[0] in manage.text
    assert "data:image/png;base64," in manage.text

    delete = client.post("/photos/manage/delete", data={"file_names": stored}, follow_redirects=False)
    assert delete.status_code == 303
    assert delete.headers["location"] == "/photos/manage?deleted=1"
    assert list(upload_dir.iterdir()) == []

    assert "还没有上传任何照片" in client.get("/photos/manage").text


def test_upload_page_reports_oversized_file(client: TestClient, upload_dir, photo_config):
    _form_login(client)

    resp = client.post(
        "/photos/upload",
        files={"photo": ("big.jpg", io.BytesIO(b"x" * (photo_config.max_upload_bytes + 1)), "image/jpeg")},
    )

    assert resp.status_code == 413
    assert "上传失败" in resp.text
    assert not upload_dir.exists() or list(upload_dir.iterdir()) == []


def test_manage_page_uses_placeholder_for_unreadable_thumbnail(client: TestClient, upload_dir, monkeypatch):
    from pathlib import Path

    upload_dir.mkdir()
    (upload_dir / "broken.png").write_bytes(b"data")
    original_read_bytes = Path.read_bytes

    def flaky_read_bytes(self):
        if self.name == "broken.png":
            raise OSError("disk error")
        return original_read_bytes(self)

    _form_login(client)
    monkeypatch.setattr(Path, "read_bytes", flaky_read_bytes)

    resp = client.get("/photos/manage")

    assert resp.status_code == 200
    assert "data:image/svg+xml;base64," in resp.text


def test_manage_delete_rejects_unsafe_name(client: TestClient, upload_dir):
    _form_login(client)

    resp = client.post("/photos/manage/delete", data={"file_names": ["../etc/passwd"]})

    assert resp.status_code == 400
    assert "非法文件名" in resp.text


def test_logout_clears_cookie(client: TestClient):
    _form_login(client)

    resp = client.post("/account/logout", follow_redirects=False)

    assert resp.status_code == 303
    client.cookies.clear()
    assert client.get("/photos/manage", follow_redirects=False).status_code == 303


def test_manage_delete_reports_only_removed_files(client: TestClient, upload_dir):
    upload_dir.mkdir()
    (upload_dir / "real.png").write_bytes(b"data")
    _form_login(client)

    resp = client.post(
        "/photos/manage/delete",
        data={"file_names": ["real.png", "already-gone.png"]},
        follow_redirects=False,
    )

    assert resp.status_code == 303
    assert resp.headers["location"] == "/photos/manage?deleted=1"
    assert "已删除 1 张照片" in client.get(resp.headers["location"]).text
