"""配置解析测试：上传目录与大小上限。"""

from pathlib import Path

from app.packages.gallery.core.config import BASE_DIR, DEFAULT_MAX_UPLOAD_BYTES, Settings


def test_upload_path_defaults_to_root_uploads(monkeypatch):
    monkeypatch.delenv("PHOTO_UPLOAD_PATH", raising=False)
    monkeypatch.delenv("PHOTO_UPLOAD_MAX_BYTES", raising=False)

    config = Settings().photo_upload

    assert config.upload_path == Path("/uploads")
    assert config.max_upload_bytes == DEFAULT_MAX_UPLOAD_BYTES == 10 * 1024 * 1024


def test_blank_upload_path_falls_back_to_default(monkeypatch):
    monkeypatch.setenv("PHOTO_UPLOAD_PATH", "   ")
    assert Settings().photo_upload.upload_path == Path("/uploads")


def test_relative_upload_path_resolves_against_project_root(monkeypatch):
    monkeypatch.setenv("PHOTO_UPLOAD_PATH", "uploads")
    monkeypatch.setenv("PHOTO_UPLOAD_MAX_BYTES", "2048")

    config = Settings().photo_upload

    assert config.upload_path == BASE_DIR / "uploads"
    assert config.max_upload_bytes == 2048


def test_absolute_upload_path_is_kept(monkeypatch, tmp_path):
    monkeypatch.setenv("PHOTO_UPLOAD_PATH", str(tmp_path / "vol"))
    assert Settings().photo_upload.upload_path == tmp_path / "vol"


def test_explicit_database_url_wins(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite:///./local.db")
    assert Settings().sql_database_url == "sqlite:///./local.db"
