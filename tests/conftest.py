"""测试夹具：为 pytest 提供数据库、上传目录与客户端的共享配置。"""

import os
import tempfile
from pathlib import Path
from typing import Generator

# 必须在导入应用之前设置，配置对象在首次导入时即被缓存
os.environ.setdefault("ENVIRONMENT", "test")
os.environ["SESSION_BACKEND"] = "memory"
os.environ["LOG_DIR"] = tempfile.mkdtemp(prefix="volumemount_logs_")
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from app.main import app
from app.packages.gallery.core.config import PhotoUploadConfiguration
from app.packages.gallery.core.dependencies import get_db, get_photo_upload_configuration
from app.packages.gallery.core.session import InMemorySessionBackend, reset_backend
from app.packages.gallery.db import session as db_session
from app.packages.gallery.db.init_db import init_db
from app.packages.gallery.models import Base

TEST_DB_PATH = os.path.join(os.path.dirname(__file__), "test.db")
TEST_DATABASE_URL = f"sqlite:///{TEST_DB_PATH}"

# 测试中使用较小的上限，便于构造超限上传
TEST_MAX_UPLOAD_BYTES = 1024


@pytest.fixture(scope="session", autouse=True)
def setup_test_database() -> Generator[None, None, None]:
    """创建隔离的 SQLite 测试数据库，并在会话结束后清理。"""
    if os.path.exists(TEST_DB_PATH):
        os.remove(TEST_DB_PATH)

    engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    db_session.engine = engine
    db_session.SessionLocal = TestingSessionLocal

    Base.metadata.create_all(bind=engine)
    init_db()
    reset_backend(InMemorySessionBackend())
    yield

    engine.dispose()
    if os.path.exists(TEST_DB_PATH):
        os.remove(TEST_DB_PATH)


@pytest.fixture()
def db_session_fixture() -> Generator[Session, None, None]:
    """提供给测试用例使用的数据库会话。"""
    session = db_session.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def upload_dir(tmp_path: Path) -> Path:
    """每个用例独立的上传目录（尚未创建，由上传操作按需创建）。"""
    return tmp_path / "uploads"


@pytest.fixture()
def photo_config(upload_dir: Path) -> PhotoUploadConfiguration:
    return PhotoUploadConfiguration(upload_path=upload_dir, max_upload_bytes=TEST_MAX_UPLOAD_BYTES)


@pytest.fixture()
def client(photo_config: PhotoUploadConfiguration):
    """构建 FastAPI TestClient，并注入测试专用的数据库与上传目录依赖。"""
    def override_get_db() -> Generator[Session, None, None]:
        session = db_session.SessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_photo_upload_configuration] = lambda: photo_config

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture()
def auth_client(client: TestClient) -> TestClient:
    """已通过 API 登录的客户端，登录 Cookie 由 TestClient 自动携带。"""
    resp = client.post("/api/v1/auth/login", json={"username": "admin", "password": "admin123"})
    assert resp.status_code == 200
    return client
