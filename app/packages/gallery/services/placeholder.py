"""默认占位图：缩略图读取失败时在管理页面展示。

占位图在应用启动时加载，资源缺失视为致命配置错误。
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from app.packages.gallery.core.exceptions import ConfigurationError
from app.packages.gallery.core.logger import logger
from app.packages.gallery.services.mime_types import build_data_url

PLACEHOLDER_PATH = Path(__file__).resolve().parent.parent / "web" / "static" / "placeholder.svg"
PLACEHOLDER_MIME_TYPE = "image/svg+xml"

_placeholder_data_url: Optional[str] = None


def load_placeholder(path: Path = PLACEHOLDER_PATH) -> str:
    """读取占位图并缓存为 Data URL。"""
    global _placeholder_data_url
    if not path.is_file():
        logger.error("Placeholder asset missing: %s", path)
        raise ConfigurationError(f"缺少默认占位图资源: {path}")
    _placeholder_data_url = build_data_url(path.read_bytes(), mime_type=PLACEHOLDER_MIME_TYPE)
    return _placeholder_data_url


def get_placeholder_data_url() -> str:
    if _placeholder_data_url is None:
        return load_placeholder()
    return _placeholder_data_url
