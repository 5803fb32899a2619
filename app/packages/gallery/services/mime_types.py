"""按扩展名推断照片的 MIME 类型，并拼接内联 Data URL。

映射表是固定的，未知扩展名一律回退为 ``image/png``（非图片文件也会被标成 PNG）。
"""

from __future__ import annotations

import base64
from pathlib import PurePath

DEFAULT_MIME_TYPE = "image/png"

_MIME_BY_EXTENSION = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
}


def mime_type_for(file_name: str) -> str:
    extension = PurePath(file_name or "").suffix.lower()
    return _MIME_BY_EXTENSION.get(extension, DEFAULT_MIME_TYPE)


def build_data_url(content: bytes, file_name: str = "", *, mime_type: str | None = None) -> str:
    """返回 ``data:<mime>;base64,<payload>`` 形式的字符串。"""
    mime = mime_type or mime_type_for(file_name)
    payload = base64.b64encode(content).decode("ascii")
    return f"data:{mime};base64,{payload}"
