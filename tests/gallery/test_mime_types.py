"""MIME 推断与 Data URL 拼接的单元测试。"""

import base64

import pytest

from app.packages.gallery.services.mime_types import DEFAULT_MIME_TYPE, build_data_url, mime_type_for


@pytest.mark.parametrize(
    "file_name, expected",
    [
        ("photo.jpg", "image/jpeg"),
        ("photo.JPEG", "image/jpeg"),
        ("photo.png", "image/png"),
        ("photo.PNG", "image/png"),
        ("anim.Gif", "image/gif"),
        ("modern.webp", "image/webp"),
    ],
)
def test_known_extensions_ignore_case(file_name, expected):
    assert mime_type_for(file_name) == expected


def test_unknown_extension_falls_back_to_png():
    """非图片文件同样被标记为 image/png（现有行为）。"""
    assert mime_type_for("doc.txt") == "image/png"
    assert mime_type_for("no-extension") == DEFAULT_MIME_TYPE
    assert mime_type_for("") == DEFAULT_MIME_TYPE


def test_build_data_url_encodes_full_content():
    content = bytes(range(10))
    url = build_data_url(content, "a.jpg")

    prefix, payload = url.split(",", 1)
    assert prefix == "data:image/jpeg;base64"
    assert base64.b64decode(payload) == content


def test_build_data_url_explicit_mime_type():
    assert build_data_url(b"<svg/>", mime_type="image/svg+xml").startswith("data:image/svg+xml;base64,")
