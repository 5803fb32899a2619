"""默认占位图加载测试。"""

import pytest

from app.packages.gallery.core.exceptions import ConfigurationError
from app.packages.gallery.services import placeholder


def test_bundled_placeholder_loads_as_svg_data_url():
    url = placeholder.load_placeholder()

    assert url.startswith("data:image/svg+xml;base64,")
    assert placeholder.get_placeholder_data_url() == url


def test_missing_placeholder_is_fatal(tmp_path):
    with pytest.raises(ConfigurationError):
        placeholder.load_placeholder(tmp_path / "missing.svg")
