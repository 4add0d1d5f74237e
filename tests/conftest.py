import pytest

from viewer_shell.surface import HtmlSurface

# 1x1 transparent PNG
PNG_BYTES = bytes.fromhex(
    "89504e470d0a1a0a0000000d49484452000000010000000108060000001f15c489"
    "0000000d4944415478da63f8cfc0f01f0005000201a5e0f5a90000000049454e44ae426082"
)


@pytest.fixture
def image_file(tmp_path):
    path = tmp_path / "photo.png"
    path.write_bytes(PNG_BYTES)
    return path


@pytest.fixture
def png_bytes():
    return PNG_BYTES


@pytest.fixture
def surface():
    return HtmlSurface()
