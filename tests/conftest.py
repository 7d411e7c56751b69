"""Test configuration and fixtures for cl_thumbnail.

This module provides:
- Synthetic image fixtures generated with Pillow (no test media on disk)
- Settings fixture isolated from the environment
- httpx MockTransport based HTTP client fixture
"""

from collections.abc import Callable
from io import BytesIO
from pathlib import Path

import httpx
import pytest
from PIL import Image, ImageDraw

from cl_thumbnail.config import ThumbnailSettings

# ============================================================================
# Image Helpers
# ============================================================================


def make_image_bytes(
    width: int,
    height: int,
    fmt: str = "PNG",
    mode: str = "RGB",
    color: tuple[int, ...] = (73, 109, 137),
) -> bytes:
    """Encode a simple patterned image of the given size."""
    img = Image.new(mode, (width, height), color=color)
    draw = ImageDraw.Draw(img)

    # Add some patterns so the encoder has real work to do
    for i in range(0, width, 10):
        draw.line([(i, 0), (i, height)], fill=(255,) * len(color), width=1)

    buffer = BytesIO()
    img.save(buffer, format=fmt)
    return buffer.getvalue()


def image_size(data: bytes) -> tuple[int, int]:
    with Image.open(BytesIO(data)) as img:
        return img.size


def image_format(data: bytes) -> str | None:
    with Image.open(BytesIO(data)) as img:
        return img.format


@pytest.fixture
def make_image() -> Callable[..., bytes]:
    """Expose `make_image_bytes` to tests."""
    return make_image_bytes


@pytest.fixture
def read_size() -> Callable[[bytes], tuple[int, int]]:
    """Expose `image_size` to tests."""
    return image_size


@pytest.fixture
def read_format() -> Callable[[bytes], str | None]:
    """Expose `image_format` to tests."""
    return image_format


# ============================================================================
# Function-Scoped Fixtures
# ============================================================================


@pytest.fixture
def settings() -> ThumbnailSettings:
    """Settings with defaults, independent of CL_THUMBNAIL_* variables."""
    return ThumbnailSettings(
        http_timeout=5.0,
        http_follow_redirects=True,
        stream_chunk_size=1024,
        path_probe_extensions=[".tif", ".tiff"],
    )


@pytest.fixture
def png_bytes() -> bytes:
    """200x100 PNG."""
    return make_image_bytes(200, 100)


@pytest.fixture
def jpeg_bytes() -> bytes:
    """400x300 JPEG."""
    return make_image_bytes(400, 300, fmt="JPEG")


@pytest.fixture
def png_path(tmp_path: Path, png_bytes: bytes) -> Path:
    path = tmp_path / "image.png"
    _ = path.write_bytes(png_bytes)
    return path


@pytest.fixture
def tiff_path(tmp_path: Path) -> Path:
    path = tmp_path / "image.tif"
    _ = path.write_bytes(make_image_bytes(120, 80, fmt="TIFF"))
    return path


@pytest.fixture
def mock_client_factory() -> Callable[[Callable[[httpx.Request], httpx.Response]], httpx.AsyncClient]:
    """Build an AsyncClient whose requests are answered by `handler`."""

    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return factory
