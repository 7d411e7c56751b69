"""Unit tests for runtime settings."""

import pytest

from cl_thumbnail import config
from cl_thumbnail.config import ThumbnailSettings, get_settings


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch):
    """Test ThumbnailSettings has correct default values."""
    for name in ("HTTP_TIMEOUT", "HTTP_FOLLOW_REDIRECTS", "STREAM_CHUNK_SIZE", "PATH_PROBE_EXTENSIONS"):
        monkeypatch.delenv(f"CL_THUMBNAIL_{name}", raising=False)

    settings = ThumbnailSettings()

    assert settings.http_timeout == 30.0
    assert settings.http_follow_redirects is True
    assert settings.stream_chunk_size == 64 * 1024
    assert settings.path_probe_extensions == [".tif", ".tiff"]


def test_settings_from_environment(monkeypatch: pytest.MonkeyPatch):
    """Test settings are read from CL_THUMBNAIL_* variables."""
    monkeypatch.setenv("CL_THUMBNAIL_HTTP_TIMEOUT", "2.5")
    monkeypatch.setenv("CL_THUMBNAIL_STREAM_CHUNK_SIZE", "16")
    monkeypatch.setenv("CL_THUMBNAIL_PATH_PROBE_EXTENSIONS", '[".TIF", "dng"]')

    settings = ThumbnailSettings()

    assert settings.http_timeout == 2.5
    assert settings.stream_chunk_size == 16
    assert settings.path_probe_extensions == [".tif", ".dng"]


def test_settings_validation():
    """Test invalid values are rejected."""
    with pytest.raises(ValueError):
        _ = ThumbnailSettings(stream_chunk_size=0)
    with pytest.raises(ValueError):
        _ = ThumbnailSettings(http_timeout=0)


def test_get_settings_singleton(monkeypatch: pytest.MonkeyPatch):
    """Test get_settings returns one shared instance."""
    monkeypatch.setattr(config, "_default_settings", None)

    s1 = get_settings()
    s2 = get_settings()

    assert s1 is s2
    assert isinstance(s1, ThumbnailSettings)
