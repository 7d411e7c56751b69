"""Runtime settings loaded from the environment via pydantic-settings."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ThumbnailSettings(BaseSettings):
    """Settings shared by every thumbnail call.

    Read from environment variables prefixed with ``CL_THUMBNAIL_``, e.g.
    ``CL_THUMBNAIL_HTTP_TIMEOUT=5``.
    """

    model_config = SettingsConfigDict(env_prefix="CL_THUMBNAIL_")

    # HTTP (URI sources)
    http_timeout: float = Field(default=30.0, gt=0)
    http_follow_redirects: bool = True

    # Stream sources
    stream_chunk_size: int = Field(default=64 * 1024, ge=1)

    # Formats whose header cannot be probed reliably from bytes
    path_probe_extensions: list[str] = Field(default_factory=lambda: [".tif", ".tiff"])

    @field_validator("path_probe_extensions")
    @classmethod
    def normalize_extensions(cls, v: list[str]) -> list[str]:
        """Lower-case extensions and make sure they start with a dot."""
        return [ext.lower() if ext.startswith(".") else f".{ext.lower()}" for ext in v]


# Singleton instance shared by all calls
_default_settings: ThumbnailSettings | None = None


def get_settings() -> ThumbnailSettings:
    """Get the default settings instance.

    Returns:
        ThumbnailSettings loaded from the environment on first use
    """
    global _default_settings
    if _default_settings is None:
        _default_settings = ThumbnailSettings()
    return _default_settings
