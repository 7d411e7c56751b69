"""cl_thumbnail - Thumbnails from any image source."""

from .common.image_source import (
    Base64Source,
    BufferSource,
    ImageSource,
    PathSource,
    SourceKind,
    StreamSource,
    UriSource,
    classify_source,
)
from .common.schemas import ResponseType, ThumbnailOptions
from .config import ThumbnailSettings, get_settings
from .errors import ErrorKind, ThumbnailError
from .thumbnail import blend, thumb

__version__ = "0.1.0"

__all__ = [
    "Base64Source",
    "BufferSource",
    "ErrorKind",
    "ImageSource",
    "PathSource",
    "ResponseType",
    "SourceKind",
    "StreamSource",
    "ThumbnailError",
    "ThumbnailOptions",
    "ThumbnailSettings",
    "UriSource",
    "__version__",
    "blend",
    "classify_source",
    "get_settings",
    "thumb",
]
