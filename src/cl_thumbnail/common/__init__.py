"""Common module - source variants and schemas."""

from .image_source import (
    Base64Source,
    BufferSource,
    ImageSource,
    PathSource,
    SourceKind,
    StreamSource,
    UriSource,
    classify_source,
)
from .schemas import Dimensions, EncodedImage, ResponseType, ThumbnailOptions

__all__ = [
    "Base64Source",
    "BufferSource",
    "Dimensions",
    "EncodedImage",
    "ImageSource",
    "PathSource",
    "ResponseType",
    "SourceKind",
    "StreamSource",
    "ThumbnailOptions",
    "UriSource",
    "classify_source",
]
