"""Thumbnail pipeline stages."""

from .compositor import BLEND_MODES, blend_images
from .dimensions import path_probe_target, probe_dimensions, resolve_dimensions
from .response_formatter import format_response
from .source_loader import drain_stream, fetch_uri, load_source
from .thumbnail_encoder import encode_thumbnail

__all__ = [
    "BLEND_MODES",
    "blend_images",
    "drain_stream",
    "encode_thumbnail",
    "fetch_uri",
    "format_response",
    "load_source",
    "path_probe_target",
    "probe_dimensions",
    "resolve_dimensions",
]
