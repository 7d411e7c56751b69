"""Public thumbnail and blend operations."""

import asyncio
from collections.abc import Mapping

import httpx
from loguru import logger
from pydantic import ValidationError

from .algo.compositor import BlendInput, blend_images
from .algo.dimensions import path_probe_target, resolve_dimensions
from .algo.response_formatter import format_response
from .algo.source_loader import load_source
from .algo.thumbnail_encoder import encode_thumbnail
from .common.image_source import classify_source
from .common.schemas import ThumbnailOptions
from .config import ThumbnailSettings, get_settings
from .errors import CodecError, InvalidOptionsError, ThumbnailError


def load_settings() -> ThumbnailSettings:
    """Ambient settings; invalid CL_THUMBNAIL_* values raise InvalidOptionsError."""
    try:
        return get_settings()
    except ValidationError as exc:
        raise InvalidOptionsError(f"Invalid CL_THUMBNAIL_* settings: {exc}") from exc


def parse_options(options: ThumbnailOptions | Mapping[str, object] | None) -> ThumbnailOptions:
    """Accept options as a model, a mapping (either key style) or None."""
    if options is None:
        return ThumbnailOptions()
    if isinstance(options, ThumbnailOptions):
        return options
    try:
        return ThumbnailOptions.model_validate(dict(options))
    except ValidationError as exc:
        raise InvalidOptionsError(str(exc)) from exc


async def thumb(
    source: object,
    options: ThumbnailOptions | Mapping[str, object] | None = None,
    *,
    client: httpx.AsyncClient | None = None,
    settings: ThumbnailSettings | None = None,
) -> bytes | str:
    """
    Create a thumbnail from any supported image source.

    Args:
        source: base64 text, {"uri": ...} descriptor, filesystem path,
                bytes-like buffer, or readable byte stream
        options: Thumbnail options (percentage, width, height,
                 responseType, pngOptions)
        client: Optional HTTP client used for URI sources
        settings: Override the environment settings

    Returns:
        Thumbnail bytes, or base64 text when responseType is "base64"

    Raises:
        ThumbnailError: On any failure; `kind` tells which stage failed
    """
    try:
        settings = settings or load_settings()
        opts = parse_options(options)
        image_source = classify_source(source)
        logger.debug(f"Classified thumbnail source as {image_source.kind}")

        data = await load_source(image_source, settings=settings, client=client)
        dimensions = await asyncio.to_thread(
            resolve_dimensions,
            data,
            opts.percentage,
            opts.width,
            opts.height,
            probe_path=path_probe_target(image_source, settings),
        )
        encoded = await asyncio.to_thread(
            encode_thumbnail, data, dimensions, opts.png_options
        )
        return format_response(encoded.data, opts.response_type)

    except ThumbnailError as exc:
        logger.error(f"Thumbnail failed ({exc.kind}): {exc.message}")
        raise
    except Exception as exc:
        logger.error(f"Thumbnail failed: {exc}")
        raise CodecError(str(exc) or exc.__class__.__name__) from exc


async def blend(base: BlendInput, overlay: BlendInput, blend_mode: str) -> bytes:
    """
    Blend `overlay` onto `base` with the named blend mode.

    Returns:
        PNG bytes with the dimensions of `base`

    Raises:
        ThumbnailError: With kind CODEC_FAILED on any failure
    """
    try:
        encoded = await asyncio.to_thread(blend_images, base, overlay, blend_mode)
    except ThumbnailError as exc:
        logger.error(f"Blend failed ({exc.kind}): {exc.message}")
        raise
    except Exception as exc:
        logger.error(f"Blend failed: {exc}")
        raise CodecError(str(exc) or exc.__class__.__name__) from exc
    return encoded.data
