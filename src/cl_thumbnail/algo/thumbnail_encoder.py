"""Pure thumbnail encoding logic: decode, shrink, re-encode."""

from collections.abc import Mapping
from io import BytesIO
from typing import Any

from loguru import logger
from PIL import Image

from ..common.schemas import Dimensions, EncodedImage
from ..errors import CodecError
from ..utils.profiling import timed

PNG_MODES = frozenset({"1", "L", "LA", "I", "I;16", "P", "RGB", "RGBA"})


def get_output_format(source_format: str | None, png_options: Mapping[str, Any] | None) -> str:
    """Pick the Pillow format to write.

    Without PNG options, or with `force: False`, the source format is kept
    when Pillow can write it. Otherwise the output is PNG.
    """
    force = True if png_options is None else bool(png_options.get("force", True))
    if png_options is not None and force:
        return "PNG"

    Image.init()
    if source_format and source_format.upper() in Image.SAVE:
        return source_format.upper()
    return "PNG"


def get_save_params(output_format: str, png_options: Mapping[str, Any] | None) -> dict[str, Any]:
    """PNG options minus `force`, forwarded verbatim to the PNG writer."""
    if output_format != "PNG" or png_options is None:
        return {}
    return {key: value for key, value in png_options.items() if key != "force"}


@timed
def encode_thumbnail(
    data: bytes,
    dimensions: Dimensions,
    png_options: Mapping[str, Any] | None = None,
) -> EncodedImage:
    """
    Shrink encoded image bytes to `dimensions` and re-encode them.

    Framework-agnostic, single-image operation. The image is never enlarged:
    each axis is capped at the original size independently.

    Args:
        data: Encoded source image
        dimensions: Resolved target dimensions
        png_options: Pillow PNG save parameters (see `get_output_format`)

    Returns:
        Encoded thumbnail with its format and final size

    Raises:
        CodecError: If Pillow fails to decode, resize or encode the image
    """
    try:
        with Image.open(BytesIO(data)) as img:
            source_format = img.format
            target = (
                min(dimensions.width, img.width),
                min(dimensions.height, img.height),
            )

            if target == img.size:
                thumbnail = img.copy()
            else:
                thumbnail = img.resize(target, Image.Resampling.LANCZOS)

        output_format = get_output_format(source_format, png_options)
        if output_format == "PNG" and thumbnail.mode not in PNG_MODES:
            thumbnail = thumbnail.convert("RGBA")

        buffer = BytesIO()
        thumbnail.save(buffer, format=output_format, **get_save_params(output_format, png_options))
    except CodecError:
        raise
    except Exception as exc:
        raise CodecError(str(exc) or exc.__class__.__name__) from exc

    encoded = buffer.getvalue()
    logger.debug(
        f"Encoded {source_format} -> {output_format} {thumbnail.width}x{thumbnail.height} ({len(encoded)} bytes)"
    )
    return EncodedImage(
        data=encoded,
        format=output_format,
        width=thumbnail.width,
        height=thumbnail.height,
        size=len(encoded),
    )
