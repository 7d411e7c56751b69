"""Target dimension resolution for thumbnails."""

import math
from io import BytesIO
from pathlib import Path

from loguru import logger
from PIL import Image, UnidentifiedImageError

from ..common.image_source import ImageSource, PathSource
from ..common.schemas import Dimensions
from ..config import ThumbnailSettings
from ..errors import CodecError, FilesystemError


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero (2.5 -> 3, -2.5 -> -3)."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def probe_dimensions(image: bytes | str | Path) -> Dimensions:
    """
    Read intrinsic width/height from image header metadata.

    Pillow opens images lazily, so only the header is parsed; pixel data is
    never decoded here.

    Args:
        image: Encoded image bytes, or a filesystem path to probe directly

    Returns:
        Intrinsic dimensions of the image

    Raises:
        FilesystemError: If a path cannot be opened
        CodecError: If the data is not a recognizable image
    """
    fp = image if isinstance(image, (str, Path)) else BytesIO(image)
    try:
        with Image.open(fp) as img:
            width, height = img.size
    except UnidentifiedImageError as exc:
        raise CodecError(str(exc)) from exc
    except (FileNotFoundError, PermissionError, IsADirectoryError) as exc:
        raise FilesystemError(str(exc)) from exc
    except (OSError, ValueError, SyntaxError) as exc:
        raise CodecError(str(exc)) from exc

    return Dimensions(width=width, height=height)


def path_probe_target(source: ImageSource, settings: ThumbnailSettings) -> Path | None:
    """Return the path to probe by, when byte probing is unreliable for the format.

    Only path sources qualify; the format is judged by file extension
    against `settings.path_probe_extensions`.
    """
    if isinstance(source, PathSource) and source.path.suffix.lower() in settings.path_probe_extensions:
        return source.path
    return None


def resolve_dimensions(
    image: bytes,
    percentage: float,
    width: int | None = None,
    height: int | None = None,
    *,
    probe_path: Path | None = None,
) -> Dimensions:
    """
    Compute the target size of a thumbnail.

    - width and height given: used unchanged, the image is not probed
    - only one given: the other is the image's intrinsic size on that axis,
      copied as-is (not scaled to keep the aspect ratio)
    - neither given: both are `percentage` of the intrinsic size, rounded
      half away from zero

    Values are not validated; zero or negative sizes are left for the
    encoder to reject.

    Args:
        image: Encoded image bytes
        percentage: Percentage of intrinsic size used when no size is given
        width: Requested width
        height: Requested height
        probe_path: Probe this path instead of `image` (see `path_probe_target`)

    Returns:
        Resolved target dimensions
    """
    if width is not None and height is not None:
        return Dimensions(width=width, height=height)

    original = probe_dimensions(probe_path if probe_path is not None else image)

    if width is not None:
        resolved = Dimensions(width=width, height=original.height)
    elif height is not None:
        resolved = Dimensions(width=original.width, height=height)
    else:
        resolved = Dimensions(
            width=round_half_away(original.width * (percentage / 100)),
            height=round_half_away(original.height * (percentage / 100)),
        )

    logger.debug(
        f"Resolved {original.width}x{original.height} -> {resolved.width}x{resolved.height}"
    )
    return resolved
