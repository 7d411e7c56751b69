"""Pure image blending logic (two images, one blend mode).

Colours are handled as floats in [0, 1]. Porter-Duff modes combine the
premultiplied source (overlay) and destination (base) with a pair of
coefficients; separable modes mix a per-channel blend function into the
overlay before compositing it over the base.
"""

from collections.abc import Callable
from io import BytesIO
from pathlib import Path

import numpy as np
from numpy.typing import NDArray
from PIL import Image

from ..common.schemas import EncodedImage
from ..errors import CodecError
from ..utils.profiling import timed

BlendInput = bytes | str | Path

Channels = NDArray[np.float64]

# (source coefficient, destination coefficient) as functions of (alpha_s, alpha_b)
PorterDuff = Callable[[Channels, Channels], tuple[Channels | float, Channels | float]]

PORTER_DUFF_MODES: dict[str, PorterDuff] = {
    "clear": lambda a_s, a_b: (0.0, 0.0),
    "source": lambda a_s, a_b: (1.0, 0.0),
    "over": lambda a_s, a_b: (1.0, 1 - a_s),
    "in": lambda a_s, a_b: (a_b, 0.0),
    "out": lambda a_s, a_b: (1 - a_b, 0.0),
    "atop": lambda a_s, a_b: (a_b, 1 - a_s),
    "dest": lambda a_s, a_b: (0.0, 1.0),
    "dest-over": lambda a_s, a_b: (1 - a_b, 1.0),
    "dest-in": lambda a_s, a_b: (0.0, a_s),
    "dest-out": lambda a_s, a_b: (0.0, 1 - a_s),
    "dest-atop": lambda a_s, a_b: (1 - a_b, a_s),
    "xor": lambda a_s, a_b: (1 - a_b, 1 - a_s),
    "add": lambda a_s, a_b: (1.0, 1.0),
}


def _screen(cb: Channels, cs: Channels) -> Channels:
    return cb + cs - cb * cs


def _hard_light(cb: Channels, cs: Channels) -> Channels:
    return np.where(cs <= 0.5, cb * 2 * cs, _screen(cb, 2 * cs - 1))


def _color_dodge(cb: Channels, cs: Channels) -> Channels:
    with np.errstate(divide="ignore", invalid="ignore"):
        dodged = np.minimum(1.0, cb / (1 - cs))
    return np.where(cb == 0, 0.0, np.where(cs >= 1, 1.0, dodged))


def _color_burn(cb: Channels, cs: Channels) -> Channels:
    with np.errstate(divide="ignore", invalid="ignore"):
        burned = 1 - np.minimum(1.0, (1 - cb) / cs)
    return np.where(cb >= 1, 1.0, np.where(cs <= 0, 0.0, burned))


def _soft_light(cb: Channels, cs: Channels) -> Channels:
    d = np.where(cb <= 0.25, ((16 * cb - 12) * cb + 4) * cb, np.sqrt(cb))
    return np.where(
        cs <= 0.5,
        cb - (1 - 2 * cs) * cb * (1 - cb),
        cb + (2 * cs - 1) * (d - cb),
    )


BlendFunction = Callable[[Channels, Channels], Channels]

# Separable blend functions B(backdrop, source), applied per colour channel
SEPARABLE_MODES: dict[str, BlendFunction] = {
    "multiply": lambda cb, cs: cb * cs,
    "screen": _screen,
    "overlay": lambda cb, cs: _hard_light(cs, cb),
    "darken": np.minimum,
    "lighten": np.maximum,
    "color-dodge": _color_dodge,
    "color-burn": _color_burn,
    "hard-light": _hard_light,
    "soft-light": _soft_light,
    "difference": lambda cb, cs: np.abs(cb - cs),
    "exclusion": lambda cb, cs: cb + cs - 2 * cb * cs,
}

BLEND_MODES = frozenset(PORTER_DUFF_MODES) | frozenset(SEPARABLE_MODES) | {"saturate"}


def normalize_blend_mode(blend_mode: str) -> str:
    """Lower-case, '-' separated, American spelling ('colour-burn' -> 'color-burn')."""
    return blend_mode.strip().lower().replace("_", "-").replace("colour", "color")


def _open_rgba(image: BlendInput) -> Image.Image:
    fp = BytesIO(image) if isinstance(image, bytes) else image
    with Image.open(fp) as img:
        return img.convert("RGBA")


def _centered_layer(base: Image.Image, overlay: Image.Image) -> Image.Image:
    """Overlay placed at the centre of a transparent canvas the size of `base`."""
    layer = Image.new("RGBA", base.size, (0, 0, 0, 0))
    offset = ((base.width - overlay.width) // 2, (base.height - overlay.height) // 2)
    layer.paste(overlay, offset)
    return layer


def _to_channels(img: Image.Image) -> tuple[Channels, Channels]:
    pixels = np.asarray(img, dtype=np.float64) / 255.0
    return pixels[..., :3], pixels[..., 3:]


def _blend(base: Image.Image, layer: Image.Image, mode: str) -> Image.Image:
    cb, a_b = _to_channels(base)
    cs, a_s = _to_channels(layer)

    if mode in PORTER_DUFF_MODES:
        f_s, f_b = PORTER_DUFF_MODES[mode](a_s, a_b)
        alpha = f_s * a_s + f_b * a_b
        premultiplied = f_s * a_s * cs + f_b * a_b * cb
    elif mode == "saturate":
        f_s = np.minimum(a_s, 1 - a_b)
        alpha = f_s + a_b
        premultiplied = f_s * cs + a_b * cb
    else:
        mixed = (1 - a_b) * cs + a_b * SEPARABLE_MODES[mode](cb, cs)
        alpha = a_s + a_b * (1 - a_s)
        premultiplied = a_s * mixed + (1 - a_s) * a_b * cb

    alpha = np.clip(alpha, 0.0, 1.0)
    premultiplied = np.clip(premultiplied, 0.0, 1.0)
    with np.errstate(divide="ignore", invalid="ignore"):
        color = np.where(alpha > 0, np.minimum(1.0, premultiplied / alpha), 0.0)

    rgba = np.concatenate([color, alpha], axis=-1)
    return Image.fromarray(np.rint(rgba * 255).astype(np.uint8))


@timed
def blend_images(base: BlendInput, overlay: BlendInput, blend_mode: str) -> EncodedImage:
    """
    Composite `overlay` onto `base` and encode the result as PNG.

    The overlay is centred on the base and clipped to it, so the output
    always has the base image's dimensions.

    Args:
        base: Encoded base image bytes or path
        overlay: Encoded overlay image bytes or path
        blend_mode: One of BLEND_MODES ('_' and '-' are interchangeable)

    Returns:
        Encoded PNG of the blended image

    Raises:
        CodecError: If the blend mode is unknown or Pillow fails
    """
    if not isinstance(blend_mode, str):
        raise CodecError(f"Unsupported blend mode: {blend_mode!r}")

    mode = normalize_blend_mode(blend_mode)
    if mode not in BLEND_MODES:
        raise CodecError(f"Unsupported blend mode: {blend_mode}")

    try:
        base_img = _open_rgba(base)
        layer = _centered_layer(base_img, _open_rgba(overlay))
        result = _blend(base_img, layer, mode)

        buffer = BytesIO()
        result.save(buffer, format="PNG")
    except Exception as exc:
        raise CodecError(str(exc) or exc.__class__.__name__) from exc

    encoded = buffer.getvalue()
    return EncodedImage(
        data=encoded,
        format="PNG",
        width=result.width,
        height=result.height,
        size=len(encoded),
    )
