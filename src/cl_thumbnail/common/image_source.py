"""Image source variants and the classification step that builds them.

A caller-supplied value is inspected exactly once, by `classify_source()`,
and turned into one of five explicit variants. Everything downstream matches
on the variant instead of inspecting runtime types again.
"""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import ClassVar, Protocol, runtime_checkable

from ..errors import UnsupportedSourceError


class SourceKind(StrEnum):
    BASE64 = "base64"
    URI = "uri"
    PATH = "path"
    BUFFER = "buffer"
    STREAM = "stream"


@runtime_checkable
class Readable(Protocol):
    """Sync or async byte reader (file object, BytesIO, aiofiles handle...)."""

    def read(self, size: int = -1, /) -> object: ...


# ---------------------------------------------------------------------------
# Variants
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Base64Source:
    text: str
    kind: ClassVar[SourceKind] = SourceKind.BASE64


@dataclass(frozen=True)
class UriSource:
    uri: str
    kind: ClassVar[SourceKind] = SourceKind.URI


@dataclass(frozen=True)
class PathSource:
    path: Path
    kind: ClassVar[SourceKind] = SourceKind.PATH


@dataclass(frozen=True)
class BufferSource:
    data: bytes
    kind: ClassVar[SourceKind] = SourceKind.BUFFER


@dataclass(frozen=True)
class StreamSource:
    stream: Readable
    kind: ClassVar[SourceKind] = SourceKind.STREAM


ImageSource = Base64Source | UriSource | PathSource | BufferSource | StreamSource


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------

_BASE64_CHARS = re.compile(r"^[A-Za-z0-9+/=]+$")


def is_base64(text: str) -> bool:
    """Return True if `text` is strict, padded base64.

    The string must be non-empty, a multiple of 4 characters long, and may
    only carry '=' as one or two trailing padding characters.
    """
    length = len(text)
    if not length or length % 4 != 0 or not _BASE64_CHARS.match(text):
        return False

    first_padding = text.find("=")
    return (
        first_padding == -1
        or first_padding == length - 1
        or (first_padding == length - 2 and text[-1] == "=")
    )


def is_stream(value: object) -> bool:
    return callable(getattr(value, "read", None))


def is_buffer(value: object) -> bool:
    return isinstance(value, (bytes, bytearray, memoryview))


def _uri_of(value: object) -> str | None:
    if isinstance(value, Mapping):
        uri = value.get("uri")
    else:
        uri = getattr(value, "uri", None)
    return uri if isinstance(uri, str) else None


def classify_source(value: object) -> ImageSource:
    """Build the source variant for a caller-supplied value.

    Objects are checked in order: stream, buffer, path-like, URI descriptor.
    Strings are base64 when they parse as base64, otherwise a path.

    Raises:
        UnsupportedSourceError: If the value matches none of the variants
    """
    if isinstance(value, str):
        if is_base64(value):
            return Base64Source(text=value)
        return PathSource(path=Path(value))

    if value is None or isinstance(value, (bool, int, float, complex)):
        raise UnsupportedSourceError()

    if is_stream(value):
        return StreamSource(stream=value)  # pyright: ignore[reportArgumentType]

    if is_buffer(value):
        return BufferSource(data=bytes(value))  # pyright: ignore[reportArgumentType]

    if isinstance(value, os.PathLike):
        return PathSource(path=Path(os.fspath(value)))

    uri = _uri_of(value)
    if uri is not None:
        return UriSource(uri=uri)

    raise UnsupportedSourceError()
