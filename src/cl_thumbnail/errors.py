"""Typed errors raised by thumbnail and blend operations."""

from enum import StrEnum
from typing_extensions import override


class ErrorKind(StrEnum):
    UNSUPPORTED_SOURCE = "unsupported_source"
    FETCH_FAILED = "fetch_failed"
    FILESYSTEM_FAILED = "filesystem_failed"
    STREAM_FAILED = "stream_failed"
    CODEC_FAILED = "codec_failed"
    INVALID_OPTIONS = "invalid_options"


class ThumbnailError(Exception):
    """Failure of a thumbnail or blend call.

    `kind` tells callers which stage failed; `message` keeps the text of the
    underlying failure. The original exception is chained as `__cause__`.
    """

    def __init__(self, kind: ErrorKind, message: str):
        self.kind: ErrorKind = kind
        self.message: str = message
        super().__init__(message)

    @override
    def __str__(self) -> str:
        return self.message

    @override
    def __repr__(self) -> str:
        return f"ThumbnailError(kind={self.kind.value!r}, message={self.message!r})"


class UnsupportedSourceError(ThumbnailError):
    def __init__(self, message: str = "unsupported source type"):
        super().__init__(ErrorKind.UNSUPPORTED_SOURCE, message)


class FetchError(ThumbnailError):
    def __init__(self, message: str):
        super().__init__(ErrorKind.FETCH_FAILED, message)


class FilesystemError(ThumbnailError):
    def __init__(self, message: str):
        super().__init__(ErrorKind.FILESYSTEM_FAILED, message)


class StreamError(ThumbnailError):
    def __init__(self, message: str):
        super().__init__(ErrorKind.STREAM_FAILED, message)


class CodecError(ThumbnailError):
    def __init__(self, message: str):
        super().__init__(ErrorKind.CODEC_FAILED, message)


class InvalidOptionsError(ThumbnailError):
    def __init__(self, message: str):
        super().__init__(ErrorKind.INVALID_OPTIONS, message)
