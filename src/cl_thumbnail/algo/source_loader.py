"""Turn a classified image source into raw encoded-image bytes."""

import asyncio
import base64
import inspect

import aiofiles
import httpx
from loguru import logger

from ..common.image_source import (
    Base64Source,
    BufferSource,
    ImageSource,
    PathSource,
    Readable,
    StreamSource,
    UriSource,
)
from ..config import ThumbnailSettings
from ..errors import FetchError, FilesystemError, StreamError


async def load_source(
    source: ImageSource,
    *,
    settings: ThumbnailSettings,
    client: httpx.AsyncClient | None = None,
) -> bytes:
    """
    Produce the raw bytes of an image source.

    Args:
        source: Classified image source
        settings: Runtime settings (HTTP timeout, stream chunk size)
        client: Optional shared HTTP client used for URI sources

    Returns:
        Encoded image bytes, exactly as stored or served

    Raises:
        FetchError: If a URI cannot be fetched or answers non-2xx
        FilesystemError: If a path cannot be read
        StreamError: If a stream fails before EOF
    """
    match source:
        case Base64Source(text=text):
            return base64.b64decode(text, validate=True)
        case UriSource(uri=uri):
            return await fetch_uri(uri, settings=settings, client=client)
        case PathSource(path=path):
            try:
                async with aiofiles.open(path, "rb") as f:
                    return await f.read()
            except OSError as exc:
                raise FilesystemError(str(exc)) from exc
        case BufferSource(data=data):
            return data
        case StreamSource(stream=stream):
            return await drain_stream(stream, chunk_size=settings.stream_chunk_size)


async def fetch_uri(
    uri: str,
    *,
    settings: ThumbnailSettings,
    client: httpx.AsyncClient | None = None,
) -> bytes:
    """GET `uri` and return the response body. No retries."""
    logger.debug(f"Fetching image from {uri}")
    try:
        if client is not None:
            response = await client.get(uri)
        else:
            async with httpx.AsyncClient(
                timeout=settings.http_timeout,
                follow_redirects=settings.http_follow_redirects,
            ) as own_client:
                response = await own_client.get(uri)
        _ = response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise FetchError(
            f"Request failed with status code {exc.response.status_code}"
        ) from exc
    except httpx.HTTPError as exc:
        raise FetchError(str(exc) or exc.__class__.__name__) from exc

    return response.content


async def drain_stream(stream: Readable, *, chunk_size: int) -> bytes:
    """Read a sync or async byte stream to EOF, keeping chunk order.

    Blocking readers are called in a worker thread so the event loop keeps
    running while they wait.
    """
    chunks: list[bytes] = []
    is_async = inspect.iscoroutinefunction(stream.read)
    try:
        while True:
            if is_async:
                chunk = stream.read(chunk_size)
            else:
                chunk = await asyncio.to_thread(stream.read, chunk_size)
            if inspect.isawaitable(chunk):
                chunk = await chunk
            if not chunk:
                break
            if not isinstance(chunk, (bytes, bytearray, memoryview)):
                raise StreamError(
                    f"Stream yielded {type(chunk).__name__}, expected bytes"
                )
            chunks.append(bytes(chunk))
    except StreamError:
        raise
    except Exception as exc:
        raise StreamError(str(exc) or exc.__class__.__name__) from exc

    return b"".join(chunks)
