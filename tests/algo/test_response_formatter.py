"""Unit tests for response formatting."""

import base64

from cl_thumbnail.algo.response_formatter import format_response
from cl_thumbnail.common.schemas import ResponseType


def test_format_response_buffer():
    """Test buffer responses return the bytes unchanged."""
    assert format_response(b"\x89PNG", ResponseType.BUFFER) == b"\x89PNG"


def test_format_response_base64():
    """Test base64 responses decode back to the same bytes."""
    result = format_response(b"\x89PNG\x00\xff", ResponseType.BASE64)

    assert isinstance(result, str)
    assert base64.b64decode(result) == b"\x89PNG\x00\xff"
