"""Shape encoder output for the caller."""

import base64

from ..common.schemas import ResponseType


def format_response(data: bytes, response_type: ResponseType) -> bytes | str:
    """Return `data` as-is, or as base64 text for ResponseType.BASE64."""
    if response_type == ResponseType.BASE64:
        return base64.b64encode(data).decode("ascii")
    return data
