"""Pydantic schemas for thumbnail options and results."""

from enum import StrEnum
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_PERCENTAGE = 10


class ResponseType(StrEnum):
    BUFFER = "buffer"
    BASE64 = "base64"


# ─────────────────────────────────────────────────────────────
# Call options
# ─────────────────────────────────────────────────────────────


class ThumbnailOptions(BaseModel):
    """Options accepted by `thumb()`.

    Field names are snake_case; the camelCase names (`responseType`,
    `pngOptions`) are accepted as aliases.

    Attributes:
        percentage: Percentage of the original size used when neither width
                    nor height is given (default 10)
        width: Explicit target width in pixels
        height: Explicit target height in pixels
        response_type: "buffer" for raw bytes, "base64" for base64 text
        png_options: Pillow PNG save parameters, forwarded verbatim.
                     None keeps the source format when possible.
    """

    percentage: float = Field(
        default=DEFAULT_PERCENTAGE,
        description="Percentage of original dimensions when no width/height is given",
    )
    width: int | None = Field(None, description="Target width in pixels")
    height: int | None = Field(None, description="Target height in pixels")
    response_type: ResponseType = Field(
        default=ResponseType.BUFFER,
        alias="responseType",
        description="Shape of the returned thumbnail",
    )
    png_options: dict[str, Any] | None = Field(
        default=None,
        alias="pngOptions",
        description="Encoder parameters forwarded to the PNG writer",
    )

    model_config: ClassVar[ConfigDict] = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    @field_validator("percentage", mode="before")
    @classmethod
    def default_missing_percentage(cls, v: object) -> object:
        """Treat an explicit None like an absent percentage."""
        return DEFAULT_PERCENTAGE if v is None else v


# ─────────────────────────────────────────────────────────────
# Intermediate values
# ─────────────────────────────────────────────────────────────


class Dimensions(BaseModel):
    """Width/height pair used for probing results and resize targets."""

    width: int
    height: int

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    def as_tuple(self) -> tuple[int, int]:
        return (self.width, self.height)


class EncodedImage(BaseModel):
    """Encoded image bytes plus what the encoder produced."""

    data: bytes = Field(..., repr=False)
    format: str = Field(..., description="Pillow format name, e.g. 'PNG'")
    width: int
    height: int
    size: int = Field(..., ge=0, description="Encoded size in bytes")

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)
