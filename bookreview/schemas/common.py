"""
Shared schema building blocks.

Python attributes are snake_case; JSON uses camelCase (bookId, createdAt)
to match the public API.

Input types (ids, ratings, content, lenient page/limit) live here too so
the review and comment commands declare their rules the same way.
"""

from datetime import UTC, datetime
from typing import Annotated, Any

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    StringConstraints,
)
from pydantic.alias_generators import to_camel

# Primary keys are 32-bit INTEGER columns
MAX_ID = 2**31 - 1

REVIEW_CONTENT_MAX_LENGTH = 1000
COMMENT_CONTENT_MAX_LENGTH = 10000

RATING_MIN = 1
RATING_MAX = 5

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20
MAX_LIMIT = 100


# =============================================================================
# Coercion helpers
# =============================================================================


def coerce_integral(value: Any) -> int:
    """
    Accept ints, integral floats and numeric strings ("12", " 7 ", "3.0").

    Booleans are rejected even though bool subclasses int.

    Raises:
        ValueError: If the value is not an integer
    """
    if isinstance(value, bool):
        raise ValueError("must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            number = None
        if number is not None and number.is_integer():
            return int(number)
    raise ValueError("must be an integer")


def blank_to_none(value: Any) -> Any:
    """Missing and blank values both count as "not supplied"."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _lenient(value: Any) -> int | None:
    try:
        return coerce_integral(value)
    except (ValueError, OverflowError):
        return None


def lenient_page(value: Any) -> int:
    """Page number; anything unusable falls back to the first page."""
    number = _lenient(value)
    if not number:
        return DEFAULT_PAGE
    return max(DEFAULT_PAGE, min(MAX_ID, number))


def lenient_limit(value: Any) -> int:
    """Page size clamped to [1, MAX_LIMIT]; unusable input means the default."""
    number = _lenient(value)
    if not number:
        return DEFAULT_LIMIT
    return max(1, min(MAX_LIMIT, number))


def as_utc(value: datetime) -> datetime:
    """SQLite hands back naive datetimes; every stored timestamp is UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


# =============================================================================
# Annotated types
# =============================================================================
# BeforeValidator is listed last so it runs before int parsing and the bounds.

PositiveId = Annotated[int, Field(gt=0, le=MAX_ID), BeforeValidator(coerce_integral)]
OptionalId = Annotated[PositiveId | None, BeforeValidator(blank_to_none)]

Rating = Annotated[
    int,
    Field(ge=RATING_MIN, le=RATING_MAX),
    BeforeValidator(coerce_integral),
]
OptionalRating = Annotated[Rating | None, BeforeValidator(blank_to_none)]

ReviewContent = Annotated[
    str,
    StringConstraints(min_length=1, max_length=REVIEW_CONTENT_MAX_LENGTH),
]
CommentContent = Annotated[
    str,
    StringConstraints(
        strip_whitespace=True,
        min_length=1,
        max_length=COMMENT_CONTENT_MAX_LENGTH,
    ),
]

Page = Annotated[int, BeforeValidator(lenient_page)]
Limit = Annotated[int, BeforeValidator(lenient_limit)]

UTCDatetime = Annotated[datetime, AfterValidator(as_utc)]


# =============================================================================
# Base models
# =============================================================================


class CamelModel(BaseModel):
    """Base for response schemas: reads ORM objects, dumps camelCase."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_json(self) -> dict:
        """JSON-ready dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)


class CommandModel(BaseModel):
    """
    Base for validated input.

    Raw request values are read by their camelCase names (bookId, parentId);
    unknown keys are ignored and the parsed command is immutable.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


class PaginationMeta(CamelModel):
    """Pagination block of a list response."""

    current_page: int = Field(..., ge=1, description="Current page number")
    total_pages: int = Field(..., ge=0, description="ceil(total_items / items_per_page)")
    total_items: int = Field(..., ge=0, description="Number of matching items")
    items_per_page: int = Field(..., ge=1, le=100, description="Page size")
