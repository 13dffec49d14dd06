"""
Map pydantic validation errors to the service's field error codes.

Pydantic reports every failing field in one pass; each failing field
becomes one FieldError carrying a stable code such as INVALID_BOOK_ID or
CONTENT_TOO_LONG.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ValidationError
from pydantic_core import ErrorDetails

from bookreview.errors import Err, FieldError, Ok, Result, ServiceError
from bookreview.schemas.common import RATING_MAX, RATING_MIN

ID_CODES = {
    "reviewId": "INVALID_REVIEW_ID",
    "bookId": "INVALID_BOOK_ID",
    "userId": "INVALID_USER_ID",
    "parentId": "INVALID_PARENT_ID",
}


def _is_absent(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def to_field_error(error: ErrorDetails) -> FieldError:
    """
    Translate one pydantic error entry.

    Args:
        error: An entry of ValidationError.errors()

    Returns:
        FieldError named by the camelCase input key
    """
    field = str(error["loc"][0]) if error["loc"] else "body"

    if field in ID_CODES:
        return FieldError(field, f"{field} must be a positive integer", ID_CODES[field])

    if field == "content":
        if error["type"] == "string_too_long":
            max_length = error.get("ctx", {}).get("max_length")
            return FieldError(
                field,
                f"content must be at most {max_length} characters",
                "CONTENT_TOO_LONG",
            )
        return FieldError(field, "content is required", "CONTENT_REQUIRED")

    if field == "rating":
        if error["type"] == "missing" or _is_absent(error.get("input")):
            return FieldError(field, "rating is required", "RATING_REQUIRED")
        return FieldError(
            field,
            f"rating must be an integer between {RATING_MIN} and {RATING_MAX}",
            "INVALID_RATING",
        )

    return FieldError(field, error["msg"])


def field_errors(exc: ValidationError) -> list[FieldError]:
    """One FieldError per failing field, in declaration order."""
    errors: list[FieldError] = []
    seen: set[str] = set()
    for error in exc.errors():
        field_error = to_field_error(error)
        if field_error.field not in seen:
            seen.add(field_error.field)
            errors.append(field_error)
    return errors


def parse_command(model: type[BaseModel], data: Mapping[str, Any]) -> Result:
    """
    Validate raw input into a command model.

    Never raises for bad input: a failure is an Err whose ServiceError has
    code VALIDATION_ERROR and every field problem as a detail.
    """
    try:
        return Ok(model.model_validate(data))
    except ValidationError as exc:
        return Err(ServiceError.validation(field_errors(exc)))


def pick(body: Mapping[str, Any], *keys: str) -> dict[str, Any]:
    """The listed keys of a request body, leaving out any that are missing."""
    return {key: body[key] for key in keys if key in body}
