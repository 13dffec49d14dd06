"""
Error Taxonomy and Result Types

Expected outcomes such as "review not found" or "not the owner" are part of
the normal flow of the review and comment services. They are returned as
values instead of being raised:

    result = create_review(db, command, actor_id)
    if result.ok:
        review = result.value
    else:
        print(result.error.code, result.error.message)

Validators use the same types: a failed validation is an Err whose error
carries every FieldError found in the input.

Only unexpected storage failures are raised, as StorageError, after the
open transaction has been rolled back.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Generic, TypeVar, Union

T = TypeVar("T")


class ErrorCode(str, Enum):
    """Machine-readable error kinds shared by validators and services."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    AUTHENTICATION_REQUIRED = "AUTHENTICATION_REQUIRED"
    FORBIDDEN = "FORBIDDEN"
    REVIEW_NOT_FOUND = "REVIEW_NOT_FOUND"
    BOOK_NOT_FOUND = "BOOK_NOT_FOUND"
    PARENT_COMMENT_NOT_FOUND = "PARENT_COMMENT_NOT_FOUND"
    PARENT_COMMENT_WRONG_REVIEW = "PARENT_COMMENT_WRONG_REVIEW"
    RELATED_DATA_EXISTS = "RELATED_DATA_EXISTS"
    # Used by the book and user flows, never returned by this package
    DUPLICATE_RESOURCE = "DUPLICATE_RESOURCE"


STATUS_CODES: dict[ErrorCode, int] = {
    ErrorCode.VALIDATION_ERROR: 400,
    ErrorCode.AUTHENTICATION_REQUIRED: 401,
    ErrorCode.FORBIDDEN: 403,
    ErrorCode.REVIEW_NOT_FOUND: 404,
    ErrorCode.BOOK_NOT_FOUND: 404,
    ErrorCode.PARENT_COMMENT_NOT_FOUND: 404,
    ErrorCode.PARENT_COMMENT_WRONG_REVIEW: 400,
    ErrorCode.RELATED_DATA_EXISTS: 409,
    ErrorCode.DUPLICATE_RESOURCE: 409,
}

INTERNAL_ERROR_CODE = "INTERNAL_SERVER_ERROR"


@dataclass(frozen=True)
class FieldError:
    """One problem with one input field."""

    field: str
    message: str
    code: str | None = None

    def to_dict(self) -> dict:
        data = {"field": self.field, "message": self.message}
        if self.code is not None:
            data["code"] = self.code
        return data


@dataclass(frozen=True)
class ServiceError:
    """
    A typed business error.

    Attributes:
        code: Error kind from the taxonomy
        message: Human-readable explanation
        details: Field-level problems (validation and parent-comment errors)
    """

    code: ErrorCode
    message: str
    details: tuple[FieldError, ...] = field(default_factory=tuple)

    @property
    def status_code(self) -> int:
        return STATUS_CODES[self.code]

    def to_dict(self) -> dict:
        data = {"message": self.message, "code": self.code.value}
        if self.details:
            data["details"] = [detail.to_dict() for detail in self.details]
        return data

    # -------------------------------------------------------------------------
    # Constructors
    # -------------------------------------------------------------------------
    @classmethod
    def validation(cls, details: list[FieldError]) -> "ServiceError":
        return cls(ErrorCode.VALIDATION_ERROR, "Validation failed", tuple(details))

    @classmethod
    def authentication_required(cls) -> "ServiceError":
        return cls(ErrorCode.AUTHENTICATION_REQUIRED, "Authentication is required")

    @classmethod
    def forbidden(cls, action: str) -> "ServiceError":
        return cls(ErrorCode.FORBIDDEN, f"You do not have permission to {action}")

    @classmethod
    def review_not_found(cls, review_id: int) -> "ServiceError":
        return cls(ErrorCode.REVIEW_NOT_FOUND, f"Review with id {review_id} not found")

    @classmethod
    def book_not_found(cls, book_id: int) -> "ServiceError":
        return cls(ErrorCode.BOOK_NOT_FOUND, f"Book with id {book_id} not found")

    @classmethod
    def parent_comment_not_found(cls, parent_id: int) -> "ServiceError":
        message = f"Parent comment with id {parent_id} not found"
        return cls(
            ErrorCode.PARENT_COMMENT_NOT_FOUND,
            message,
            (FieldError("parentId", message),),
        )

    @classmethod
    def parent_comment_wrong_review(cls, parent_id: int) -> "ServiceError":
        message = "Parent comment must belong to the same review"
        return cls(
            ErrorCode.PARENT_COMMENT_WRONG_REVIEW,
            message,
            (FieldError("parentId", f"{message} (parent id {parent_id})"),),
        )

    @classmethod
    def related_data_exists(cls) -> "ServiceError":
        return cls(
            ErrorCode.RELATED_DATA_EXISTS,
            "The review has comments and cannot be deleted",
        )


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying a value."""

    value: T
    ok: ClassVar[bool] = True


@dataclass(frozen=True)
class Err:
    """Failed outcome carrying a ServiceError."""

    error: ServiceError
    ok: ClassVar[bool] = False

    @property
    def errors(self) -> list[FieldError]:
        """Field-level problems, as returned by the validators."""
        return list(self.error.details)


Result = Union[Ok[T], Err]


class StorageError(Exception):
    """
    Opaque wrapper for unexpected storage failures.

    Raised by the services after rolling back; kept apart from every
    ServiceError so callers can never mistake it for a business outcome.
    """

    def __init__(self, operation: str) -> None:
        super().__init__(f"Storage failure during {operation}")
        self.operation = operation
