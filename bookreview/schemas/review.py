"""
Review Pydantic Schemas

Schemas:
- ListReviewsQuery: Filters and lenient pagination for the review list
- ReviewIdCommand: A review addressed by its path id
- CreateReviewCommand: A new review
- UpdateReviewCommand: New content for an existing review
- ReviewResponse: A review as returned by list, create and update
- ReviewDetailResponse: A review with its book title and author username
- ReviewListResponse: One page of reviews plus pagination metadata

Business Rules:
- Rating must be 1-5 and is only read on create
- Review content is 1-1000 characters and kept exactly as sent
- page and limit never fail validation (see Page and Limit)
"""

from pydantic import ConfigDict, Field

from bookreview.schemas.common import (
    DEFAULT_LIMIT,
    DEFAULT_PAGE,
    CamelModel,
    CommandModel,
    Limit,
    OptionalId,
    OptionalRating,
    Page,
    PaginationMeta,
    PositiveId,
    Rating,
    ReviewContent,
    UTCDatetime,
)


# =============================================================================
# Input Schemas
# =============================================================================


class ListReviewsQuery(CommandModel):
    """
    Review list filters.

    page defaults to 1 and limit to 20 (clamped to 1-100); bookId, userId
    and rating are optional but must be valid when supplied.
    """

    page: Page = DEFAULT_PAGE
    limit: Limit = DEFAULT_LIMIT
    book_id: OptionalId = None
    user_id: OptionalId = None
    rating: OptionalRating = None

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class ReviewIdCommand(CommandModel):
    review_id: PositiveId


class CreateReviewCommand(CommandModel):
    """
    Schema for creating a new review.

    Example request body:
    {
        "bookId": 42,
        "content": "A must-read.",
        "rating": 5
    }
    """

    book_id: PositiveId = Field(..., description="Book being reviewed")
    content: ReviewContent = Field(..., description="Review text, not trimmed")
    rating: Rating = Field(..., description="Rating from 1 to 5 stars")


class UpdateReviewCommand(CommandModel):
    """Replacement content; a rating sent with it is ignored."""

    review_id: PositiveId
    content: ReviewContent


class ReviewResponse(CamelModel):
    """A review without related records."""

    id: int = Field(..., description="Unique review identifier")
    book_id: int = Field(..., description="ID of the reviewed book")
    user_id: int | None = Field(
        default=None,
        description="Author's user ID; null when the account was removed",
    )
    content: str = Field(..., description="Review text")
    rating: int = Field(..., ge=1, le=5, description="Rating from 1 to 5 stars")
    created_at: UTCDatetime = Field(..., description="When the review was created")
    updated_at: UTCDatetime = Field(..., description="When the review was last updated")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 1,
                "bookId": 42,
                "userId": 7,
                "content": "This book completely changed my perspective on...",
                "rating": 5,
                "createdAt": "2026-02-17T10:30:00Z",
                "updatedAt": "2026-02-17T10:30:00Z",
            }
        },
    )


class ReviewDetailResponse(ReviewResponse):
    """
    A review with denormalized names.

    book_title and username are best-effort: they are null when the
    related book or user row is missing.
    """

    book_title: str | None = Field(default=None, description="Title of the reviewed book")
    username: str | None = Field(default=None, description="Author's username")


class ReviewListResponse(CamelModel):
    """One page of reviews, newest first."""

    reviews: list[ReviewResponse] = Field(..., description="Reviews on this page")
    pagination: PaginationMeta
