"""
Review Validators

Turn raw path, query and body values into review commands.

Every function returns Ok(command) or Err(ServiceError) with code
VALIDATION_ERROR and one FieldError per problem found. The rules live on
the command schemas in bookreview.schemas.review; nothing here touches
storage, so book existence and ownership are the service's job.
"""

from collections.abc import Mapping
from typing import Any

from bookreview.errors import Result
from bookreview.schemas import (
    CreateReviewCommand,
    ListReviewsQuery,
    ReviewIdCommand,
    UpdateReviewCommand,
)
from bookreview.validators.fields import parse_command, pick


def validate_review_id(raw_review_id: Any) -> Result[ReviewIdCommand]:
    """Validate the reviewId path parameter (detail and delete)."""
    return parse_command(ReviewIdCommand, {"reviewId": raw_review_id})


def validate_list_reviews_query(params: Mapping[str, Any]) -> Result[ListReviewsQuery]:
    """
    Validate list filters.

    page and limit never fail: non-numeric values fall back to the defaults
    (page 1, limit 20) and limit is clamped to 1-100. bookId, userId and
    rating are optional but must be valid when supplied.
    """
    return parse_command(
        ListReviewsQuery,
        pick(params, "page", "limit", "bookId", "userId", "rating"),
    )


def validate_create_review(body: Mapping[str, Any]) -> Result[CreateReviewCommand]:
    """
    Validate a new review.

    Rules:
    - bookId: required positive integer
    - content: required, 1-1000 characters, not trimmed
    - rating: required integer 1-5
    """
    return parse_command(CreateReviewCommand, pick(body, "bookId", "content", "rating"))


def validate_update_review(
    raw_review_id: Any,
    body: Mapping[str, Any],
) -> Result[UpdateReviewCommand]:
    """
    Validate a content update.

    Only content is read from the body; a rating in the body is ignored
    because ratings cannot change after creation.
    """
    return parse_command(
        UpdateReviewCommand,
        {"reviewId": raw_review_id, **pick(body, "content")},
    )
