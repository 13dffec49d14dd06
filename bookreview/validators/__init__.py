"""
Validators Package

Raw request values → typed commands. Validators never raise for bad input
and never touch storage; they return Ok(command) or an Err listing every
field problem. The rules themselves are declared on the pydantic command
schemas, which are re-exported here for convenience.
"""

from bookreview.schemas import (
    CreateCommentCommand,
    CreateReviewCommand,
    ListCommentsCommand,
    ListReviewsQuery,
    ReviewIdCommand,
    UpdateReviewCommand,
)
from bookreview.validators.comment import validate_create_comment, validate_list_comments
from bookreview.validators.review import (
    validate_create_review,
    validate_list_reviews_query,
    validate_review_id,
    validate_update_review,
)

__all__ = [
    "CreateCommentCommand",
    "ListCommentsCommand",
    "validate_create_comment",
    "validate_list_comments",
    "CreateReviewCommand",
    "ListReviewsQuery",
    "ReviewIdCommand",
    "UpdateReviewCommand",
    "validate_create_review",
    "validate_list_reviews_query",
    "validate_review_id",
    "validate_update_review",
]
