"""
Pydantic Schemas Package

Input commands and response schemas for the review service. Keeping them
apart from the SQLAlchemy models controls exactly which fields enter and
leave the service and how they are named (camelCase on the wire).
"""

from bookreview.schemas.comment import (
    CommentResponse,
    CommentThreadResponse,
    CreateCommentCommand,
    ListCommentsCommand,
)
from bookreview.schemas.common import CamelModel, CommandModel, PaginationMeta
from bookreview.schemas.review import (
    CreateReviewCommand,
    ListReviewsQuery,
    ReviewDetailResponse,
    ReviewIdCommand,
    ReviewListResponse,
    ReviewResponse,
    UpdateReviewCommand,
)

__all__ = [
    "CamelModel",
    "CommandModel",
    "PaginationMeta",
    # Review schemas
    "ListReviewsQuery",
    "ReviewIdCommand",
    "CreateReviewCommand",
    "UpdateReviewCommand",
    "ReviewResponse",
    "ReviewDetailResponse",
    "ReviewListResponse",
    # Comment schemas
    "ListCommentsCommand",
    "CreateCommentCommand",
    "CommentResponse",
    "CommentThreadResponse",
]
