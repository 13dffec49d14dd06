"""
Comment Validators

Syntax checks only. Whether the review and the parent comment exist, and
whether the parent belongs to the same review, is decided by the comment
service.
"""

from collections.abc import Mapping
from typing import Any

from bookreview.errors import Result
from bookreview.schemas import CreateCommentCommand, ListCommentsCommand
from bookreview.validators.fields import parse_command, pick


def validate_list_comments(raw_review_id: Any) -> Result[ListCommentsCommand]:
    """Validate the reviewId path parameter of a comment listing."""
    return parse_command(ListCommentsCommand, {"reviewId": raw_review_id})


def validate_create_comment(
    raw_review_id: Any,
    body: Mapping[str, Any],
) -> Result[CreateCommentCommand]:
    """
    Validate a new comment.

    Rules:
    - reviewId: required positive integer
    - content: required; surrounding whitespace is stripped, then the
      text must be 1-10000 characters (whitespace-only is rejected)
    - parentId: optional; null or missing means a top-level comment,
      otherwise a positive integer
    """
    return parse_command(
        CreateCommentCommand,
        {"reviewId": raw_review_id, **pick(body, "content", "parentId")},
    )
