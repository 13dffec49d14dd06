"""
Comment Pydantic Schemas

Schemas:
- ListCommentsCommand: The review whose comments are listed
- CreateCommentCommand: A new comment or reply
- CommentResponse: One comment as stored
- CommentThreadResponse: A top-level comment with its direct replies
"""

from pydantic import Field

from bookreview.schemas.common import (
    CamelModel,
    CommandModel,
    CommentContent,
    PositiveId,
    UTCDatetime,
)


# =============================================================================
# Input Schemas
# =============================================================================


class ListCommentsCommand(CommandModel):
    review_id: PositiveId


class CreateCommentCommand(CommandModel):
    """
    Schema for creating a comment.

    Content is trimmed before its length is checked, so whitespace-only
    text is rejected. parentId null or missing means a top-level comment.
    """

    review_id: PositiveId
    content: CommentContent
    parent_id: PositiveId | None = None


class CommentResponse(CamelModel):
    """A single comment."""

    id: int = Field(..., description="Unique comment identifier")
    review_id: int = Field(..., description="Review the comment belongs to")
    user_id: int | None = Field(
        default=None,
        description="Author's user ID; null when the account was removed",
    )
    parent_id: int | None = Field(
        default=None,
        description="Comment this one replies to; null for top-level comments",
    )
    content: str = Field(..., description="Trimmed comment text")
    created_at: UTCDatetime = Field(..., description="When the comment was created")
    updated_at: UTCDatetime = Field(..., description="When the comment was last updated")


class CommentThreadResponse(CommentResponse):
    """A top-level comment and the comments replying directly to it."""

    replies: list[CommentResponse] = Field(
        default_factory=list,
        description="Direct replies, newest first",
    )
