"""
Comment Service

Operations:
- list_comments: All comments of a review as a two-level thread
- create_comment: New comment or reply on a review
- build_comment_tree: Pure assembly of the two-level thread

Threads are derived on every read from the flat comments table. A reply
to a reply is stored but never shown: only comments whose parent is a
top-level comment are attached. Listing loads the whole comment set of the
review, which is fine while per-review counts stay small.
"""

import logging
from collections import defaultdict
from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from bookreview.database import storage_guard
from bookreview.errors import Err, Ok, Result, ServiceError
from bookreview.models import Comment, Review
from bookreview.schemas import CommentResponse, CommentThreadResponse, CreateCommentCommand

logger = logging.getLogger(__name__)


def build_comment_tree(comments: Sequence[CommentResponse]) -> list[CommentThreadResponse]:
    """
    Group a flat, already ordered comment list into top-level threads.

    Args:
        comments: Every comment of one review, in display order

    Returns:
        Top-level comments (parent_id is None), each with the comments whose
        parent_id equals its id, both levels keeping the input order
    """
    replies_by_parent: dict[int, list[CommentResponse]] = defaultdict(list)
    for comment in comments:
        if comment.parent_id is not None:
            replies_by_parent[comment.parent_id].append(comment)

    return [
        CommentThreadResponse(
            **comment.model_dump(),
            replies=replies_by_parent.get(comment.id, []),
        )
        for comment in comments
        if comment.parent_id is None
    ]


def list_comments(db: Session, review_id: int) -> Result[list[CommentThreadResponse]]:
    """
    List the comments of a review, newest first, with replies nested.

    An unknown review simply has no comments.
    """
    with storage_guard(db, "list_comments"):
        stmt = (
            select(Comment)
            .where(Comment.review_id == review_id)
            .order_by(Comment.created_at.desc(), Comment.id.desc())
        )
        rows = db.execute(stmt).scalars().all()

    flat = [CommentResponse.model_validate(row) for row in rows]
    return Ok(build_comment_tree(flat))


def create_comment(
    db: Session,
    command: CreateCommentCommand,
    actor_id: int | None,
) -> Result[CommentResponse]:
    """
    Create a comment owned by the actor.

    Returns:
        Ok with the new comment, or Err with AUTHENTICATION_REQUIRED,
        REVIEW_NOT_FOUND, PARENT_COMMENT_NOT_FOUND or
        PARENT_COMMENT_WRONG_REVIEW (nothing is written in those cases)
    """
    if actor_id is None:
        return Err(ServiceError.authentication_required())

    with storage_guard(db, "create_comment"):
        # FOR SHARE orders this insert against a concurrent review delete
        stmt = select(Review.id).where(Review.id == command.review_id).with_for_update(read=True)
        if db.execute(stmt).scalar_one_or_none() is None:
            db.rollback()
            return Err(ServiceError.review_not_found(command.review_id))

        if command.parent_id is not None:
            parent = db.get(Comment, command.parent_id)
            if parent is None:
                db.rollback()
                return Err(ServiceError.parent_comment_not_found(command.parent_id))
            if parent.review_id != command.review_id:
                db.rollback()
                logger.info(
                    f"Reply rejected: parent {parent.id} belongs to review {parent.review_id}, "
                    f"not {command.review_id}"
                )
                return Err(ServiceError.parent_comment_wrong_review(command.parent_id))

        comment = Comment(
            review_id=command.review_id,
            user_id=actor_id,
            content=command.content,
            parent_id=command.parent_id,
        )
        db.add(comment)
        db.commit()
        db.refresh(comment)

    logger.info(f"Comment {comment.id} created by user {actor_id} on review {command.review_id}")
    return Ok(CommentResponse.model_validate(comment))
